"""Adapters for address decoding, call encoding and ledger RPC."""
