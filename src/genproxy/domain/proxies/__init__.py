"""Proxy configuration reconciliation.

Layered flow:
1) validate each tabular source into typed rows
2) fold rows into one definition per genesis account
3) diff OLD against NEW per owner
4) assemble owner-scoped units into one atomic (optionally privileged) batch
5) summarise the impact for the operator
"""

from __future__ import annotations

from .assemble import SubmissionPlan, assemble, scope_operations
from .canonicalize import normalize_capability, to_mapping
from .diff import (
    Added,
    ChangeKind,
    Reconciliation,
    ReconciliationEntry,
    Removed,
    Replaced,
    Unchanged,
    diff,
    replay,
)
from .operations import (
    AddDelegation,
    Batch,
    Call,
    OperationKind,
    Privileged,
    ProxyOperation,
    RemoveDelegation,
    Scoped,
    iter_operations,
)
from .pipeline import ProxyReconciliationPipeline, ReconciliationOutcome, TableSource
from .summary import PlanSummary, summarize
from .validate import EXPECTED_HEADER, check_header, parse_delay, validate_source

__all__ = [
    "EXPECTED_HEADER",
    "AddDelegation",
    "Added",
    "Batch",
    "Call",
    "ChangeKind",
    "OperationKind",
    "PlanSummary",
    "Privileged",
    "ProxyOperation",
    "ProxyReconciliationPipeline",
    "Reconciliation",
    "ReconciliationEntry",
    "ReconciliationOutcome",
    "RemoveDelegation",
    "Removed",
    "Replaced",
    "Scoped",
    "SubmissionPlan",
    "TableSource",
    "Unchanged",
    "assemble",
    "check_header",
    "diff",
    "iter_operations",
    "normalize_capability",
    "parse_delay",
    "replay",
    "scope_operations",
    "summarize",
    "to_mapping",
    "validate_source",
]
