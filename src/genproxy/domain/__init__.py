"""Domain layer: proxy configuration types, errors, ports and reconciliation."""
