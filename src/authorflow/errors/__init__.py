"""Error types and their HTTP mapping."""
