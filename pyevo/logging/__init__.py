"""Per-generation diagnostic logging."""
