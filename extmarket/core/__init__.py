"""Core marketplace logic — version comparison, caching, resolution."""
