"""Core building blocks: API layer, exceptions and logging."""
