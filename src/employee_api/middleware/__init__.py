"""Application middleware and exception handlers."""
