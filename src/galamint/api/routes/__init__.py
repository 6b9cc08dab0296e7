"""Service-level API routes."""
