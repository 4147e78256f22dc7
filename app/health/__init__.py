"""Service health endpoints."""
