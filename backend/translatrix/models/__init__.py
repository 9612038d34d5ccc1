"""API and data schemas."""
