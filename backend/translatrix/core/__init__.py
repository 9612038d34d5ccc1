"""Core translation components."""
