"""Translatrix document translation service."""
