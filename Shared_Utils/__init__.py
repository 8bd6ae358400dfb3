"""Shared helpers: structured logging and numeric precision."""
