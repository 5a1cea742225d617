"""Shared helpers: URL handling, validation, and settle-all concurrency."""
