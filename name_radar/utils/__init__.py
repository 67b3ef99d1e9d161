"""Shared utilities: rate limiting, bounded concurrency, stats and logging helpers."""
