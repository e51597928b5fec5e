"""Command-line interface for cachefolio."""
