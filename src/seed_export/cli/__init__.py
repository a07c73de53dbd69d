"""Command-line interface for Seed Export."""
