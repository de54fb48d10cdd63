"""Command-line interface for commitlens."""
