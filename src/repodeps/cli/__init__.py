"""Command-line interface for repodeps."""
