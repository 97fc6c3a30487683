"""Command-line credential manager."""
