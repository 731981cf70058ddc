"""Command line interface for projectfolio."""
