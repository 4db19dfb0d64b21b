"""Command-line tools for working with a running Thing Store app."""
