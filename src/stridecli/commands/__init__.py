"""Command implementations for the stride CLI."""
