"""CLI commands for taglog."""
