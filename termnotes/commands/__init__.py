"""Non-interactive CLI commands."""
