"""Output formatting for the pacdb CLI."""
