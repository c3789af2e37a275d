"""Process and git helpers."""
