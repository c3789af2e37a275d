"""View, save and apply git branch patches."""

__version__ = "0.1.0"
