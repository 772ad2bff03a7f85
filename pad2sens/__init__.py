"""pad2sens: convert mouse pad distance into per-game sensitivity and test it."""

__version__ = "0.1.0"
