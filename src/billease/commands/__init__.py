"""Command implementations exposed through :mod:`billease.cli`."""

__all__ = ["delete", "listing", "report", "show", "validate"]
