"""User interfaces."""

__all__ = []
