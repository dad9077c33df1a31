"""Adapters exposing the ledger to users."""

__all__ = []
