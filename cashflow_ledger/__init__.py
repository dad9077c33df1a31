"""Cashflow ledger engine and dashboard."""
