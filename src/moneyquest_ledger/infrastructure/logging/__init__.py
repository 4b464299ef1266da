"""Logging helpers for the ledger services."""
