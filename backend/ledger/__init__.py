"""Ledger Finance API: a transaction ledger over HTTP."""

__version__ = "1.0.0"
