"""Synchronisation et cycle de vie des pays (source externe + PostgreSQL)."""

__version__ = "0.1.0"
