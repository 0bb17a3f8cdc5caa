# src/mini_social/db/__init__.py
"""Database configuration and utilities."""

from .session import Base, Store, StoreNotReadyError, get_db, store

__all__ = ["Base", "Store", "StoreNotReadyError", "get_db", "store"]
