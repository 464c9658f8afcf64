"""Snapshot database implementations for CanvasFS."""

from canvasfs.databases.base import BaseDatabase
from canvasfs.databases.sqlite_db import SQLiteDatabase

__all__ = ["BaseDatabase", "SQLiteDatabase"]
