"""
Database package for the Matchmaking API.

Sessions are handed out by ``app.database.connection.get_db``.
"""
from . import models
from .models import Base

__all__ = ["Base", "models"]
