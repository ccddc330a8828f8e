"""Repositories mapping domain records onto the row store."""

from .base import BaseRepository
from .talent_repository import TalentRepository
from .user_repository import UserRepository

__all__ = ["BaseRepository", "TalentRepository", "UserRepository"]
