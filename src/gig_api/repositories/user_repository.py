"""Repository for the ``users`` table."""

from .base import BaseRepository


class UserRepository(BaseRepository):
    """Local user records."""

    table = "users"
    search_fields = ("firstName", "lastName", "username")
