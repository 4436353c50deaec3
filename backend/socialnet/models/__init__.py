"""ORM models. Importing this package registers every table with Base.metadata."""

from socialnet.models.post import Post
from socialnet.models.user import User

__all__ = ["Post", "User"]
