"""SQLAlchemy models exposed for metadata creation and imports."""
from .card import Card
from .session import AuthSession
from .user import User

__all__ = ["User", "Card", "AuthSession"]
