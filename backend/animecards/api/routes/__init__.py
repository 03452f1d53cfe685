"""Route modules for the Anime Cards API."""
from . import auth, cards

__all__ = ["auth", "cards"]
