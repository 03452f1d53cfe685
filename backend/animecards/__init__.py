"""Anime Cards: user-owned card collections behind session auth."""

__version__ = "0.1.0"
