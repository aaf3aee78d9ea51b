"""CineRate: record 1-10 ratings for anime, movies and shows."""

__version__ = "0.1.0"
