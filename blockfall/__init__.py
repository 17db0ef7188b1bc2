"""A falling-block puzzle game: pieces, board, rules and a pygame front end."""

__version__ = "0.1.0"
__all__ = ["__version__"]