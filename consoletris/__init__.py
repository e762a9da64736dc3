"""A falling-block puzzle game for the terminal: piece rules, game loop base and console front end."""

__version__ = "0.1.0"
__all__ = ["block", "instance", "game"]