"""Quest Live: live trivia race backend."""

__version__ = "0.1.0"
