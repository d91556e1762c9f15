"""Learning session engine for the language helper flashcard application."""

__version__ = "0.1.0"
