"""Quiz Loader - Fonte da definição do quiz."""

from .quiz_source import load_quiz, parse_quiz

__all__ = ["load_quiz", "parse_quiz"]
