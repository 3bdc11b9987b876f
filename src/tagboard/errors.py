"""Exceptions raised by tagboard."""


class BoardError(Exception):
    """Base class for all tagboard errors."""


class PathOutOfRange(BoardError, IndexError):
    """A path does not resolve against the given tree."""

    def __init__(self, path, message: str | None = None) -> None:
        self.path = tuple(path)
        super().__init__(message or f"path {list(self.path)} is out of range")


class InvalidGrammarConfig(BoardError, ValueError):
    """A trigger string cannot be compiled into a tag matcher."""


class InvalidFieldValue(BoardError, ValueError):
    """A value cannot be written into an inline tag."""


class InvalidMove(BoardError, ValueError):
    """A move would place a node inside itself."""
