"""Errors raised by the comment normalizer."""


class CommentParseError(Exception):
    """Raised when comment text cannot be parsed."""

    def __init__(self, message: str, position: int | None = None) -> None:
        self.message = message
        self.position = position
        full_message = message
        if position is not None:
            full_message += f" (at offset {position})"
        super().__init__(full_message)


class UnterminatedCommentError(CommentParseError):
    """Raised when a documentation comment opener has no closer."""

    def __init__(self, position: int, line: int, column: int) -> None:
        self.line = line
        self.column = column
        super().__init__(
            f"Unclosed documentation comment starting at line {line}, column {column}",
            position=position,
        )
