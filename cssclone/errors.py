"""
CSSClone — duplicated declaration detector for stylesheets.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""


class CssCloneError(Exception):
    """Base exception for CSSClone."""


class UsageError(CssCloneError):
    """Command line arguments are invalid."""


class FileProcessingError(CssCloneError):
    """Error reading a stylesheet."""


class ParseError(FileProcessingError):
    """Stylesheet syntax is malformed."""

    def __init__(
        self,
        message: str,
        *,
        filepath: str = "",
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(message)
        self.filepath = filepath
        self.line = line
        self.column = column

    def __str__(self) -> str:
        message = super().__str__()
        if not self.filepath:
            return message
        location = self.filepath
        if self.line is not None:
            location += f":{self.line}"
            if self.column is not None:
                location += f":{self.column}"
        return f"{location}: {message}"
