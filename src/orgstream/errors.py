"""Exception classes for orgstream.

Org-mode's grammar is permissive, so almost nothing raises: malformed
constructs degrade to plain text and unterminated blocks are closed
implicitly. The exceptions here cover the few conditions that cannot be
recovered from.
"""

from __future__ import annotations


class OrgStreamError(Exception):
    """Base exception for all orgstream errors.

    Catch this to handle any failure raised by the library.
    """

    pass


class EncodingError(OrgStreamError, ValueError):
    """The input buffer is not validly encoded text.

    Raised by ``parse_events()`` before any event is produced.
    """

    def __init__(self, message: str, offset: int | None = None) -> None:
        """Initialize encoding error.

        Args:
            message: Error description
            offset: Position of the first offending byte or character
        """
        self.message = message
        self.offset = offset
        suffix = f" (at offset {offset})" if offset is not None else ""
        super().__init__(f"{message}{suffix}")


class ParseError(OrgStreamError):
    """Error while driving a parse.

    Raised for misuse of the event stream, never for malformed Org input.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Build the message, prefixed with whatever location is known.

        Args:
            message: Error description
            lineno: 1-indexed line of the Org source, if known
            col_offset: 1-indexed column, only shown together with lineno
            source_file: Name given to parse_events(), for messages only
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class RenderError(OrgStreamError):
    """Error during rendering.

    Raised when an exporter receives an unbalanced event sequence: an End
    with no open Start, an End that closes the wrong Start, or a Start left
    open. Only hand-built sequences can be unbalanced.
    """

    pass
