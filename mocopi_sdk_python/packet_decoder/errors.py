"""
Decode errors raised by the packet decoder.

Every error carries the tag of the chunk being read (when it is known) and
the absolute byte offset of that chunk within the datagram, so a malformed
capture can be located with a hex dump.
"""


class DecodeError(ValueError):
    """Base class for every failure to decode a datagram."""

    def __init__(self, reason, tag=None, offset=None):
        self.reason = reason
        self.tag = tag
        self.offset = offset
        super().__init__(self._format())

    def _format(self):
        where = []
        if self.tag is not None:
            where.append(f"tag={self.tag!r}")
        if self.offset is not None:
            where.append(f"offset={self.offset}")
        if not where:
            return self.reason
        return f"{self.reason} ({', '.join(where)})"


class TruncatedChunk(DecodeError):
    """Declared chunk length runs past the end of the available bytes."""


class InvalidTag(DecodeError):
    """The 4 tag bytes of a chunk are not valid text."""


class InvalidUtf8(DecodeError):
    """A text field payload is not valid UTF-8."""


class FieldSizeMismatch(DecodeError):
    """A fixed-width field payload has the wrong number of bytes."""

    def __init__(self, expected, actual, tag=None, offset=None):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"expected {expected} byte field, got {actual}", tag=tag, offset=offset
        )


class MalformedList(DecodeError):
    """Child chunks of a list do not add up to the list's declared length."""
