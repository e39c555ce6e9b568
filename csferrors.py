# -*- coding: utf-8 -*-
"""Exceptions raised while reading or writing string tables."""


class CsfError(ValueError):
    """Base class for every string table error.

    Args:
        message (str): What went wrong.
        offset (int, optional): Byte offset in a .csf stream.
        label (str, optional): Name of the label being processed.
        line (int, optional): 1-based line number in an .ini document.
    """

    def __init__(self, message, offset=None, label=None, line=None):
        self.message = message
        self.offset = offset
        self.label = label
        self.line = line
        super().__init__(self._format())

    def _format(self):
        details = []
        if self.label is not None:
            details.append(f"label \"{self.label}\"")
        if self.offset is not None:
            details.append(f"position {self.offset}")
        if self.line is not None:
            details.append(f"line {self.line}")
        if details:
            return f"{self.message} ({', '.join(details)})"
        return self.message


class FormatError(CsfError):
    """Bad magic, bad marker, unparseable document or missing header."""


class UnexpectedEndOfInput(FormatError):
    """The stream ended in the middle of a record."""


class VersionMismatch(CsfError):
    """The .ini document declares a schema version this module cannot read."""


class InvalidLabelName(CsfError):
    """A label name is empty or has characters outside ASCII 32..126."""


class EncodingError(CsfError):
    """A value is not valid UTF-16 text."""


class InvariantViolation(CsfError):
    """Internal consistency check failed while writing. This is a bug."""
