# Copyright (C) 2025 The python-dcf developers
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA

"""Result and error types shared by the stanza and field parsers"""

import collections
from typing import Optional


ErrorInfo = collections.namedtuple('ErrorInfo', ['offender', 'line', 'column', 'offset'])
ErrorInfo.__doc__ = """Position of the byte that made a parser give up

:ivar offender: The offending byte as a one byte ``bytes`` object (``b''``
  when the source was empty).
:ivar line: Line number of the offending byte (1-based).
:ivar column: Column of the offending byte (0-based).
:ivar offset: Index of the offending byte in the source, so
  ``source[offset:offset + 1]`` is the offender.
"""

Field = collections.namedtuple('Field', ['name', 'value'])
Field.__doc__ = """A field/value pair returned by :class:`dcf.field.FieldParser`

``name`` is a zero-copy view into the parsed source.  ``value`` is a view into
the parser's scratch buffer and is only valid until the parser is advanced or
reset; use ``bytes(field.value)`` to keep it.
"""


class DcfError(Exception):
    """Base class of all errors raised by this library"""


class DcfParseError(DcfError, ValueError):
    """The input is not valid deb-control syntax"""

    is_user_error = True
    message = "Syntax error"

    def __init__(self, error_info):
        # type: (ErrorInfo) -> None
        self.error_info = error_info
        super().__init__(error_info)

    @property
    def offender(self):
        # type: () -> bytes
        return self.error_info.offender

    @property
    def line(self):
        # type: () -> int
        return self.error_info.line

    @property
    def column(self):
        # type: () -> int
        return self.error_info.column

    def __str__(self):
        # type: () -> str
        return "{msg} at line {line}, column {column}: {offender!r}".format(
            msg=self.message,
            line=self.error_info.line,
            column=self.error_info.column,
            offender=self.error_info.offender,
        )


class InvalidFieldNameError(DcfParseError):
    """A stanza line starts with a byte that cannot start a field name"""

    message = "Invalid field name"


class InvalidNameError(DcfParseError):
    """A field starts with a byte that is not allowed as first name byte"""

    message = "Invalid field name"


class InvalidDefinitionError(DcfParseError):
    """A line is neither blank, a comment nor a "Name: value" field"""

    message = "Invalid field definition"


class BufferExceededError(DcfError):
    """A field value does not fit into a fixed-capacity scratch buffer"""

    def __init__(self, capacity, error_info=None):
        # type: (int, Optional[ErrorInfo]) -> None
        self.capacity = capacity
        self.error_info = error_info
        super().__init__(capacity, error_info)

    def __str__(self):
        # type: () -> str
        msg = "Field value exceeds the scratch buffer capacity of {n} bytes".format(
            n=self.capacity)
        if self.error_info is not None:
            msg += " (at line {line}, column {column})".format(
                line=self.error_info.line, column=self.error_info.column)
        return msg
