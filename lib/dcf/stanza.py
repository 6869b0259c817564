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

""" Split a deb-control style document into stanzas

A stanza (also known as a paragraph) is a run of fields terminated by a blank
line or by the end of the input.  The :class:`StanzaParser` only does the
minimal amount of syntax checking needed to find stanza boundaries; use
:class:`dcf.field.FieldParser` to take each stanza apart::

    >>> from dcf.stanza import StanzaParser
    >>> parser = StanzaParser(b'''
    ... Source: foo
    ... # Comment lines do not end a stanza
    ... Build-Depends: debhelper-compat (= 13)
    ...
    ...
    ... Package: foo
    ... Architecture: any
    ... ''')
    >>> for stanza in parser:
    ...     print(bytes(stanza))
    b'Source: foo\\n# Comment lines do not end a stanza\\nBuild-Depends: debhelper-compat (= 13)\\n'
    b'Package: foo\\nArchitecture: any\\n'

Stanzas are returned as ``memoryview`` slices of the source, so no data is
copied.  The source must therefore stay alive (and unmodified) for as long as
the stanzas are used.
"""

import enum
import logging

from typing import Iterator, Tuple

from dcf._util import (
    BytesLike,
    COLON,
    HASH,
    HYPHEN,
    NEWLINE,
    as_source,
    is_indent,
)
from dcf.types import ErrorInfo, InvalidFieldNameError


logger = logging.getLogger(__name__)


class _State(enum.Enum):
    START = 'start of line'
    FIELD = 'field name'
    VALUE_START = 'start of value'
    VALUE = 'value'
    COMMENT = 'comment'
    NEWLINE = 'newline'


class StanzaParser:
    """Iterator over the stanzas of a document

    Each call to ``next()`` returns the next stanza as a ``memoryview`` of the
    source, ending with the newline of its last line (if there is one) but
    never including the blank line that terminated it.  Leading blank lines
    are skipped and consecutive blank lines collapse, so no empty stanzas are
    produced.  Once the input is exhausted, every further call raises
    StopIteration.

    A line that starts with "-" where a field name is expected raises
    :class:`InvalidFieldNameError`.  The parser then skips the rest of that
    line, so calling ``next()`` again continues with the following line.

    Instances are not thread-safe; share them between threads only with
    external locking.
    """

    def __init__(self, source):
        # type: (BytesLike) -> None
        self._source = as_source(source)
        self._pos = 0
        self._line = 1
        self._column = 0
        # Line number of the first line of the last stanza returned
        self.last_start_line = 1

    def __iter__(self):
        # type: () -> Iterator[memoryview]
        return self

    def __next__(self):
        # type: () -> memoryview
        start, end = self.next_span()
        return self._source[start:end]

    def __repr__(self):
        # type: () -> str
        return "{clsname}(position={pos}, line={line}, column={column})".format(
            clsname=self.__class__.__name__,
            pos=self._pos,
            line=self._line,
            column=self._column,
        )

    @property
    def source(self):
        # type: () -> memoryview
        """Read-only view of the whole source"""
        return self._source

    @property
    def position(self):
        # type: () -> int
        return self._pos

    @property
    def line(self):
        # type: () -> int
        return self._line

    @property
    def column(self):
        # type: () -> int
        return self._column

    def _advance(self, c):
        # type: (int) -> None
        self._pos += 1
        if c == NEWLINE:
            self._line += 1
            self._column = 0
        else:
            self._column += 1

    def _skip_line(self):
        # type: () -> None
        source = self._source
        length = len(source)
        while self._pos < length:
            c = source[self._pos]
            self._advance(c)
            if c == NEWLINE:
                break

    def _invalid_field_name(self):
        # type: () -> InvalidFieldNameError
        pos = self._pos
        error_info = ErrorInfo(bytes(self._source[pos:pos + 1]), self._line, self._column, pos)
        self._skip_line()
        logger.debug("Invalid field name at line %d, column %d",
                     error_info.line, error_info.column)
        return InvalidFieldNameError(error_info)

    def next_span(self):
        # type: () -> Tuple[int, int]
        """Return the ``(start, end)`` offsets of the next stanza in the source

        This is the offset-based variant of ``next()``.
        """
        source = self._source
        length = len(source)
        state = _State.START
        start = self._pos
        start_line = self._line
        seen_field = False

        while self._pos < length:
            c = source[self._pos]

            if state is _State.START:
                if c == NEWLINE:
                    if seen_field:
                        # A blank line after a comment line inside the stanza
                        end = self._pos
                        self.last_start_line = start_line
                        self._advance(c)
                        return start, end
                    # Leading blank lines are not part of the stanza
                    self._advance(c)
                    start = self._pos
                    start_line = self._line
                    continue
                if c == HASH:
                    state = _State.COMMENT
                elif c == HYPHEN:
                    raise self._invalid_field_name()
                else:
                    state = _State.FIELD
                    seen_field = True
            elif state is _State.FIELD:
                if c == NEWLINE:
                    state = _State.NEWLINE
                elif c == COLON:
                    state = _State.VALUE_START
            elif state is _State.VALUE_START:
                if c == NEWLINE:
                    state = _State.NEWLINE
                elif not is_indent(c):
                    state = _State.VALUE
            elif state is _State.VALUE:
                if c == NEWLINE:
                    state = _State.NEWLINE
            elif state is _State.COMMENT:
                if c == NEWLINE:
                    state = _State.START
            elif state is _State.NEWLINE:
                if c == NEWLINE:
                    # Second newline in a row: the stanza ends before the blank line
                    end = self._pos
                    self.last_start_line = start_line
                    self._advance(c)
                    return start, end
                # An ordinary line break; look at this byte again as the start of a line
                state = _State.START
                continue
            else:  # pragma: no cover
                assert False, "Unknown state: %s" % state

            self._advance(c)

        if not seen_field:
            # Only blank lines and comments were left
            raise StopIteration
        self.last_start_line = start_line
        return start, self._pos
