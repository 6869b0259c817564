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

""" Extract "Name: value" fields one at a time

The :class:`FieldParser` reads fields from a stanza (or any other text) and
joins continuation lines into a single logical value::

    >>> from dcf.field import FieldParser
    >>> with FieldParser(b'''Package: foo
    ... Description: short summary
    ...  long description
    ... # comments between continuation lines are dropped
    ...  second line
    ... ''') as parser:
    ...     for name, value in parser:
    ...         print(bytes(name), bytes(value))
    b'Package' b'foo'
    b'Description' b'short summary long description second line'

Field names are returned with their original casing.  Field names are
case-insensitive in deb-control files, so callers comparing names should
normalise them first.
"""

import enum
import logging

from typing import Iterator, Optional, Tuple, Union

from dcf._util import (
    BytesLike,
    COLON,
    HASH,
    NEWLINE,
    SPACE,
    as_source,
    is_field_byte,
    is_field_start,
    is_indent,
    is_whitespace,
)
from dcf.buffer import DEFAULT_INITIAL_SIZE, ScratchBuffer
from dcf.types import (
    BufferExceededError,
    ErrorInfo,
    Field,
    InvalidDefinitionError,
    InvalidNameError,
)


logger = logging.getLogger(__name__)


class _State(enum.Enum):
    START = 'start of line'
    FIELD = 'field name'
    VALUE_START = 'start of value'
    VALUE_START_NEWLINE = 'newline after empty value'
    VALUE = 'value'
    VALUE_NEWLINE = 'newline after value'
    VALUE_CONTINUATION = 'continuation line'
    VALUE_CONTINUATION_COMMENT = 'comment between continuation lines'
    COMMENT = 'comment'


class FieldParser:
    """Iterator over the fields of a stanza

    Each call to ``next()`` returns a :class:`dcf.types.Field`.  The name is a
    ``memoryview`` slice of the source.  The value is assembled in a scratch
    buffer owned by the parser: every continuation line contributes a single
    space followed by the line without its indentation.  The value view is
    overwritten by the next call to ``next()`` or :meth:`reset`.

    Errors:

     * :class:`dcf.types.InvalidNameError`: a field starts with a byte that
       cannot start a field name (such as "-").
     * :class:`dcf.types.InvalidDefinitionError`: a line that is neither blank
       nor a comment does not contain a ":".
     * :class:`dcf.types.BufferExceededError`: only with a fixed ``buffer``,
       the value did not fit.

    After any of these, the parser has skipped past the offending line (or
    field), so calling ``next()`` again continues with the rest of the input.

    :param source: The text to parse.  It can be replaced later via
      :meth:`reset`, which reuses the scratch buffer.
    :param initial_buffer_size: Initial size of the owned scratch buffer.  The
      buffer grows as needed.
    :param buffer: A writable bytearray/memoryview to use as scratch buffer
      instead of an owned one.  Its size is a hard limit on value lengths.
    """

    def __init__(self,
                 source=b'',  # type: BytesLike
                 *,
                 initial_buffer_size=DEFAULT_INITIAL_SIZE,  # type: int
                 buffer=None,  # type: Optional[Union[bytearray, memoryview]]
                 ):
        # type: (...) -> None
        self._buffer = ScratchBuffer(initial_size=initial_buffer_size, buffer=buffer)
        self._source = as_source(source)
        self._pos = 0
        self._line = 1
        self._column = 0
        self._overflow = None  # type: Optional[ErrorInfo]
        self.last_name_span = None  # type: Optional[Tuple[int, int]]

    def __iter__(self):
        # type: () -> Iterator[Field]
        return self

    def __enter__(self):
        # type: () -> FieldParser
        return self

    def __exit__(self, *exc_info):
        # type: (*object) -> None
        self.close()

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

    @property
    def buffer(self):
        # type: () -> ScratchBuffer
        return self._buffer

    def reset(self, new_source):
        # type: (BytesLike) -> None
        """Start over on ``new_source``, keeping the scratch buffer

        Use this rather than creating a new parser for every stanza when
        parsing many stanzas.
        """
        self._source = as_source(new_source)
        self._pos = 0
        self._line = 1
        self._column = 0
        self._overflow = None
        self.last_name_span = None
        self._buffer.clear()

    def close(self):
        # type: () -> None
        """Release the scratch buffer; the parser cannot be used afterwards"""
        self._buffer.release()

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

    def _error_info(self):
        # type: () -> ErrorInfo
        pos = self._pos
        return ErrorInfo(bytes(self._source[pos:pos + 1]), self._line, self._column, pos)

    def _syntax_error(self, exc_class):
        # type: (type) -> Exception
        error_info = self._error_info()
        self._skip_line()
        logger.debug("%s at line %d, column %d", exc_class.__name__,
                     error_info.line, error_info.column)
        return exc_class(error_info)

    def _push(self, c):
        # type: (int) -> None
        if self._overflow is not None:
            return
        try:
            self._buffer.append(c)
        except BufferExceededError:
            # Keep scanning so the whole field is skipped; reported in _field()
            self._overflow = self._error_info()

    def _field(self, name_start, name_end):
        # type: (int, int) -> Field
        overflow = self._overflow
        if overflow is not None:
            self._overflow = None
            self._buffer.clear()
            logger.debug("Value at line %d exceeded the scratch buffer", overflow.line)
            raise BufferExceededError(self._buffer.capacity, overflow)
        self.last_name_span = (name_start, name_end)
        return Field(self._source[name_start:name_end], self._buffer.getvalue())

    def __next__(self):
        # type: () -> Field
        source = self._source
        length = len(source)
        state = _State.START
        name_start = name_end = 0
        self._buffer.clear()
        self._overflow = None

        while self._pos < length:
            c = source[self._pos]

            if state is _State.START:
                if is_field_start(c):
                    name_start = self._pos
                    name_end = self._pos + 1
                    state = _State.FIELD
                elif c == HASH:
                    state = _State.COMMENT
                elif not is_whitespace(c):
                    raise self._syntax_error(InvalidNameError)
            elif state is _State.FIELD:
                if is_field_byte(c):
                    name_end = self._pos + 1
                elif c == COLON:
                    state = _State.VALUE_START
                elif c == NEWLINE or not is_whitespace(c):
                    raise self._syntax_error(InvalidDefinitionError)
            elif state is _State.VALUE_START:
                if c == NEWLINE:
                    # Either an empty value or a value starting on the next line
                    state = _State.VALUE_START_NEWLINE
                elif not is_whitespace(c):
                    self._push(c)
                    state = _State.VALUE
            elif state is _State.VALUE_START_NEWLINE:
                if is_indent(c):
                    state = _State.VALUE_START
                elif c == NEWLINE:
                    self._advance(c)
                    return self._field(name_start, name_end)
                else:
                    # Empty value; this byte starts the next field
                    return self._field(name_start, name_end)
            elif state is _State.VALUE:
                if c == NEWLINE:
                    state = _State.VALUE_NEWLINE
                else:
                    self._push(c)
            elif state is _State.VALUE_NEWLINE:
                if c == NEWLINE:
                    self._advance(c)
                    return self._field(name_start, name_end)
                if is_indent(c):
                    state = _State.VALUE_CONTINUATION
                elif c == HASH:
                    state = _State.VALUE_CONTINUATION_COMMENT
                else:
                    return self._field(name_start, name_end)
            elif state is _State.VALUE_CONTINUATION:
                if c == NEWLINE:
                    # Whitespace-only continuation line
                    state = _State.VALUE_NEWLINE
                elif not is_indent(c):
                    self._push(SPACE)
                    self._push(c)
                    state = _State.VALUE
            elif state is _State.VALUE_CONTINUATION_COMMENT:
                if c == NEWLINE:
                    state = _State.VALUE_NEWLINE
            elif state is _State.COMMENT:
                if c == NEWLINE:
                    state = _State.START
            else:  # pragma: no cover
                assert False, "Unknown state: %s" % state

            self._advance(c)

        if state is _State.START or state is _State.COMMENT:
            raise StopIteration
        if state is _State.FIELD:
            # The last byte of the input belongs to a name without a ":"
            pos = length - 1
            error_info = ErrorInfo(bytes(source[pos:length]), self._line, self._column - 1, pos)
            logger.debug("InvalidDefinitionError at line %d, column %d (end of input)",
                         error_info.line, error_info.column)
            raise InvalidDefinitionError(error_info)
        return self._field(name_start, name_end)
