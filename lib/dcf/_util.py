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

import logging

from typing import Callable, Optional, Union


BytesLike = Union[bytes, bytearray, memoryview]

NEWLINE = 0x0A
CARRIAGE_RETURN = 0x0D
SPACE = 0x20
TAB = 0x09
HASH = 0x23
HYPHEN = 0x2D
COLON = 0x3A

# From Policy 5.1:
#
#    The field name is composed of US-ASCII characters excluding control
#    characters, space, and colon (i.e., characters in the ranges U+0021
#    (!) through U+0039 (9), and U+003B (;) through U+007E (~),
#    inclusive). Field names must not begin with the comment character
#    (U+0023 #), nor with the hyphen character (U+002D -).
_FIELD_BYTES = frozenset(range(0x21, 0x3A)) | frozenset(range(0x3B, 0x7F))
_FIELD_START_BYTES = _FIELD_BYTES - {HASH, HYPHEN}
_WHITESPACE_BYTES = frozenset((SPACE, TAB, CARRIAGE_RETURN, NEWLINE))


def is_field_start(c):
    # type: (int) -> bool
    """Whether the byte ``c`` may be the first byte of a field name"""
    return c in _FIELD_START_BYTES


def is_field_byte(c):
    # type: (int) -> bool
    """Whether the byte ``c`` may appear in a field name after the first byte"""
    return c in _FIELD_BYTES


def is_whitespace(c):
    # type: (int) -> bool
    return c in _WHITESPACE_BYTES


def is_indent(c):
    # type: (int) -> bool
    """Whether the byte ``c`` turns a line into a continuation line"""
    return c == SPACE or c == TAB


def as_source(source):
    # type: (BytesLike) -> memoryview
    """Return a read-only, flat byte view of ``source`` without copying it

    The parsers work on bytes, so text must be encoded by the caller first.
    """
    if isinstance(source, str):
        raise TypeError("Expected a bytes-like object, got str (encode the text first)")
    try:
        view = memoryview(source)
    except TypeError:
        raise TypeError("Expected a bytes-like object, got "
                        + type(source).__name__) from None
    if view.ndim != 1 or view.itemsize != 1:
        view = view.cast('B')
    return view.toreadonly()


def print_fields(source,  # type: BytesLike
                 *,
                 output_function=None,  # type: Optional[Callable[[str], None]]
                 ):
    # type: (...) -> None
    """Debugging aid, which dumps every stanza and field in ``source``

    :param source: The raw document.
    :param output_function: Callable that receives a single str argument and is
      responsible for "displaying" that line. The callable may be invoked multiple
      times (one per line of output).  Defaults to logging.info if omitted.

    Parse errors are printed in place of the field that caused them and the dump
    continues with the next line.
    """
    # Avoid circular dependency
    # pylint: disable=import-outside-toplevel
    from dcf.field import FieldParser
    from dcf.stanza import StanzaParser
    from dcf.types import DcfError

    if output_function is None:
        output_function = logging.info
    stanzas = StanzaParser(source)
    with FieldParser() as fields:
        stanza_no = 0
        while True:
            try:
                start, end = stanzas.next_span()
            except StopIteration:
                break
            except DcfError as e:
                output_function("! " + str(e))
                continue
            stanza_no += 1
            output_function("Stanza {no} (bytes {start}..{end})".format(
                no=stanza_no, start=start, end=end))
            fields.reset(stanzas.source[start:end])
            while True:
                try:
                    name, value = next(fields)
                except StopIteration:
                    break
                except DcfError as e:
                    output_function("  ! " + str(e))
                    continue
                output_function("  {name!r}: {value!r}".format(
                    name=bytes(name), value=bytes(value)))
