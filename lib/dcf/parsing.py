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

""" Read whole documents with the stanza and field parsers

:func:`iter_stanza_fields` is the usual way to combine the two parsers: one
:class:`dcf.field.FieldParser` is reset onto each stanza found by the
:class:`dcf.stanza.StanzaParser`, so the scratch buffer is allocated once::

    >>> from dcf.parsing import iter_stanza_fields
    >>> document = b'''Source: foo
    ... Maintainer: Jane Doe <jane@example.org>
    ...
    ... Package: foo
    ... Depends: libbar,
    ...          libbaz
    ... '''
    >>> for fields in iter_stanza_fields(document):
    ...     print(fields)
    [(b'Source', b'foo'), (b'Maintainer', b'Jane Doe <jane@example.org>')]
    [(b'Package', b'foo'), (b'Depends', b'libbar, libbaz')]
"""

import logging
import warnings

from typing import IO, Iterator, List, Tuple, Union

from dcf._util import BytesLike
from dcf.buffer import DEFAULT_INITIAL_SIZE
from dcf.field import FieldParser
from dcf.stanza import StanzaParser
from dcf.types import DcfParseError, ErrorInfo


logger = logging.getLogger(__name__)


def _relocate(error, start, first_line):
    # type: (DcfParseError, int, int) -> DcfParseError
    """Translate the position of an error inside a stanza to the whole document"""
    info = error.error_info
    return error.__class__(ErrorInfo(info.offender,
                                     info.line + first_line - 1,
                                     info.column,
                                     info.offset + start))


def _parse_error(error, strict):
    # type: (DcfParseError, bool) -> None
    if strict:
        raise error
    warnings.warn(str(error))


def iter_stanza_fields(source,  # type: Union[BytesLike, IO[bytes]]
                       *,
                       strict=True,  # type: bool
                       initial_buffer_size=DEFAULT_INITIAL_SIZE,  # type: int
                       ):
    # type: (...) -> Iterator[List[Tuple[bytes, bytes]]]
    """Yield the fields of each stanza in ``source`` as ``(name, value)`` lists

    Names and values are copied to ``bytes``, so the results stay valid after
    the iteration moved on.

    :param source: The document as a bytes-like object or a binary file
      object (which will be read completely).
    :param strict: Whether to raise an exception on syntax errors.  If False,
      a warning is issued instead and parsing continues with the next line
      (a stanza where no field could be parsed is skipped).
    :param initial_buffer_size: Initial size of the buffer used to join
      multi-line values.
    """
    if hasattr(source, 'read'):
        source = source.read()
    stanzas = StanzaParser(source)
    with FieldParser(initial_buffer_size=initial_buffer_size) as fields:
        stanza_no = 0
        while True:
            try:
                start, end = stanzas.next_span()
            except StopIteration:
                break
            except DcfParseError as e:
                _parse_error(e, strict)
                continue

            stanza_no += 1
            fields.reset(stanzas.source[start:end])
            result = []  # type: List[Tuple[bytes, bytes]]
            while True:
                try:
                    name, value = next(fields)
                except StopIteration:
                    break
                except DcfParseError as e:
                    _parse_error(_relocate(e, start, stanzas.last_start_line), strict)
                    continue
                result.append((bytes(name), bytes(value)))

            logger.debug("Stanza %d (bytes %d..%d) has %d field(s)",
                         stanza_no, start, end, len(result))
            if result:
                yield result
