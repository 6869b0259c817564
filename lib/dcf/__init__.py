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

""" Parser for deb-control style files (stanzas of "Name: value" fields)

The library consists of two pull-based parsers that are composed by the
caller:

 * :class:`StanzaParser` splits a document into stanzas (paragraphs).
 * :class:`FieldParser` takes a stanza apart into field/value pairs, joining
   continuation lines and dropping comment lines.

:func:`iter_stanza_fields` combines the two for the common case.  Both parsers
work on bytes and never copy the source::

    >>> from dcf import StanzaParser, FieldParser
    >>> document = b'Package: foo\\nSuggests:\\nDepends: bar\\n\\nPackage: bar\\n'
    >>> with FieldParser() as fields:
    ...     for stanza in StanzaParser(document):
    ...         fields.reset(stanza)
    ...         print([(bytes(n), bytes(v)) for n, v in fields])
    [(b'Package', b'foo'), (b'Suggests', b''), (b'Depends', b'bar')]
    [(b'Package', b'bar')]
"""

# pylint: disable=useless-import-alias
from dcf.field import FieldParser as FieldParser
from dcf.stanza import StanzaParser as StanzaParser
from dcf.parsing import iter_stanza_fields as iter_stanza_fields
from dcf.buffer import ScratchBuffer as ScratchBuffer
from dcf.types import (
    BufferExceededError as BufferExceededError,
    DcfError as DcfError,
    DcfParseError as DcfParseError,
    ErrorInfo as ErrorInfo,
    Field as Field,
    InvalidDefinitionError as InvalidDefinitionError,
    InvalidFieldNameError as InvalidFieldNameError,
    InvalidNameError as InvalidNameError,
)
from dcf._util import print_fields as print_fields

__all__ = [
    'FieldParser',
    'StanzaParser',
    'iter_stanza_fields',
    'ScratchBuffer',
    'BufferExceededError',
    'DcfError',
    'DcfParseError',
    'ErrorInfo',
    'Field',
    'InvalidDefinitionError',
    'InvalidFieldNameError',
    'InvalidNameError',
    'print_fields',
]
