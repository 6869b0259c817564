#!/usr/bin/python3
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

"""Tests for the scratch buffer used to assemble field values"""

import pytest

from dcf.buffer import ScratchBuffer
from dcf.types import BufferExceededError


class TestScratchBuffer:

    def test_growing(self):
        # type: () -> None
        buf = ScratchBuffer(initial_size=2)
        assert not buf.is_fixed
        buf.extend(b'abc')
        buf.append(ord('d'))
        assert len(buf) == 4
        assert buf.capacity == 4
        buf.append(ord('e'))
        assert buf.capacity == 8
        assert bytes(buf.getvalue()) == b'abcde'

    def test_clear_keeps_capacity(self):
        # type: () -> None
        buf = ScratchBuffer(initial_size=4)
        buf.extend(b'x' * 10)
        buf.clear()
        assert len(buf) == 0
        assert buf.capacity == 16
        assert bytes(buf.getvalue()) == b''

    def test_old_views_survive_growth(self):
        # type: () -> None
        buf = ScratchBuffer(initial_size=2)
        buf.extend(b'ab')
        view = buf.getvalue()
        buf.extend(b'cd')
        assert bytes(view) == b'ab'
        assert view.readonly

    def test_fixed(self):
        # type: () -> None
        storage = bytearray(3)
        buf = ScratchBuffer(buffer=storage)
        assert buf.is_fixed
        assert buf.capacity == 3
        buf.extend(b'abc')
        assert storage == bytearray(b'abc')
        with pytest.raises(BufferExceededError) as excinfo:
            buf.append(ord('d'))
        assert excinfo.value.capacity == 3
        # Failed appends do not change the content
        assert bytes(buf.getvalue()) == b'abc'

    def test_fixed_buffer_must_be_writable(self):
        # type: () -> None
        with pytest.raises(TypeError):
            ScratchBuffer(buffer=b'abc')  # type: ignore

    def test_initial_size_must_be_positive(self):
        # type: () -> None
        with pytest.raises(ValueError):
            ScratchBuffer(initial_size=0)

    def test_release(self):
        # type: () -> None
        with ScratchBuffer() as buf:
            buf.extend(b'abc')
        assert buf.released
        assert len(buf) == 0
        with pytest.raises(ValueError):
            buf.append(ord('x'))
        with pytest.raises(ValueError):
            buf.getvalue()

    def test_released_on_error(self):
        # type: () -> None
        with pytest.raises(BufferExceededError):
            with ScratchBuffer(buffer=bytearray(1)) as buf:
                buf.extend(b'ab')
        assert buf.released
