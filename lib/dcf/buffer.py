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

"""Reusable byte buffer used to assemble multi-line field values"""

from typing import Optional, Union

from dcf.types import BufferExceededError


DEFAULT_INITIAL_SIZE = 4096


class ScratchBuffer:
    """Append-only byte buffer that keeps its storage between uses

    The buffer comes in two configurations:

     * Growing (the default): the buffer owns its storage, which starts at
       ``initial_size`` bytes and doubles whenever it runs full.
     * Fixed: the caller passes a writable ``buffer`` whose length is the
       capacity.  Appending beyond it raises :class:`BufferExceededError`.

    :meth:`clear` only resets the fill level, so the storage (and its capacity)
    is reused for the next value.  Views returned by :meth:`getvalue` share the
    storage and are overwritten by the next value.
    """

    __slots__ = ('_storage', '_view', '_size', '_fixed')

    def __init__(self,
                 initial_size=DEFAULT_INITIAL_SIZE,  # type: int
                 buffer=None,  # type: Optional[Union[bytearray, memoryview]]
                 ):
        # type: (...) -> None
        if buffer is not None:
            view = memoryview(buffer)
            if view.readonly:
                raise TypeError("The scratch buffer must be writable")
            if view.ndim != 1 or view.itemsize != 1:
                view = view.cast('B')
            self._storage = buffer  # type: Optional[Union[bytearray, memoryview]]
            self._view = view  # type: Optional[memoryview]
            self._fixed = True
        else:
            if initial_size < 1:
                raise ValueError("initial_size must be a positive number, not %r" % initial_size)
            storage = bytearray(initial_size)
            self._storage = storage
            self._view = memoryview(storage)
            self._fixed = False
        self._size = 0

    def __len__(self):
        # type: () -> int
        return self._size

    def __enter__(self):
        # type: () -> ScratchBuffer
        return self

    def __exit__(self, *exc_info):
        # type: (*object) -> None
        self.release()

    @property
    def capacity(self):
        # type: () -> int
        return len(self._checked_view())

    @property
    def is_fixed(self):
        # type: () -> bool
        return self._fixed

    @property
    def released(self):
        # type: () -> bool
        return self._view is None

    def _checked_view(self):
        # type: () -> memoryview
        view = self._view
        if view is None:
            raise ValueError("Operation on a released scratch buffer")
        return view

    def _reserve(self, needed):
        # type: (int) -> memoryview
        view = self._checked_view()
        capacity = len(view)
        if needed <= capacity:
            return view
        if self._fixed:
            raise BufferExceededError(capacity)
        while capacity < needed:
            capacity *= 2
        # Views handed out by getvalue() keep the old storage alive, so it is
        # replaced rather than resized in place.
        storage = bytearray(capacity)
        storage[:self._size] = view[:self._size]
        self._storage = storage
        self._view = view = memoryview(storage)
        return view

    def append(self, byte):
        # type: (int) -> None
        view = self._reserve(self._size + 1)
        view[self._size] = byte
        self._size += 1

    def extend(self, data):
        # type: (Union[bytes, bytearray, memoryview]) -> None
        n = len(data)
        view = self._reserve(self._size + n)
        view[self._size:self._size + n] = data
        self._size += n

    def clear(self):
        # type: () -> None
        self._checked_view()
        self._size = 0

    def getvalue(self):
        # type: () -> memoryview
        """Return a view of the bytes appended since the last clear()"""
        return self._checked_view()[:self._size].toreadonly()

    def release(self):
        # type: () -> None
        """Drop the storage; the buffer cannot be used afterwards"""
        self._view = None
        self._storage = None
        self._size = 0
