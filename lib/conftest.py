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

from typing import Iterator

import pytest

from dcf.field import FieldParser


@pytest.fixture()
def field_parser():
    # type: () -> Iterator[FieldParser]
    # A parser without input; tests point it at their input with reset()
    with FieldParser() as parser:
        yield parser
