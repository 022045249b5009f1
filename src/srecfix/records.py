# Copyright (c) 2013-2025, Andrea Zoppi
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# 1. Redistributions of source code must retain the above copyright notice,
#    this list of conditions and the following disclaimer.
#
# 2. Redistributions in binary form must reproduce the above copyright
#    notice, this list of conditions and the following disclaimer in the
#    documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE
# ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE
# LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR
# CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF
# SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS
# INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN
# CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
# ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.

r"""Motorola S-record line model.

See Also:
    `<https://en.wikipedia.org/wiki/SREC_(file_format)>`_
"""

import enum
import re
from typing import NamedTuple
from typing import Optional

from .utils import hex_digits

RECORD_REGEX = re.compile(r'^S(?P<tag>[0-9])')
r"""Record marker regex: uppercase ``S`` followed by the tag digit."""


class SrecTag(enum.IntEnum):
    r"""Motorola S-record tag."""

    HEADER = 0
    r"""Header string. Optional."""

    DATA_16 = 1
    r"""16-bit address data record."""

    DATA_24 = 2
    r"""24-bit address data record."""

    DATA_32 = 3
    r"""32-bit address data record."""

    RESERVED = 4
    r"""Reserved tag."""

    COUNT_16 = 5
    r"""16-bit record count. Optional."""

    COUNT_24 = 6
    r"""24-bit record count. Optional."""

    START_32 = 7
    r"""32-bit start address. Terminates :attr:`DATA_32`."""

    START_24 = 8
    r"""24-bit start address. Terminates :attr:`DATA_24`."""

    START_16 = 9
    r"""16-bit start address. Terminates :attr:`DATA_16`."""

    def get_address_size(self) -> int:
        r"""Calculates the address size.

        It calculates the *address* field size for the calling tag.
        If the *address* field is not supported, it returns zero.

        Returns:
            int: *Address* size, in bytes.

        Examples:
            >>> SrecTag.DATA_32.get_address_size()
            4
            >>> SrecTag.START_24.get_address_size()
            3
            >>> SrecTag.COUNT_16.get_address_size()
            2
            >>> SrecTag.RESERVED.get_address_size()
            0
        """

        SIZES = (2, 2, 3, 4, 0, 2, 3, 4, 3, 2)
        size = SIZES[self]
        return size

    def is_data(self) -> bool:
        r"""Tells whether this is a data record tag.

        Returns:
            bool: This is a data record tag.

        Examples:
            >>> SrecTag.DATA_24.is_data()
            True
            >>> SrecTag.HEADER.is_data()
            False
        """

        return ((self == self.DATA_16) or
                (self == self.DATA_24) or
                (self == self.DATA_32))


class SrecLine(NamedTuple):
    r"""Decoded S-record line.

    All the fields are derived from the hexadecimal payload following the
    ``S<tag>`` marker, where any non-hexadecimal characters were stripped.
    """

    tag: SrecTag
    r"""Record tag."""

    payload: str
    r"""Hexadecimal payload digits, checksum included."""

    count: int
    r"""Byte count field."""

    address: int
    r"""Address field; zero for tags without address."""

    data: bytes
    r"""Data bytes, between address and checksum."""

    checksum: int
    r"""Declared checksum byte."""

    @classmethod
    def parse(cls, line: str) -> Optional['SrecLine']:
        r"""Parses a record line.

        Args:
            line (str):
                Line of text.

        Returns:
            :class:`SrecLine`: Decoded record, or ``None`` if `line` is not
            a record, or its payload cannot hold the fields its tag requires.

        Examples:
            >>> record = SrecLine.parse('S1070100DEADBEEFBF')
            >>> record.tag, hex(record.address), record.data.hex()
            (<SrecTag.DATA_16: 1>, '0x100', 'deadbeef')
            >>> SrecLine.parse('S9') is None
            True
        """

        match = RECORD_REGEX.match(line)
        if not match:
            return None

        tag = SrecTag(int(match.group('tag')))
        payload = hex_digits(line[2:])
        if len(payload) % 2:
            return None

        raw = bytes.fromhex(payload)
        address_size = tag.get_address_size()
        if len(raw) < 1 + address_size + 1:
            return None

        return cls(
            tag=tag,
            payload=payload,
            count=raw[0],
            address=int.from_bytes(raw[1:(1 + address_size)], 'big'),
            data=raw[(1 + address_size):-1],
            checksum=raw[-1],
        )

    @property
    def endex(self) -> int:
        r"""Exclusive end address of the data field."""

        return self.address + len(self.data)

    def contains(self, address: int) -> bool:
        r"""Tells whether a data record covers an address.

        Args:
            address (int):
                Target address.

        Returns:
            bool: `address` is within ``[address, endex)`` of a *data*
            record.
        """

        return self.tag.is_data() and self.address <= address < self.endex
