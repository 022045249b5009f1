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

r"""Configuration options.

Options are named after the host editor settings they mirror, within the
``srecord`` section.
"""

import re
from dataclasses import dataclass
from dataclasses import fields
from typing import Any
from typing import Mapping

COLOR_REGEX = re.compile(r'^#[0-9A-Fa-f]{6}$')
r"""Custom color regex, ``#RRGGBB``."""

DEFAULT_SECTION: str = 'srecord'
r"""Default settings section name."""

SETTING_KEYS: Mapping[str, str] = {
    'crcColorFallback': 'crc_color_fallback',
    'crcCustomColor': 'crc_custom_color',
    'repairOnSave': 'repair_on_save',
}
r"""Host setting key to :class:`Settings` field name."""

BOOL_STRINGS: Mapping[str, bool] = {
    'true': True,
    'yes': True,
    'on': True,
    '1': True,
    'false': False,
    'no': False,
    'off': False,
    '0': False,
}
r"""Boolean setting strings, case-insensitive."""


def parse_bool(value: Any) -> bool:
    r"""Parses a boolean setting value.

    Examples:
        >>> parse_bool('False')
        False
        >>> parse_bool(1)
        True
    """

    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        key = value.strip().lower()
        if key in BOOL_STRINGS:
            return BOOL_STRINGS[key]
    raise ValueError(f'invalid boolean: {value!r}')


@dataclass(frozen=True)
class Settings:
    r"""Checker settings."""

    crc_color_fallback: bool = False
    r"""Highlights bad checksums with :attr:`crc_custom_color`, instead of
    the theme error color."""

    crc_custom_color: str = '#ff1744'
    r"""Fallback highlight color, as ``#RRGGBB``."""

    repair_on_save: bool = False
    r"""Repairs bad checksums before saving."""

    def __post_init__(self):

        if not COLOR_REGEX.match(self.crc_custom_color):
            raise ValueError(f'invalid color: {self.crc_custom_color!r}')

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Any],
        section: str = DEFAULT_SECTION,
    ) -> 'Settings':
        r"""Loads settings from a host mapping.

        Keys are either dotted (``srecord.repairOnSave``) or plain
        (``repairOnSave``); :class:`Settings` field names are accepted too.
        Unknown keys are ignored.

        Args:
            mapping (dict):
                Host settings.

            section (str):
                Settings section prefix.

        Returns:
            :class:`Settings`: Loaded settings.

        Examples:
            >>> Settings.from_mapping({'srecord.repairOnSave': True})
            Settings(crc_color_fallback=False, crc_custom_color='#ff1744', repair_on_save=True)
        """

        names = {f.name for f in fields(cls)}
        prefix = f'{section}.' if section else ''
        kwargs = {}

        for key, value in mapping.items():
            if prefix and key.startswith(prefix):
                key = key[len(prefix):]
            name = SETTING_KEYS.get(key, key)
            if name in names:
                kwargs[name] = value

        for name in ('crc_color_fallback', 'repair_on_save'):
            if name in kwargs:
                kwargs[name] = parse_bool(kwargs[name])

        return cls(**kwargs)

    @property
    def color_rgb(self):
        r"""Custom color as an RGB tuple."""

        color = self.crc_custom_color
        return tuple(int(color[i:(i + 2)], 16) for i in (1, 3, 5))
