# SPDX-FileCopyrightText: 2025 nickcaps Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

DEFAULT_CAPS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


class CapsMap:
    """Set of characters counted as capital letters in a nick.

    Backed by a lookup table indexed by code point, sized to cover at least
    the 8-bit range and the highest configured character. Any character
    past the end of the table is not a capital.
    """

    __slots__ = ("_table",)

    TABLE_MIN_SIZE = 256

    def __init__(self, characters=DEFAULT_CAPS):

        if characters is None:
            characters = DEFAULT_CAPS

        code_points = [ord(char) for char in characters]
        table = bytearray(max([self.TABLE_MIN_SIZE - 1, *code_points]) + 1)

        for code_point in code_points:
            table[code_point] = 1

        self._table = bytes(table)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.characters!r})"

    def __eq__(self, other):
        return isinstance(other, CapsMap) and self._table.rstrip(b"\0") == other._table.rstrip(b"\0")

    def __hash__(self):
        return hash(self._table.rstrip(b"\0"))

    @property
    def characters(self):
        return "".join(chr(code_point) for code_point, value in enumerate(self._table) if value)

    def is_capital(self, char):

        code_point = ord(char)
        return code_point < len(self._table) and self._table[code_point] == 1

    def count(self, text):
        """Returns how many characters of text are capitals."""

        table = self._table
        size = len(table)

        return sum(table[code_point] for code_point in map(ord, text) if code_point < size)
