"""Binary formats of analog sensor readings and thresholds."""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum

from .complement import ones


def parse_unsigned(raw: int) -> int:
    """Parse an 8-bit unsigned reading."""
    return raw & 0xFF


def parse_ones_complement(raw: int) -> int:
    """Parse an 8-bit one's complement reading."""
    return ones(raw & 0xFF)


def parse_twos_complement(raw: int) -> int:
    """Parse an 8-bit two's complement reading."""
    raw &= 0xFF
    return raw - 0x100 if raw & 0x80 else raw


class AnalogDataFormat(IntEnum):
    """Analog data format of a Full Sensor Record (a 2-bit field)."""

    UNSIGNED = 0
    ONES_COMPLEMENT = 1
    TWOS_COMPLEMENT = 2
    NOT_ANALOG = 3

    def parser(self) -> Callable[[int], int]:
        """Function converting raw values of this format to ints.

        Raises ValueError for formats without numeric readings.
        """
        try:
            return _PARSERS[self]
        except KeyError:
            raise ValueError(f"no analog data format parser found for {self}") from None

    def description(self) -> str:
        return _DESCRIPTIONS.get(self, "Unknown")

    def __str__(self) -> str:
        return f"{self.value:#x}({self.description()})"


_PARSERS: dict[AnalogDataFormat, Callable[[int], int]] = {
    AnalogDataFormat.UNSIGNED: parse_unsigned,
    AnalogDataFormat.ONES_COMPLEMENT: parse_ones_complement,
    AnalogDataFormat.TWOS_COMPLEMENT: parse_twos_complement,
}

_DESCRIPTIONS = {
    AnalogDataFormat.UNSIGNED: "Unsigned",
    AnalogDataFormat.ONES_COMPLEMENT: "1's Complement",
    AnalogDataFormat.TWOS_COMPLEMENT: "2's Complement",
    AnalogDataFormat.NOT_ANALOG: "No analog readings",
}