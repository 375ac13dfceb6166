"""The DCMI Get Power Reading command (section 6.6.1)."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import IntEnum

from .errors import DecodeError
from .rolling_average import period_byte


class SystemPowerStatisticsMode(IntEnum):
    """Whether enhanced system power statistics are in use."""

    NORMAL = 0x01
    ENHANCED = 0x02

    def description(self) -> str:
        return "Normal" if self is SystemPowerStatisticsMode.NORMAL else "Enhanced"

    def __str__(self) -> str:
        return f"{self.value}({self.description()})"


@dataclass
class GetPowerReadingReq:
    """A Get Power Reading request.

    ``period`` is only sent in enhanced mode, and must be one of the periods
    the BMC advertises.
    """

    mode: SystemPowerStatisticsMode = SystemPowerStatisticsMode.NORMAL
    period: timedelta = timedelta(0)

    def serialize(self) -> bytes:
        if self.mode == SystemPowerStatisticsMode.ENHANCED:
            period = period_byte(self.period)
        else:
            period = 0x00
        return bytes([int(self.mode) & 0xFF, period, 0x00])


_LAYOUT = struct.Struct("<HHHHII")
_LENGTH = 17


@dataclass
class GetPowerReadingRsp:
    """A Get Power Reading response; power values are in watts."""

    instantaneous: int
    min: int
    max: int
    avg: int
    timestamp: datetime
    period: timedelta
    active: bool

    @classmethod
    def decode(cls, data: bytes) -> GetPowerReadingRsp:
        data = bytes(data)
        if len(data) < _LENGTH:
            if not data:
                raise DecodeError(
                    "0-byte power reading response; this is known to happen "
                    "when the BMC is not connected to the power supply",
                    truncated=True,
                )
            raise DecodeError(
                f"power reading response must be {_LENGTH} bytes, got {len(data)}",
                truncated=True,
            )
        instantaneous, minimum, maximum, average, stamp, period = _LAYOUT.unpack_from(
            data
        )
        return cls(
            instantaneous=instantaneous,
            min=minimum,
            max=maximum,
            avg=average,
            timestamp=datetime.fromtimestamp(stamp, tz=timezone.utc),
            period=timedelta(milliseconds=period),
            active=bool(data[16] & (1 << 6)),
        )