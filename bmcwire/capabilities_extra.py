"""Optional, manageability access and enhanced power statistics responses.

These are the responses to parameters 3, 4 and 5 of the Get DCMI
Capabilities Info command.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

from .capabilities import CapabilitiesHeader
from .errors import DecodeError
from .rolling_average import period_duration

#: Channel number meaning "not supported" in manageability access attributes.
CHANNEL_NOT_SUPPORTED = 0xFF


def _require_body(body: bytes, length: int) -> None:
    if len(body) < length:
        raise DecodeError(
            f"invalid capabilities response: need at least {length} bytes, "
            f"got {len(body)}",
            truncated=True,
        )


@dataclass
class OptionalPlatformAttrsRsp:
    """Response to parameter 3: the power management controller's location.

    ``power_management_slave_address`` is the 7-bit I2C slave address on the
    IPMB.
    """

    header: CapabilitiesHeader
    power_management_slave_address: int
    power_management_channel: int
    power_management_revision: int
    contents: bytes = b""
    payload: bytes = b""

    @classmethod
    def decode(cls, data: bytes) -> OptionalPlatformAttrsRsp:
        data = bytes(data)
        header, body = CapabilitiesHeader.decode(data)
        body_length = 2
        _require_body(body, body_length)
        consumed = len(data) - len(body) + body_length
        return cls(
            header=header,
            power_management_slave_address=body[0] >> 1,
            power_management_channel=body[1] >> 4,
            power_management_revision=body[1] & 0x0F,
            contents=data[:consumed],
            payload=body[body_length:],
        )


@dataclass
class ManageabilityAccessAttrsRsp:
    """Response to parameter 4: out-of-band channel numbers.

    A channel of 0xff means not supported; see ``is_supported``.
    """

    header: CapabilitiesHeader
    primary_lan_oob_channel: int
    secondary_lan_oob_channel: int
    serial_oob_channel: int
    contents: bytes = b""
    payload: bytes = b""

    @staticmethod
    def is_supported(channel: int) -> bool:
        """Whether a channel number denotes a supported channel."""
        return channel != CHANNEL_NOT_SUPPORTED

    @classmethod
    def decode(cls, data: bytes) -> ManageabilityAccessAttrsRsp:
        data = bytes(data)
        header, body = CapabilitiesHeader.decode(data)
        body_length = 3
        _require_body(body, body_length)
        consumed = len(data) - len(body) + body_length
        return cls(
            header=header,
            primary_lan_oob_channel=body[0],
            secondary_lan_oob_channel=body[1],
            serial_oob_channel=body[2],
            contents=data[:consumed],
            payload=body[body_length:],
        )


@dataclass
class EnhancedSystemPowerStatisticsAttrsRsp:
    """Response to parameter 5 (not in v1.0): supported rolling average periods.

    Periods are in the order the BMC gave them; a zero period means the
    current reading can be obtained.
    """

    header: CapabilitiesHeader
    power_rolling_avg_time_periods: list[timedelta] = field(default_factory=list)
    contents: bytes = b""
    payload: bytes = b""

    @classmethod
    def decode(cls, data: bytes) -> EnhancedSystemPowerStatisticsAttrsRsp:
        data = bytes(data)
        header, body = CapabilitiesHeader.decode(data)
        _require_body(body, 1)
        periods = body[0]
        if len(body) < 1 + periods:
            raise DecodeError(
                f"managed system indicated {periods} supported rolling average "
                f"time periods, but only room for {len(body) - 1} in payload of "
                f"length {len(body)}",
                truncated=True,
            )
        body_length = 1 + periods
        consumed = len(data) - len(body) + body_length
        return cls(
            header=header,
            power_rolling_avg_time_periods=[
                period_duration(b) for b in body[1:body_length]
            ],
            contents=data[:consumed],
            payload=body[body_length:],
        )