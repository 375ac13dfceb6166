"""The DCMI Get DCMI Capabilities Info command (section 6.1).

The response format depends on the parameter requested, so each parameter
has its own response type.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from .errors import DecodeError


class CapabilitiesParameter(int):
    """Selects which capabilities or attributes a request asks for."""

    SUPPORTED_CAPABILITIES: CapabilitiesParameter
    MANDATORY_PLATFORM_ATTRS: CapabilitiesParameter
    OPTIONAL_PLATFORM_ATTRS: CapabilitiesParameter
    MANAGEABILITY_ACCESS_ATTRS: CapabilitiesParameter
    ENHANCED_SYSTEM_POWER_STATISTICS_ATTRS: CapabilitiesParameter

    def description(self) -> str:
        """Human-readable name of the parameter, or "Unknown"."""
        return _PARAMETER_DESCRIPTIONS.get(int(self), "Unknown")

    def __str__(self) -> str:
        return f"{int(self)}({self.description()})"

    def __repr__(self) -> str:
        return f"CapabilitiesParameter({int(self)})"


CapabilitiesParameter.SUPPORTED_CAPABILITIES = CapabilitiesParameter(1)
CapabilitiesParameter.MANDATORY_PLATFORM_ATTRS = CapabilitiesParameter(2)
CapabilitiesParameter.OPTIONAL_PLATFORM_ATTRS = CapabilitiesParameter(3)
CapabilitiesParameter.MANAGEABILITY_ACCESS_ATTRS = CapabilitiesParameter(4)
CapabilitiesParameter.ENHANCED_SYSTEM_POWER_STATISTICS_ATTRS = CapabilitiesParameter(5)

_PARAMETER_DESCRIPTIONS = {
    1: "Supported DCMI Capabilities",
    2: "Mandatory Platform Attributes",
    3: "Optional Platform Attributes",
    4: "Manageability Access Attributes",
    5: "Enhanced System Power Statistics Attributes",
}


@dataclass
class GetDCMICapabilitiesInfoReq:
    """A Get DCMI Capabilities Info request for a single parameter."""

    parameter: int = 0

    def serialize(self) -> bytes:
        parameter = int(self.parameter)
        if not 0 <= parameter <= 0xFF:
            raise ValueError(f"parameter must fit in a byte, got {parameter}")
        return bytes([parameter])


@dataclass(frozen=True)
class CapabilitiesHeader:
    """The header shared by all Get DCMI Capabilities Info responses.

    ``revision`` is that of the parameter data: 1 for DCMI v1.0, 2 for v1.1
    and v1.5.
    """

    major_version: int
    minor_version: int
    revision: int

    @property
    def is_version_10(self) -> bool:
        return self.major_version == 1 and self.minor_version == 0

    @classmethod
    def decode(cls, data: bytes) -> tuple[CapabilitiesHeader, bytes]:
        """Decode the header, returning it with the remaining (maybe empty) bytes."""
        data = bytes(data)
        if len(data) < 3:
            raise DecodeError(
                f"invalid response header, got length {len(data)}, need 3",
                truncated=True,
            )
        return cls(data[0], data[1], data[2]), data[3:]


def _require_body(body: bytes, length: int) -> None:
    if len(body) < length:
        raise DecodeError(
            f"invalid capabilities response: need at least {length} bytes, "
            f"got {len(body)}",
            truncated=True,
        )


def _bit(value: int, bit: int) -> bool:
    return bool(value & (1 << bit))


@dataclass
class SupportedCapabilitiesRsp:
    """Response to parameter 1: platform and manageability access conformance.

    Fields only present in v1.0 are forced to true for later versions.
    ``contents`` holds the bytes decoded, ``payload`` any trailing bytes.
    """

    header: CapabilitiesHeader
    temperature_monitor: bool
    chassis_power: bool
    sel_logging: bool
    identification: bool
    power_management: bool
    vlan_capable: bool
    sol_supported: bool
    oob_primary_lan_channel_available: bool
    oob_secondary_lan_channel_available: bool
    serial_tmode_available: bool
    ib_kcs_channel_available: bool
    ib_system_interface_channel_available: bool
    contents: bytes = b""
    payload: bytes = b""

    @classmethod
    def decode(cls, data: bytes) -> SupportedCapabilitiesRsp:
        data = bytes(data)
        header, body = CapabilitiesHeader.decode(data)
        body_length = 3
        _require_body(body, body_length)
        v10 = header.is_version_10
        mandatory, optional, access = body[0], body[1], body[2]

        if v10:
            temperature_monitor = _bit(mandatory, 3)
            chassis_power = _bit(mandatory, 2)
            sel_logging = _bit(mandatory, 1)
            identification = _bit(mandatory, 0)
            vlan_capable = _bit(access, 5)
            sol_supported = _bit(access, 4)
            oob_primary = _bit(access, 3)
            ib_kcs = _bit(access, 0)
            ib_system_interface = False
        else:
            temperature_monitor = chassis_power = sel_logging = identification = True
            vlan_capable = sol_supported = oob_primary = ib_kcs = True
            ib_system_interface = _bit(access, 0)

        consumed = len(data) - len(body) + body_length
        return cls(
            header=header,
            temperature_monitor=temperature_monitor,
            chassis_power=chassis_power,
            sel_logging=sel_logging,
            identification=identification,
            power_management=_bit(optional, 0),
            vlan_capable=vlan_capable,
            sol_supported=sol_supported,
            oob_primary_lan_channel_available=oob_primary,
            oob_secondary_lan_channel_available=_bit(access, 2),
            serial_tmode_available=_bit(access, 1),
            ib_kcs_channel_available=ib_kcs,
            ib_system_interface_channel_available=ib_system_interface,
            contents=data[:consumed],
            payload=body[body_length:],
        )


@dataclass
class MandatoryPlatformAttrsRsp:
    """Response to parameter 2: mandatory platform attributes.

    A 4-byte body is always read in the v1.0 format, as some BMCs claim
    v1.1 but send v1.0 bodies. Fields removed after v1.0 are forced to true
    for later versions; ``temperature_sampling_frequency`` is 0 for v1.0.
    """

    header: CapabilitiesHeader
    sel_auto_rollover: bool
    sel_flush_on_rollover: bool
    sel_record_level_flush_on_rollover: bool
    sel_max_entries: int
    asset_tag_support: bool
    dhcp_host_name_support: bool
    guid_support: bool
    baseboard_temperature: bool
    processors_temperature: bool
    inlet_temperature: bool
    temperature_sampling_frequency: timedelta
    contents: bytes = b""
    payload: bytes = b""

    @classmethod
    def decode(cls, data: bytes) -> MandatoryPlatformAttrsRsp:
        data = bytes(data)
        header, body = CapabilitiesHeader.decode(data)
        _require_body(body, 4)
        v10 = len(body) == 4 or header.is_version_10

        sel = body[0]
        # 12-bit little-endian field: low nibble of byte 0, then byte 1
        sel_max_entries = (sel & 0x0F) | (body[1] << 8)

        if v10:
            flush = record_flush = False
            asset_tag = _bit(body[2], 2)
            dhcp = _bit(body[2], 1)
            guid = _bit(body[2], 0)
            baseboard = _bit(body[3], 2)
            processors = _bit(body[3], 1)
            inlet = _bit(body[3], 0)
            sampling = timedelta(0)
            body_length = 4
        else:
            flush = _bit(sel, 6)
            record_flush = _bit(sel, 5)
            asset_tag = dhcp = guid = True
            baseboard = processors = inlet = True
            sampling = timedelta(seconds=body[4])
            body_length = 5

        consumed = len(data) - len(body) + body_length
        return cls(
            header=header,
            sel_auto_rollover=_bit(sel, 7),
            sel_flush_on_rollover=flush,
            sel_record_level_flush_on_rollover=record_flush,
            sel_max_entries=sel_max_entries,
            asset_tag_support=asset_tag,
            dhcp_host_name_support=dhcp,
            guid_support=guid,
            baseboard_temperature=baseboard,
            processors_temperature=processors,
            inlet_temperature=inlet,
            temperature_sampling_frequency=sampling,
            contents=data[:consumed],
            payload=body[body_length:],
        )