from datetime import timedelta

import pytest

from bmcwire.capabilities import (
    CapabilitiesHeader,
    CapabilitiesParameter,
    GetDCMICapabilitiesInfoReq,
    MandatoryPlatformAttrsRsp,
    SupportedCapabilitiesRsp,
)
from bmcwire.errors import DecodeError

V10 = CapabilitiesHeader(1, 0, 1)
V11 = CapabilitiesHeader(1, 1, 2)
V15 = CapabilitiesHeader(1, 5, 2)


@pytest.mark.parametrize(
    "value, text",
    [
        (1, "1(Supported DCMI Capabilities)"),
        (5, "5(Enhanced System Power Statistics Attributes)"),
        (9, "9(Unknown)"),
    ],
)
def test_parameter_str(value, text):
    assert str(CapabilitiesParameter(value)) == text


def test_parameter_constants():
    assert CapabilitiesParameter.MANDATORY_PLATFORM_ATTRS.description() == (
        "Mandatory Platform Attributes"
    )
    assert int(CapabilitiesParameter.MANDATORY_PLATFORM_ATTRS) == 2


@pytest.mark.parametrize(
    "request_, wire",
    [
        (GetDCMICapabilitiesInfoReq(), b"\x00"),
        (GetDCMICapabilitiesInfoReq(parameter=22), b"\x16"),
    ],
)
def test_request_serialize(request_, wire):
    assert request_.serialize() == wire


def test_request_serialize_out_of_range():
    with pytest.raises(ValueError):
        GetDCMICapabilitiesInfoReq(parameter=256).serialize()


def test_header_too_short():
    with pytest.raises(DecodeError) as info:
        CapabilitiesHeader.decode(bytes(2))
    assert info.value.truncated


@pytest.mark.parametrize(
    "data, header, remaining",
    [
        (b"\x01\x01\x02", CapabilitiesHeader(1, 1, 2), b""),
        (b"\x01\x00\x01", V10, b""),
        (b"\x01\x01\x02", V11, b""),
        (b"\x01\x05\x02", V15, b""),
        (b"\x0f\xf0\x09\x01\x02\x03", CapabilitiesHeader(15, 240, 9), b"\x01\x02\x03"),
    ],
)
def test_header_decode(data, header, remaining):
    assert CapabilitiesHeader.decode(data) == (header, remaining)


def test_supported_too_short():
    with pytest.raises(DecodeError):
        SupportedCapabilitiesRsp.decode(bytes(5))


def _supported(header, flags, contents, payload=b""):
    names = [
        "temperature_monitor",
        "chassis_power",
        "sel_logging",
        "identification",
        "power_management",
        "vlan_capable",
        "sol_supported",
        "oob_primary_lan_channel_available",
        "oob_secondary_lan_channel_available",
        "serial_tmode_available",
        "ib_kcs_channel_available",
        "ib_system_interface_channel_available",
    ]
    return SupportedCapabilitiesRsp(
        header=header,
        contents=contents,
        payload=payload,
        **dict(zip(names, flags)),
    )


T, F = True, False


@pytest.mark.parametrize(
    "data, expected",
    [
        (
            b"\x01\x00\x01\x0a\x01\xd5",
            _supported(V10, [T, F, T, F, T, F, T, F, T, F, T, F], b"\x01\x00\x01\x0a\x01\xd5"),
        ),
        (
            b"\x01\x00\x01\x05\x00\x2a",
            _supported(V10, [F, T, F, T, F, T, F, T, F, T, F, F], b"\x01\x00\x01\x05\x00\x2a"),
        ),
        (
            b"\x01\x01\x02\x00\x00\x02",
            _supported(V11, [T, T, T, T, F, T, T, T, F, T, T, F], b"\x01\x01\x02\x00\x00\x02"),
        ),
        (
            b"\x01\x05\x02\x00\x00\xf5\x01\x02",
            _supported(
                V15,
                [T, T, T, T, F, T, T, T, T, F, T, T],
                b"\x01\x05\x02\x00\x00\xf5",
                b"\x01\x02",
            ),
        ),
        (
            b"\x01\x05\x02\xff\x01\xf2",
            _supported(V15, [T, T, T, T, T, T, T, T, F, T, T, F], b"\x01\x05\x02\xff\x01\xf2"),
        ),
    ],
)
def test_supported_decode(data, expected):
    assert SupportedCapabilitiesRsp.decode(data) == expected


@pytest.mark.parametrize(
    "data",
    [
        b"\x01\x00\x01\x00\x00\x00",
        b"\x01\x01\x01\x00\x00\x00",
        b"\x01\x05\x01\x00\x00\x00",
    ],
)
def test_mandatory_too_short(data):
    with pytest.raises(DecodeError) as info:
        MandatoryPlatformAttrsRsp.decode(data)
    assert info.value.truncated


def _mandatory(header, flags, entries, sampling, contents, payload=b""):
    names = [
        "sel_auto_rollover",
        "sel_flush_on_rollover",
        "sel_record_level_flush_on_rollover",
        "asset_tag_support",
        "dhcp_host_name_support",
        "guid_support",
        "baseboard_temperature",
        "processors_temperature",
        "inlet_temperature",
    ]
    return MandatoryPlatformAttrsRsp(
        header=header,
        sel_max_entries=entries,
        temperature_sampling_frequency=sampling,
        contents=contents,
        payload=payload,
        **dict(zip(names, flags)),
    )


@pytest.mark.parametrize(
    "data, expected",
    [
        (
            b"\x01\x00\x01\xf5\xaa\x05\x02",
            _mandatory(
                V10, [T, F, F, T, F, T, F, T, F], 43525, timedelta(0),
                b"\x01\x00\x01\xf5\xaa\x05\x02",
            ),
        ),
        (
            b"\x01\x00\x01\x7a\x5a\x02\x05",
            _mandatory(
                V10, [F, F, F, F, T, F, T, F, T], 23050, timedelta(0),
                b"\x01\x00\x01\x7a\x5a\x02\x05",
            ),
        ),
        # v1.0 body purporting to be v1.1
        (
            b"\x01\x01\x02\x7a\x5a\x02\x05",
            _mandatory(
                V11, [F, F, F, F, T, F, T, F, T], 23050, timedelta(0),
                b"\x01\x01\x02\x7a\x5a\x02\x05",
            ),
        ),
        (
            b"\x01\x01\x02\xa5\x0a\x00\x00\x0f\x03\x04",
            _mandatory(
                V11, [T, F, T, T, T, T, T, T, T], 2565, timedelta(seconds=15),
                b"\x01\x01\x02\xa5\x0a\x00\x00\x0f", b"\x03\x04",
            ),
        ),
        (
            b"\x01\x05\x02\x4f\xff\xff\xff\xf0",
            _mandatory(
                V15, [F, T, F, T, T, T, T, T, T], 65295, timedelta(seconds=240),
                b"\x01\x05\x02\x4f\xff\xff\xff\xf0",
            ),
        ),
    ],
)
def test_mandatory_decode(data, expected):
    assert MandatoryPlatformAttrsRsp.decode(data) == expected


def test_contents_and_payload_cover_input():
    data = b"\x01\x05\x02\x00\x00\xf5\x01\x02"
    rsp = SupportedCapabilitiesRsp.decode(data)
    assert rsp.contents + rsp.payload == data