from datetime import timedelta

import pytest

from bmcwire.commands import (
    CommandError,
    SensorInfo,
    SessionCommander,
    SessionlessCommander,
    get_sensor_info,
    validate_response,
)
from bmcwire.dcmi_sensor import GetDCMISensorInfoReq
from bmcwire.power import GetPowerReadingReq, SystemPowerStatisticsMode


class FakeConnection:
    def __init__(self, replies):
        self.replies = list(replies)
        self.sent = []

    def send_command(self, command):
        self.sent.append((command.name, command.command, command.request.serialize()))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def sensor_reply(instances, *record_ids):
    body = bytes([instances, len(record_ids)])
    for record_id in record_ids:
        body += record_id.to_bytes(2, "little")
    return (0, body)


def test_validate_response_raises_with_code():
    with pytest.raises(CommandError) as info:
        validate_response(0xC1)
    assert info.value.code == 0xC1


def test_supported_capabilities():
    conn = FakeConnection([(0, bytes([0x01, 0x05, 0x02, 0x00, 0x00, 0xF5, 0x01, 0x02]))])
    rsp = SessionlessCommander(conn).supported_capabilities()
    assert rsp.header.minor_version == 5
    assert rsp.ib_system_interface_channel_available is True
    assert rsp.payload == b"\x01\x02"
    name, command, request = conn.sent[0]
    assert command == 0x01
    assert request == b"\x01"
    assert name == "Get DCMI Capabilities Info (Supported Capabilities)"


def test_mandatory_platform_attrs():
    conn = FakeConnection([(0, bytes([0x01, 0x05, 0x02, 0x4F, 0xFF, 0xFF, 0xFF, 0xF0]))])
    rsp = SessionlessCommander(conn).mandatory_platform_attrs()
    assert rsp.sel_max_entries == 65295
    assert rsp.temperature_sampling_frequency == timedelta(seconds=240)
    assert conn.sent[0][2] == b"\x02"


def test_optional_platform_attrs():
    conn = FakeConnection([(0, bytes([0x01, 0x05, 0x02, 0xFF, 0x0F]))])
    rsp = SessionlessCommander(conn).optional_platform_attrs()
    assert rsp.power_management_slave_address == 0x7F
    assert rsp.power_management_revision == 15
    assert conn.sent[0][2] == b"\x03"


def test_manageability_access_attrs():
    conn = FakeConnection([(0, bytes([0x01, 0x05, 0x02, 0x01, 0xFF, 0x03]))])
    rsp = SessionlessCommander(conn).manageability_access_attrs()
    assert rsp.primary_lan_oob_channel == 1
    assert rsp.secondary_lan_oob_channel == 0xFF
    assert rsp.serial_oob_channel == 3
    assert conn.sent[0][2] == b"\x04"


def test_enhanced_power_statistics_attrs():
    conn = FakeConnection([(0, bytes([0x01, 0x05, 0x02, 0x01, 0x00]))])
    rsp = SessionlessCommander(conn).enhanced_power_statistics_attrs()
    assert rsp.power_rolling_avg_time_periods == [timedelta(0)]
    assert conn.sent[0][2] == b"\x05"


def test_non_normal_completion_code_raises():
    conn = FakeConnection([(0xD4, b"")])
    with pytest.raises(CommandError) as info:
        SessionlessCommander(conn).supported_capabilities()
    assert info.value.code == 0xD4


def test_get_power_reading():
    body = bytes(
        [0xAE, 0x08, 0x57, 0x04, 0x05, 0x0D, 0xD2, 0x04,
         0x73, 0xB6, 0x44, 0x5D, 0xAA, 0xBB, 0xCC, 0xDD, 1 << 6]
    )
    conn = FakeConnection([(0, body)])
    request = GetPowerReadingReq(
        mode=SystemPowerStatisticsMode.ENHANCED, period=timedelta(minutes=5)
    )
    rsp = SessionCommander(conn).get_power_reading(request)
    assert rsp.instantaneous == 2222
    assert rsp.avg == 1234
    assert rsp.active is True
    assert conn.sent[0][1] == 0x02
    assert conn.sent[0][2] == b"\x02\x45\x00"


def test_get_dcmi_sensor_info():
    conn = FakeConnection([(0, bytes([0x2, 0x1, 0xAB, 0xBA]))])
    request = GetDCMISensorInfoReq(sensor_type=0x01, entity=0x37)
    rsp = SessionCommander(conn).get_dcmi_sensor_info(request)
    assert rsp.record_ids == [0xBAAB]
    assert rsp.instances == 2
    assert conn.sent[0][1] == 0x07
    assert conn.sent[0][2] == b"\x01\x37\x00\x00"


def test_get_sensor_info_ipmi_entities():
    conn = FakeConnection(
        [sensor_reply(1, 10), sensor_reply(2, 20, 21), sensor_reply(0)]
    )
    info = get_sensor_info(conn)
    assert info == SensorInfo(inlet=[10], cpu=[20, 21], baseboard=[])
    assert [request for _, _, request in conn.sent] == [
        b"\x01\x37\x00\x01",
        b"\x01\x03\x00\x01",
        b"\x01\x07\x00\x01",
    ]


def test_get_sensor_info_paginates():
    conn = FakeConnection(
        [sensor_reply(3, 1, 2), sensor_reply(3, 3), sensor_reply(0), sensor_reply(0)]
    )
    info = get_sensor_info(conn)
    assert info.inlet == [1, 2, 3]
    assert conn.sent[1][2][3] == 3
    assert len(conn.sent) == 4


def test_get_sensor_info_stops_on_empty_page():
    conn = FakeConnection(
        [sensor_reply(5, 7), sensor_reply(5), sensor_reply(0), sensor_reply(0)]
    )
    info = get_sensor_info(conn)
    assert info.inlet == [7]
    assert len(conn.sent) == 4


def test_get_sensor_info_falls_back_when_empty():
    conn = FakeConnection(
        [sensor_reply(0)] * 3
        + [sensor_reply(1, 40), sensor_reply(1, 41), sensor_reply(1, 42)]
    )
    info = get_sensor_info(conn)
    assert info == SensorInfo(inlet=[40], cpu=[41], baseboard=[42])
    assert [request[1] for _, _, request in conn.sent[3:]] == [0x40, 0x41, 0x42]


def test_get_sensor_info_falls_back_on_error():
    conn = FakeConnection(
        [(0xCC, b""), sensor_reply(1, 5), sensor_reply(0), sensor_reply(0)]
    )
    info = get_sensor_info(conn)
    assert info.inlet == [5]
    assert conn.sent[1][2][1] == 0x40


def test_get_sensor_info_dcmi_error_propagates():
    conn = FakeConnection([sensor_reply(0)] * 3 + [(0xC1, b"")])
    with pytest.raises(CommandError) as info:
        get_sensor_info(conn)
    assert info.value.code == 0xC1