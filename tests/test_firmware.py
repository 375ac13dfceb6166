import pytest

from bmcwire.enterprise import Enterprise
from bmcwire.firmware import firmware_version


@pytest.mark.parametrize(
    "manufacturer, major, minor, aux, expected",
    [
        (Enterprise.INTEL, 1, 20, [0x01, 0x17, 0xA1, 0x16], "01.20.5793"),
        (Enterprise.DELL, 2, 41, [0x00, 0x07, 0x28, 0x28], "2.41.40.40b07"),
        (Enterprise.DELL, 2, 50, [0x00, 0x21, 0x32, 0x32], "2.50.50.50b33"),
        (Enterprise.DELL, 3, 15, [0x00, 0x01, 0x11, 0x0F], "3.15.17.15b01"),
        (Enterprise.QUANTA, 3, 45, [0x01, 0x00, 0x00, 0x00], "3.45.01"),
        (Enterprise.SUPERMICRO, 3, 72, [0, 0, 0, 0], "03.72"),
    ],
)
def test_firmware_version(manufacturer, major, minor, aux, expected):
    assert firmware_version(manufacturer, major, minor, aux) == expected


def test_unknown_manufacturer_falls_back():
    assert firmware_version(Enterprise.ATEN, 3, 7, b"\x01\x02\x03\x04") == "3.7"


def test_auxiliary_must_be_four_bytes():
    with pytest.raises(ValueError):
        firmware_version(Enterprise.DELL, 1, 2, b"\x00\x00")