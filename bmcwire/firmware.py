"""Firmware version strings built from Get Device ID responses."""

from __future__ import annotations

from collections.abc import Sequence

from .enterprise import Enterprise


def firmware_version(
    manufacturer: int, major: int, minor: int, auxiliary: Sequence[int]
) -> str:
    """Build a firmware version string in the manufacturer's own format.

    ``auxiliary`` is the 4-byte auxiliary firmware revision. Manufacturers
    without a known format fall back on "major.minor".
    """
    aux = bytes(auxiliary)
    if len(aux) != 4:
        raise ValueError(f"auxiliary firmware revision must be 4 bytes, got {len(aux)}")

    if manufacturer == Enterprise.INTEL:
        build = int.from_bytes(aux[2:4], "little")
        return f"{major:02d}.{minor:02d}.{build}"
    if manufacturer == Enterprise.DELL:
        return f"{major}.{minor}.{aux[2]}.{aux[3]}b{aux[1]:02d}"
    if manufacturer == Enterprise.QUANTA:
        return f"{major}.{minor}.{aux[0]:02d}"
    if manufacturer == Enterprise.SUPERMICRO:
        return f"{major:02d}.{minor:02d}"
    return f"{major}.{minor}"