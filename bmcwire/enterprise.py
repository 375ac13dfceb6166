"""IANA Private Enterprise Numbers."""

from __future__ import annotations


class Enterprise(int):
    """An IANA Private Enterprise Number.

    No wire format is assumed; on the wire it is typically a 3 or 4 byte
    unsigned integer.
    """

    INTEL: Enterprise
    DELL: Enterprise
    QUANTA: Enterprise
    SUPERMICRO: Enterprise
    GIGABYTE: Enterprise
    ATEN: Enterprise

    def organisation(self) -> str:
        """Official name of the organisation, or "Unknown"."""
        return _ORGANISATIONS.get(int(self), "Unknown")

    def __str__(self) -> str:
        return f"{int(self)}({self.organisation()})"

    def __repr__(self) -> str:
        return f"Enterprise({int(self)})"


Enterprise.INTEL = Enterprise(343)
Enterprise.DELL = Enterprise(674)
Enterprise.QUANTA = Enterprise(7244)
Enterprise.SUPERMICRO = Enterprise(10876)
Enterprise.GIGABYTE = Enterprise(15370)
Enterprise.ATEN = Enterprise(21317)

_ORGANISATIONS = {
    343: "Intel Corporation",
    674: "Dell Inc.",
    7244: "Quanta Computer Inc.",
    10876: "Super Micro Computer Inc.",
    15370: "GIGA-BYTE TECHNOLOGY CO., LTD",
    21317: "ATEN INTERNATIONAL CO., LTD.",
}