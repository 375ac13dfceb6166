"""The DCMI Get DCMI Sensor Info command (section 6.5.2)."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import DecodeError


@dataclass
class GetDCMISensorInfoReq:
    """A Get DCMI Sensor Info request.

    ``instance`` 0 asks for all instances of the entity, starting at
    ``instance_start``; otherwise ``instance_start`` is ignored.
    """

    sensor_type: int = 0
    entity: int = 0
    instance: int = 0
    instance_start: int = 0

    def serialize(self) -> bytes:
        start = self.instance_start if self.instance == 0 else 0
        values = [int(self.sensor_type), int(self.entity), int(self.instance), int(start)]
        for value in values:
            if not 0 <= value <= 0xFF:
                raise ValueError(f"field value must fit in a byte, got {value}")
        return bytes(values)


@dataclass
class GetDCMISensorInfoRsp:
    """A Get DCMI Sensor Info response.

    ``instances`` is the total number of instances of the entity; if it
    exceeds the record IDs returned, another request with a later
    ``instance_start`` is invited.
    """

    instances: int = 0
    record_ids: list[int] = field(default_factory=list)
    contents: bytes = b""
    payload: bytes = b""

    @classmethod
    def decode(cls, data: bytes) -> GetDCMISensorInfoRsp:
        data = bytes(data)
        if len(data) < 2:
            raise DecodeError(
                f"expected at least 2 bytes, got {len(data)}", truncated=True
            )
        count = data[1]
        # the spec limits this to 8, but it is not enforced
        expect_length = 2 + count * 2
        if len(data) < expect_length:
            raise DecodeError(
                f"expected {expect_length} bytes for {count} record IDs, "
                f"got {len(data)}"
            )
        body = data[2:expect_length]
        record_ids = [
            int.from_bytes(body[offset : offset + 2], "little")
            for offset in range(0, len(body), 2)
        ]
        return cls(
            instances=data[0],
            record_ids=record_ids,
            contents=data[:expect_length],
            payload=data[expect_length:],
        )