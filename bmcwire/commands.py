"""High-level DCMI commands sent over an IPMI connection.

A connection is any object with a ``send_command(command)`` method that
sends the command's serialised request and returns a ``(completion_code,
response_body)`` tuple, raising OSError (including TimeoutError) on
transport failure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from .capabilities import (
    CapabilitiesParameter,
    GetDCMICapabilitiesInfoReq,
    MandatoryPlatformAttrsRsp,
    SupportedCapabilitiesRsp,
)
from .capabilities_extra import (
    EnhancedSystemPowerStatisticsAttrsRsp,
    ManageabilityAccessAttrsRsp,
    OptionalPlatformAttrsRsp,
)
from .dcmi_sensor import GetDCMISensorInfoReq, GetDCMISensorInfoRsp
from .errors import DecodeError
from .power import GetPowerReadingReq, GetPowerReadingRsp

#: Network function of group extension requests.
NETWORK_FUNCTION_GROUP_REQ = 0x2C
#: Body code identifying the DCMI group.
BODY_CODE_DCMI = 0xDC
#: Completion code of a successfully executed command.
COMPLETION_CODE_NORMAL = 0x00

GET_DCMI_CAPABILITIES_INFO = 0x01
GET_POWER_READING = 0x02
GET_DCMI_SENSOR_INFO = 0x07

SENSOR_TYPE_TEMPERATURE = 0x01

ENTITY_AIR_INLET = 0x37
ENTITY_PROCESSOR = 0x03
ENTITY_SYSTEM_BOARD = 0x07
ENTITY_DCMI_AIR_INLET = 0x40
ENTITY_DCMI_PROCESSOR = 0x41
ENTITY_DCMI_SYSTEM_BOARD = 0x42

_IPMI_ENTITIES = (ENTITY_AIR_INLET, ENTITY_PROCESSOR, ENTITY_SYSTEM_BOARD)
_DCMI_ENTITIES = (ENTITY_DCMI_AIR_INLET, ENTITY_DCMI_PROCESSOR, ENTITY_DCMI_SYSTEM_BOARD)

# the most record IDs retrievable for a single entity
_MAX_RECORD_IDS = 255


class CommandError(Exception):
    """Raised when the BMC answers with a non-normal completion code."""

    def __init__(self, code: int) -> None:
        super().__init__(f"received non-normal completion code: {code:#04x}")
        self.code = code


class _Request(Protocol):
    def serialize(self) -> bytes: ...


@dataclass
class Command:
    """A DCMI command: its identity, request and the type decoding its response."""

    name: str
    command: int
    request: _Request
    response_type: Any
    function: int = NETWORK_FUNCTION_GROUP_REQ
    body: int = BODY_CODE_DCMI


class Connection(Protocol):
    def send_command(self, command: Command) -> tuple[int, bytes]: ...


def validate_response(code: int) -> None:
    """Raise CommandError unless ``code`` is the normal completion code."""
    if code != COMPLETION_CODE_NORMAL:
        raise CommandError(code)


def _execute(connection: Connection, command: Command) -> Any:
    code, body = connection.send_command(command)
    validate_response(code)
    return command.response_type.decode(body)


def _capabilities_command(parameter: int, label: str, response_type: Any) -> Command:
    return Command(
        name=f"Get DCMI Capabilities Info ({label})",
        command=GET_DCMI_CAPABILITIES_INFO,
        request=GetDCMICapabilitiesInfoReq(parameter=parameter),
        response_type=response_type,
    )


class SessionlessCommander:
    """Commands that can be executed outside a session."""

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    def supported_capabilities(self) -> SupportedCapabilitiesRsp:
        return _execute(
            self._connection,
            _capabilities_command(
                CapabilitiesParameter.SUPPORTED_CAPABILITIES,
                "Supported Capabilities",
                SupportedCapabilitiesRsp,
            ),
        )

    def mandatory_platform_attrs(self) -> MandatoryPlatformAttrsRsp:
        return _execute(
            self._connection,
            _capabilities_command(
                CapabilitiesParameter.MANDATORY_PLATFORM_ATTRS,
                "Mandatory Platform Attributes",
                MandatoryPlatformAttrsRsp,
            ),
        )

    def optional_platform_attrs(self) -> OptionalPlatformAttrsRsp:
        return _execute(
            self._connection,
            _capabilities_command(
                CapabilitiesParameter.OPTIONAL_PLATFORM_ATTRS,
                "Optional Platform Attributes",
                OptionalPlatformAttrsRsp,
            ),
        )

    def manageability_access_attrs(self) -> ManageabilityAccessAttrsRsp:
        return _execute(
            self._connection,
            _capabilities_command(
                CapabilitiesParameter.MANAGEABILITY_ACCESS_ATTRS,
                "Manageability Access Attributes",
                ManageabilityAccessAttrsRsp,
            ),
        )

    def enhanced_power_statistics_attrs(self) -> EnhancedSystemPowerStatisticsAttrsRsp:
        return _execute(
            self._connection,
            _capabilities_command(
                CapabilitiesParameter.ENHANCED_SYSTEM_POWER_STATISTICS_ATTRS,
                "Enhanced System Power Statistics Attributes",
                EnhancedSystemPowerStatisticsAttrsRsp,
            ),
        )


class SessionCommander(SessionlessCommander):
    """Commands that require a session, plus all session-less ones."""

    def get_power_reading(self, request: GetPowerReadingReq) -> GetPowerReadingRsp:
        return _execute(
            self._connection,
            Command(
                name="Get Power Reading",
                command=GET_POWER_READING,
                request=request,
                response_type=GetPowerReadingRsp,
            ),
        )

    def get_dcmi_sensor_info(self, request: GetDCMISensorInfoReq) -> GetDCMISensorInfoRsp:
        return _execute(
            self._connection,
            Command(
                name="Get DCMI Sensor Info",
                command=GET_DCMI_SENSOR_INFO,
                request=request,
                response_type=GetDCMISensorInfoRsp,
            ),
        )


@dataclass
class SensorInfo:
    """Record IDs of the inlet, CPU and baseboard temperature sensors."""

    inlet: list[int] = field(default_factory=list)
    cpu: list[int] = field(default_factory=list)
    baseboard: list[int] = field(default_factory=list)


def _entity_instances(commander: SessionCommander, entity: int) -> list[int]:
    record_ids: list[int] = []
    total = 1  # ensures at least one request
    while len(record_ids) < total:
        response = commander.get_dcmi_sensor_info(
            GetDCMISensorInfoReq(
                sensor_type=SENSOR_TYPE_TEMPERATURE,
                entity=entity,
                instance=0,
                instance_start=len(record_ids) + 1,
            )
        )
        total = response.instances
        record_ids.extend(response.record_ids)
        if not response.record_ids or len(record_ids) == _MAX_RECORD_IDS:
            break
    return record_ids


def _sensor_map(commander: SessionCommander, entities: tuple[int, ...]) -> dict[int, list[int]]:
    return {entity: _entity_instances(commander, entity) for entity in entities}


def get_sensor_info(session: Connection) -> SensorInfo:
    """Retrieve all inlet, CPU and baseboard temperature sensor record IDs.

    IPMI entity IDs are tried first; if they fail or yield nothing, the
    older DCMI entity IDs are used. Results never mix the two.
    """
    commander = SessionCommander(session)
    try:
        sensors = _sensor_map(commander, _IPMI_ENTITIES)
    except (CommandError, DecodeError, OSError):
        sensors = None
    if sensors is not None and any(sensors.values()):
        return SensorInfo(*(sensors[entity] for entity in _IPMI_ENTITIES))

    sensors = _sensor_map(commander, _DCMI_ENTITIES)
    return SensorInfo(*(sensors[entity] for entity in _DCMI_ENTITIES))