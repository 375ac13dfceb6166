# bmcwire

Building blocks for talking to baseboard management controllers (BMCs) over
IPMI v2.0 and DCMI, in plain Python.

## What is in the package

- `bmcwire.power`: `GetPowerReadingReq`, `GetPowerReadingRsp` and
  `SystemPowerStatisticsMode`, which cover the DCMI *Get Power Reading* command.
- `bmcwire.capabilities` and `bmcwire.capabilities_extra`: the *Get DCMI
  Capabilities Info* request (`GetDCMICapabilitiesInfoReq`,
  `CapabilitiesParameter`) and a response type for each of the five
  parameters: `SupportedCapabilitiesRsp`, `MandatoryPlatformAttrsRsp`,
  `OptionalPlatformAttrsRsp`, `ManageabilityAccessAttrsRsp` and
  `EnhancedSystemPowerStatisticsAttrsRsp`.
- `bmcwire.dcmi_sensor`: `GetDCMISensorInfoReq` and `GetDCMISensorInfoRsp`.
- `bmcwire.commands`:
  - `SessionlessCommander` and `SessionCommander`, which send the DCMI
    commands over a connection object that you supply.
  - `get_sensor_info()`, which lists every inlet, CPU and baseboard
    temperature sensor. It tries the IPMI entity IDs first and falls back to
    the DCMI ones.
  - `validate_response()` and `CommandError`.
- `bmcwire.authentication`: `AuthenticationAlgorithm` and the RMCP+ Open
  Session `AuthenticationPayload`, which has `serialise()` and
  `deserialise()`.
- `bmcwire.authenticator`:
  - `params_for_algorithm()` and `AuthenticationParams`, which give the MACs
    for RAKP auth codes, the SIK, K_N and the ICV.
  - `TruncatedMac`.
  - `AdditionalKeyMaterialGenerator`, which produces K1 and K2.
  - `RAKPExchange` together with `calculate_sik()`,
    `calculate_rakp2_auth_code()`, `calculate_rakp3_auth_code()` and
    `calculate_rakp4_icv()`.
- `bmcwire.aes`: `AES128CBC`, which encrypts and decrypts payloads with the
  IPMI confidentiality trailer.
- `bmcwire.transport`: `Transport`, a connected UDP socket usable as a context
  manager. `normalise_address()` adds port 623 to an address that has no port.
- Helpers:
  - `bmcwire.analog`: `AnalogDataFormat` and its parsers.
  - `bmcwire.complement`: `ones()` and `twos()`.
  - `bmcwire.bcd`: `decode()`.
  - `bmcwire.enterprise`: `Enterprise`, for IANA enterprise numbers.
  - `bmcwire.rolling_average`: `period_byte()` and `period_duration()`.
  - `bmcwire.firmware`: `firmware_version()`, which builds the version string
    in the vendor's format for Intel, Dell, Quanta and Super Micro.

## Installation

```
pip install bmcwire
```

## Examples

Build a power reading request and decode a response body:

```python
from bmcwire.power import GetPowerReadingReq, GetPowerReadingRsp, SystemPowerStatisticsMode

GetPowerReadingReq(mode=SystemPowerStatisticsMode.NORMAL).serialize()
# b'\x01\x00\x00'

body = bytes([0xAE, 0x08, 0x57, 0x04, 0x05, 0x0D, 0xD2, 0x04,
              0x73, 0xB6, 0x44, 0x5D, 0xAA, 0xBB, 0xCC, 0xDD, 0x40])
reading = GetPowerReadingRsp.decode(body)
reading.instantaneous, reading.avg, reading.active
# (2222, 1234, True)
```

Format a firmware version the way the vendor's web interface shows it:

```python
from bmcwire.enterprise import Enterprise
from bmcwire.firmware import firmware_version

firmware_version(Enterprise.DELL, 3, 15, bytes([0x00, 0x01, 0x11, 0x0F]))
# '3.15.17.15b01'
```

Convert between DCMI rolling-average periods and durations:

```python
from datetime import timedelta
from bmcwire.rolling_average import period_byte, period_duration

period_byte(timedelta(minutes=5))   # 0x45
period_duration(0xC1)               # timedelta(days=1)
```

Send raw bytes to a BMC and wait for the reply:

```python
from bmcwire.transport import Transport

with Transport("192.0.2.10") as transport:
    reply = transport.send(packet, timeout=1.0)
```

Use the high-level DCMI commands over your own connection:

```python
from bmcwire.commands import SessionlessCommander

caps = SessionlessCommander(connection).supported_capabilities()
print(caps.power_management)
```

The connection is any object with a `send_command(command)` method. The method
receives a `bmcwire.commands.Command`, sends `command.request.serialize()` and
returns a `(completion_code, response_body)` tuple.

## Errors

- Invalid or truncated input raises `bmcwire.errors.DecodeError`, a subclass
  of `ValueError`. Its `truncated` attribute is true when the data was too
  short.
- A non-normal completion code raises `bmcwire.commands.CommandError`.
- `Transport.send()` raises `TimeoutError` when its timeout expires.

## What it does not do

- It does not build or parse RMCP, IPMI session or IPMI message headers.
- It does not run the RAKP session handshake itself.
- It does not provide a ready-made connection for the commanders. You supply
  an object that wraps command bodies into packets.
- It does not read the SDR repository or sensor readings.
- It supports no IPMI v1.5 sessions.
- It has no command-line tool.

## Running the tests

```
pip install -e .[test]
pytest
```