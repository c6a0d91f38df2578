"""
State Mapping - Redfish enumerated status strings to numeric gauge values.

Redfish reports health, state and power state as enumerated strings. Monitoring
rules need numbers, so each string is mapped into a small fixed range. Strings
outside a table are reported as invalid rather than mapped to a default value;
callers must skip the sample in that case.

Tables:
- Health: 1(OK), 2(Warning), 3(Critical)
- State: 1(Enabled), 2(Disabled), 3(StandbyOffline), 4(StandbySpare), 5(InTest),
  6(Starting), 7(Absent), 8(UnavailableOffline), 9(Deferring), 10(Quiesced),
  11(Updating)
- PowerState: 1(On), 2(Off), 3(PoweringOn), 4(PoweringOff)
"""

from typing import Dict, Optional, Tuple

HEALTH_VALUES: Dict[str, int] = {
    "OK": 1,
    "Warning": 2,
    "Critical": 3,
}

STATE_VALUES: Dict[str, int] = {
    "Enabled": 1,
    "Disabled": 2,
    "StandbyOffline": 3,
    "StandbySpare": 4,
    "InTest": 5,
    "Starting": 6,
    "Absent": 7,
    "UnavailableOffline": 8,
    "Deferring": 9,
    "Quiesced": 10,
    "Updating": 11,
}

POWER_STATE_VALUES: Dict[str, int] = {
    "On": 1,
    "Off": 2,
    "PoweringOn": 3,
    "PoweringOff": 4,
}


def _lookup(table: Dict[str, int], value: Optional[str]) -> Tuple[float, bool]:
    if not value:
        return 0.0, False
    code = table.get(value)
    if code is None:
        return 0.0, False
    return float(code), True


def map_health(value: Optional[str]) -> Tuple[float, bool]:
    """Map a Redfish Status.Health value. Returns (code, ok)."""
    return _lookup(HEALTH_VALUES, value)


def map_state(value: Optional[str]) -> Tuple[float, bool]:
    """Map a Redfish Status.State value. Returns (code, ok)."""
    return _lookup(STATE_VALUES, value)


def map_power_state(value: Optional[str]) -> Tuple[float, bool]:
    """Map a Redfish PowerState value. Returns (code, ok)."""
    return _lookup(POWER_STATE_VALUES, value)


def describe_table(table: Dict[str, int]) -> str:
    """Render a table as '1(OK),2(Warning),...' for metric help text."""
    return ",".join(f"{code}({name})" for name, code in sorted(table.items(), key=lambda item: item[1]))
