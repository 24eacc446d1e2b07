"""Time policy models: synchronization Mode, time Owner and set decisions.

Domain models describing who may set which clock.

Mode governs whether an external synchronization agent owns the
controller's absolute clock. Owner governs which party's manual set
requests are honored and whether the host tracks the controller through
a persisted offset.

The property layer exchanges Mode and Owner as bus strings; the
conversions below map them to and from the enums.

Usage:
    from time_manager.domain.models.time_policy import Mode, Owner, owner_from_str

    owner = owner_from_str("xyz.openbmc_project.Time.Owner.Owners.Split")
    assert owner is Owner.SPLIT
"""

from enum import Enum

from time_manager.domain.errors.time_setting import InvalidTimeSettingError


class Mode(str, Enum):
    """Time synchronization mode.

    - AUTOMATIC: an external agent (NTP) owns the absolute clock
    - MANUAL: manual sets are permitted according to Owner
    """

    AUTOMATIC = "automatic"
    MANUAL = "manual"


class Owner(str, Enum):
    """Time owner.

    - CONTROLLER: only the controller may set time
    - HOST: only the host may set time, which sets the controller clock
    - BOTH: either side may set the shared absolute clock
    - SPLIT: host time is controller time plus a persisted offset
    """

    CONTROLLER = "controller"
    HOST = "host"
    BOTH = "both"
    SPLIT = "split"


class Requester(str, Enum):
    """The clock a manual set request was issued against."""

    CONTROLLER = "controller"
    HOST = "host"


class SetTimeDecision(str, Enum):
    """Outcome of a policy decision for a manual set request."""

    DENIED = "denied"
    SET_ABSOLUTE = "set_absolute"
    ADJUST_OFFSET = "adjust_offset"


# Cold start state before the property layer restores anything
DEFAULT_MODE: Mode = Mode.MANUAL
DEFAULT_OWNER: Owner = Owner.BOTH

MODE_BUS_PREFIX = "xyz.openbmc_project.Time.Synchronization.Method."
OWNER_BUS_PREFIX = "xyz.openbmc_project.Time.Owner.Owners."

_MODE_TO_BUS: dict[Mode, str] = {
    Mode.AUTOMATIC: MODE_BUS_PREFIX + "NTP",
    Mode.MANUAL: MODE_BUS_PREFIX + "Manual",
}

_OWNER_TO_BUS: dict[Owner, str] = {
    Owner.CONTROLLER: OWNER_BUS_PREFIX + "BMC",
    Owner.HOST: OWNER_BUS_PREFIX + "Host",
    Owner.BOTH: OWNER_BUS_PREFIX + "Both",
    Owner.SPLIT: OWNER_BUS_PREFIX + "Split",
}

_MODE_ALIASES: dict[str, Mode] = {
    "automatic": Mode.AUTOMATIC,
    "ntp": Mode.AUTOMATIC,
    "manual": Mode.MANUAL,
}

_OWNER_ALIASES: dict[str, Owner] = {
    "controller": Owner.CONTROLLER,
    "bmc": Owner.CONTROLLER,
    "host": Owner.HOST,
    "both": Owner.BOTH,
    "split": Owner.SPLIT,
}


def mode_from_str(value: str) -> Mode:
    """Convert a bus string or short name to a Mode.

    Accepts the full bus form (``...Synchronization.Method.NTP``) or a
    case-insensitive short name (``manual``, ``automatic``, ``ntp``).

    Raises:
        InvalidTimeSettingError: If the string is not a known mode.
    """
    for mode, bus_value in _MODE_TO_BUS.items():
        if value == bus_value:
            return mode
    mode = _MODE_ALIASES.get(value.strip().lower())
    if mode is None:
        raise InvalidTimeSettingError("mode", value)
    return mode


def owner_from_str(value: str) -> Owner:
    """Convert a bus string or short name to an Owner.

    Accepts the full bus form (``...Owner.Owners.Split``) or a
    case-insensitive short name (``bmc``/``controller``, ``host``,
    ``both``, ``split``).

    Raises:
        InvalidTimeSettingError: If the string is not a known owner.
    """
    for owner, bus_value in _OWNER_TO_BUS.items():
        if value == bus_value:
            return owner
    owner = _OWNER_ALIASES.get(value.strip().lower())
    if owner is None:
        raise InvalidTimeSettingError("owner", value)
    return owner


def mode_to_str(mode: Mode) -> str:
    """Return the bus string form of a Mode."""
    return _MODE_TO_BUS[mode]


def owner_to_str(owner: Owner) -> str:
    """Return the bus string form of an Owner."""
    return _OWNER_TO_BUS[owner]
