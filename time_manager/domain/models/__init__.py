"""Domain models for the time manager."""

from time_manager.domain.models.time_policy import (
    DEFAULT_MODE,
    DEFAULT_OWNER,
    Mode,
    Owner,
    Requester,
    SetTimeDecision,
    mode_from_str,
    mode_to_str,
    owner_from_str,
    owner_to_str,
)

__all__: list[str] = [
    "DEFAULT_MODE",
    "DEFAULT_OWNER",
    "Mode",
    "Owner",
    "Requester",
    "SetTimeDecision",
    "mode_from_str",
    "mode_to_str",
    "owner_from_str",
    "owner_to_str",
]
