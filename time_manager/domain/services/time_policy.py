"""Time policy domain service: who may manually set which clock.

Pure decision function over (Mode, Owner, Requester) shared by the
controller and host clocks.

Controller requests (set the controller's own absolute time):
- AUTOMATIC mode always denies; the sync agent owns the clock
- MANUAL mode allows SET_ABSOLUTE for owner CONTROLLER or BOTH

Host requests (set the host's virtual time):

    | Mode      | CONTROLLER | HOST         | BOTH         | SPLIT         |
    |-----------|------------|--------------|--------------|---------------|
    | AUTOMATIC | DENIED     | DENIED       | DENIED       | ADJUST_OFFSET |
    | MANUAL    | DENIED     | SET_ABSOLUTE | SET_ABSOLUTE | ADJUST_OFFSET |
"""

from __future__ import annotations

from time_manager.domain.models.time_policy import (
    Mode,
    Owner,
    Requester,
    SetTimeDecision,
)

_CONTROLLER_SETTERS: frozenset[Owner] = frozenset({Owner.CONTROLLER, Owner.BOTH})
_HOST_SETTERS: frozenset[Owner] = frozenset({Owner.HOST, Owner.BOTH})


def decide(mode: Mode, owner: Owner, requester: Requester) -> SetTimeDecision:
    """Classify a manual set request.

    Args:
        mode: Active synchronization mode.
        owner: Active time owner.
        requester: Which clock received the request.

    Returns:
        DENIED, SET_ABSOLUTE or ADJUST_OFFSET.

    Examples:
        >>> decide(Mode.MANUAL, Owner.BOTH, Requester.CONTROLLER)
        <SetTimeDecision.SET_ABSOLUTE: 'set_absolute'>
        >>> decide(Mode.AUTOMATIC, Owner.SPLIT, Requester.HOST)
        <SetTimeDecision.ADJUST_OFFSET: 'adjust_offset'>
    """
    if requester is Requester.CONTROLLER:
        if mode is Mode.AUTOMATIC:
            return SetTimeDecision.DENIED
        if owner in _CONTROLLER_SETTERS:
            return SetTimeDecision.SET_ABSOLUTE
        return SetTimeDecision.DENIED

    if owner is Owner.SPLIT:
        return SetTimeDecision.ADJUST_OFFSET
    if mode is Mode.MANUAL and owner in _HOST_SETTERS:
        return SetTimeDecision.SET_ABSOLUTE
    return SetTimeDecision.DENIED


def is_set_allowed(mode: Mode, owner: Owner, requester: Requester) -> bool:
    """Return True when a manual set would not be denied."""
    return decide(mode, owner, requester) is not SetTimeDecision.DENIED
