"""Domain services for the time manager."""

from time_manager.domain.services.time_policy import decide, is_set_allowed

__all__: list[str] = ["decide", "is_set_allowed"]
