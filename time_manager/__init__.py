"""
Time Manager - controller and host clock ownership

Maintains the controller's absolute clock and a host's virtual clock.
The active synchronization Mode and time Owner decide, for every manual
set of either clock, whether it is denied, forwarded to the external
time service, or absorbed into a persisted host offset.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
