"""Frame-paced event dispatch.

This package provides a small synchronous dispatcher meant to be driven from
a host update loop. Events are either fired immediately or queued and
delivered once per processing cycle. Modules do no I/O on import.
"""

from .dispatcher import Dispatcher, Subscription
from .events import Event

__all__ = [
    "Dispatcher",
    "Event",
    "Subscription",
    "__version__",
]

__version__ = "0.1.0"
