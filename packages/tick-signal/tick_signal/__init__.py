"""tick-signal - Synchronous signals for the tick animator."""
from __future__ import annotations

from tick_signal.bus import Listener, Signal, Subscription

__all__ = ["Listener", "Signal", "Subscription"]
