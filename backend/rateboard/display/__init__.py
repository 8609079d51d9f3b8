"""Display client: rotation state machine, timers and API polling."""

from .rotation import (
    DisplaySnapshot,
    RotationScheduler,
    RotationSettings,
    ShowingMedia,
    ShowingRates,
    Slide,
)  # noqa: F401
from .timers import APSchedulerTimers, TimerSlots, VirtualTimers  # noqa: F401
from .poller import DisplayPoller, DisplayData  # noqa: F401
from .session import DisplaySession  # noqa: F401
