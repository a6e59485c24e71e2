"""Injectable clock capability.

Time-sensitive validators take a ``Clock`` instead of reading the system time
directly, so tests can pin "now" to a fixed value.
"""

import time
from collections.abc import Callable

# Returns the current Unix time in whole seconds.
Clock = Callable[[], int]


def system_clock() -> int:
    """Current Unix time in seconds from the system clock."""
    return int(time.time())


def fixed_clock(unixtime: int) -> Clock:
    """Return a clock that always reports ``unixtime``."""
    return lambda: unixtime
