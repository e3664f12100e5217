"""testenv.polling

Poll-until-condition helper for library consumers.

This is the Python counterpart of ``TestHelper.waitFor`` in the generated
harness: evaluate a predicate, sleep a short fixed interval while it is
false, give up after an overall bound. The toolkit's own pipelines never
call it.
"""

from __future__ import annotations

import time
from typing import Callable

from testenv.errors import WaitTimeoutError

DEFAULT_TIMEOUT_SECONDS = 5.0
DEFAULT_INTERVAL_SECONDS = 0.1


def wait_for(
    condition: Callable[[], object],
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    interval: float = DEFAULT_INTERVAL_SECONDS,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """Return True once *condition()* is truthy.

    Raises :class:`WaitTimeoutError` when *timeout* seconds pass first.
    Exceptions raised by *condition* propagate unchanged.
    """
    if interval <= 0:
        raise ValueError("interval must be positive")

    start = clock()
    while clock() - start < timeout:
        if condition():
            return True
        sleep(interval)
    raise WaitTimeoutError(f"Timeout waiting for condition after {timeout:g}s")
