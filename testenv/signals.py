"""testenv.signals

Scoped SIGINT/SIGTERM handling for the entrypoints.

Handlers are installed only for the duration of a ``with`` block and the
previous handlers are restored on exit, so importing or embedding the toolkit
never changes process-wide signal behaviour.

On a signal the handler logs one line and raises ``SystemExit(128 + signum)``.
No workspace cleanup is attempted.
"""

from __future__ import annotations

import signal
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Tuple

from testenv.log import ConsoleLogger, get_default_logger

HANDLED_SIGNALS: Tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)

_MESSAGES = {
    signal.SIGINT: "Test execution interrupted by user",
    signal.SIGTERM: "Test execution terminated",
}


def exit_code_for(signum: int) -> int:
    return 128 + int(signum)


@contextmanager
def installed_signal_handlers(log: Optional[ConsoleLogger] = None) -> Iterator[None]:
    """Install interrupt/terminate handlers for the enclosed block.

    Outside the main thread ``signal.signal`` is not allowed; the block then
    runs with whatever handlers are already in place.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    log = log or get_default_logger()

    def _handler(signum, frame) -> None:
        log.plain()
        log.warning(_MESSAGES.get(signal.Signals(signum), f"Received signal {signum}"))
        raise SystemExit(exit_code_for(signum))

    previous: Dict[signal.Signals, object] = {}
    try:
        for sig in HANDLED_SIGNALS:
            previous[sig] = signal.signal(sig, _handler)
        yield
    finally:
        for sig, old in previous.items():
            # None means the old handler was not installed from Python.
            signal.signal(sig, signal.SIG_DFL if old is None else old)
