"""testenv.workspace.environment

Datastore reachability and run-artifact housekeeping.

The toolkit never talks the datastore protocol itself; the harness does.
What it can do cheaply is tell whether the configured datastore accepts TCP
connections, so the user learns early that the run will fall back to the
in-memory strategy.
"""

from __future__ import annotations

import logging
import shutil
import socket
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple
from urllib.parse import urlsplit

from testenv.config import TestEnvironment
from testenv.errors import ExternalServiceUnavailable
from testenv.log import ConsoleLogger, get_default_logger

logger = logging.getLogger(__name__)

DEFAULT_DB_PORT = 27017
PROBE_TIMEOUT_SECONDS = 5.0

STRATEGY_EXTERNAL = "external"
STRATEGY_IN_MEMORY = "in-memory"

# Leftovers from a previous run, relative to the project root.
RUN_ARTIFACTS: Tuple[str, ...] = ("coverage", "test-results.xml", ".nyc_output")


def parse_datastore_address(uri: str) -> Tuple[str, int]:
    """Return ``(host, port)`` of the first host listed in *uri*.

    Replica-set URIs (``host1,host2``) are probed through their first member.
    """
    parts = urlsplit(uri)
    if parts.scheme.endswith("+srv"):
        raise ExternalServiceUnavailable(uri, "SRV URIs cannot be probed without DNS resolution")

    netloc = parts.netloc.rsplit("@", 1)[-1]
    first = netloc.split(",", 1)[0].strip()
    if not first:
        raise ExternalServiceUnavailable(uri, "no host in URI")

    if first.startswith("["):
        host, _, tail = first[1:].partition("]")
        port_s = tail.lstrip(":")
    else:
        host, _, port_s = first.partition(":")
    try:
        port = int(port_s) if port_s else DEFAULT_DB_PORT
    except ValueError:
        raise ExternalServiceUnavailable(uri, f"invalid port {port_s!r}") from None
    return host, port


Connector = Callable[[Tuple[str, int], float], object]


def default_connector(address: Tuple[str, int], timeout: float) -> object:
    return socket.create_connection(address, timeout=timeout)


def probe_datastore(
    uri: str,
    *,
    timeout: float = PROBE_TIMEOUT_SECONDS,
    connect: Connector = default_connector,
) -> None:
    """Raise :class:`ExternalServiceUnavailable` if *uri* is not reachable."""
    address = parse_datastore_address(uri)
    try:
        conn = connect(address, timeout)
    except OSError as e:
        raise ExternalServiceUnavailable(uri, str(e) or e.__class__.__name__) from e
    close = getattr(conn, "close", None)
    if callable(close):
        close()


@dataclass(frozen=True)
class DatastoreCheck:
    strategy: str
    reason: str = ""


def check_datastore(
    env: TestEnvironment,
    *,
    log: Optional[ConsoleLogger] = None,
    connect: Connector = default_connector,
) -> DatastoreCheck:
    """Decide the datastore strategy for this run.

    An unreachable datastore is downgraded to a warning and the in-memory
    strategy; it never fails the invocation.
    """
    log = log or get_default_logger()
    if env.use_memory_db:
        log.info("USE_MEMORY_DB is set - skipping datastore check")
        return DatastoreCheck(strategy=STRATEGY_IN_MEMORY, reason="USE_MEMORY_DB")

    try:
        probe_datastore(env.database_uri, connect=connect)
    except ExternalServiceUnavailable as e:
        logger.debug("datastore probe failed", exc_info=True)
        log.warning("Datastore connection failed - using in-memory database for tests")
        log.info("Install and start MongoDB for full integration testing")
        return DatastoreCheck(strategy=STRATEGY_IN_MEMORY, reason=e.reason)

    log.success("Datastore connection successful")
    return DatastoreCheck(strategy=STRATEGY_EXTERNAL)


def cleanup_run_artifacts(project_root: Path, *, log: Optional[ConsoleLogger] = None) -> List[Path]:
    """Remove coverage output and runner reports left by a previous run."""
    log = log or get_default_logger()
    removed: List[Path] = []
    for rel in RUN_ARTIFACTS:
        p = Path(project_root) / rel
        if p.is_symlink() or p.is_file():
            p.unlink()
        elif p.is_dir():
            shutil.rmtree(p)
        else:
            continue
        removed.append(p)
        log.info(f"Removed: {p.name}")
    return removed
