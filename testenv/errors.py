"""testenv.errors

Error taxonomy shared by every component.

Only errors that a caller is expected to handle (or translate into an exit
code) live here. Everything derives from :class:`TestEnvError` so the CLI
boundary can catch the whole family in one place.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Union


class TestEnvError(Exception):
    """Base class for toolkit errors."""

    # Keep pytest from collecting this as a test class.
    __test__ = False


class ConfigurationError(TestEnvError):
    """Required tooling or configuration is missing/invalid. Fatal."""

    def __init__(self, message: str, *, hint: Optional[str] = None) -> None:
        super().__init__(message)
        self.hint = hint


class ProvisioningError(TestEnvError):
    """A filesystem operation failed irrecoverably."""

    def __init__(self, path: Union[str, Path], os_error: OSError) -> None:
        self.path = Path(path)
        self.os_error = os_error
        super().__init__(f"Could not provision {self.path}: {os_error}")


class ExternalServiceUnavailable(TestEnvError):
    """The configured datastore could not be reached. Non-fatal."""

    def __init__(self, uri: str, reason: str) -> None:
        self.uri = uri
        self.reason = reason
        super().__init__(f"Datastore {uri} is unreachable: {reason}")


class ProcessFailure(TestEnvError):
    """The delegated runner exited non-zero or could not be spawned."""

    def __init__(
        self,
        command: Sequence[str],
        *,
        exit_code: Optional[int] = None,
        os_error: Optional[OSError] = None,
    ) -> None:
        self.command = list(command)
        self.exit_code = exit_code
        self.os_error = os_error
        if os_error is not None:
            msg = f"Could not start {self.command[0] if self.command else '<empty>'}: {os_error}"
        else:
            msg = f"Command failed with exit code {exit_code}"
        super().__init__(msg)


class WaitTimeoutError(TestEnvError, TimeoutError):
    """A poll-until-condition helper exceeded its bound."""
