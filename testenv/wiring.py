"""testenv.wiring

This module is the **composition root** for the toolkit.

"Composition root" means: the single place where we *assemble* the running
application from its building blocks:

- load ``testenv.yaml`` and the environment (``.env`` included)
- pick the logger
- build the :class:`~testenv.toolkit.TestEnvToolkit` facade

Both entry points call :func:`build_toolkit`, so configuration is read the
same way no matter which CLI was started.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional, Union

from testenv.config import load_project_config, read_env
from testenv.log import ConsoleLogger, get_default_logger
from testenv.toolkit import TestEnvToolkit


def build_toolkit(
    project_root: Union[str, Path] = ".",
    *,
    load_dotenv: bool = True,
    log: Optional[ConsoleLogger] = None,
    config_path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> TestEnvToolkit:
    """Build the toolkit facade for *project_root*.

    Config warnings (unknown keys) are logged, not raised. A malformed config
    raises :class:`~testenv.errors.ConfigurationError`.
    """
    log = log or get_default_logger()
    config, warnings = load_project_config(project_root, config_path=config_path)
    for w in warnings:
        log.warning(w)

    env = read_env(config.project_root, load_dotenv_file=load_dotenv, environ=environ)
    return TestEnvToolkit(config, env, log=log)
