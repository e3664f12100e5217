"""testenv.io

Filesystem helpers shared by the workspace and audit packages.
"""

from __future__ import annotations

from .fs import read_json, read_source_text, write_json_atomic, write_text_atomic

__all__ = [
    "read_json",
    "read_source_text",
    "write_json_atomic",
    "write_text_atomic",
]
