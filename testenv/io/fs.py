"""testenv.io.fs

Atomic, stable filesystem writers.

Every artifact the toolkit persists (fixtures, scaffold files, sample tests,
reports) goes through these helpers so that an interrupted run never leaves a
half-written file behind and repeated runs produce identical bytes.

Generated JavaScript and JSON are written with ``newline=""``: the templates
carry ``\\n`` line endings and they reach disk unchanged on every platform.
"""

from __future__ import annotations

import json
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any, Iterator


@contextmanager
def atomic_writer(path: Path, *, encoding: str = "utf-8") -> Iterator[IO[str]]:
    """Yield a text handle on a sibling temp file; move it over *path* on success.

    On error the temp file is removed and *path* is left as it was.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent))
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            yield handle
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp, target)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


def write_text_atomic(path: Path, text: str, *, encoding: str = "utf-8") -> None:
    with atomic_writer(path, encoding=encoding) as f:
        f.write(text)


def write_json_atomic(
    path: Path,
    data: Any,
    *,
    indent: int = 2,
    sort_keys: bool = False,
    ensure_ascii: bool = False,
    encoding: str = "utf-8",
) -> None:
    """Write *data* as indented JSON plus a trailing newline.

    Keys keep their insertion order unless ``sort_keys`` is set; fixture
    documents rely on that to preserve field order.
    """
    with atomic_writer(path, encoding=encoding) as f:
        json.dump(data, f, indent=indent, sort_keys=sort_keys, ensure_ascii=ensure_ascii)
        f.write("\n")


def read_json(path: Path, *, encoding: str = "utf-8") -> Any:
    with Path(path).open("r", encoding=encoding) as f:
        return json.load(f)


def read_source_text(path: Path) -> str:
    """Read a source file for textual inspection (undecodable bytes replaced)."""
    return Path(path).read_text(encoding="utf-8", errors="replace")
