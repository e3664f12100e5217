"""testenv.workspace.fixtures

Seed fixtures for the test datastore.

A fixture is a named, ordered list of records; the harness loads
``fixtures/data/<name>.json`` into the collection of the same name. Files are
rewritten wholesale on every generation (no merge), and the same input always
produces the same bytes: timestamps are part of the fixed records, never
generated at write time.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from testenv.errors import ConfigurationError, ProvisioningError
from testenv.io.fs import write_json_atomic
from testenv.log import ConsoleLogger, get_default_logger

ID_FIELD = "_id"
PLACEHOLDER_FILENAME = ".gitkeep"

Record = Dict[str, Any]


@dataclass(frozen=True)
class Fixture:
    name: str
    records: Tuple[Record, ...]

    @property
    def filename(self) -> str:
        return f"{self.name}.json"


DEFAULT_FIXTURES: Tuple[Fixture, ...] = (
    Fixture(
        name="users",
        records=(
            {
                "_id": "507f1f77bcf86cd799439011",
                "email": "admin@test.com",
                "password": "$2b$10$hash",
                "firstName": "Admin",
                "lastName": "User",
                "role": "admin",
                "isActive": True,
                "createdAt": "2024-01-01T00:00:00.000Z",
            },
            {
                "_id": "507f1f77bcf86cd799439012",
                "email": "user@test.com",
                "password": "$2b$10$hash",
                "firstName": "Test",
                "lastName": "User",
                "role": "user",
                "isActive": True,
                "createdAt": "2024-01-02T00:00:00.000Z",
            },
        ),
    ),
    Fixture(
        name="contacts",
        records=(
            {
                "_id": "507f1f77bcf86cd799439013",
                "firstName": "John",
                "lastName": "Doe",
                "email": "john.doe@example.com",
                "phone": "+1234567890",
                "tags": ["lead", "interested"],
                "source": "website",
                "createdAt": "2024-01-01T00:00:00.000Z",
            },
            {
                "_id": "507f1f77bcf86cd799439014",
                "firstName": "Jane",
                "lastName": "Smith",
                "email": "jane.smith@example.com",
                "phone": "+1234567891",
                "tags": ["customer"],
                "source": "referral",
                "createdAt": "2024-01-02T00:00:00.000Z",
            },
        ),
    ),
    Fixture(
        name="campaigns",
        records=(
            {
                "_id": "507f1f77bcf86cd799439015",
                "name": "Test Campaign",
                "type": "email",
                "status": "active",
                "subject": "Test Email Subject",
                "content": "Test email content",
                "targetAudience": ["507f1f77bcf86cd799439013"],
                "createdAt": "2024-01-01T00:00:00.000Z",
            },
        ),
    ),
)


def fixtures_from_mapping(raw: Mapping[str, Any], *, source: str = "<mapping>") -> Tuple[Fixture, ...]:
    """Validate a ``{name: [record, ...]}`` mapping into fixtures."""
    out: List[Fixture] = []
    for name, records in raw.items():
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError(f"{source}: fixture names must be non-empty strings (got {name!r})")
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            raise ConfigurationError(f"{source}: fixture '{name}' must be a list of mappings")
        for idx, r in enumerate(records):
            if ID_FIELD not in r:
                raise ConfigurationError(f"{source}: record #{idx + 1} of fixture '{name}' has no {ID_FIELD}")
        out.append(Fixture(name=name.strip(), records=tuple(dict(r) for r in records)))
    return tuple(out)


def load_fixture_set(path: Path) -> Tuple[Fixture, ...]:
    """Load an alternative seed set from YAML (``.yaml``/``.yml``) or JSON."""
    import yaml

    p = Path(path)
    if not p.exists():
        raise ConfigurationError(f"Fixture file not found: {p}")

    text = p.read_text(encoding="utf-8")
    try:
        if p.suffix.lower() in {".yaml", ".yml"}:
            raw = yaml.safe_load(text) or {}
        else:
            raw = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not parse fixture file {p}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Fixture file must map fixture names to record lists: {p}")
    return fixtures_from_mapping(raw, source=str(p))


class FixtureWriter:
    """Serialize fixtures into ``<data_dir>/<name>.json``."""

    def __init__(self, data_dir: Path, *, log: Optional[ConsoleLogger] = None) -> None:
        self.data_dir = Path(data_dir)
        self._log = log or get_default_logger()

    def write(self, fixture: Fixture) -> Path:
        path = self.data_dir / fixture.filename
        try:
            write_json_atomic(path, [dict(r) for r in fixture.records], sort_keys=False)
        except OSError as e:
            raise ProvisioningError(path, e) from e
        self._log.info(f"Created fixture: {fixture.filename}")
        return path

    def write_all(self, fixtures: Sequence[Fixture] = DEFAULT_FIXTURES) -> List[Path]:
        return [self.write(f) for f in fixtures]

    def ensure_placeholders(self, dirs: Iterable[Path]) -> List[Path]:
        """Create ``.gitkeep`` markers where absent; return the new ones."""
        created: List[Path] = []
        for d in dirs:
            marker = Path(d) / PLACEHOLDER_FILENAME
            if marker.exists():
                continue
            try:
                marker.parent.mkdir(parents=True, exist_ok=True)
                marker.touch()
            except OSError as e:
                raise ProvisioningError(marker, e) from e
            created.append(marker)
        return created
