"""testenv.flags

Declarative flag tables and the one parser loop that consumes them.

Both entrypoints (the orchestration CLI and the runner CLI) describe their
flags as a tuple of :class:`FlagSpec`. :func:`parse_flags` walks ``argv``
once, applies each recognized flag to its field, and collects everything it
does not understand as warnings instead of failing. Help text is rendered
from the same table so usage output cannot drift from the parser.

Unknown flags are accepted with a warning, which argparse cannot do.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

FLAG_PREFIX = "-"


@dataclass(frozen=True)
class FlagSpec:
    """One recognized flag and the option it sets."""

    names: Tuple[str, ...]
    dest: str
    value: Any = True
    takes_value: bool = False
    metavar: Optional[str] = None
    help: str = ""

    def usage(self) -> str:
        names = ", ".join(self.names)
        if self.takes_value:
            names += f" <{self.metavar or 'value'}>"
        return names


@dataclass(frozen=True)
class ParsedFlags:
    values: Dict[str, Any]
    subcommand: Optional[str] = None
    warnings: Tuple[str, ...] = ()
    rest: Tuple[str, ...] = field(default_factory=tuple)


def _index(table: Iterable[FlagSpec]) -> Dict[str, FlagSpec]:
    out: Dict[str, FlagSpec] = {}
    for spec in table:
        for name in spec.names:
            if name in out:
                raise ValueError(f"Duplicate flag in table: {name}")
            out[name] = spec
    return out


def parse_flags(
    argv: Sequence[str],
    table: Sequence[FlagSpec],
    *,
    defaults: Mapping[str, Any],
    subcommands: Optional[Mapping[str, str]] = None,
    stop_at: Iterable[str] = (),
) -> ParsedFlags:
    """Apply *table* to *argv*.

    ``subcommands`` maps accepted bare tokens (aliases included) to their
    canonical name; the last one seen wins. Bare tokens that are not
    subcommands are ignored. When a canonical subcommand listed in *stop_at*
    is seen, the remaining tokens are returned untouched in ``rest``.
    """
    by_name = _index(table)
    aliases = dict(subcommands or {})
    stop = set(stop_at)

    values: Dict[str, Any] = dict(defaults)
    subcommand: Optional[str] = None
    warnings: List[str] = []
    rest: Tuple[str, ...] = ()

    i = 0
    while i < len(argv):
        token = str(argv[i])
        spec = by_name.get(token)

        if spec is not None:
            if spec.takes_value:
                if i + 1 < len(argv):
                    values[spec.dest] = str(argv[i + 1])
                    i += 1
                else:
                    warnings.append(f"Option {token} expects a value; ignored")
            else:
                values[spec.dest] = spec.value
        elif token.startswith(FLAG_PREFIX) and token != FLAG_PREFIX:
            warnings.append(f"Unknown option: {token}")
        elif token in aliases:
            subcommand = aliases[token]
            if subcommand in stop:
                rest = tuple(str(t) for t in argv[i + 1:])
                break
        i += 1

    return ParsedFlags(values=values, subcommand=subcommand, warnings=tuple(warnings), rest=rest)


def format_flag_help(table: Sequence[FlagSpec], *, width: int = 25) -> List[str]:
    """Render one aligned help line per flag."""
    return [f"  {spec.usage():<{width}}{spec.help}" for spec in table]
