"""JSONL run log: one event per solve, grouped by UTC date, rotated by size.

Files live under ``<dir>/<YYYYMMDD>/solve_NN.jsonl``.  A file is reused until
it reaches ``max_bytes``; the next free index is picked after that.
"""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping

__all__ = [
    "append_event",
    "configure",
    "configure_from_section",
    "current_log_path",
    "read_events",
]

_DEFAULT_MAX_BYTES = 100 * 1024 * 1024
_FILE_STEM = "solve"


@dataclass
class _RunLogState:
    base_dir: Path = Path("logs/solver")
    max_bytes: int = _DEFAULT_MAX_BYTES
    active: Path | None = None


_LOCK = threading.Lock()
_STATE = _RunLogState()


def configure(base_dir: str | Path, *, max_bytes: int | None = None) -> None:
    """Point the run log at ``base_dir`` and forget the active file."""

    global _STATE
    with _LOCK:
        _STATE = _RunLogState(Path(base_dir), max_bytes or _DEFAULT_MAX_BYTES)


def configure_from_section(section: Mapping[str, Any], *, base_dir: str | None = None) -> None:
    """Apply a ``[run_log]`` config section; ``base_dir`` wins over ``dir``."""

    target = base_dir or section.get("dir")
    if not target:
        return
    max_bytes = section.get("max_bytes")
    configure(target, max_bytes=int(max_bytes) if max_bytes else None)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _fits(path: Path) -> bool:
    return not path.exists() or path.stat().st_size < _STATE.max_bytes


def _select_file() -> Path:
    day_dir = _STATE.base_dir / _utc_now().strftime("%Y%m%d")
    day_dir.mkdir(parents=True, exist_ok=True)

    active = _STATE.active
    if active is not None and active.parent == day_dir and active.exists() and _fits(active):
        return active

    index = 0
    candidate = day_dir / f"{_FILE_STEM}_{index:02d}.jsonl"
    while not _fits(candidate):
        index += 1
        candidate = day_dir / f"{_FILE_STEM}_{index:02d}.jsonl"
    _STATE.active = candidate
    return candidate


def append_event(event: Mapping[str, Any]) -> Path:
    """Write ``event`` as a single JSON line; a ``ts`` field is added if absent."""

    record: Dict[str, Any] = dict(event)
    record.setdefault("ts", _utc_now().isoformat(timespec="milliseconds"))
    line = json.dumps(record, sort_keys=True, ensure_ascii=False)
    with _LOCK:
        path = _select_file()
        with path.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")
    return path


def read_events(path: str | Path) -> Iterator[Dict[str, Any]]:
    """Yield the events stored in one run-log file, skipping blank lines."""

    with Path(path).open("r", encoding="utf-8") as handle:
        for line in handle:
            if line.strip():
                yield json.loads(line)


def current_log_path() -> Path | None:
    return _STATE.active
