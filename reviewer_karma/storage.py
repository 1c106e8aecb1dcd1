"""JSON persistence of accumulated karma for incremental updates."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

DEFAULT_DATA_PATH = ".karma-data.json"

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_TIME_PATTERN = re.compile(
    r"(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})"
)


class KarmaStorageError(Exception):
    """Raised when karma data cannot be read, decoded or written."""


@dataclass
class KarmaData:
    """Accumulated reviewer points and the pull requests already counted."""

    reviewers: dict[str, int] = field(default_factory=dict)
    last_updated: datetime = ZERO_TIME
    processed_prs: dict[int, datetime] = field(default_factory=dict)


def _now() -> datetime:
    return datetime.now().astimezone()


def new_empty_karma_data() -> KarmaData:
    """Return empty karma data stamped with the current time."""
    return KarmaData(last_updated=_now())


def _format_time(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.astimezone()
    text = moment.isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def _parse_time(value: Any) -> datetime:
    if value is None:
        return ZERO_TIME
    if not isinstance(value, str):
        raise KarmaStorageError(f"failed to unmarshal karma data: bad time {value!r}")
    match = _TIME_PATTERN.fullmatch(value)
    if match is None:
        raise KarmaStorageError(f"failed to unmarshal karma data: bad time {value!r}")
    base, fraction, zone = match.groups()
    micro = (fraction or "")[:6].ljust(6, "0")
    zone = "+00:00" if zone == "Z" else zone
    try:
        return datetime.fromisoformat(f"{base}.{micro}{zone}")
    except ValueError as exc:
        raise KarmaStorageError(f"failed to unmarshal karma data: {exc}") from exc


def _decode(document: Any) -> KarmaData:
    if document is None:
        return KarmaData()
    if not isinstance(document, dict):
        raise KarmaStorageError("failed to unmarshal karma data: expected an object")

    reviewers_raw = document.get("reviewers") or {}
    if not isinstance(reviewers_raw, dict):
        raise KarmaStorageError("failed to unmarshal karma data: bad reviewers")
    reviewers: dict[str, int] = {}
    for name, points in reviewers_raw.items():
        if type(points) is not int:
            raise KarmaStorageError(
                f"failed to unmarshal karma data: bad points for {name!r}"
            )
        reviewers[name] = points

    processed_raw = document.get("processed_prs") or {}
    if not isinstance(processed_raw, dict):
        raise KarmaStorageError("failed to unmarshal karma data: bad processed_prs")
    processed: dict[int, datetime] = {}
    for key, moment in processed_raw.items():
        try:
            number = int(key)
        except ValueError as exc:
            raise KarmaStorageError(
                f"failed to unmarshal karma data: bad pull request number {key!r}"
            ) from exc
        processed[number] = _parse_time(moment)

    return KarmaData(
        reviewers=reviewers,
        last_updated=_parse_time(document.get("last_updated")),
        processed_prs=processed,
    )


def _encode(data: KarmaData) -> str:
    document = {
        "reviewers": {name: data.reviewers[name] for name in sorted(data.reviewers)},
        "last_updated": _format_time(data.last_updated),
        "processed_prs": {
            key: _format_time(data.processed_prs[number])
            for key, number in sorted((str(n), n) for n in data.processed_prs)
        },
    }
    return json.dumps(document, indent=2, ensure_ascii=False)


class Storage:
    """Reads and writes KarmaData as JSON at a fixed path."""

    def __init__(self, path: str | Path = DEFAULT_DATA_PATH) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"Storage({str(self.path)!r})"

    def load(self) -> KarmaData:
        """Read stored data; a missing or empty file gives empty data."""
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return KarmaData()
        except OSError as exc:
            raise KarmaStorageError(f"failed to read karma data: {exc}") from exc
        if not raw:
            return KarmaData()
        try:
            document = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise KarmaStorageError(f"failed to unmarshal karma data: {exc}") from exc
        return _decode(document)

    def save(self, data: KarmaData) -> None:
        """Stamp data with the current time and write it out."""
        data.last_updated = _now()
        try:
            self.path.write_text(_encode(data), encoding="utf-8")
        except OSError as exc:
            raise KarmaStorageError(f"failed to write karma data: {exc}") from exc

    def update_karma(self, pr_number: int, reviewer_karma: Mapping[str, int]) -> None:
        """Add the points of one pull request and mark it processed."""
        data = self.load()
        for name, points in reviewer_karma.items():
            data.reviewers[name] = data.reviewers.get(name, 0) + points
        data.processed_prs[pr_number] = _now()
        self.save(data)

    def processed_pr_numbers(self) -> set[int]:
        """Return the numbers of pull requests already counted."""
        return set(self.load().processed_prs)

    def clear(self) -> None:
        """Replace stored data with empty data."""
        self.save(new_empty_karma_data())