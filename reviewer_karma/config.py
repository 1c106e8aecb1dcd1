"""Karma point configuration read from environment variables."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, replace
from typing import Mapping

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Config:
    """Points awarded per kind of contribution, and the update mode."""

    review_point: int = 1
    positive_emoji_point: int = 2
    constructive_comment_point: int = 1
    incremental_update: bool = False


def _parse_int(value: str) -> int | None:
    if _INTEGER.fullmatch(value):
        return int(value)
    return None


def load(environ: Mapping[str, str] | None = None) -> Config:
    """Build a Config from the given mapping (os.environ by default).

    Unset, empty or malformed point values keep their defaults.
    """
    env = os.environ if environ is None else environ
    config = Config()

    for variable, field in (
        ("REVIEW_POINT", "review_point"),
        ("POSITIVE_EMOJI_POINT", "positive_emoji_point"),
        ("CONSTRUCTIVE_COMMENT_POINT", "constructive_comment_point"),
    ):
        value = env.get(variable, "")
        if value:
            points = _parse_int(value)
            if points is not None:
                config = replace(config, **{field: points})

    incremental = env.get("INCREMENTAL_UPDATE", "")
    if incremental:
        config = replace(config, incremental_update=incremental.lower() == "true")

    return config