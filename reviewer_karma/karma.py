"""Karma scoring rules and the markdown leaderboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Mapping

POSITIVE_EMOJIS = ("👍", "🔥", "😄", "🎉", "🚀", "💯", "✅", "⭐", "❤️", "👏")

_BOT_MARKERS = ("[bot]", "-bot", "bot-", "github-actions[bot]", "dependabot[bot]")

_NON_CONSTRUCTIVE = ("lgtm", "looks good", "good", "nice") + POSITIVE_EMOJIS

_MEDALS = ("🥇", "🥈", "🥉")

DEFAULT_LEADERBOARD_PATH = "REVIEWERS.md"


@dataclass
class Reviewer:
    """A user and the karma points they earned."""

    username: str
    points: int


@dataclass
class Leaderboard:
    """Reviewers ordered by points, highest first."""

    reviewers: list[Reviewer] = field(default_factory=list)


def is_bot(username: str) -> bool:
    """Return True if the username looks like a bot account."""
    lowered = username.lower()
    return any(marker in lowered for marker in _BOT_MARKERS)


def has_positive_emoji(text: str) -> bool:
    """Return True if the text contains one of the positive emojis."""
    return bool(text) and any(emoji in text for emoji in POSITIVE_EMOJIS)


def is_constructive_comment(text: str) -> bool:
    """Return True if more than ten words remain once filler is removed."""
    if not text:
        return False
    text = text.lower()
    for phrase in _NON_CONSTRUCTIVE:
        text = text.replace(f" {phrase} ", " ")
        text = text.replace(f"{phrase} ", " ")
        text = text.replace(f" {phrase}", " ")
        text = text.replace(phrase, "")
    return len(text.split()) > 10


def generate_leaderboard(reviewer_karma: Mapping[str, int]) -> Leaderboard:
    """Order reviewers by points, descending."""
    reviewers = [Reviewer(name, points) for name, points in reviewer_karma.items()]
    reviewers.sort(key=lambda reviewer: reviewer.points, reverse=True)
    return Leaderboard(reviewers)


def render_leaderboard(
    leaderboard: Leaderboard,
    review_point: int = 1,
    emoji_point: int = 2,
    comment_point: int = 1,
    now: datetime | None = None,
) -> str:
    """Render the leaderboard as markdown."""
    moment = now if now is not None else datetime.now()
    lines = [
        "# Reviewer Karma Leaderboard",
        "",
        "This leaderboard tracks reviewer engagement and contributions to the repository.",
        "",
        "## Scoring System",
        "",
        f"- ✅ Giving a code review: +{review_point} point(s)",
        f"- ✅ Review includes a positive emoji (👍, 🔥, 😄, etc.): +{emoji_point} point(s)",
        f"- ✅ Review comment contains a constructive message (>10 words): +{comment_point} point(s)",
        "",
        "## Current Rankings",
        "",
        "| Rank | Reviewer | Points |",
        "|------|----------|--------|",
    ]
    for rank, reviewer in enumerate(leaderboard.reviewers, start=1):
        medal = f"{_MEDALS[rank - 1]} " if rank <= len(_MEDALS) else ""
        lines.append(f"| {rank} | {medal}@{reviewer.username} | {reviewer.points} |")
    lines += [
        "",
        "---",
        f"*Last updated: {moment.strftime('%Y-%m-%d %H:%M:%S')} UTC*",
    ]
    return "\n".join(lines) + "\n"


def write_leaderboard_file(
    leaderboard: Leaderboard,
    path: str | Path = DEFAULT_LEADERBOARD_PATH,
    review_point: int = 1,
    emoji_point: int = 2,
    comment_point: int = 1,
) -> Path:
    """Write the rendered leaderboard to path and return the path."""
    target = Path(path)
    target.write_text(
        render_leaderboard(leaderboard, review_point, emoji_point, comment_point),
        encoding="utf-8",
    )
    return target