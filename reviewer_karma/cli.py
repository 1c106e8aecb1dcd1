"""Command that builds the reviewer karma leaderboard for a repository."""

from __future__ import annotations

import os
import sys
from typing import Sequence

from .config import Config, load
from .githubapi import GitHubAPIError, GitHubClient
from .karma import (
    DEFAULT_LEADERBOARD_PATH,
    Leaderboard,
    generate_leaderboard,
    has_positive_emoji,
    is_bot,
    is_constructive_comment,
    write_leaderboard_file,
)
from .storage import DEFAULT_DATA_PATH, KarmaStorageError, Storage

_HELP = """\
Reviewer Karma Action
Track reviewer engagement and generate a karma-based leaderboard

Environment variables:
  GITHUB_TOKEN          - GitHub token for API access
  GITHUB_REPOSITORY     - Repository name (format: owner/repo)
  REVIEW_POINT          - Points for reviews (default: 1)
  POSITIVE_EMOJI_POINT  - Points for emojis (default: 2)
  CONSTRUCTIVE_COMMENT_POINT - Points for comments (default: 1)
  INCREMENTAL_UPDATE    - Use incremental updates (default: false)

Usage:
  ./reviewer-karma [--help]"""

_INCREMENTAL_MODE = "Incremental (only new PRs)"
_FULL_MODE = "Full Recreation (all PRs)"


def parse_repository(full_name: str) -> tuple[str, str]:
    """Split an 'owner/repo' name into its two parts."""
    parts = full_name.split("/")
    if len(parts) != 2:
        raise ValueError("Invalid GITHUB_REPOSITORY format. Expected 'owner/repo'")
    return parts[0], parts[1]


def update_mode_description(incremental: bool) -> str:
    """Describe the update mode for the progress output."""
    if incremental:
        description = _INCREMENTAL_MODE
    else:
        description = _FULL_MODE
    return description


def _login(item: dict) -> str:
    return (item.get("user") or {}).get("login") or ""


def _body(item: dict) -> str:
    return item.get("body") or ""


def _award_for_text(
    karma: dict[str, int], username: str, body: str, config: Config, where: str
) -> None:
    if has_positive_emoji(body):
        karma[username] = karma.get(username, 0) + config.positive_emoji_point
        print(
            f"  🎉 @{username} gets +{config.positive_emoji_point} "
            f"points for positive emoji{where}"
        )
    if is_constructive_comment(body):
        karma[username] = karma.get(username, 0) + config.constructive_comment_point
        print(
            f"  💬 @{username} gets +{config.constructive_comment_point} "
            "points for constructive comment"
        )


def calculate_pr_karma(
    client: GitHubClient, owner: str, repo: str, pr_number: int, config: Config
) -> dict[str, int]:
    """Score the reviews and review comments of one pull request."""
    karma: dict[str, int] = {}

    try:
        reviews = client.fetch_pull_request_reviews(owner, repo, pr_number)
    except GitHubAPIError as exc:
        print(f"⚠️ Error fetching reviews for PR #{pr_number}: {exc}")
        return karma

    for review in reviews:
        username = _login(review)
        if is_bot(username):
            continue
        karma[username] = karma.get(username, 0) + config.review_point
        _award_for_text(karma, username, _body(review), config, "")

    try:
        comments = client.fetch_pull_request_comments(owner, repo, pr_number)
    except GitHubAPIError as exc:
        print(f"⚠️ Error fetching comments for PR #{pr_number}: {exc}")
        return karma

    for comment in comments:
        username = _login(comment)
        if is_bot(username):
            continue
        _award_for_text(karma, username, _body(comment), config, " in comment")

    return karma


def _write(leaderboard: Leaderboard, config: Config) -> None:
    write_leaderboard_file(
        leaderboard,
        DEFAULT_LEADERBOARD_PATH,
        config.review_point,
        config.positive_emoji_point,
        config.constructive_comment_point,
    )


def run_full_recreation(
    client: GitHubClient, owner: str, repo: str, config: Config
) -> Leaderboard:
    """Score every pull request and write the leaderboard from scratch."""
    print("🔄 Running in full recreation mode...")
    prs = client.fetch_all_pull_requests(owner, repo)
    print(f"📋 Found {len(prs)} pull requests")

    totals: dict[str, int] = {}
    for pr in prs:
        number = pr.get("number", 0)
        print(f"🔍 Processing PR #{number}: {pr.get('title') or ''}")
        for username, points in calculate_pr_karma(
            client, owner, repo, number, config
        ).items():
            totals[username] = totals.get(username, 0) + points

    leaderboard = generate_leaderboard(totals)
    _write(leaderboard, config)
    return leaderboard


def run_incremental_update(
    client: GitHubClient, owner: str, repo: str, config: Config
) -> Leaderboard:
    """Score only pull requests not yet stored, then write the leaderboard."""
    print("🔄 Running in incremental update mode...")
    storage = Storage(DEFAULT_DATA_PATH)

    try:
        karma_data = storage.load()
    except KarmaStorageError as exc:
        print(f"⚠️ Error loading karma data: {exc}")
        print("🔄 Starting fresh...")
        try:
            karma_data = storage.load()
        except KarmaStorageError as retry_exc:
            raise KarmaStorageError(
                f"Error creating empty karma data: {retry_exc}"
            ) from retry_exc

    prs = client.fetch_all_pull_requests(owner, repo)
    print(f"📋 Found {len(prs)} pull requests")

    try:
        processed = storage.processed_pr_numbers()
    except KarmaStorageError as exc:
        print(f"⚠️ Error getting processed PRs: {exc}")
        processed = set()

    new_count = 0
    for pr in prs:
        number = pr.get("number", 0)
        if number in processed:
            continue
        new_count += 1
        print(f"🆕 Processing new PR #{number}: {pr.get('title') or ''}")
        pr_karma = calculate_pr_karma(client, owner, repo, number, config)
        try:
            storage.update_karma(number, pr_karma)
        except KarmaStorageError as exc:
            print(f"⚠️ Error updating karma for PR #{number}: {exc}")
            continue
        for username, points in pr_karma.items():
            karma_data.reviewers[username] = karma_data.reviewers.get(username, 0) + points

    if new_count == 0:
        print("✅ No new PRs to process")
    else:
        print(f"✅ Processed {new_count} new PRs")

    leaderboard = generate_leaderboard(karma_data.reviewers)
    _write(leaderboard, config)
    return leaderboard


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command; return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] in ("--help", "-h"):
        print(_HELP)
        return 0

    token = os.environ.get("GITHUB_TOKEN", "")
    if not token:
        print("❌ GITHUB_TOKEN environment variable is required")
        return 1

    full_name = os.environ.get("GITHUB_REPOSITORY", "")
    if not full_name:
        print("❌ GITHUB_REPOSITORY environment variable is required")
        return 1

    try:
        owner, repo = parse_repository(full_name)
    except ValueError as exc:
        print(f"❌ {exc}")
        return 1

    config = load()
    print(f"🔍 Analyzing repository: {owner}/{repo}")
    print(
        f"📊 Karma configuration: Review={config.review_point}, "
        f"Emoji={config.positive_emoji_point}, "
        f"Constructive={config.constructive_comment_point}"
    )
    print(f"🔄 Update mode: {update_mode_description(config.incremental_update)}")

    runner = run_incremental_update if config.incremental_update else run_full_recreation
    try:
        with GitHubClient(token) as client:
            runner(client, owner, repo, config)
    except GitHubAPIError as exc:
        print(f"❌ Error fetching pull requests: {exc}")
        return 1
    except KarmaStorageError as exc:
        print(f"⚠️ {exc}")
        return 1
    except OSError as exc:
        print(f"❌ Error writing leaderboard file: {exc}")
        return 1

    print("✅ Reviewer karma leaderboard generated successfully!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())