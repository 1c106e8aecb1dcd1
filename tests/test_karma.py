from datetime import datetime

import pytest

from reviewer_karma.karma import (
    Leaderboard,
    Reviewer,
    generate_leaderboard,
    has_positive_emoji,
    is_bot,
    is_constructive_comment,
    render_leaderboard,
    write_leaderboard_file,
)


@pytest.mark.parametrize(
    "username, expected",
    [
        ("alice", False),
        ("bob", False),
        ("github-actions[bot]", True),
        ("dependabot[bot]", True),
        ("test-bot", True),
        ("bot-user", True),
        ("user-bot", True),
        ("normaluser", False),
        ("Renovate[BOT]", True),
    ],
)
def test_is_bot(username, expected):
    assert is_bot(username) is expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", False),
        ("This is a normal comment", False),
        ("Great work! 👍", True),
        ("Amazing! 🔥", True),
        ("Nice job 😄", True),
        ("Good work 🎉", True),
        ("Excellent 🚀", True),
        ("Perfect 💯", True),
        ("Looks good ✅", True),
        ("Awesome ⭐", True),
        ("Love it ❤️", True),
        ("Well done 👏", True),
        ("This is great but no emoji", False),
    ],
)
def test_has_positive_emoji(text, expected):
    assert has_positive_emoji(text) is expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", False),
        ("LGTM", False),
        ("Looks good", False),
        ("Good 👍", False),
        ("Nice 🔥", False),
        (
            "This is a very detailed comment that provides constructive feedback "
            "about the code changes and suggests improvements for better maintainability",
            True,
        ),
        (
            "I think we should refactor this function to improve readability "
            "and add better error handling",
            True,
        ),
        ("The implementation looks good but we should consider adding more test cases", False),
        ("LGTM but we should add more documentation", False),
        ("Great work! 👍 This is excellent", False),
    ],
)
def test_is_constructive_comment(text, expected):
    assert is_constructive_comment(text) is expected


def test_generate_leaderboard_sorted_descending():
    leaderboard = generate_leaderboard(
        {"alice": 18, "bob": 12, "carol": 10, "dave": 8, "eve": 5}
    )
    assert len(leaderboard.reviewers) == 5
    points = [reviewer.points for reviewer in leaderboard.reviewers]
    assert points == sorted(points, reverse=True)
    assert leaderboard.reviewers[0] == Reviewer("alice", 18)


def test_generate_leaderboard_unordered_input():
    leaderboard = generate_leaderboard({"eve": 5, "alice": 18, "bob": 12})
    assert [r.username for r in leaderboard.reviewers] == ["alice", "bob", "eve"]


def test_generate_leaderboard_empty():
    assert generate_leaderboard({}).reviewers == []


def test_render_leaderboard():
    leaderboard = Leaderboard(
        [
            Reviewer("alice", 18),
            Reviewer("bob", 12),
            Reviewer("carol", 10),
            Reviewer("dave", 8),
        ]
    )
    text = render_leaderboard(leaderboard, 3, 5, 2, now=datetime(2024, 5, 6, 7, 8, 9))
    expected = (
        "# Reviewer Karma Leaderboard\n\n"
        "This leaderboard tracks reviewer engagement and contributions to the repository.\n\n"
        "## Scoring System\n\n"
        "- ✅ Giving a code review: +3 point(s)\n"
        "- ✅ Review includes a positive emoji (👍, 🔥, 😄, etc.): +5 point(s)\n"
        "- ✅ Review comment contains a constructive message (>10 words): +2 point(s)\n\n"
        "## Current Rankings\n\n"
        "| Rank | Reviewer | Points |\n"
        "|------|----------|--------|\n"
        "| 1 | 🥇 @alice | 18 |\n"
        "| 2 | 🥈 @bob | 12 |\n"
        "| 3 | 🥉 @carol | 10 |\n"
        "| 4 | @dave | 8 |\n"
        "\n---\n"
        "*Last updated: 2024-05-06 07:08:09 UTC*\n"
    )
    assert text == expected


def test_render_leaderboard_default_points():
    text = render_leaderboard(Leaderboard(), now=datetime(2024, 1, 1))
    assert "- ✅ Giving a code review: +1 point(s)\n" in text
    assert "etc.): +2 point(s)\n" in text
    assert "(>10 words): +1 point(s)\n" in text
    assert text.endswith("|------|----------|--------|\n\n---\n*Last updated: 2024-01-01 00:00:00 UTC*\n")


def test_write_leaderboard_file(tmp_path):
    target = tmp_path / "REVIEWERS.md"
    result = write_leaderboard_file(generate_leaderboard({"alice": 4}), target, 2, 3, 4)
    assert result == target
    content = target.read_text(encoding="utf-8")
    assert "| 1 | 🥇 @alice | 4 |" in content
    assert "- ✅ Giving a code review: +2 point(s)" in content


def test_write_leaderboard_file_missing_directory(tmp_path):
    with pytest.raises(OSError):
        write_leaderboard_file(Leaderboard(), tmp_path / "missing" / "REVIEWERS.md")