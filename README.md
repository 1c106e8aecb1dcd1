# reviewer-karma

Score the reviewers of a GitHub repository's pull requests and write a
karma leaderboard to `REVIEWERS.md` in the working directory.

For each pull request (open and closed), the reviews and the review comments
are fetched from the GitHub REST API. Points are awarded as follows:

- every review: the review points;
- a review or review comment containing a positive emoji
  (👍, 🔥, 😄, 🎉, 🚀, 💯, ✅, ⭐, ❤️, 👏): the emoji points;
- a review or review comment that is constructive: the comment points. A text
  counts as constructive when more than ten words remain after stock phrases
  ("lgtm", "looks good", "good", "nice") and the positive emojis are removed,
  ignoring case.

Accounts whose name contains `[bot]`, `-bot` or `bot-` (ignoring case) are
skipped.

## Installation

```sh
pip install .
```

## Usage

The command takes its settings from the environment:

| Variable | Meaning | Default |
|----------|---------|---------|
| `GITHUB_TOKEN` | Token used for GitHub API access | required |
| `GITHUB_REPOSITORY` | Repository as `owner/repo` | required |
| `REVIEW_POINT` | Points for each review | `1` |
| `POSITIVE_EMOJI_POINT` | Points for a positive emoji | `2` |
| `CONSTRUCTIVE_COMMENT_POINT` | Points for a constructive message | `1` |
| `INCREMENTAL_UPDATE` | `true` (any case) to score only pull requests not seen before | `false` |

Point values that are not whole numbers are ignored and the default is kept.

```sh
export GITHUB_TOKEN=token
export GITHUB_REPOSITORY=example-org/example-repo
reviewer-karma
```

`reviewer-karma --help` prints a summary of these variables. The command
prints its progress and exits with status 1 if a required variable is missing,
the repository name is not of the form `owner/repo`, the pull request list
cannot be fetched, or a file cannot be written. A failure to fetch the reviews
or comments of a single pull request is reported and that pull request is
scored with what was fetched so far.

### Update modes

- **Full recreation** (default): every pull request is scored from scratch on
  each run.
- **Incremental**: totals and the numbers of scored pull requests are kept in
  `.karma-data.json` in the working directory. Only pull requests not recorded
  there are scored; their points are added to the stored totals.

In both modes the leaderboard is written to `REVIEWERS.md`, ranked by points
with the top three marked 🥇 🥈 🥉, followed by the scoring system in use and
a "Last updated" timestamp.

## Library use

```python
from reviewer_karma.config import load
from reviewer_karma.karma import (
    generate_leaderboard,
    is_bot,
    has_positive_emoji,
    is_constructive_comment,
    render_leaderboard,
    write_leaderboard_file,
)

config = load({"REVIEW_POINT": "3"})      # Config(review_point=3, ...)
board = generate_leaderboard({"alice": 18, "bob": 12})
print(render_leaderboard(board, 1, 2, 1))
print(is_constructive_comment("LGTM"))     # False
write_leaderboard_file(board, "REVIEWERS.md", 1, 2, 1)
```

- `reviewer_karma.config.load(environ=None)` builds a frozen `Config` from a
  mapping, `os.environ` by default.
- `reviewer_karma.storage.Storage(path)` keeps `KarmaData` (reviewer totals,
  last update time, processed pull request numbers) as JSON, with `load`,
  `save`, `update_karma`, `processed_pr_numbers` and `clear`. A missing or
  empty file loads as empty data; unreadable or malformed data raises
  `KarmaStorageError`.
- `reviewer_karma.githubapi.GitHubClient(token, base_url=..., session=..., timeout=...)`
  fetches pull requests, reviews and review comments as lists of JSON objects,
  following pagination. It can be used as a context manager. Failed requests
  raise `GitHubAPIError`, whose `status` holds the HTTP status when there is one.
- `reviewer_karma.cli` exposes the steps of the command: `parse_repository`,
  `calculate_pr_karma`, `run_full_recreation`, `run_incremental_update` and
  `main`.

## What it does not do

The package only writes `REVIEWERS.md` (and `.karma-data.json` in incremental
mode) locally. It does not commit, push or publish them, and it does not
count issue comments or reactions, only pull request reviews and review
comments.

## Running the tests

```sh
pip install ".[test]"
pytest
```