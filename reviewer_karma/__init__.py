"""Score pull request reviewers from GitHub and write a karma leaderboard."""

__version__ = "1.0.0"