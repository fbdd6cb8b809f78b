"""GitHub API adapter."""

from botman.adapters.github import GitHubClient, GitHubError

__all__ = ["GitHubClient", "GitHubError"]
