"""hacktoberfest-accepted labelling for merged pull requests."""

import logging
from datetime import date

from botman.adapters.github import GitHubClient, GitHubError
from botman.models import PullRequestEvent

LOG = logging.getLogger("botman.hacktober")

HACKTOBERFEST_LABEL = "hacktoberfest-accepted"
EXCLUDED_AUTHORS = ("renovate[bot]",)


def in_hacktoberfest(today: date) -> bool:
    """Sep 25 through Nov 5, both inclusive."""
    return date(today.year, 9, 25) <= today <= date(today.year, 11, 5)


def label_hacktoberfest(
    event: PullRequestEvent,
    client: GitHubClient,
    bot_login: str | None,
    today: date | None = None,
) -> bool:
    """Label a merged PR during the event window. Returns whether a label was added."""
    pr = event.pull_request
    if not pr.merged:
        return False
    author = pr.user.login if pr.user else None
    if author in EXCLUDED_AUTHORS or (bot_login and author == bot_login):
        return False
    if not in_hacktoberfest(today or date.today()):
        return False
    try:
        client.add_labels(event.repository, pr.number, [HACKTOBERFEST_LABEL])
    except GitHubError as e:
        LOG.warning("Failed to label %s#%s: %s", event.repository.full_name, pr.number, e)
        return False
    return True
