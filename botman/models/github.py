"""GitHub entities as they appear in webhook payloads and API responses."""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class User(BaseModel):
    """GitHub user or bot account."""

    id: int
    login: str


class CommentKind(str, Enum):
    """Which GitHub object a triggering comment is.

    Decides the reaction endpoint; reviews support neither reactions nor
    minimizing.
    """

    ISSUE_COMMENT = "issue_comment"
    REVIEW_COMMENT = "review_comment"
    REVIEW = "review"


class Comment(BaseModel):
    """Issue comment, pull request review comment or review body."""

    id: int
    node_id: str = ""
    body: str | None = None
    user: User
    kind: CommentKind = CommentKind.ISSUE_COMMENT

    @property
    def reactable(self) -> bool:
        return self.kind != CommentKind.REVIEW


class Repo(BaseModel):
    """Repository identified by full_name (owner/name)."""

    id: int
    full_name: str

    @field_validator("full_name")
    @classmethod
    def _check_full_name(cls, value: str) -> str:
        owner, sep, name = value.partition("/")
        if not sep or not owner or not name:
            raise ValueError(f"{value!r} is not an owner/name repository id")
        return value

    @property
    def owner(self) -> str:
        return self.full_name.split("/", 1)[0]

    @property
    def name(self) -> str:
        return self.full_name.split("/", 1)[1]

    @property
    def git_url(self) -> str:
        return f"https://github.com/{self.full_name}.git"


class Ref(BaseModel):
    """One side (head or base) of a pull request."""

    model_config = ConfigDict(frozen=True)

    ref: str
    sha: str
    user: User | None = None
    # null once the fork behind a pull request is deleted
    repo: Repo | None = None


class Team(BaseModel):
    slug: str


class PullRequest(BaseModel):
    """Pull request with both refs."""

    number: int
    head: Ref
    base: Ref
    user: User | None = None
    merged: bool = False
    requested_teams: List[Team] = Field(default_factory=list)


class IssuePullRequestLink(BaseModel):
    """Marker on an issue that is really a pull request."""

    url: str
    merged_at: str | None = None


class Label(BaseModel):
    name: str


class Issue(BaseModel):
    """Issue (or pull request seen through the issues API)."""

    id: int
    number: int
    user: User
    labels: List[Label] = Field(default_factory=list)
    pull_request: IssuePullRequestLink | None = None

    def has_label(self, name: str) -> bool:
        return any(label.name == name for label in self.labels)


class CheckRunPullRequest(BaseModel):
    url: str
    number: int


class CheckRun(BaseModel):
    """Check run with its status, conclusion and associated pull requests."""

    id: int
    status: str
    conclusion: str | None = None
    pull_requests: List[CheckRunPullRequest] = Field(default_factory=list)


class Reaction(str, Enum):
    """Comment reaction content values."""

    PLUS_ONE = "+1"
    MINUS_ONE = "-1"
    LAUGH = "laugh"
    CONFUSED = "confused"
    HEART = "heart"
    HOORAY = "hooray"
    ROCKET = "rocket"
    EYES = "eyes"
