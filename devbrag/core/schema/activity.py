from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class Identity:
    login: str
    token: str = field(repr=False)
    display_name: Optional[str] = None


@dataclass(frozen=True, slots=True)
class UserProfile:
    login: str
    name: Optional[str]
    avatar_url: Optional[str]


@dataclass(frozen=True, slots=True)
class RepositoryDescriptor:
    id: int
    name: str
    full_name: str
    private: bool
    html_url: str
    api_url: str
    description: Optional[str]
    language: Optional[str]
    pushed_at: Optional[datetime]


@dataclass(frozen=True, slots=True)
class SizeImpact:
    additions: int
    deletions: int

    @property
    def total(self) -> int:
        return self.additions + self.deletions


@dataclass(frozen=True, slots=True)
class PullRequestEvent:
    id: int
    number: int
    title: str
    html_url: str
    api_url: str
    detail_url: str
    state: str
    created_at: datetime
    merged_at: Optional[datetime]
    body: Optional[str]
    repository_api_url: str
    impact: Optional[SizeImpact] = None

    @property
    def is_merged(self) -> bool:
        return self.merged_at is not None


@dataclass(frozen=True, slots=True)
class CommitEvent:
    sha: str
    message: str
    html_url: str
    authored_at: datetime
    repository_url: Optional[str]


@dataclass(frozen=True, slots=True)
class ReconciledActivity:
    pull_requests: Tuple[PullRequestEvent, ...]
    commits: Tuple[CommitEvent, ...]

    @property
    def is_empty(self) -> bool:
        return not self.pull_requests and not self.commits
