from typing import Protocol, Tuple, runtime_checkable

from devbrag.core.schema.activity import (
    CommitEvent,
    PullRequestEvent,
    RepositoryDescriptor,
    SizeImpact,
    UserProfile,
)
from devbrag.core.schema.timeline import DateRange


@runtime_checkable
class ActivitySource(Protocol):
    """Read access to one identity's repositories and authored activity.

    A source is bound to a single credential for its whole lifetime.
    """

    async def fetch_profile(self) -> UserProfile:
        ...

    async def load_repositories(self) -> Tuple[RepositoryDescriptor, ...]:
        ...

    async def fetch_pull_requests(
        self, login: str, date_range: DateRange
    ) -> Tuple[PullRequestEvent, ...]:
        ...

    async def fetch_commits(
        self, login: str, date_range: DateRange
    ) -> Tuple[CommitEvent, ...]:
        ...

    async def fetch_size_impact(self, pull_request: PullRequestEvent) -> SizeImpact:
        ...

    async def close(self) -> None:
        ...
