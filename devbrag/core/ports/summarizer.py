from typing import Optional, Protocol, Sequence, runtime_checkable

from devbrag.core.schema.activity import CommitEvent, PullRequestEvent
from devbrag.core.schema.report import ReportTone


@runtime_checkable
class Summarizer(Protocol):
    async def summarize(
        self,
        login: str,
        pull_requests: Sequence[PullRequestEvent],
        commits: Sequence[CommitEvent],
        tone: ReportTone,
        focus: Optional[str] = None,
    ) -> str:
        ...
