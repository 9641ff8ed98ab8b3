import asyncio
from dataclasses import replace
from typing import Awaitable, Callable, Sequence, Tuple

from devbrag.core.exceptions import SourceError
from devbrag.core.ports.logger import Logger
from devbrag.core.schema.activity import PullRequestEvent, SizeImpact

DEFAULT_ENRICHMENT_LIMIT = 20

ImpactFetcher = Callable[[PullRequestEvent], Awaitable[SizeImpact]]


class DetailEnricher:
    """Adds size impact to the most recent pull requests.

    Only the first ``limit`` items are enriched, one detail request each,
    all in flight together. A failed request leaves that item as it was.
    """

    def __init__(
        self,
        fetch_impact: ImpactFetcher,
        logger: Logger,
        *,
        limit: int = DEFAULT_ENRICHMENT_LIMIT,
    ) -> None:
        self._fetch_impact = fetch_impact
        self._logger = logger
        self._limit = max(limit, 0)

    async def enrich(
        self, pull_requests: Sequence[PullRequestEvent]
    ) -> Tuple[PullRequestEvent, ...]:
        head = pull_requests[: self._limit]
        rest = pull_requests[self._limit :]
        enriched = await asyncio.gather(*(self._enrich_one(pr) for pr in head))
        degraded = sum(1 for pr in enriched if pr.impact is None)
        self._logger.info(
            "Enriched pull requests",
            requested=len(head),
            degraded=degraded,
            untouched=len(rest),
        )
        return (*enriched, *rest)

    async def _enrich_one(self, pull_request: PullRequestEvent) -> PullRequestEvent:
        try:
            impact = await self._fetch_impact(pull_request)
        except SourceError as error:
            self._logger.debug(
                "Pull request detail unavailable",
                pr_url=pull_request.html_url,
                error=str(error),
            )
            return pull_request
        return replace(pull_request, impact=impact)
