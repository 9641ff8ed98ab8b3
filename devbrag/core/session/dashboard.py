import asyncio
from typing import AbstractSet, Callable, Optional, Tuple

from devbrag.core.exceptions import DevbragError, InputError, SummarizerError
from devbrag.core.pipeline.insights import summarize_activity
from devbrag.core.pipeline.reconcile import reconcile
from devbrag.core.pipeline.timeline import (
    MAX_TIMELINE_BUCKETS,
    MONTHLY_THRESHOLD_DAYS,
    build_timeline,
)
from devbrag.core.ports.activity_source import ActivitySource
from devbrag.core.ports.clock import Clock
from devbrag.core.ports.logger import Logger
from devbrag.core.ports.summarizer import Summarizer
from devbrag.core.schema.activity import Identity, RepositoryDescriptor
from devbrag.core.schema.report import DashboardView, ReportTone, SessionSnapshot
from devbrag.core.schema.timeline import DateRange

DEFAULT_LOOKBACK_MONTHS = 6

SourceFactory = Callable[[str], ActivitySource]


class DashboardSession:
    """One authenticated analysis session.

    Every refresh is a fetch cycle tagged with a generation number. A cycle
    that completes after a newer one has started, or after logout, is
    dropped instead of replacing the current view.
    """

    def __init__(
        self,
        source_factory: SourceFactory,
        clock: Clock,
        logger: Logger,
        summarizer: Summarizer | None = None,
        *,
        monthly_threshold_days: int = MONTHLY_THRESHOLD_DAYS,
        max_buckets: int = MAX_TIMELINE_BUCKETS,
    ) -> None:
        self._source_factory = source_factory
        self._summarizer = summarizer
        self._clock = clock
        self._logger = logger
        self._monthly_threshold_days = monthly_threshold_days
        self._max_buckets = max_buckets
        self._source: ActivitySource | None = None
        self._identity: Identity | None = None
        self._catalog: Tuple[RepositoryDescriptor, ...] = ()
        self._view: DashboardView | None = None
        self._generation = 0

    @property
    def identity(self) -> Identity | None:
        return self._identity

    @property
    def catalog(self) -> Tuple[RepositoryDescriptor, ...]:
        return self._catalog

    @property
    def view(self) -> DashboardView | None:
        return self._view

    async def connect(self, token: str) -> Optional[Identity]:
        """Replace the session with one bound to ``token``.

        Returns ``None`` when a later connect or a logout finished first; the
        source built here is closed and the newer state is left alone.
        """
        if not token or not token.strip():
            raise InputError("GitHub token is required")
        await self.logout()
        generation = self._generation

        source = self._source_factory(token)
        try:
            profile = await source.fetch_profile()
            catalog = await source.load_repositories()
        except BaseException:
            await source.close()
            raise

        if self._is_superseded(generation):
            await source.close()
            self._logger.info(
                "Discarded superseded connect",
                login=profile.login,
                generation=generation,
                current=self._generation,
            )
            return None

        self._source = source
        self._identity = Identity(
            login=profile.login,
            token=token,
            display_name=profile.name,
        )
        self._catalog = catalog
        self._logger.info(
            "Session connected",
            login=profile.login,
            repositories=len(catalog),
        )
        return self._identity

    def default_date_range(self, months: int = DEFAULT_LOOKBACK_MONTHS) -> DateRange:
        return DateRange.last_months(self._clock.today(), months)

    def snapshot(
        self, date_range: DateRange, selected_ids: AbstractSet[int]
    ) -> SessionSnapshot:
        if self._identity is None:
            raise InputError("Session is not connected")
        return SessionSnapshot(
            identity=self._identity,
            date_range=date_range,
            selected_repository_ids=frozenset(selected_ids),
        )

    async def refresh(
        self,
        snapshot: SessionSnapshot,
        *,
        reload_catalog: bool = False,
    ) -> Optional[DashboardView]:
        source = self._require_source()
        self._generation += 1
        generation = self._generation
        login = snapshot.identity.login
        date_range = snapshot.date_range
        self._logger.info(
            "Fetch cycle started",
            generation=generation,
            login=login,
            date_range=str(date_range),
            selected=len(snapshot.selected_repository_ids),
        )

        try:
            if reload_catalog:
                catalog, pull_requests, commits = await asyncio.gather(
                    source.load_repositories(),
                    source.fetch_pull_requests(login, date_range),
                    source.fetch_commits(login, date_range),
                )
            else:
                catalog = self._catalog
                pull_requests, commits = await asyncio.gather(
                    source.fetch_pull_requests(login, date_range),
                    source.fetch_commits(login, date_range),
                )
        except DevbragError as error:
            if self._is_superseded(generation):
                self._logger.info(
                    "Discarded failed superseded cycle",
                    generation=generation,
                    error=str(error),
                )
                return None
            self._logger.error(
                "Fetch cycle failed",
                generation=generation,
                error=str(error),
                error_type=type(error).__name__,
            )
            raise

        if self._is_superseded(generation):
            self._logger.info(
                "Discarded superseded cycle",
                generation=generation,
                current=self._generation,
            )
            return None

        activity = reconcile(
            pull_requests,
            commits,
            catalog,
            snapshot.selected_repository_ids,
        )
        timeline = build_timeline(
            activity.pull_requests,
            activity.commits,
            date_range,
            monthly_threshold_days=self._monthly_threshold_days,
            max_buckets=self._max_buckets,
        )
        view = DashboardView(
            snapshot=snapshot,
            pull_requests=activity.pull_requests,
            commits=activity.commits,
            timeline=timeline,
            stats=summarize_activity(activity.pull_requests, activity.commits),
        )
        self._catalog = catalog
        self._view = view
        self._logger.info(
            "Fetch cycle complete",
            generation=generation,
            pull_requests=len(view.pull_requests),
            commits=len(view.commits),
            buckets=len(view.timeline),
        )
        return view

    async def write_review(
        self,
        tone: ReportTone = ReportTone.PROFESSIONAL,
        focus: Optional[str] = None,
    ) -> str:
        view = self._view
        if view is None or not view.has_data:
            raise InputError("No activity to review")
        if self._summarizer is None:
            raise SummarizerError("No summarizer configured")
        try:
            return await self._summarizer.summarize(
                view.snapshot.identity.login,
                view.pull_requests,
                view.commits,
                tone,
                focus or None,
            )
        except Exception as error:
            self._logger.exception("Review generation failed", error=str(error))
            raise SummarizerError("Failed to generate report") from error

    async def logout(self) -> None:
        self._generation += 1
        source = self._source
        self._source = None
        self._identity = None
        self._catalog = ()
        self._view = None
        if source is not None:
            await source.close()
            self._logger.info("Session closed")

    def _is_superseded(self, generation: int) -> bool:
        return generation != self._generation

    def _require_source(self) -> ActivitySource:
        if self._source is None:
            raise InputError("Session is not connected")
        return self._source
