import asyncio
from typing import AbstractSet, Sequence

from devbrag.config import Settings, load_settings
from devbrag.core.exceptions import DevbragError, InputError
from devbrag.core.pipeline import PagePolicy, impact_badge, merge_badge, repository_name
from devbrag.core.ports.activity_source import ActivitySource
from devbrag.core.ports.logger import Logger
from devbrag.core.schema import DashboardView, DateRange, RepositoryDescriptor
from devbrag.core.session import DashboardSession
from devbrag.infra import (
    ConsoleLogger,
    GitHubActivitySource,
    GitHubClient,
    LogfireLogger,
    SystemClock,
    configure_logfire,
)


def main() -> None:
    settings = load_settings()
    logger = _build_logger(settings)
    try:
        asyncio.run(_run(settings, logger))
    except DevbragError as error:
        logger.error('Run failed', error=error.message, error_type=type(error).__name__)
        raise SystemExit(1) from error


async def _run(settings: Settings, logger: Logger) -> None:
    if not settings.github.token:
        raise InputError('GITHUB_TOKEN is not set')

    session = DashboardSession(
        source_factory=lambda token: _build_source(settings, logger, token),
        clock=SystemClock(),
        logger=logger,
        monthly_threshold_days=settings.timeline.monthly_threshold_days,
        max_buckets=settings.timeline.max_buckets,
    )
    try:
        await session.connect(settings.github.token)
        date_range = _resolve_date_range(settings, session)
        selected = _select_repositories(session.catalog, settings.report.repositories)
        view = await session.refresh(session.snapshot(date_range, selected))
        if view is not None:
            _report(logger, view)
    finally:
        await session.logout()


def _build_source(settings: Settings, logger: Logger, token: str) -> ActivitySource:
    fetch = settings.fetch
    client = GitHubClient(
        token,
        base_url=settings.github.base_url,
        timeout=settings.github.timeout,
    )
    return GitHubActivitySource(
        client,
        logger,
        search_policy=PagePolicy(
            page_size=fetch.page_size,
            max_pages=fetch.search_max_pages,
        ),
        repository_policy=PagePolicy(
            page_size=fetch.page_size,
            max_pages=fetch.repository_max_pages,
        ),
        enrichment_limit=fetch.enrichment_limit,
    )


def _build_logger(settings: Settings) -> Logger:
    if settings.logging.backend == 'console':
        return ConsoleLogger(settings.logging.name, settings.logging.level)
    if settings.logging.backend == 'logfire':
        if not settings.logging.logfire_token:
            raise ValueError(
                'Logfire backend selected but DEVBRAG_LOGFIRE_TOKEN is not set'
            )
        configure_logfire(settings.logging.logfire_token)
        return LogfireLogger(settings.logging.name)
    raise ValueError(f'Unknown logging backend {settings.logging.backend}')


def _resolve_date_range(settings: Settings, session: DashboardSession) -> DateRange:
    default = session.default_date_range(settings.report.lookback_months)
    return DateRange(
        start=settings.report.start_date or default.start,
        end=settings.report.end_date or default.end,
    )


def _select_repositories(
    catalog: Sequence[RepositoryDescriptor],
    full_names: Sequence[str],
) -> AbstractSet[int]:
    if not full_names:
        return {repo.id for repo in catalog}
    wanted = {name.lower() for name in full_names}
    return {repo.id for repo in catalog if repo.full_name.lower() in wanted}


def _report(logger: Logger, view: DashboardView) -> None:
    stats = view.stats
    logger.info(
        'Activity summary',
        date_range=str(view.snapshot.date_range),
        pull_requests=stats.total_pull_requests,
        merged=stats.merged_pull_requests,
        commits=stats.total_commits,
        repositories=stats.repositories_touched,
    )
    for bucket in view.timeline:
        logger.info(
            'Timeline bucket',
            key=bucket.key,
            label=bucket.label,
            pull_requests=bucket.pr_count,
            commits=bucket.commit_count,
        )
    for pull_request in view.pull_requests:
        badges = [
            badge.value
            for badge in (merge_badge(pull_request), impact_badge(pull_request))
            if badge is not None
        ]
        logger.info(
            'Pull request',
            repository=repository_name(pull_request.repository_api_url),
            number=pull_request.number,
            title=pull_request.title,
            state=pull_request.state,
            badges=','.join(badges),
        )


if __name__ == '__main__':
    main()
