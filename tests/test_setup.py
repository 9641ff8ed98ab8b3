from dataclasses import replace
from datetime import date, datetime, timedelta, timezone

import pytest

from devbrag.core.exceptions import InputError
from devbrag.core.pipeline import build_timeline, summarize_activity
from devbrag.core.schema import (
    DashboardView,
    DateRange,
    Identity,
    SessionSnapshot,
    SizeImpact,
)
from devbrag.infra.logging.console import ConsoleLogger
from devbrag.setup import _build_logger, _report, _run, _select_repositories
from tests.settings import make_pr, make_repo


class TestSelectRepositories:
    def test_selects_everything_by_default(self) -> None:
        catalog = [make_repo(1, "octo/app"), make_repo(2, "octo/lib")]

        assert _select_repositories(catalog, ()) == {1, 2}

    def test_selects_named_repositories(self) -> None:
        catalog = [make_repo(1, "octo/app"), make_repo(2, "octo/lib")]

        assert _select_repositories(catalog, ("Octo/Lib", "octo/missing")) == {2}


class TestBuildLogger:
    def test_console_backend(self, test_settings) -> None:
        assert isinstance(_build_logger(test_settings), ConsoleLogger)

    def test_logfire_requires_token(self, test_settings) -> None:
        settings = replace(
            test_settings,
            logging=replace(test_settings.logging, backend="logfire"),
        )

        with pytest.raises(ValueError, match="DEVBRAG_LOGFIRE_TOKEN"):
            _build_logger(settings)

    def test_unknown_backend(self, test_settings) -> None:
        settings = replace(
            test_settings,
            logging=replace(test_settings.logging, backend="syslog"),
        )

        with pytest.raises(ValueError):
            _build_logger(settings)


class TestRun:
    async def test_requires_token(self, test_settings, logger) -> None:
        settings = replace(
            test_settings,
            github=replace(test_settings.github, token=None),
        )

        with pytest.raises(InputError, match="GITHUB_TOKEN"):
            await _run(settings, logger)


class TestReport:
    def test_logs_pull_requests_with_badges(self, logger) -> None:
        created = datetime(2024, 1, 5, 10, 0, tzinfo=timezone.utc)
        quick = make_pr(
            1,
            "octo/app",
            created_at=created,
            merged_at=created + timedelta(hours=2),
            impact=SizeImpact(additions=900, deletions=200),
        )
        plain = make_pr(2, "octo/lib")
        date_range = DateRange(start=date(2024, 1, 1), end=date(2024, 1, 31))
        view = DashboardView(
            snapshot=SessionSnapshot(
                identity=Identity(login="octocat", token="token"),
                date_range=date_range,
                selected_repository_ids=frozenset({1, 2}),
            ),
            pull_requests=(quick, plain),
            commits=(),
            timeline=build_timeline([quick, plain], [], date_range),
            stats=summarize_activity([quick, plain], []),
        )

        _report(logger, view)

        rows = [context for _, message, context in logger.records if message == "Pull request"]
        assert rows[0]["repository"] == "app"
        assert rows[0]["badges"] == "quick_merge,high_impact"
        assert rows[1]["repository"] == "lib"
        assert rows[1]["badges"] == ""
        assert logger.messages().count("Timeline bucket") == 31
