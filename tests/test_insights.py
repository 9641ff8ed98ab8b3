from datetime import datetime, timedelta, timezone

import pytest

from devbrag.core.pipeline.insights import (
    filter_repositories,
    impact_badge,
    merge_badge,
    repository_name,
    summarize_activity,
    toggle_repository,
    toggle_visible,
)
from devbrag.core.schema.activity import SizeImpact
from devbrag.core.schema.report import Badge
from tests.settings import make_commit, make_pr, make_repo

CREATED = datetime(2024, 1, 5, 10, 0, tzinfo=timezone.utc)


class TestSummarizeActivity:
    def test_counts(self) -> None:
        prs = [
            make_pr(1, "octo/app", merged_at=CREATED + timedelta(hours=1)),
            make_pr(2, "octo/app"),
            make_pr(3, "octo/lib", merged_at=CREATED + timedelta(days=3)),
        ]
        commits = [
            make_commit("a1", "octo/app"),
            make_commit("b2", "octo/tools"),
            make_commit("c3", "octo/tools", repository_url=None),
        ]

        stats = summarize_activity(prs, commits)

        assert stats.total_pull_requests == 3
        assert stats.merged_pull_requests == 2
        assert stats.total_commits == 3
        assert stats.repositories_touched == 3

    def test_empty(self) -> None:
        stats = summarize_activity([], [])

        assert stats.total_pull_requests == 0
        assert stats.repositories_touched == 0


class TestRepositoryName:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://api.github.com/repos/octo/app", "app"),
            ("https://github.com/octo/app/", "app"),
            (None, "unknown-repo"),
            ("", "unknown-repo"),
        ],
    )
    def test_last_path_segment(self, url, expected) -> None:
        assert repository_name(url) == expected


class TestBadges:
    def test_quick_merge_under_a_day(self) -> None:
        pr = make_pr(1, created_at=CREATED, merged_at=CREATED + timedelta(hours=23))

        assert merge_badge(pr) is Badge.QUICK_MERGE

    def test_slow_merge_has_no_badge(self) -> None:
        pr = make_pr(1, created_at=CREATED, merged_at=CREATED + timedelta(hours=24))

        assert merge_badge(pr) is None

    def test_unmerged_has_no_badge(self) -> None:
        assert merge_badge(make_pr(1)) is None

    @pytest.mark.parametrize(
        ("additions", "deletions", "expected"),
        [
            (900, 101, Badge.HIGH_IMPACT),
            (500, 500, Badge.SIGNIFICANT),
            (200, 101, Badge.SIGNIFICANT),
            (200, 100, None),
        ],
    )
    def test_impact_thresholds(self, additions, deletions, expected) -> None:
        pr = make_pr(1, impact=SizeImpact(additions=additions, deletions=deletions))

        assert impact_badge(pr) is expected

    def test_unenriched_has_no_impact_badge(self) -> None:
        assert impact_badge(make_pr(1)) is None


class TestRepositorySelection:
    def test_filter_is_case_insensitive_substring(self) -> None:
        catalog = [make_repo(1, "Octo/WebApp"), make_repo(2, "octo/lib")]

        assert [repo.id for repo in filter_repositories(catalog, " webapp ")] == [1]
        assert len(filter_repositories(catalog, "")) == 2

    def test_toggle_repository(self) -> None:
        assert toggle_repository({1, 2}, 2) == frozenset({1})
        assert toggle_repository({1}, 2) == frozenset({1, 2})

    def test_toggle_visible_selects_missing(self) -> None:
        visible = [make_repo(1, "octo/a"), make_repo(2, "octo/b")]

        assert toggle_visible({1, 9}, visible) == frozenset({1, 2, 9})

    def test_toggle_visible_clears_when_all_selected(self) -> None:
        visible = [make_repo(1, "octo/a"), make_repo(2, "octo/b")]

        assert toggle_visible({1, 2, 9}, visible) == frozenset({9})

    def test_toggle_visible_with_nothing_visible(self) -> None:
        assert toggle_visible({3}, []) == frozenset({3})
