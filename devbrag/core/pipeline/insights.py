from datetime import timedelta
from typing import AbstractSet, FrozenSet, Iterable, Optional, Sequence, Tuple
from urllib.parse import urlparse

from devbrag.core.schema.activity import (
    CommitEvent,
    PullRequestEvent,
    RepositoryDescriptor,
)
from devbrag.core.schema.report import ActivityStats, Badge

QUICK_MERGE_WINDOW = timedelta(hours=24)
HIGH_IMPACT_LINES = 1000
SIGNIFICANT_LINES = 300
UNKNOWN_REPOSITORY = "unknown-repo"


def summarize_activity(
    pull_requests: Sequence[PullRequestEvent],
    commits: Sequence[CommitEvent],
) -> ActivityStats:
    slugs = {_slug_from_path(pr.repository_api_url) for pr in pull_requests}
    slugs.update(_commit_slug(commit) for commit in commits)
    slugs.discard(None)
    return ActivityStats(
        total_pull_requests=len(pull_requests),
        merged_pull_requests=sum(1 for pr in pull_requests if pr.is_merged),
        total_commits=len(commits),
        repositories_touched=len(slugs),
    )


def repository_name(url: Optional[str]) -> str:
    if not url:
        return UNKNOWN_REPOSITORY
    name = url.rstrip("/").rsplit("/", 1)[-1]
    return name or UNKNOWN_REPOSITORY


def merge_badge(pull_request: PullRequestEvent) -> Optional[Badge]:
    if pull_request.merged_at is None:
        return None
    if pull_request.merged_at - pull_request.created_at < QUICK_MERGE_WINDOW:
        return Badge.QUICK_MERGE
    return None


def impact_badge(pull_request: PullRequestEvent) -> Optional[Badge]:
    if pull_request.impact is None:
        return None
    total = pull_request.impact.total
    if total > HIGH_IMPACT_LINES:
        return Badge.HIGH_IMPACT
    if total > SIGNIFICANT_LINES:
        return Badge.SIGNIFICANT
    return None


def filter_repositories(
    catalog: Iterable[RepositoryDescriptor], query: str
) -> Tuple[RepositoryDescriptor, ...]:
    needle = query.strip().lower()
    return tuple(repo for repo in catalog if needle in repo.full_name.lower())


def toggle_repository(selected: AbstractSet[int], repo_id: int) -> FrozenSet[int]:
    if repo_id in selected:
        return frozenset(selected - {repo_id})
    return frozenset(selected | {repo_id})


def toggle_visible(
    selected: AbstractSet[int], visible: Iterable[RepositoryDescriptor]
) -> FrozenSet[int]:
    """Select every visible repository, or clear them if all are already selected."""
    visible_ids = {repo.id for repo in visible}
    if visible_ids and visible_ids <= selected:
        return frozenset(selected - visible_ids)
    return frozenset(selected | visible_ids)


def _commit_slug(commit: CommitEvent) -> Optional[str]:
    if commit.repository_url:
        return _slug_from_path(commit.repository_url)
    path = urlparse(commit.html_url).path
    return _slug_from_path(path.split("/commit/", 1)[0])


def _slug_from_path(url: str) -> Optional[str]:
    parts = [part for part in urlparse(url).path.split("/") if part]
    if len(parts) < 2:
        return None
    return "/".join(parts[-2:]).lower()
