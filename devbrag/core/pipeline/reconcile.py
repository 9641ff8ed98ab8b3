from typing import AbstractSet, Iterable, Sequence

from devbrag.core.schema.activity import (
    CommitEvent,
    PullRequestEvent,
    ReconciledActivity,
    RepositoryDescriptor,
)


def reconcile(
    pull_requests: Sequence[PullRequestEvent],
    commits: Sequence[CommitEvent],
    catalog: Iterable[RepositoryDescriptor],
    selected_ids: AbstractSet[int],
) -> ReconciledActivity:
    """Keep only the activity that belongs to the selected repositories.

    Search results name a PR's repository by its API URL, so PRs are
    matched by exact membership. Commit results carry a repository URL
    whose shape varies with the request, so a commit is kept when its own
    html_url starts with a selected repository's html_url.
    """
    selected = [repo for repo in catalog if repo.id in selected_ids]
    api_urls = frozenset(repo.api_url for repo in selected)
    # trailing slash keeps "org/repo" from claiming "org/repo2"
    html_prefixes = tuple(repo.html_url.rstrip("/") + "/" for repo in selected)

    kept_prs = tuple(pr for pr in pull_requests if pr.repository_api_url in api_urls)
    kept_commits = tuple(
        commit for commit in commits if commit.html_url.startswith(html_prefixes)
    )
    return ReconciledActivity(pull_requests=kept_prs, commits=kept_commits)
