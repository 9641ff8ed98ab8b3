from datetime import datetime, timedelta, timezone
from http import HTTPStatus
from typing import Any, Dict, List, Mapping, Optional, Tuple

from github import GithubException
from requests import RequestException

from devbrag.core.exceptions import (
    EnrichmentError,
    InputError,
    SourceAuthenticationError,
    SourceError,
    SourceNotFoundError,
    SourceRateLimitError,
    SourceValidationError,
)
from devbrag.core.pipeline.enrichment import DEFAULT_ENRICHMENT_LIMIT, DetailEnricher
from devbrag.core.pipeline.pager import REPOSITORY_MAX_PAGES, PagePolicy, collect_pages
from devbrag.core.ports.activity_source import ActivitySource
from devbrag.core.ports.logger import Logger
from devbrag.core.schema.activity import (
    CommitEvent,
    PullRequestEvent,
    RepositoryDescriptor,
    SizeImpact,
    UserProfile,
)
from devbrag.core.schema.timeline import DateRange
from devbrag.infra.github.client import GitHubClient

USER_PATH = "/user"
USER_REPOS_PATH = "/user/repos"
SEARCH_ISSUES_PATH = "/search/issues"
SEARCH_COMMITS_PATH = "/search/commits"

RATE_LIMIT_MESSAGE = "GitHub API rate limit exceeded. Please try again later."
VALIDATION_MESSAGE = "Validation failed. Try a shorter date range."
AUTH_MESSAGE = "Invalid GitHub token."


def pull_request_query(login: str, date_range: DateRange) -> str:
    return (
        f"author:{login} type:pr "
        f"created:{date_range.start.isoformat()}..{date_range.end.isoformat()}"
    )


def commit_query(login: str, date_range: DateRange) -> str:
    return (
        f"author:{login} "
        f"committer-date:{date_range.start.isoformat()}..{date_range.end.isoformat()}"
    )


class GitHubActivitySource(ActivitySource):
    def __init__(
        self,
        client: GitHubClient,
        logger: Logger,
        *,
        search_policy: PagePolicy = PagePolicy(),
        repository_policy: PagePolicy = PagePolicy(max_pages=REPOSITORY_MAX_PAGES),
        enrichment_limit: int = DEFAULT_ENRICHMENT_LIMIT,
    ) -> None:
        self._client = client
        self._logger = logger
        self._search_policy = search_policy
        self._repository_policy = repository_policy
        self._enricher = DetailEnricher(
            self.fetch_size_impact,
            logger,
            limit=enrichment_limit,
        )

    async def fetch_profile(self) -> UserProfile:
        data = await self._get("Failed to fetch authenticated user", USER_PATH)
        return UserProfile(
            login=data["login"],
            name=data.get("name"),
            avatar_url=data.get("avatar_url"),
        )

    async def load_repositories(self) -> Tuple[RepositoryDescriptor, ...]:
        policy = self._repository_policy

        async def fetch_page(page: int) -> List[Dict[str, Any]]:
            data = await self._get(
                "Failed to fetch repositories",
                USER_REPOS_PATH,
                {
                    "sort": "pushed",
                    "type": "all",
                    "per_page": policy.page_size,
                    "page": page,
                },
            )
            return list(data or [])

        items = await collect_pages(
            fetch_page, policy, logger=self._logger, resource="repositories"
        )
        repositories = tuple(self._to_repository(item) for item in items)
        self._logger.info("Loaded repositories", count=len(repositories))
        return repositories

    async def fetch_pull_requests(
        self, login: str, date_range: DateRange
    ) -> Tuple[PullRequestEvent, ...]:
        self._require_login(login)
        items = await self._search(
            "Failed to fetch pull requests",
            SEARCH_ISSUES_PATH,
            pull_request_query(login, date_range),
            sort="created",
        )
        basic = tuple(self._to_pull_request(item) for item in items)
        self._logger.info(
            "Fetched pull requests",
            login=login,
            date_range=str(date_range),
            count=len(basic),
        )
        return await self._enricher.enrich(basic)

    async def fetch_commits(
        self, login: str, date_range: DateRange
    ) -> Tuple[CommitEvent, ...]:
        self._require_login(login)
        items = await self._search(
            "Failed to fetch commits",
            SEARCH_COMMITS_PATH,
            commit_query(login, date_range),
            sort="committer-date",
        )
        commits = tuple(self._to_commit(item) for item in items)
        self._logger.info(
            "Fetched commits",
            login=login,
            date_range=str(date_range),
            count=len(commits),
        )
        return commits

    async def fetch_size_impact(self, pull_request: PullRequestEvent) -> SizeImpact:
        try:
            data = await self._client.get_json(pull_request.detail_url)
        except (GithubException, RequestException) as error:
            raise EnrichmentError(
                "Failed to fetch pull request details",
                pull_request.detail_url,
            ) from error
        additions = data.get("additions") if isinstance(data, Mapping) else None
        deletions = data.get("deletions") if isinstance(data, Mapping) else None
        if additions is None or deletions is None:
            raise EnrichmentError(
                "Pull request details carry no size impact",
                pull_request.detail_url,
            )
        return SizeImpact(additions=int(additions), deletions=int(deletions))

    async def close(self) -> None:
        await self._client.close()

    async def _search(
        self,
        message: str,
        path: str,
        query: str,
        *,
        sort: str,
    ) -> List[Dict[str, Any]]:
        policy = self._search_policy

        async def fetch_page(page: int) -> List[Dict[str, Any]]:
            data = await self._get(
                message,
                path,
                {
                    "q": query,
                    "sort": sort,
                    "order": "desc",
                    "per_page": policy.page_size,
                    "page": page,
                },
            )
            return list((data or {}).get("items") or [])

        return await collect_pages(fetch_page, policy, logger=self._logger, resource=path)

    async def _get(
        self,
        message: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        try:
            return await self._client.get_json(path, params)
        except GithubException as error:
            self._translate_exception(message, error, resource=path)
        except RequestException as error:
            raise SourceError(f"{message}: {error}") from error

    def _require_login(self, login: str) -> None:
        if not login or not login.strip():
            raise InputError("Username is required")

    def _to_repository(self, item: Mapping[str, Any]) -> RepositoryDescriptor:
        return RepositoryDescriptor(
            id=item["id"],
            name=item["name"],
            full_name=item["full_name"],
            private=bool(item.get("private", False)),
            html_url=item["html_url"],
            api_url=item["url"],
            description=item.get("description"),
            language=item.get("language"),
            pushed_at=_parse_optional(item.get("pushed_at") or item.get("updated_at")),
        )

    def _to_pull_request(self, item: Mapping[str, Any]) -> PullRequestEvent:
        pull_request = item.get("pull_request") or {}
        return PullRequestEvent(
            id=item["id"],
            number=item["number"],
            title=item.get("title") or "",
            html_url=item["html_url"],
            api_url=item["url"],
            detail_url=pull_request.get("url") or item["url"],
            state=item.get("state") or "open",
            created_at=_parse_timestamp(item["created_at"]),
            merged_at=_parse_optional(pull_request.get("merged_at")),
            body=item.get("body"),
            repository_api_url=item.get("repository_url") or "",
        )

    def _to_commit(self, item: Mapping[str, Any]) -> CommitEvent:
        commit = item.get("commit") or {}
        author = commit.get("author") or {}
        repository = item.get("repository") or {}
        message = commit.get("message") or ""
        lines = message.splitlines()
        return CommitEvent(
            sha=item["sha"],
            message=lines[0] if lines else "",
            html_url=item["html_url"],
            authored_at=_parse_timestamp(author["date"]),
            repository_url=repository.get("html_url"),
        )

    def _translate_exception(
        self,
        message: str,
        error: GithubException,
        resource: str | None = None,
    ) -> None:
        status = getattr(error, "status", None)
        headers = getattr(error, "headers", {}) or {}
        if status == 401:
            raise SourceAuthenticationError(AUTH_MESSAGE, status=status) from error
        if status == 403:
            raise SourceRateLimitError(
                RATE_LIMIT_MESSAGE,
                self._retry_after_from_headers(headers),
            ) from error
        if status == 404:
            raise SourceNotFoundError(message, resource or "resource") from error
        if status == 422:
            raise SourceValidationError(VALIDATION_MESSAGE, status=status) from error
        raise SourceError(
            f"GitHub API error: {_status_text(status)}",
            status=status,
        ) from error

    def _retry_after_from_headers(self, headers) -> datetime | None:  # noqa: ANN001
        retry_after = headers.get("retry-after") or headers.get("Retry-After")
        if retry_after is not None:
            try:
                return datetime.now(timezone.utc) + timedelta(seconds=float(retry_after))
            except (TypeError, ValueError):
                return None
        reset = headers.get("x-ratelimit-reset") or headers.get("X-RateLimit-Reset")
        if reset is None:
            return None
        try:
            return datetime.fromtimestamp(float(reset), tz=timezone.utc)
        except (TypeError, ValueError):
            return None


def _status_text(status: Optional[int]) -> str:
    if status is None:
        return "unknown status"
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return str(status)


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_optional(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return _parse_timestamp(value)
