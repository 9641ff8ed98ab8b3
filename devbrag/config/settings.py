import os
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class GitHubSettings:
    token: Optional[str]
    base_url: str
    timeout: float


@dataclass(frozen=True, slots=True)
class LoggingSettings:
    backend: str
    name: str
    level: str
    logfire_token: Optional[str]


@dataclass(frozen=True, slots=True)
class FetchSettings:
    page_size: int
    search_max_pages: int
    repository_max_pages: int
    enrichment_limit: int


@dataclass(frozen=True, slots=True)
class TimelineSettings:
    monthly_threshold_days: int
    max_buckets: int


@dataclass(frozen=True, slots=True)
class ReportSettings:
    start_date: Optional[date]
    end_date: Optional[date]
    lookback_months: int
    repositories: Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Settings:
    github: GitHubSettings
    logging: LoggingSettings
    fetch: FetchSettings
    timeline: TimelineSettings
    report: ReportSettings


def load_settings() -> Settings:
    from dotenv import load_dotenv

    load_dotenv()

    return Settings(
        github=GitHubSettings(
            token=_get_env_or_default("GITHUB_TOKEN"),
            base_url=_get_env_or_default(
                "DEVBRAG_GITHUB_BASE_URL", "https://api.github.com"
            ),
            timeout=_env_float("DEVBRAG_GITHUB_TIMEOUT", 30.0),
        ),
        logging=LoggingSettings(
            backend=_get_env_or_default("DEVBRAG_LOGGER_BACKEND", "console").lower(),
            name=_get_env_or_default("DEVBRAG_LOGGER_NAME", "devbrag"),
            level=_get_env_or_default("DEVBRAG_LOGGER_LEVEL", "INFO").upper(),
            logfire_token=_get_env_or_default("DEVBRAG_LOGFIRE_TOKEN"),
        ),
        fetch=FetchSettings(
            page_size=_env_int("DEVBRAG_PAGE_SIZE", 100),
            search_max_pages=_env_int("DEVBRAG_SEARCH_MAX_PAGES", 10),
            repository_max_pages=_env_int("DEVBRAG_REPOSITORY_MAX_PAGES", 3),
            enrichment_limit=_env_int("DEVBRAG_ENRICHMENT_LIMIT", 20),
        ),
        timeline=TimelineSettings(
            monthly_threshold_days=_env_int("DEVBRAG_MONTHLY_THRESHOLD_DAYS", 60),
            max_buckets=_env_int("DEVBRAG_MAX_TIMELINE_BUCKETS", 1000),
        ),
        report=ReportSettings(
            start_date=_env_optional_date("DEVBRAG_START_DATE"),
            end_date=_env_optional_date("DEVBRAG_END_DATE"),
            lookback_months=_env_int("DEVBRAG_LOOKBACK_MONTHS", 6),
            repositories=_env_list("DEVBRAG_REPOSITORIES"),
        ),
    )


def _get_env_or_default(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if not value:
        return default
    return value


def _env_int(name: str, default: int) -> int:
    value = _get_env_or_default(name)
    if value is None:
        return default
    return int(value)


def _env_float(name: str, default: float) -> float:
    value = _get_env_or_default(name)
    if value is None:
        return default
    return float(value)


def _env_optional_date(name: str) -> Optional[date]:
    value = _get_env_or_default(name)
    if value is None:
        return None
    return date.fromisoformat(value)


def _env_list(name: str) -> Tuple[str, ...]:
    value = _get_env_or_default(name, "")
    return tuple(part.strip() for part in value.split(",") if part.strip())
