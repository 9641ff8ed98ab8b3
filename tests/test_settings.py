from datetime import date

import pytest

from devbrag.config import load_settings

_ENV_NAMES = (
    "GITHUB_TOKEN",
    "DEVBRAG_GITHUB_BASE_URL",
    "DEVBRAG_GITHUB_TIMEOUT",
    "DEVBRAG_LOGGER_BACKEND",
    "DEVBRAG_LOGGER_NAME",
    "DEVBRAG_LOGGER_LEVEL",
    "DEVBRAG_LOGFIRE_TOKEN",
    "DEVBRAG_PAGE_SIZE",
    "DEVBRAG_SEARCH_MAX_PAGES",
    "DEVBRAG_REPOSITORY_MAX_PAGES",
    "DEVBRAG_ENRICHMENT_LIMIT",
    "DEVBRAG_MONTHLY_THRESHOLD_DAYS",
    "DEVBRAG_MAX_TIMELINE_BUCKETS",
    "DEVBRAG_START_DATE",
    "DEVBRAG_END_DATE",
    "DEVBRAG_LOOKBACK_MONTHS",
    "DEVBRAG_REPOSITORIES",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestLoadSettings:
    def test_defaults(self, clean_env) -> None:
        settings = load_settings()

        assert settings.github.token is None
        assert settings.github.base_url == "https://api.github.com"
        assert settings.github.timeout == 30.0
        assert settings.logging.backend == "console"
        assert settings.logging.name == "devbrag"
        assert settings.logging.level == "INFO"
        assert settings.fetch.page_size == 100
        assert settings.fetch.search_max_pages == 10
        assert settings.fetch.repository_max_pages == 3
        assert settings.fetch.enrichment_limit == 20
        assert settings.timeline.monthly_threshold_days == 60
        assert settings.timeline.max_buckets == 1000
        assert settings.report.start_date is None
        assert settings.report.end_date is None
        assert settings.report.lookback_months == 6
        assert settings.report.repositories == ()

    def test_reads_environment(self, clean_env) -> None:
        clean_env.setenv("GITHUB_TOKEN", "ghp_test")
        clean_env.setenv("DEVBRAG_LOGGER_BACKEND", "Logfire")
        clean_env.setenv("DEVBRAG_LOGGER_LEVEL", "debug")
        clean_env.setenv("DEVBRAG_SEARCH_MAX_PAGES", "4")
        clean_env.setenv("DEVBRAG_START_DATE", "2024-01-01")
        clean_env.setenv("DEVBRAG_END_DATE", "2024-03-31")
        clean_env.setenv("DEVBRAG_REPOSITORIES", "octo/app, octo/lib,,")

        settings = load_settings()

        assert settings.github.token == "ghp_test"
        assert settings.logging.backend == "logfire"
        assert settings.logging.level == "DEBUG"
        assert settings.fetch.search_max_pages == 4
        assert settings.report.start_date == date(2024, 1, 1)
        assert settings.report.end_date == date(2024, 3, 31)
        assert settings.report.repositories == ("octo/app", "octo/lib")

    def test_empty_values_fall_back_to_defaults(self, clean_env) -> None:
        clean_env.setenv("DEVBRAG_PAGE_SIZE", "")

        assert load_settings().fetch.page_size == 100

    def test_invalid_number_raises(self, clean_env) -> None:
        clean_env.setenv("DEVBRAG_MAX_TIMELINE_BUCKETS", "lots")

        with pytest.raises(ValueError):
            load_settings()
