from devbrag.config.settings import (
    FetchSettings,
    GitHubSettings,
    LoggingSettings,
    ReportSettings,
    Settings,
    TimelineSettings,
    load_settings,
)

__all__ = [
    'Settings',
    'GitHubSettings',
    'LoggingSettings',
    'FetchSettings',
    'TimelineSettings',
    'ReportSettings',
    'load_settings',
]
