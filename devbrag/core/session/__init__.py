from devbrag.core.session.dashboard import (
    DEFAULT_LOOKBACK_MONTHS,
    DashboardSession,
    SourceFactory,
)

__all__ = [
    'DashboardSession',
    'SourceFactory',
    'DEFAULT_LOOKBACK_MONTHS',
]
