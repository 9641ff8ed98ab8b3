from devbrag.core.schema.activity import (
    CommitEvent,
    Identity,
    PullRequestEvent,
    ReconciledActivity,
    RepositoryDescriptor,
    SizeImpact,
    UserProfile,
)
from devbrag.core.schema.report import (
    ActivityStats,
    Badge,
    DashboardView,
    ReportTone,
    SessionSnapshot,
)
from devbrag.core.schema.timeline import (
    DateRange,
    Granularity,
    TimelineBucket,
    shift_months,
)

__all__ = [
    "Identity",
    "UserProfile",
    "RepositoryDescriptor",
    "SizeImpact",
    "PullRequestEvent",
    "CommitEvent",
    "ReconciledActivity",
    "DateRange",
    "Granularity",
    "TimelineBucket",
    "shift_months",
    "ReportTone",
    "Badge",
    "ActivityStats",
    "SessionSnapshot",
    "DashboardView",
]
