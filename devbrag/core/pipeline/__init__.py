from devbrag.core.pipeline.enrichment import DEFAULT_ENRICHMENT_LIMIT, DetailEnricher
from devbrag.core.pipeline.insights import (
    impact_badge,
    merge_badge,
    repository_name,
    summarize_activity,
)
from devbrag.core.pipeline.pager import (
    DEFAULT_PAGE_SIZE,
    REPOSITORY_MAX_PAGES,
    SEARCH_MAX_PAGES,
    PagePolicy,
    collect_pages,
)
from devbrag.core.pipeline.reconcile import reconcile
from devbrag.core.pipeline.timeline import (
    MAX_TIMELINE_BUCKETS,
    MONTHLY_THRESHOLD_DAYS,
    build_timeline,
    choose_granularity,
)

__all__ = [
    "PagePolicy",
    "collect_pages",
    "DEFAULT_PAGE_SIZE",
    "SEARCH_MAX_PAGES",
    "REPOSITORY_MAX_PAGES",
    "DetailEnricher",
    "DEFAULT_ENRICHMENT_LIMIT",
    "reconcile",
    "build_timeline",
    "choose_granularity",
    "MONTHLY_THRESHOLD_DAYS",
    "MAX_TIMELINE_BUCKETS",
    "summarize_activity",
    "repository_name",
    "merge_badge",
    "impact_badge",
]
