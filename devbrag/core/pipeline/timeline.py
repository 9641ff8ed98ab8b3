from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, Iterable, List, Sequence, Tuple

from devbrag.core.schema.activity import CommitEvent, PullRequestEvent
from devbrag.core.schema.timeline import (
    DateRange,
    Granularity,
    TimelineBucket,
    shift_months,
)

MONTHLY_THRESHOLD_DAYS = 60
MAX_TIMELINE_BUCKETS = 1000


def choose_granularity(
    date_range: DateRange,
    monthly_threshold_days: int = MONTHLY_THRESHOLD_DAYS,
) -> Granularity:
    if date_range.span_days > monthly_threshold_days:
        return Granularity.MONTHLY
    return Granularity.DAILY


def build_timeline(
    pull_requests: Sequence[PullRequestEvent],
    commits: Sequence[CommitEvent],
    date_range: DateRange,
    *,
    monthly_threshold_days: int = MONTHLY_THRESHOLD_DAYS,
    max_buckets: int = MAX_TIMELINE_BUCKETS,
) -> Tuple[TimelineBucket, ...]:
    """Count PRs and commits per day or per month across ``date_range``.

    Every step of the range gets a bucket, empty or not. PRs count by
    creation time and commits by authored time, both taken in UTC; an
    event whose slot is outside the generated grid is not counted.
    """
    granularity = choose_granularity(date_range, monthly_threshold_days)
    slots = _grid(date_range, granularity, max_buckets)

    keys = [_key(slot, granularity) for slot in slots]

    pr_counts: Dict[str, int] = dict.fromkeys(keys, 0)
    commit_counts: Dict[str, int] = dict.fromkeys(keys, 0)
    _tally(pr_counts, (pr.created_at for pr in pull_requests), granularity)
    _tally(commit_counts, (commit.authored_at for commit in commits), granularity)

    buckets = [
        TimelineBucket(
            key=key,
            label=_label(slot, granularity),
            pr_count=pr_counts[key],
            commit_count=commit_counts[key],
            timestamp=_timestamp(slot),
        )
        for slot, key in zip(slots, keys)
    ]
    buckets.sort(key=lambda bucket: bucket.timestamp)
    return tuple(buckets)


def _grid(date_range: DateRange, granularity: Granularity, max_buckets: int) -> List[date]:
    if granularity is Granularity.MONTHLY:
        current = date_range.start.replace(day=1)
        last = date_range.end.replace(day=1)
    else:
        current = date_range.start
        last = date_range.end

    slots: List[date] = []
    while current <= last and len(slots) < max_buckets:
        slots.append(current)
        if granularity is Granularity.MONTHLY:
            current = shift_months(current, 1)
        else:
            current += timedelta(days=1)
    return slots


def _tally(
    counts: Dict[str, int],
    timestamps: Iterable[datetime],
    granularity: Granularity,
) -> None:
    for moment in timestamps:
        key = _key(_utc_day(moment), granularity)
        if key in counts:
            counts[key] += 1


def _utc_day(moment: datetime) -> date:
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(timezone.utc).date()


def _key(day: date, granularity: Granularity) -> str:
    if granularity is Granularity.MONTHLY:
        return f"{day.year:04d}-{day.month:02d}"
    return day.isoformat()


def _label(day: date, granularity: Granularity) -> str:
    if granularity is Granularity.MONTHLY:
        return day.strftime("%b %y")
    return f"{day:%b} {day.day}"


def _timestamp(day: date) -> int:
    return int(datetime.combine(day, time.min, tzinfo=timezone.utc).timestamp())
