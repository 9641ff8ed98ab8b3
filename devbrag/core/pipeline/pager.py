from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Sequence, TypeVar

from devbrag.core.ports.logger import Logger

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 100
SEARCH_MAX_PAGES = 10
REPOSITORY_MAX_PAGES = 3

PageFetcher = Callable[[int], Awaitable[Sequence[T]]]


@dataclass(frozen=True, slots=True)
class PagePolicy:
    page_size: int = DEFAULT_PAGE_SIZE
    max_pages: int = SEARCH_MAX_PAGES


async def collect_pages(
    fetch_page: PageFetcher[T],
    policy: PagePolicy,
    *,
    logger: Optional[Logger] = None,
    resource: str = "",
) -> List[T]:
    """Fetch pages 1..max_pages in order and concatenate their items.

    Stops at the first empty page or the first page shorter than
    ``policy.page_size``. Pages are requested one at a time; any error
    raised by ``fetch_page`` propagates and discards what was collected.
    """
    items: List[T] = []
    pages_fetched = 0
    for page in range(1, policy.max_pages + 1):
        batch = await fetch_page(page)
        pages_fetched += 1
        if not batch:
            break
        items.extend(batch)
        if len(batch) < policy.page_size:
            break
    if logger is not None:
        logger.debug(
            "Collected pages",
            resource=resource,
            pages=pages_fetched,
            items=len(items),
            ceiling=policy.max_pages,
        )
    return items
