"""
Pagination arithmetic for the post index pages.

Page 1 lives at the site root; pages 2..n live under /page/<n>/.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from .documents import Post
from .errors import InvalidPageNumber


@dataclass(frozen=True)
class PaginatedPosts:
    """One page of the ordered post sequence."""
    posts: Tuple[Post, ...]
    current_page: int
    total_page: int

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_page

    @property
    def previous_page(self) -> Optional[int]:
        return self.current_page - 1 if self.has_previous else None

    @property
    def next_page(self) -> Optional[int]:
        return self.current_page + 1 if self.has_next else None

    @property
    def is_out_of_range(self) -> bool:
        return self.current_page > self.total_page


def total_pages(count: int, page_size: int) -> int:
    """Number of index pages for ``count`` posts; never less than 1."""
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return max(1, math.ceil(count / page_size))


def paginate(ordered_posts: Sequence[Post], page: int, page_size: int) -> PaginatedPosts:
    """
    Slice ``ordered_posts`` into the requested page.

    Pages past the end come back empty with the correct ``total_page``;
    deciding that such a page is "not found" is up to the caller.
    """
    # bool is an int subclass but never a page number
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise InvalidPageNumber(page)
    total = total_pages(len(ordered_posts), page_size)
    start = (page - 1) * page_size
    return PaginatedPosts(
        posts=tuple(ordered_posts[start:start + page_size]),
        current_page=page,
        total_page=total,
    )


def static_page_numbers(total_page: int) -> List[int]:
    """
    Page numbers that need a static /page/<n>/ route.

    Always includes page 2 so the route exists before there is enough
    content to fill it; until then it resolves to not found.
    """
    return list(range(2, max(total_page, 2) + 1))


def index_page_path(page: int) -> str:
    return '/' if page == 1 else f"/page/{page}/"


def pagination_links(current_page: int, total_page: int) -> List[Union[int, str]]:
    """
    Returns a list of page numbers (or ellipses) to display in pagination.
    Always shows page 1 and total_page.
    Shows two pages before and after the current page.
    Inserts '...' when there is a gap.
    """
    delta = 2
    links = [1]

    start = max(current_page - delta, 2)
    end = min(current_page + delta, total_page - 1)

    if start > 2:
        links.append('...')

    links.extend(range(start, end + 1))

    if end < total_page - 1:
        links.append('...')

    if total_page > 1:
        links.append(total_page)

    return links
