"""
Route boundary between the content core and whatever renders the site.

Raw route parameters are validated here before they reach the paginator or
the index; absent resources surface as NotFound.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .documents import Post
from .errors import InvalidPageNumber, NotFound
from .index import PostIndex
from .paginator import PaginatedPosts, paginate, static_page_numbers, index_page_path
from .seo import category_path
from .settings import SiteConfig

ROUTE_INDEX = 'index'
ROUTE_POST = 'post'
ROUTE_CATEGORY = 'category'


@dataclass(frozen=True)
class Route:
    """A concrete path that has to be generated at build time."""
    path: str
    kind: str
    key: Optional[str] = None


def parse_page_number(raw) -> int:
    """Turn a route parameter into a page number (>= 1) or raise InvalidPageNumber."""
    if isinstance(raw, bool):
        raise InvalidPageNumber(raw)
    if isinstance(raw, int):
        page = raw
    elif isinstance(raw, str) and re.fullmatch(r'\s*\d+\s*', raw):
        page = int(raw)
    else:
        raise InvalidPageNumber(raw)
    if page < 1:
        raise InvalidPageNumber(raw)
    return page


def resolve_index_page(index: PostIndex, raw_page, page_size: int) -> PaginatedPosts:
    """Validated page of the post index; NotFound past the last page."""
    page = parse_page_number(raw_page)
    data = paginate(index.sorted_posts(), page, page_size)
    if data.is_out_of_range:
        raise NotFound('page', page)
    return data


def resolve_post(index: PostIndex, slug: str) -> Post:
    return index.get(slug)


def resolve_category(index: PostIndex, category: str) -> Tuple[Post, ...]:
    """Posts in ``category``; NotFound when the corpus has none."""
    if category not in index.categories():
        raise NotFound('category', category)
    return index.by_category(category)


def enumerate_routes(index: PostIndex, config: SiteConfig) -> List[Route]:
    """
    Every path to pre-render, in a stable order: index pages, posts,
    categories. Includes the placeholder index page from
    static_page_numbers even when it has no posts yet.
    """
    total = paginate(index.sorted_posts(), 1, config.posts_per_page).total_page
    routes = [Route(index_page_path(1), ROUTE_INDEX, '1')]
    routes.extend(
        Route(index_page_path(n), ROUTE_INDEX, str(n)) for n in static_page_numbers(total)
    )
    routes.extend(Route(post.permalink, ROUTE_POST, post.slug) for post in index.sorted_posts())
    routes.extend(
        Route(category_path(category), ROUTE_CATEGORY, category) for category in index.categories()
    )

    seen = set()
    unique = []
    for route in routes:
        if route.path not in seen:
            seen.add(route.path)
            unique.append(route)
    return unique
