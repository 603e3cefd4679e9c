"""
Post index: owns the loaded posts and answers ordering and lookup queries.
"""

from collections import Counter
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Tuple

from .documents import Post
from .errors import DuplicateSlug, NotFound


def sort_key(post: Post):
    """Date descending, then slug ascending."""
    return (-post.date.toordinal(), post.slug)


class PostIndex:
    """
    Immutable collection of posts built once per build.

    Raises DuplicateSlug when two posts share a slug; nothing is
    overwritten.
    """

    def __init__(self, posts: Iterable[Post]):
        by_slug = {}
        for post in posts:
            existing = by_slug.get(post.slug)
            if existing is not None:
                raise DuplicateSlug(post.slug, [existing.source_path, post.source_path])
            by_slug[post.slug] = post

        self._posts: Tuple[Post, ...] = tuple(sorted(by_slug.values(), key=sort_key))
        self._by_slug: Mapping[str, Post] = MappingProxyType(by_slug)
        counts = Counter(p.category for p in self._posts if p.category is not None)
        self._categories: Mapping[str, int] = MappingProxyType(
            {category: counts[category] for category in sorted(counts)}
        )

    def __len__(self) -> int:
        return len(self._posts)

    def __iter__(self) -> Iterator[Post]:
        return iter(self._posts)

    def __contains__(self, slug) -> bool:
        return slug in self._by_slug

    def sorted_posts(self) -> Tuple[Post, ...]:
        return self._posts

    def by_slug(self, slug: str) -> Optional[Post]:
        """Return the post for ``slug`` or None."""
        return self._by_slug.get(slug)

    def get(self, slug: str) -> Post:
        """Return the post for ``slug`` or raise NotFound."""
        post = self._by_slug.get(slug)
        if post is None:
            raise NotFound('post', slug)
        return post

    def by_category(self, category: str) -> Tuple[Post, ...]:
        return tuple(p for p in self._posts if p.category == category)

    def categories(self) -> Mapping[str, int]:
        """Categories present in the corpus mapped to their post counts."""
        return self._categories
