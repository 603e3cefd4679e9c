"""
Canonical URLs and SEO metadata records.

Every route the site exposes gets exactly one canonical URL: the configured
base URL followed by the route path with a leading and trailing slash.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .index import PostIndex
from .paginator import index_page_path
from .settings import SiteConfig

OG_TYPES = {'index': 'website', 'website': 'website', 'article': 'article'}


def category_path(category: str) -> str:
    return f"/category/{category}/"


@dataclass(frozen=True)
class SocialPayload:
    """Sharing attributes requested for a page."""
    type: str = 'website'
    published_time: Optional[str] = None
    authors: Tuple[str, ...] = ()
    images: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.type not in OG_TYPES:
            raise ValueError(f"Unsupported Open Graph type: {self.type!r}")
        object.__setattr__(self, 'authors', tuple(self.authors))
        object.__setattr__(self, 'images', tuple(self.images))


@dataclass(frozen=True)
class OpenGraph:
    title: str
    description: str
    url: str
    site_name: str
    locale: str
    type: str
    images: Tuple[str, ...] = ()
    published_time: Optional[str] = None
    authors: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'title': self.title,
            'description': self.description,
            'url': self.url,
            'siteName': self.site_name,
            'locale': self.locale,
            'type': self.type,
        }
        if self.images:
            data['images'] = list(self.images)
        if self.published_time:
            data['publishedTime'] = self.published_time
        if self.authors:
            data['authors'] = list(self.authors)
        return data


@dataclass(frozen=True)
class TwitterCard:
    title: str
    description: str
    card: str = 'summary'

    def to_dict(self) -> Dict[str, Any]:
        return {'card': self.card, 'title': self.title, 'description': self.description}


@dataclass(frozen=True)
class Metadata:
    """SEO metadata for one route."""
    title: str
    description: str
    canonical: str
    open_graph: Optional[OpenGraph] = None
    twitter: Optional[TwitterCard] = None

    @property
    def has_social(self) -> bool:
        return self.open_graph is not None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'title': self.title,
            'description': self.description,
            'alternates': {'canonical': self.canonical},
        }
        if self.open_graph is not None:
            data['openGraph'] = self.open_graph.to_dict()
        if self.twitter is not None:
            data['twitter'] = self.twitter.to_dict()
        return data


class MetadataBuilder:
    def __init__(self, config: SiteConfig):
        self.config = config

    def canonical_url(self, path: str) -> str:
        """
        Absolute URL for ``path``.

        "/posts/foo", "/posts/foo/" and "posts/foo" all give the same result.
        """
        path = path or '/'
        if not path.startswith('/'):
            path = '/' + path
        if not path.endswith('/'):
            path = path + '/'
        return f"{self.config.site_url}{path}"

    def build_metadata(self, title: str, description: str, path: str,
                       open_graph: Optional[SocialPayload] = None) -> Metadata:
        """
        Build the metadata record for a page.

        The Open Graph and Twitter blocks are only filled in when a social
        payload is given; both echo the canonical URL.
        """
        canonical = self.canonical_url(path)
        if open_graph is None:
            return Metadata(title=title, description=description, canonical=canonical)

        return Metadata(
            title=title,
            description=description,
            canonical=canonical,
            open_graph=OpenGraph(
                title=title,
                description=description,
                url=canonical,
                site_name=self.config.site_title,
                locale=self.config.locale,
                type=OG_TYPES[open_graph.type],
                images=open_graph.images,
                published_time=open_graph.published_time,
                authors=open_graph.authors,
            ),
            twitter=TwitterCard(title=title, description=description),
        )

    def post_metadata(self, index: PostIndex, slug: str) -> Optional[Metadata]:
        """Article metadata for a post, or None when the slug is unknown."""
        post = index.by_slug(slug)
        if post is None:
            return None
        authors = (self.config.author,) if self.config.author else ()
        return self.build_metadata(
            post.title,
            post.description,
            post.permalink,
            SocialPayload(type='article', published_time=post.date.isoformat(), authors=authors),
        )

    def index_metadata(self, page: int = 1) -> Metadata:
        title = self.config.site_title if page == 1 else f"{self.config.site_title} - Page {page}"
        return self.build_metadata(
            title,
            self.config.site_description,
            index_page_path(page),
            SocialPayload(type='index'),
        )

    def category_metadata(self, category: str) -> Metadata:
        name = self.config.category_name(category)
        return self.build_metadata(
            f"{name} - {self.config.site_title}",
            f"Posts in {name}",
            category_path(category),
            SocialPayload(type='index'),
        )