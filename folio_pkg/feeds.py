"""
Sitemap, RSS feed and robots.txt emitters.

All three walk the post index in its canonical order and use the metadata
builder for URLs, so every surface agrees on ordering and canonical form.
"""

import html
import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from email.utils import format_datetime
from typing import List, Optional, Union

from jinja2 import Environment, PackageLoader, select_autoescape

from .index import PostIndex
from .paginator import paginate, index_page_path
from .seo import MetadataBuilder, category_path
from .settings import SiteConfig

PRIORITY_ROOT = 1.0
PRIORITY_POST = 0.8
PRIORITY_INDEX_PAGE = 0.6
PRIORITY_CATEGORY = 0.5

_env = Environment(
    loader=PackageLoader('folio_pkg', 'templates'),
    autoescape=select_autoescape(['xml']),
    keep_trailing_newline=True,
)


@dataclass(frozen=True)
class SitemapEntry:
    url: str
    last_modified: Union[date, datetime]
    priority: float
    change_frequency: str = 'weekly'


def _build_date(build_time: Optional[datetime]) -> datetime:
    """Build timestamp in UTC, to the second; naive values are taken as UTC."""
    built = build_time or datetime.now(timezone.utc)
    if built.tzinfo is None:
        built = built.replace(tzinfo=timezone.utc)
    return built.astimezone(timezone.utc).replace(microsecond=0)


def build_sitemap(index: PostIndex, config: SiteConfig, builder: MetadataBuilder,
                  build_time: Optional[datetime] = None) -> List[SitemapEntry]:
    """
    One entry per canonical URL: the root, index pages 2..total_page, every
    post, and every category with posts.
    """
    built_on = _build_date(build_time)
    total = paginate(index.sorted_posts(), 1, config.posts_per_page).total_page

    candidates = [SitemapEntry(builder.canonical_url('/'), built_on, PRIORITY_ROOT)]
    for page in range(2, total + 1):
        candidates.append(
            SitemapEntry(builder.canonical_url(index_page_path(page)), built_on, PRIORITY_INDEX_PAGE)
        )
    for post in index.sorted_posts():
        candidates.append(
            SitemapEntry(builder.canonical_url(post.permalink), post.date, PRIORITY_POST, 'monthly')
        )
    for category in index.categories():
        candidates.append(
            SitemapEntry(builder.canonical_url(category_path(category)), built_on, PRIORITY_CATEGORY)
        )

    seen = set()
    entries = []
    for entry in candidates:
        if entry.url not in seen:
            seen.add(entry.url)
            entries.append(entry)
    return entries


def render_sitemap(entries: List[SitemapEntry]) -> str:
    return _env.get_template('sitemap.xml').render(entries=entries)


def clean_text(text: str) -> str:
    """Strip tags and collapse whitespace for plain-text feed fields."""
    text = html.unescape(str(text))
    text = re.sub(r'<.*?>', '', text)
    text = re.sub(r'\s+', ' ', text)
    return text.strip()


def build_feed(index: PostIndex, config: SiteConfig, builder: MetadataBuilder,
               build_time: Optional[datetime] = None) -> str:
    """RSS 2.0 document; items follow the on-site order."""
    items = []
    for post in index.sorted_posts()[:config.feed_limit]:
        published = datetime(post.date.year, post.date.month, post.date.day, tzinfo=timezone.utc)
        items.append({
            'title': clean_text(post.title),
            'link': builder.canonical_url(post.permalink),
            'description': clean_text(post.description),
            'pub_date': format_datetime(published),
            'category': config.category_name(post.category) if post.category else None,
        })

    return _env.get_template('rss.xml').render(
        site_title=config.site_title,
        site_link=builder.canonical_url('/'),
        description=config.site_description or f"Latest posts from {config.site_title}",
        language=config.locale.replace('_', '-').lower(),
        last_build_date=format_datetime(_build_date(build_time)),
        items=items,
    )


def render_robots_txt(config: SiteConfig, builder: MetadataBuilder) -> str:
    if config.robots == 'public':
        sitemap_url = builder.canonical_url('/').rstrip('/') + '/sitemap.xml'
        return f"User-agent: *\nAllow: /\n\nSitemap: {sitemap_url}\n"
    return "User-agent: *\nDisallow: /\n"
