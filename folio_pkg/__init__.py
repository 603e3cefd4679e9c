"""
Folio - a static site content pipeline.

Folio reads Markdown posts with YAML front matter and produces the data a
static site is rendered from: ordered and paginated post lists, category
groupings, canonical URLs, SEO metadata, a sitemap and an RSS feed.
"""

__version__ = "1.0.0"

from .core import Folio
from .documents import DocumentStore, Post
from .errors import FolioError, MalformedDocument, DuplicateSlug, NotFound, InvalidPageNumber
from .index import PostIndex
from .paginator import PaginatedPosts, paginate
from .seo import MetadataBuilder, Metadata, SocialPayload
from .settings import FolioSettings, SiteConfig

__all__ = [
    'Folio', 'DocumentStore', 'Post', 'PostIndex', 'PaginatedPosts', 'paginate',
    'MetadataBuilder', 'Metadata', 'SocialPayload', 'FolioSettings', 'SiteConfig',
    'FolioError', 'MalformedDocument', 'DuplicateSlug', 'NotFound', 'InvalidPageNumber',
]
