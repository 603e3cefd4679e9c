"""
Document store: reads Markdown files with YAML front matter and turns each
one into an immutable Post record.
"""

import os
import re
import logging
import yaml
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Tuple, Dict, Any

from .errors import MalformedDocument
from .settings import SiteConfig

DOCUMENT_EXTENSIONS = ('.md', '.markdown')
REQUIRED_FIELDS = ('title', 'description', 'date')
DATE_FORMAT = '%Y-%m-%d'

_NON_ALNUM_RE = re.compile(r'[^a-z0-9]+')


def slugify(name: str) -> str:
    """Lowercase a file stem and collapse non-alphanumeric runs to hyphens."""
    return _NON_ALNUM_RE.sub('-', name.lower()).strip('-')


def parse_post_date(value) -> date:
    """
    Parse a front matter date.

    YAML already turns an unquoted ``2024-01-31`` into a ``date``; quoted
    values arrive as strings and must match ``YYYY-MM-DD`` exactly.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        # strptime accepts single-digit fields, the format here does not
        if not re.fullmatch(r'\d{4}-\d{2}-\d{2}', text):
            raise ValueError(f"expected YYYY-MM-DD, got {value!r}")
        return datetime.strptime(text, DATE_FORMAT).date()
    raise ValueError(f"expected YYYY-MM-DD, got {value!r}")


@dataclass(frozen=True)
class Post:
    """One parsed document."""
    slug: str
    title: str
    description: str
    date: date
    content: str = ''
    category: Optional[str] = None
    source_path: Optional[str] = field(default=None, compare=False, repr=False)

    @property
    def permalink(self) -> str:
        return f"/posts/{self.slug}/"

    def to_dict(self, include_content: bool = True) -> Dict[str, Any]:
        data = {
            'slug': self.slug,
            'title': self.title,
            'description': self.description,
            'date': self.date.isoformat(),
            'category': self.category,
            'permalink': self.permalink,
        }
        if include_content:
            data['content'] = self.content
        return data


def split_frontmatter(text: str) -> Tuple[Optional[str], str]:
    """
    Split a document into its front matter block and body.

    The document must open with a ``---`` line; the header runs up to the
    next ``---`` line. Returns ``(None, text)`` when there is no header.
    """
    text = text.lstrip('\ufeff')
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != '---':
        return None, text

    for i in range(1, len(lines)):
        if lines[i].strip() == '---':
            header = ''.join(lines[1:i])
            body = ''.join(lines[i + 1:])
            return header, body
    return None, text


class DocumentStore:
    """Loads every eligible document under the configured posts directory."""

    def __init__(self, config: SiteConfig, posts_dir: str = None):
        self.config = config
        self.posts_dir = posts_dir or config.posts_dir
        self.logger = logging.getLogger('Folio.DocumentStore')

    def get_document_files(self) -> List[str]:
        """Get all document files from the posts directory, sorted by name."""
        if not os.path.isdir(self.posts_dir):
            self.logger.warning(f"Posts directory not found: {self.posts_dir}")
            return []
        files = []
        for name in sorted(os.listdir(self.posts_dir)):
            path = os.path.join(self.posts_dir, name)
            if name.lower().endswith(DOCUMENT_EXTENSIONS) and os.path.isfile(path):
                files.append(path)
        return files

    def load_all(self) -> List[Post]:
        """
        Read and parse every document.

        The first malformed document aborts the load with MalformedDocument;
        required fields are never defaulted.
        """
        posts = [self.load(path) for path in self.get_document_files()]
        self.logger.debug(f"Loaded {len(posts)} documents from {self.posts_dir}")
        return posts

    def load(self, filepath: str) -> Post:
        """Read and parse a single document."""
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                text = f.read()
        except (IOError, OSError, UnicodeDecodeError) as e:
            raise MalformedDocument(filepath, f"could not be read ({e})")
        return self.parse_document(filepath, text)

    def parse_document(self, filepath: str, text: str) -> Post:
        """Build a Post from the raw text of ``filepath``."""
        header, body = split_frontmatter(text)
        if header is None:
            raise MalformedDocument(filepath, "missing front matter block")

        try:
            metadata = yaml.safe_load(header)
        except (yaml.YAMLError, ValueError) as e:
            # out-of-range timestamps like 2024-02-30 fail inside the YAML constructor
            raise MalformedDocument(filepath, f"invalid YAML front matter ({e})")
        if not isinstance(metadata, dict):
            raise MalformedDocument(filepath, "front matter must be a mapping")

        for key in REQUIRED_FIELDS:
            value = metadata.get(key)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise MalformedDocument(filepath, f"missing required field '{key}'")

        for key in ('title', 'description'):
            value = metadata[key]
            if isinstance(value, bool) or not isinstance(value, (str, int, float, date)):
                raise MalformedDocument(filepath, f"field '{key}' must be text")

        try:
            post_date = parse_post_date(metadata['date'])
        except ValueError as e:
            raise MalformedDocument(filepath, f"invalid date ({e})")

        slug = slugify(os.path.splitext(os.path.basename(filepath))[0])
        if not slug:
            raise MalformedDocument(filepath, "file name does not produce a slug")

        return Post(
            slug=slug,
            title=str(metadata['title']).strip(),
            description=str(metadata['description']).strip(),
            date=post_date,
            content=body,
            category=self._resolve_category(filepath, metadata.get('category')),
            source_path=filepath,
        )

    def _resolve_category(self, filepath: str, value) -> Optional[str]:
        """Check a declared category against the configured set."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        category = str(value).strip()
        if self.config.is_known_category(category):
            return category
        if self.config.strict_categories:
            raise MalformedDocument(filepath, f"unknown category '{category}'")
        self.logger.warning(f"Unknown category '{category}' in {filepath}; treating as uncategorized")
        return None
