"""Test configuration and fixtures for Folio tests."""

import pytest
import tempfile
import shutil
import os
from pathlib import Path
from datetime import date, timedelta

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from folio_pkg.documents import Post
from folio_pkg.settings import SiteConfig


POST_TEMPLATE = """---
title: {title}
description: {description}
date: {date}
{extra}---

{body}
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def posts_dir(temp_dir):
    """Create an empty content/posts directory."""
    posts_dir = Path(temp_dir) / 'content' / 'posts'
    posts_dir.mkdir(parents=True)
    return posts_dir


@pytest.fixture
def write_post(posts_dir):
    """Factory writing a post file into content/posts."""
    def _write(filename, title='A Post', description='About a post',
               date='2024-01-01', category=None, body='Body text.', raw=None):
        path = posts_dir / filename
        if raw is not None:
            path.write_text(raw, encoding='utf-8')
            return path
        extra = f"category: {category}\n" if category else ''
        path.write_text(POST_TEMPLATE.format(
            title=title, description=description, date=date, extra=extra, body=body
        ), encoding='utf-8')
        return path
    return _write


@pytest.fixture
def mock_content_dir(temp_dir, write_post):
    """Create a content directory with three posts in two categories."""
    write_post('first-post.md', title='First Post', date='2024-01-01', category='news')
    write_post('Second Post.md', title='Second Post', date='2024-03-01', category='tech')
    write_post('third_post.markdown', title='Third Post', date='2024-02-01')
    return str(Path(temp_dir) / 'content')


@pytest.fixture
def site_config(temp_dir):
    """A SiteConfig rooted in the temporary directory."""
    return SiteConfig(
        site_url='https://example.com',
        site_title='Example Site',
        site_description='An example site',
        author='Jane Doe',
        posts_per_page=10,
        categories=('news', 'tech'),
        content_dir=os.path.join(temp_dir, 'content'),
        output_dir=os.path.join(temp_dir, 'output'),
    )


@pytest.fixture
def make_posts():
    """Factory for in-memory posts, one per day counting back from a start date."""
    def _make(count, start=date(2024, 12, 31), category=None):
        return [
            Post(
                slug=f"post-{i:03d}",
                title=f"Post {i}",
                description=f"Description {i}",
                date=start - timedelta(days=i),
                category=category,
            )
            for i in range(count)
        ]
    return _make
