"""Tests for sitemap, feed and robots.txt emitters."""

import pytest
import xml.etree.ElementTree as ET
from datetime import date, datetime, timezone

from folio_pkg.documents import Post
from folio_pkg.feeds import (
    build_sitemap, render_sitemap, build_feed, render_robots_txt, clean_text,
    PRIORITY_ROOT, PRIORITY_POST, PRIORITY_INDEX_PAGE, PRIORITY_CATEGORY,
)
from folio_pkg.index import PostIndex
from folio_pkg.seo import MetadataBuilder
from folio_pkg.settings import SiteConfig

BUILD_TIME = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)
SITEMAP_NS = '{http://www.sitemaps.org/schemas/sitemap/0.9}'


@pytest.fixture
def config():
    return SiteConfig(site_url='https://example.com', site_title='Example & Co',
                      posts_per_page=2, categories=('news', 'tech'),
                      category_names={'tech': 'Technology'}, feed_limit=20)


@pytest.fixture
def index():
    return PostIndex([
        Post(slug='a', title='A <b>bold</b> post', description='First & best',
             date=date(2024, 1, 1), category='news'),
        Post(slug='b', title='B', description='Second', date=date(2024, 3, 1), category='tech'),
        Post(slug='c', title='C', description='Third', date=date(2024, 2, 1)),
    ])


class TestSitemap:
    """Test cases for sitemap entries."""

    def test_entries(self, index, config):
        entries = build_sitemap(index, config, MetadataBuilder(config), BUILD_TIME)
        urls = [e.url for e in entries]

        assert urls == [
            'https://example.com/',
            'https://example.com/page/2/',
            'https://example.com/posts/b/',
            'https://example.com/posts/c/',
            'https://example.com/posts/a/',
            'https://example.com/category/news/',
            'https://example.com/category/tech/',
        ]
        assert len(urls) == len(set(urls))

    def test_last_modified_and_priority(self, index, config):
        entries = {e.url: e for e in build_sitemap(index, config, MetadataBuilder(config), BUILD_TIME)}

        root = entries['https://example.com/']
        assert root.last_modified == BUILD_TIME
        assert root.priority == PRIORITY_ROOT
        assert entries['https://example.com/page/2/'].priority == PRIORITY_INDEX_PAGE

        post = entries['https://example.com/posts/a/']
        assert post.last_modified == date(2024, 1, 1)
        assert post.priority == PRIORITY_POST
        assert post.change_frequency == 'monthly'
        assert entries['https://example.com/category/tech/'].priority == PRIORITY_CATEGORY

    def test_no_placeholder_page(self, config):
        """Only real index pages are listed."""
        index = PostIndex([Post(slug='a', title='A', description='D', date=date(2024, 1, 1))])
        urls = [e.url for e in build_sitemap(index, config, MetadataBuilder(config), BUILD_TIME)]
        assert urls == ['https://example.com/', 'https://example.com/posts/a/']

    def test_render(self, index, config):
        entries = build_sitemap(index, config, MetadataBuilder(config), BUILD_TIME)
        root = ET.fromstring(render_sitemap(entries))

        urls = root.findall(f'{SITEMAP_NS}url')
        assert len(urls) == len(entries)
        assert urls[0].find(f'{SITEMAP_NS}loc').text == 'https://example.com/'
        assert urls[0].find(f'{SITEMAP_NS}lastmod').text == '2025-06-01T12:00:00+00:00'
        assert urls[0].find(f'{SITEMAP_NS}priority').text == '1.0'

        by_loc = {u.find(f'{SITEMAP_NS}loc').text: u for u in urls}
        post = by_loc['https://example.com/posts/a/']
        assert post.find(f'{SITEMAP_NS}lastmod').text == '2024-01-01'

    def test_naive_build_time_is_utc(self, index, config):
        naive = datetime(2025, 6, 1, 12, 0, 0, 123456)
        entries = build_sitemap(index, config, MetadataBuilder(config), naive)
        assert entries[0].last_modified == BUILD_TIME
        assert entries[0].last_modified.isoformat() == '2025-06-01T12:00:00+00:00'


class TestFeed:
    """Test cases for the RSS feed."""

    def test_items_follow_site_order(self, index, config):
        channel = ET.fromstring(build_feed(index, config, MetadataBuilder(config), BUILD_TIME)).find('channel')

        links = [item.find('link').text for item in channel.findall('item')]
        assert links == [
            'https://example.com/posts/b/',
            'https://example.com/posts/c/',
            'https://example.com/posts/a/',
        ]

    def test_channel_and_escaping(self, index, config):
        channel = ET.fromstring(build_feed(index, config, MetadataBuilder(config), BUILD_TIME)).find('channel')

        assert channel.find('title').text == 'Example & Co'
        assert channel.find('link').text == 'https://example.com/'
        assert channel.find('language').text == 'en-us'
        last = channel.findall('item')[-1]
        assert last.find('title').text == 'A bold post'
        assert last.find('description').text == 'First & best'
        assert last.find('pubDate').text == 'Mon, 01 Jan 2024 00:00:00 +0000'
        assert last.find('category').text == 'news'

    def test_category_display_name(self, index, config):
        channel = ET.fromstring(build_feed(index, config, MetadataBuilder(config), BUILD_TIME)).find('channel')
        first = channel.findall('item')[0]
        assert first.find('category').text == 'Technology'
        assert channel.findall('item')[1].find('category') is None

    def test_feed_limit_is_prefix(self, index):
        config = SiteConfig(site_url='https://example.com', feed_limit=2, categories=('news', 'tech'))
        channel = ET.fromstring(build_feed(index, config, MetadataBuilder(config), BUILD_TIME)).find('channel')
        assert [i.find('guid').text for i in channel.findall('item')] == [
            'https://example.com/posts/b/',
            'https://example.com/posts/c/',
        ]

    def test_empty_feed(self, config):
        channel = ET.fromstring(build_feed(PostIndex([]), config, MetadataBuilder(config), BUILD_TIME)).find('channel')
        assert channel.findall('item') == []

    def test_clean_text(self):
        assert clean_text('<p>Hello&nbsp;\n  <em>world</em></p>') == 'Hello world'


class TestRobots:
    """Test cases for robots.txt."""

    def test_public(self, config):
        content = render_robots_txt(config, MetadataBuilder(config))
        assert 'Allow: /' in content
        assert 'Sitemap: https://example.com/sitemap.xml' in content

    def test_private(self):
        config = SiteConfig(robots='private')
        assert render_robots_txt(config, MetadataBuilder(config)) == "User-agent: *\nDisallow: /\n"
