"""Tests for canonical URLs and metadata."""

import pytest
from datetime import date

from folio_pkg.documents import Post
from folio_pkg.index import PostIndex
from folio_pkg.seo import MetadataBuilder, SocialPayload
from folio_pkg.settings import SiteConfig


@pytest.fixture
def builder(site_config):
    return MetadataBuilder(site_config)


class TestCanonicalUrl:
    """Test cases for canonical URL normalization."""

    def test_adds_trailing_slash(self, builder):
        assert builder.canonical_url('/page/2') == 'https://example.com/page/2/'

    @pytest.mark.parametrize('variant', ['/posts/foo', '/posts/foo/', 'posts/foo', 'posts/foo/'])
    def test_variants_are_identical(self, builder, variant):
        assert builder.canonical_url(variant) == 'https://example.com/posts/foo/'

    def test_root(self, builder):
        assert builder.canonical_url('/') == 'https://example.com/'
        assert builder.canonical_url('') == 'https://example.com/'

    def test_base_url_trailing_slash_removed(self):
        builder = MetadataBuilder(SiteConfig(site_url='https://example.com/blog/'))
        assert builder.canonical_url('posts/a') == 'https://example.com/blog/posts/a/'


class TestBuildMetadata:
    """Test cases for metadata records."""

    def test_without_social_payload(self, builder):
        """Scenario: no social payload means no social block."""
        metadata = builder.build_metadata('Title', 'Desc', '/about')

        assert metadata.canonical == 'https://example.com/about/'
        assert metadata.title == 'Title'
        assert metadata.description == 'Desc'
        assert metadata.open_graph is None
        assert metadata.twitter is None
        assert not metadata.has_social
        assert metadata.to_dict() == {
            'title': 'Title',
            'description': 'Desc',
            'alternates': {'canonical': 'https://example.com/about/'},
        }

    def test_with_social_payload(self, builder):
        payload = SocialPayload(type='article', published_time='2024-01-02',
                                authors=['Jane Doe'], images=['https://example.com/a.png'])
        metadata = builder.build_metadata('Title', 'Desc', 'posts/x', payload)

        og = metadata.open_graph
        assert og.url == metadata.canonical == 'https://example.com/posts/x/'
        assert og.type == 'article'
        assert og.site_name == 'Example Site'
        assert og.locale == 'en_US'
        assert og.authors == ('Jane Doe',)
        assert og.images == ('https://example.com/a.png',)
        assert metadata.twitter.card == 'summary'

        data = metadata.to_dict()
        assert data['openGraph']['publishedTime'] == '2024-01-02'
        assert data['twitter']['title'] == 'Title'

    def test_index_type_maps_to_website(self, builder):
        metadata = builder.build_metadata('T', 'D', '/', SocialPayload(type='index'))
        assert metadata.open_graph.type == 'website'
        assert 'images' not in metadata.to_dict()['openGraph']

    def test_unsupported_type(self):
        with pytest.raises(ValueError):
            SocialPayload(type='video')


class TestResourceMetadata:
    """Test cases for post, index and category metadata."""

    def test_post_metadata(self, builder):
        index = PostIndex([Post(slug='hello', title='Hello', description='Hi', date=date(2024, 1, 2))])
        metadata = builder.post_metadata(index, 'hello')

        assert metadata.canonical == 'https://example.com/posts/hello/'
        assert metadata.open_graph.type == 'article'
        assert metadata.open_graph.published_time == '2024-01-02'
        assert metadata.open_graph.authors == ('Jane Doe',)

    def test_post_metadata_unknown_slug(self, builder):
        assert builder.post_metadata(PostIndex([]), 'missing') is None

    def test_index_metadata(self, builder):
        assert builder.index_metadata().title == 'Example Site'
        second = builder.index_metadata(2)
        assert second.canonical == 'https://example.com/page/2/'
        assert second.title == 'Example Site - Page 2'

    def test_category_metadata(self):
        config = SiteConfig(site_url='https://example.com', site_title='Site',
                            categories=('tech',), category_names={'tech': 'Technology'})
        metadata = MetadataBuilder(config).category_metadata('tech')
        assert metadata.canonical == 'https://example.com/category/tech/'
        assert metadata.title == 'Technology - Site'
