import os
import json
import shutil
import logging
from datetime import datetime, timezone

from .documents import DocumentStore
from .errors import NotFound
from .feeds import build_sitemap, render_sitemap, build_feed, render_robots_txt
from .index import PostIndex
from .paginator import pagination_links
from .routes import (
    ROUTE_INDEX, ROUTE_POST, ROUTE_CATEGORY,
    enumerate_routes, resolve_index_page, resolve_post, resolve_category,
)
from .seo import MetadataBuilder
from .settings import SiteConfig


class InfoFilter(logging.Filter):
    """Filter to allow only selected INFO messages to be shown in the console."""
    def filter(self, record):
        allowed_messages = [
            "Site build completed in",
            "Total posts loaded:",
            "Total routes generated:",
            "Placeholder routes:",
            "Building route data",
            "Generating RSS feed",
            "Generating XML sitemap",
            "Generating robots.txt",
        ]
        return any(msg in record.getMessage() for msg in allowed_messages)


class Folio:
    """
    Batch build of the content data layer.

    Loads and indexes the corpus first; the output directory is only
    touched once the whole corpus has been validated.
    """

    # Files and directories the build owns inside the output directory
    GENERATED = {'index.json', 'routes.json', 'sitemap.xml', 'rss.xml', 'robots.txt',
                 'page', 'posts', 'category'}

    def __init__(self, config: SiteConfig, log_dir=None):
        self.config = config
        self.output_dir = config.output_dir
        self.log_dir = log_dir
        self.metadata = MetadataBuilder(config)
        self.posts_loaded = 0
        self.routes_generated = 0
        self.placeholder_routes = 0
        self.setup_logging()

    def setup_logging(self):
        """Set up logging configuration."""
        self.logger = logging.getLogger('Folio')
        self.logger.setLevel(logging.DEBUG)

        if not self.logger.handlers:
            # Console handler with filter
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.INFO)
            console_handler.addFilter(InfoFilter())
            console_handler.setFormatter(logging.Formatter('%(message)s'))
            self.logger.addHandler(console_handler)

            # File handler for all logs
            logs_dir = self.log_dir or os.path.join(os.getcwd(), 'logs')
            os.makedirs(logs_dir, exist_ok=True)
            log_filename = datetime.now().strftime('folio_%Y-%m-%d_%H-%M-%S.log')
            file_handler = logging.FileHandler(os.path.join(logs_dir, log_filename))
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(
                logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            )
            self.logger.addHandler(file_handler)

    def load(self) -> PostIndex:
        """Read the corpus and build the index. Raises on malformed or duplicate documents."""
        posts = DocumentStore(self.config).load_all()
        index = PostIndex(posts)
        self.posts_loaded = len(index)
        self.logger.debug(f"Indexed {len(index)} posts in {len(index.categories())} categories")
        return index

    def create_output_dir(self):
        """Create output directory, removing only what a previous build generated."""
        if not os.path.exists(self.output_dir):
            os.makedirs(self.output_dir, exist_ok=True)
            return

        preserved_items = []
        for item in sorted(os.listdir(self.output_dir)):
            item_path = os.path.join(self.output_dir, item)
            if item in self.GENERATED:
                if os.path.isdir(item_path):
                    shutil.rmtree(item_path)
                else:
                    os.remove(item_path)
            else:
                preserved_items.append(item)

        if preserved_items:
            self.logger.info(f"Preserved non-Folio files: {', '.join(preserved_items)}")

    def write_file(self, relative_path, content):
        """Write ``content`` under the output directory."""
        output_path = os.path.join(self.output_dir, relative_path)
        os.makedirs(os.path.dirname(output_path), exist_ok=True)
        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(content)
            self.logger.debug(f"Wrote {output_path}")
        except (IOError, OSError) as e:
            self.logger.error(f"Failed to write {output_path}: {e}")
            raise
        return output_path

    def write_json(self, relative_path, data):
        return self.write_file(relative_path, json.dumps(data, indent=2, ensure_ascii=False) + '\n')

    def route_record(self, index, route):
        """Structured data for one route; status 404 when the route has nothing to show."""
        try:
            if route.kind == ROUTE_INDEX:
                data = resolve_index_page(index, route.key, self.config.posts_per_page)
                return {
                    'status': 200,
                    'path': route.path,
                    'kind': route.kind,
                    'metadata': self.metadata.index_metadata(data.current_page).to_dict(),
                    'posts': [post.to_dict(include_content=False) for post in data.posts],
                    'pagination': {
                        'current': data.current_page,
                        'total': data.total_page,
                        'previous': data.previous_page,
                        'next': data.next_page,
                        'links': pagination_links(data.current_page, data.total_page),
                    },
                }
            if route.kind == ROUTE_POST:
                post = resolve_post(index, route.key)
                return {
                    'status': 200,
                    'path': route.path,
                    'kind': route.kind,
                    'metadata': self.metadata.post_metadata(index, post.slug).to_dict(),
                    'post': post.to_dict(),
                }
            if route.kind == ROUTE_CATEGORY:
                posts = resolve_category(index, route.key)
                return {
                    'status': 200,
                    'path': route.path,
                    'kind': route.kind,
                    'metadata': self.metadata.category_metadata(route.key).to_dict(),
                    'category': {
                        'id': route.key,
                        'name': self.config.category_name(route.key),
                        'count': len(posts),
                    },
                    'posts': [post.to_dict(include_content=False) for post in posts],
                }
            raise ValueError(f"Unknown route kind: {route.kind}")
        except NotFound as e:
            self.logger.debug(f"Route {route.path} resolves to not found: {e}")
            return {'status': 404, 'path': route.path, 'kind': route.kind}

    def build_routes(self, index):
        """Write one index.json per static route and return the route summaries."""
        self.logger.info("Building route data")
        summaries = []
        for route in enumerate_routes(index, self.config):
            record = self.route_record(index, route)
            self.write_json(os.path.join(route.path.strip('/'), 'index.json'), record)
            summaries.append({'path': route.path, 'kind': route.kind, 'status': record['status']})
            self.routes_generated += 1
            if record['status'] == 404:
                self.placeholder_routes += 1
        return summaries

    def write_manifest(self, index, routes):
        manifest = {
            'site': {
                'title': self.config.site_title,
                'description': self.config.site_description,
                'url': self.metadata.canonical_url('/'),
                'postsPerPage': self.config.posts_per_page,
            },
            'routes': routes,
            'categories': [
                {'id': category, 'name': self.config.category_name(category), 'count': count}
                for category, count in index.categories().items()
            ],
        }
        return self.write_json('routes.json', manifest)

    def generate_xml_sitemap(self, index, build_time=None):
        entries = build_sitemap(index, self.config, self.metadata, build_time)
        self.write_file('sitemap.xml', render_sitemap(entries))
        self.logger.info("Generating XML sitemap")
        return entries

    def generate_rss_feed(self, index, build_time=None):
        self.write_file('rss.xml', build_feed(index, self.config, self.metadata, build_time))
        self.logger.info("Generating RSS feed")

    def generate_robots_txt(self):
        self.write_file('robots.txt', render_robots_txt(self.config, self.metadata))
        self.logger.info("Generating robots.txt")

    def build(self, build_time=None):
        """Main build process."""
        self.logger.info("Starting site build...")
        self.routes_generated = 0
        self.placeholder_routes = 0
        build_time = build_time or datetime.now(timezone.utc)

        index = self.load()

        self.create_output_dir()
        routes = self.build_routes(index)
        self.write_manifest(index, routes)
        self.generate_xml_sitemap(index, build_time)
        self.generate_rss_feed(index, build_time)
        self.generate_robots_txt()
        return index
