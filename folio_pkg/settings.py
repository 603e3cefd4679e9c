#!/usr/bin/env python3
"""
Settings loader for the Folio content pipeline.
Supports configuration from folio.yml, folio.yaml, or folio.json files.
"""

import os
import json
import logging
import yaml
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Any, Optional, Tuple, Mapping


SITE_URL_ENV = 'FOLIO_SITE_URL'


class FolioSettings:
    """Load and manage Folio configuration settings."""

    # Default configuration
    DEFAULT_SETTINGS = {
        'content': 'content',
        'output': 'output',
        'posts_per_page': 10,
        'site_url': 'http://localhost:3000',
        'site_title': 'Folio',
        'site_description': '',
        'author': None,
        'locale': 'en_US',
        'categories': [],
        'strict_categories': True,
        'feed_limit': 20,
        'robots': 'public',
        'log_dir': None,
    }

    # Config file names to look for (in order of preference)
    CONFIG_FILES = ['folio.yml', 'folio.yaml', 'folio.json']

    def __init__(self, config_dir: str = None):
        """
        Initialize settings loader.

        Args:
            config_dir: Directory to look for config files. Defaults to current directory.
        """
        self.config_dir = config_dir or os.getcwd()
        self.settings = dict(self.DEFAULT_SETTINGS)
        self.config_file_path = None
        self.logger = logging.getLogger('Folio.Settings')

    def load_settings(self) -> Dict[str, Any]:
        """
        Load settings from configuration file if it exists, then apply
        environment overrides.

        Returns:
            Dictionary of configuration settings
        """
        config_file = self._find_config_file()

        if config_file:
            self.config_file_path = config_file
            try:
                loaded_settings = self._load_config_file(config_file)
                if loaded_settings:
                    if not isinstance(loaded_settings, dict):
                        raise ValueError("top-level value must be a mapping")
                    self.settings.update(loaded_settings)
                    self.logger.info(f"Loaded configuration from: {os.path.relpath(config_file)}")
            except (ValueError, IOError, OSError) as e:
                self.logger.warning(f"Failed to load config file {config_file}: {e}")

        env_site_url = os.environ.get(SITE_URL_ENV)
        if env_site_url:
            self.settings['site_url'] = env_site_url

        return self.settings.copy()

    def _find_config_file(self) -> Optional[str]:
        """
        Find the first available configuration file.

        Returns:
            Path to config file or None if not found
        """
        for filename in self.CONFIG_FILES:
            config_path = os.path.join(self.config_dir, filename)
            if os.path.exists(config_path):
                return config_path
        return None

    def _load_config_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from a file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Dictionary of configuration settings
        """
        file_ext = os.path.splitext(config_path)[1].lower()
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if file_ext in ['.yml', '.yaml']:
                    return yaml.safe_load(f) or {}
                elif file_ext == '.json':
                    return json.load(f) or {}
                else:
                    raise ValueError(f"Unsupported config file format: {file_ext}")
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        except PermissionError:
            raise PermissionError(f"Permission denied reading configuration file: {config_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file {config_path}: {e}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file {config_path}: {e}")

    def create_sample_config(self, file_format: str = 'yml') -> str:
        """
        Create a sample configuration file.

        Args:
            file_format: Format for config file ('yml', 'yaml', or 'json')

        Returns:
            Path to created sample config file
        """
        filename = f'folio.{file_format}'
        config_path = os.path.join(self.config_dir, filename)

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                if file_format in ['yml', 'yaml']:
                    f.write("# Folio Configuration File\n\n")
                    f.write("# Site information\n")
                    f.write("site_url: https://example.com\n")
                    f.write("site_title: My Folio Site\n")
                    f.write("site_description: Notes and articles\n")
                    f.write("author: Site Author\n")
                    f.write("locale: en_US\n\n")
                    f.write("# Build settings\n")
                    f.write("content: content\n")
                    f.write("output: output\n\n")
                    f.write("# Content settings\n")
                    f.write("posts_per_page: 10\n")
                    f.write("feed_limit: 20\n")
                    f.write("categories:\n")
                    f.write("  - general\n")
                    f.write("strict_categories: true  # reject unknown categories\n\n")
                    f.write("# SEO settings\n")
                    f.write("robots: public  # public or private\n")
                elif file_format == 'json':
                    sample_config = {
                        'site_url': 'https://example.com',
                        'site_title': 'My Folio Site',
                        'site_description': 'Notes and articles',
                        'author': 'Site Author',
                        'locale': 'en_US',
                        'content': 'content',
                        'output': 'output',
                        'posts_per_page': 10,
                        'feed_limit': 20,
                        'categories': ['general'],
                        'strict_categories': True,
                        'robots': 'public',
                    }
                    json.dump(sample_config, f, indent=2)
                else:
                    raise ValueError(f"Unsupported config file format: {file_format}")
        except PermissionError:
            raise PermissionError(f"Permission denied creating configuration file: {config_path}")

        return config_path

    def merge_with_args(self, args_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge configuration settings with command-line arguments.
        Command-line arguments take precedence over config file settings.

        Args:
            args_dict: Dictionary of command-line arguments

        Returns:
            Merged configuration dictionary
        """
        merged = self.settings.copy()

        for key, value in args_dict.items():
            if value is not None:
                if key == 'categories' and isinstance(value, str):
                    merged[key] = [c.strip() for c in value.split(',') if c.strip()]
                else:
                    merged[key] = value

        return merged


@dataclass(frozen=True)
class SiteConfig:
    """Read-only, build-wide configuration passed to every component."""

    site_url: str = FolioSettings.DEFAULT_SETTINGS['site_url']
    site_title: str = FolioSettings.DEFAULT_SETTINGS['site_title']
    site_description: str = ''
    author: Optional[str] = None
    locale: str = 'en_US'
    posts_per_page: int = 10
    categories: Tuple[str, ...] = ()
    category_names: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    strict_categories: bool = True
    feed_limit: int = 20
    robots: str = 'public'
    content_dir: str = 'content'
    output_dir: str = 'output'

    def __post_init__(self):
        object.__setattr__(self, 'site_url', (self.site_url or '').rstrip('/'))
        object.__setattr__(self, 'posts_per_page', max(1, int(self.posts_per_page)))
        object.__setattr__(self, 'feed_limit', max(1, int(self.feed_limit)))
        object.__setattr__(self, 'categories', tuple(str(c) for c in self.categories))
        object.__setattr__(self, 'category_names', MappingProxyType(dict(self.category_names)))

    @property
    def posts_dir(self) -> str:
        return os.path.join(self.content_dir, 'posts')

    def is_known_category(self, category: str) -> bool:
        return category in self.categories

    def category_name(self, category: str) -> str:
        """Display name for a category, falling back to its identifier."""
        return self.category_names.get(category, category)

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> 'SiteConfig':
        """
        Build a SiteConfig from a merged settings dictionary.

        ``categories`` may be a list of identifiers or a mapping of
        identifier to display name.
        """
        merged = dict(FolioSettings.DEFAULT_SETTINGS)
        merged.update({k: v for k, v in settings.items() if v is not None})

        raw_categories = merged.get('categories') or []
        if isinstance(raw_categories, dict):
            categories = tuple(str(k) for k in raw_categories)
            names = {str(k): str(v) for k, v in raw_categories.items() if v}
        elif isinstance(raw_categories, str):
            categories = tuple(c.strip() for c in raw_categories.split(',') if c.strip())
            names = {}
        else:
            categories = tuple(str(c) for c in raw_categories)
            names = {}

        return cls(
            site_url=merged['site_url'],
            site_title=merged['site_title'],
            site_description=merged.get('site_description') or '',
            author=merged.get('author'),
            locale=merged['locale'],
            posts_per_page=merged['posts_per_page'],
            categories=categories,
            category_names=names,
            strict_categories=bool(merged['strict_categories']),
            feed_limit=merged['feed_limit'],
            robots=merged['robots'],
            content_dir=merged['content'],
            output_dir=merged['output'],
        )
