#!/usr/bin/env python3
"""
Command-line interface for Folio - static site content pipeline.
"""

import os
import sys
import argparse
import time
from typing import List, Optional

from . import __version__
from .core import Folio
from .errors import FolioError
from .settings import FolioSettings, SiteConfig

SAMPLE_POST = """---
title: "Hello World"
description: "The first post on this site."
date: {date}
category: general
---

Welcome! Edit `content/posts/hello-world.md` or add new Markdown files next
to it, then run `folio` to rebuild the site data.
"""


def create_starter_structure(base_dir: Optional[str] = None) -> None:
    """Create the content directory with one sample post."""
    base_dir = base_dir or os.getcwd()
    posts_dir = os.path.join(base_dir, 'content', 'posts')
    if os.path.exists(posts_dir):
        print("Directory already exists: content/posts")
    else:
        os.makedirs(posts_dir, exist_ok=True)
        print("Created directory: content/posts")

    post_path = os.path.join(posts_dir, 'hello-world.md')
    if os.path.exists(post_path):
        print("Sample post already exists: content/posts/hello-world.md")
    else:
        with open(post_path, 'w', encoding='utf-8') as f:
            f.write(SAMPLE_POST.format(date=time.strftime('%Y-%m-%d')))
        print("Created sample post: content/posts/hello-world.md")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Folio - static site content pipeline')
    parser.add_argument('--content', type=str,
                        help='Content directory containing posts/')
    parser.add_argument('--output', type=str,
                        help='Output directory for generated route data')
    parser.add_argument('--posts-per-page', type=int,
                        help='Number of posts per index page')
    parser.add_argument('--site-url', type=str,
                        help='Base URL used for canonical URLs, sitemap and feed')
    parser.add_argument('--site-title', type=str, help='Site title for metadata')
    parser.add_argument('--categories', type=str,
                        help='Comma-separated list of recognized categories')
    parser.add_argument('--robots', type=str, choices=['public', 'private'],
                        help='Robots.txt configuration')
    parser.add_argument('--log-dir', type=str,
                        help='Directory for build log files')
    parser.add_argument('--init', type=str, choices=['yml', 'yaml', 'json'],
                        help='Create a sample configuration file and starter content')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.init:
        settings_loader = FolioSettings()
        config_path = settings_loader.create_sample_config(args.init)
        print(f"Created sample configuration file: {config_path}")
        create_starter_structure()
        print("\nEdit the configuration file, then run 'folio' to build your site.")
        return

    settings_loader = FolioSettings()
    settings_loader.load_settings()

    # Command line arguments take precedence
    args_dict = {k: v for k, v in vars(args).items() if v is not None and k != 'init'}
    final_settings = settings_loader.merge_with_args(args_dict)

    output_dir = final_settings['output']
    if output_dir.startswith('~/'):
        final_settings['output'] = os.path.expanduser(output_dir)

    overall_start_time = time.time()

    try:
        config = SiteConfig.from_settings(final_settings)
        generator = Folio(config, log_dir=final_settings.get('log_dir'))
        generator.build()

        total_time = time.time() - overall_start_time
        generator.logger.info(f"Site build completed in {total_time:.6f} seconds.")
        generator.logger.info(f"Total posts loaded: {generator.posts_loaded}")
        generator.logger.info(f"Total routes generated: {generator.routes_generated}")
        generator.logger.info(f"Placeholder routes: {generator.placeholder_routes}")

    except (FolioError, ValueError, IOError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
