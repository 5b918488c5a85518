"""
Builds the pipeline collaborators from ``settings.REWRITER``.

Callers construct these once (per command run or request) and pass them
down; nothing here keeps module-level client state.
"""
from django.conf import settings

from .crawler import ListingCrawler
from .extractor import ContentExtractor, make_fetcher
from .finder import build_source_finder
from .generation import GenerationClient, build_providers
from .rewriter import ArticleRewriter

LISTING_MAX_CHARS = 3000
LISTING_MIN_CHARS = 100
LISTING_FALLBACK_CHARS = 200

SOURCE_MAX_CHARS = 6000
SOURCE_MIN_CHARS = 300


def get_config(overrides=None):
    config = dict(settings.REWRITER)
    if overrides:
        config.update(overrides)
    return config


def build_crawler(config=None):
    config = config or get_config()
    fetcher = make_fetcher(config['FETCH_STRATEGY'], config['FETCH_TIMEOUT'])
    extractor = ContentExtractor(fetcher, max_chars=LISTING_MAX_CHARS, min_chars=LISTING_MIN_CHARS,
                                 fallback_chars=LISTING_FALLBACK_CHARS)
    return ListingCrawler(
        config['LISTING_URL'],
        extractor,
        article_path=config['ARTICLE_PATH'],
        max_articles=config['MAX_LISTING_ARTICLES'],
        delay=config['LISTING_DELAY'],
        timeout=config['LISTING_TIMEOUT'],
    )


def build_rewriter(config=None):
    config = config or get_config()
    fetcher = make_fetcher(config['FETCH_STRATEGY'], config['FETCH_TIMEOUT'])
    return ArticleRewriter(
        finder=build_source_finder(config['SEARCH_ENGINES'], timeout=config['SEARCH_TIMEOUT']),
        extractor=ContentExtractor(fetcher, max_chars=SOURCE_MAX_CHARS, min_chars=SOURCE_MIN_CHARS),
        generator=GenerationClient(build_providers(config)),
        delay=config['SOURCE_DELAY'],
        claim_timeout=config['CLAIM_TIMEOUT'],
    )
