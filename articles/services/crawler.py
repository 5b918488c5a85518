import logging
import time
import requests
from bs4 import BeautifulSoup
from urllib.parse import urljoin, urlparse

from .extractor import BROWSER_HEADERS

logger = logging.getLogger(__name__)

PLACEHOLDER_CONTENT = 'Content fetch pending'
MIN_TITLE_CHARS = 20


def site_origin(url):
    parts = urlparse(url)
    return f"{parts.scheme}://{parts.netloc}"


class ListingCrawler:
    """
    Enumerates article links on the blog listing page and scrapes the
    oldest ``max_articles`` of them into pending article candidates.

    The crawler does not touch the database; ``ingest.save_new_articles``
    filters out URLs that are already stored.
    """

    def __init__(self, listing_url, extractor, article_path='/blogs/', max_articles=5,
                 delay=1.0, timeout=30, session=None):
        self.listing_url = listing_url
        self.extractor = extractor
        self.article_path = article_path
        self.max_articles = max_articles
        self.delay = delay
        self.timeout = timeout
        self.session = session or requests.Session()
        self.origin = site_origin(listing_url)

    def fetch_listing(self):
        try:
            resp = self.session.get(self.listing_url, headers=BROWSER_HEADERS, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error("Could not fetch listing page %s: %s", self.listing_url, e)
            return None
        return resp.text

    def collect_links(self, html):
        soup = BeautifulSoup(html, 'html.parser')
        links = {}
        for a in soup.find_all('a', href=True):
            href = a['href']
            title = ' '.join(a.get_text(' ').split())

            if self.article_path not in href or '#' in href:
                continue
            if len(title) <= MIN_TITLE_CHARS or 'read more' in title.lower():
                continue

            url = urljoin(self.origin + '/', href)
            # First occurrence wins; dicts keep insertion order.
            links.setdefault(url, {'title': title, 'url': url})

        return list(links.values())

    def scrape_article(self, link):
        content = self.extractor.extract(link['url'])
        if not content:
            logger.warning("Could not extract content: %s", link['url'])
            content = PLACEHOLDER_CONTENT
        return {
            'title': link['title'],
            'original_url': link['url'],
            'original_content': content,
        }

    def crawl(self):
        html = self.fetch_listing()
        if not html:
            return []

        links = self.collect_links(html)
        logger.info("Found %d unique article links", len(links))

        # Listing pages are newest first
        selected = list(reversed(links))[:self.max_articles]

        candidates = []
        for i, link in enumerate(selected, start=1):
            logger.info("[%d/%d] Scraping: %s", i, len(selected), link['title'][:50])
            candidates.append(self.scrape_article(link))
            if i < len(selected):
                time.sleep(self.delay)

        logger.info("Scraped %d articles", len(candidates))
        return candidates
