import logging
import re
import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

USER_AGENT = ('Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
              '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36')

BROWSER_HEADERS = {
    'User-Agent': USER_AGENT,
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    'Accept-Language': 'en-US,en;q=0.9',
    'Referer': 'https://www.google.com/',
}

NOISE_SELECTORS = [
    'script', 'style', 'noscript', 'nav', 'header', 'footer', 'iframe', 'aside',
    '.sidebar', '.menu', '.ad', '.advertisement', '.comments',
]

CONTENT_SELECTORS = [
    'main',
    '.main-content',
    '.content',
    '.post-content',
    '.article-content',
    '.blog-content',
    '.entry-content',
    '.story-body',
    '[role="main"]',
    '#main-content',
]

PARAGRAPH_MIN_CHARS = 50


class StaticFetcher:
    """Plain HTTP GET with browser-like headers."""

    def __init__(self, timeout=20, headers=None, max_redirects=5):
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(headers or BROWSER_HEADERS)
        self.session.max_redirects = max_redirects

    def fetch(self, url):
        try:
            resp = self.session.get(url, timeout=self.timeout, allow_redirects=True)
            resp.raise_for_status()
        except requests.HTTPError as e:
            logger.warning("HTTP %s: %s", e.response.status_code, url)
            return None
        except requests.RequestException as e:
            logger.warning("Fetch failed for %s: %s", url, e)
            return None
        return resp.text


class RenderedFetcher:
    """
    Loads the page in headless Chromium so client-side rendered
    content is present in the returned DOM.
    """

    def __init__(self, timeout=20, user_agent=USER_AGENT, referer=BROWSER_HEADERS['Referer']):
        # Playwright ships as the optional "browser" extra.
        from playwright.sync_api import Error, sync_playwright

        self._sync_playwright = sync_playwright
        self._error = Error
        self.timeout = timeout
        self.user_agent = user_agent
        self.referer = referer

    def fetch(self, url):
        try:
            with self._sync_playwright() as p:
                browser = p.chromium.launch(headless=True)
                try:
                    page = browser.new_page(user_agent=self.user_agent,
                                            extra_http_headers={'Referer': self.referer})
                    page.goto(url, timeout=self.timeout * 1000, wait_until='domcontentloaded')
                    return page.content()
                finally:
                    browser.close()
        except self._error as e:
            logger.warning("Browser fetch failed for %s: %s", url, e)
            return None


def make_fetcher(strategy, timeout):
    if strategy == 'static':
        return StaticFetcher(timeout=timeout)
    if strategy == 'rendered':
        return RenderedFetcher(timeout=timeout)
    raise ValueError(f"Unknown fetch strategy: {strategy!r}")


def normalize_whitespace(text):
    """Collapses spaces and tabs; line breaks survive, with at most one blank line in a row."""
    text = re.sub(r'[^\S\n]+', ' ', text)
    text = re.sub(r' *\n *', '\n', text)
    text = re.sub(r'\n{3,}', '\n\n', text)
    return text.strip()


def strip_boilerplate(soup):
    for tag in soup.select(', '.join(NOISE_SELECTORS)):
        # Children of an already removed element come back decomposed.
        if not tag.decomposed:
            tag.decompose()


def _joined_text(elements):
    return normalize_whitespace(' '.join(el.get_text(' ') for el in elements))


class ContentExtractor:
    """
    Fetches a page and pulls out its main text.

    Strategies run in order, each only while the text found so far is
    shorter than ``fallback_chars``: the ``<article>`` element, the longest
    of the common content containers, then every paragraph longer than
    50 characters. The result is capped at ``max_chars`` and counts as a
    success only when longer than ``min_chars``; otherwise ``extract``
    returns an empty string.
    """

    def __init__(self, fetcher, max_chars=6000, min_chars=300, fallback_chars=None):
        self.fetcher = fetcher
        self.max_chars = max_chars
        self.min_chars = min_chars
        self.fallback_chars = min_chars if fallback_chars is None else fallback_chars

    def extract(self, url):
        logger.info("Fetching: %s", url)
        html = self.fetcher.fetch(url)
        if not html:
            return ''

        try:
            content = self.extract_from_html(html)
        except Exception as e:
            logger.warning("Could not parse %s: %s", url, e)
            return ''

        if len(content) > self.min_chars:
            logger.info("Extracted %d characters from %s", len(content), url)
            return content

        logger.info("Content too short (%d characters): %s", len(content), url)
        return ''

    def extract_from_html(self, html):
        soup = BeautifulSoup(html, 'html.parser')
        strip_boilerplate(soup)

        # 1. Semantic article container
        content = ''
        articles = soup.find_all('article')
        if articles:
            content = _joined_text(articles)

        # 2. Longest common content container
        if len(content) < self.fallback_chars:
            for selector in CONTENT_SELECTORS:
                text = _joined_text(soup.select(selector))
                if len(text) > len(content):
                    content = text

        # 3. Substantial paragraphs
        if len(content) < self.fallback_chars:
            paragraphs = [p.get_text(' ', strip=True) for p in soup.find_all('p')]
            text = normalize_whitespace(
                '\n\n'.join(p for p in paragraphs if len(p) > PARAGRAPH_MIN_CHARS))
            if len(text) > len(content):
                content = text

        return content[:self.max_chars].rstrip()
