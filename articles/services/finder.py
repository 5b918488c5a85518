import logging
import requests
from bs4 import BeautifulSoup
from urllib.parse import quote, urljoin

logger = logging.getLogger(__name__)

SEARCH_HEADERS = {'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36'}
MAX_SOURCES = 3


def encode_query(query):
    return quote(query, safe="!'()*")


class SearchStrategy:
    name = 'search'

    def search(self, query):
        raise NotImplementedError


class WebSearchStrategy(SearchStrategy):
    """A search engine results page fetched over HTTP and parsed with BeautifulSoup."""

    url_template = None

    def __init__(self, timeout=10, session=None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def search(self, query):
        logger.info("Trying %s...", self.name)
        url = self.url_template.format(query=encode_query(query))
        try:
            resp = self.session.get(url, headers=SEARCH_HEADERS, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.warning("%s failed: %s", self.name, e)
            return []
        return self.parse(resp.text)

    def parse(self, html):
        raise NotImplementedError


class ScholarSearch(WebSearchStrategy):
    name = 'Google Scholar'
    url_template = 'https://scholar.google.com/scholar?q={query}'

    def parse(self, html):
        soup = BeautifulSoup(html, 'html.parser')
        results = []
        for block in soup.select('.gs_ri'):
            heading = block.select_one('.gs_rt')
            link = block.select_one('.gs_rt a[href]')
            if heading is None or link is None:
                continue
            title = heading.get_text(' ', strip=True)
            url = link['href']
            if title and url.startswith('http'):
                results.append({'title': title, 'url': url})
        return results


class DuckDuckGoLiteSearch(WebSearchStrategy):
    name = 'DuckDuckGo Lite'
    url_template = 'https://lite.duckduckgo.com/lite/?q={query}'

    def parse(self, html):
        soup = BeautifulSoup(html, 'html.parser')
        results = []
        for link in soup.select('a.result-link[href]'):
            title = link.get_text(' ', strip=True)
            url = link['href']
            if title and url.startswith('http') and 'duckduckgo' not in url:
                results.append({'title': title, 'url': url})

        # Layout without result-link classes: scan table rows
        if not results:
            for row in soup.find_all('tr'):
                for link in row.select('a[href^="http"]'):
                    title = link.get_text(' ', strip=True)
                    url = link['href']
                    if 'duckduckgo.com' not in url and len(title) > 10:
                        results.append({'title': title, 'url': url})
        return results


class GoogleNewsSearch(WebSearchStrategy):
    name = 'Google News'
    url_template = 'https://news.google.com/search?q={query}'
    origin = 'https://news.google.com/'

    def parse(self, html):
        soup = BeautifulSoup(html, 'html.parser')
        results = []
        for link in soup.select('article a[href^="./articles/"]'):
            title = link.get_text(' ', strip=True)
            if title:
                results.append({'title': title, 'url': urljoin(self.origin, link['href'])})
        return results


class HeuristicSources(SearchStrategy):
    """Fixed reference sites picked by keywords in the topic. Never empty."""

    name = 'reliable sources'

    def search(self, query):
        logger.info("Building URLs from reliable sources...")
        topic = query.lower()
        encoded = encode_query(query)
        results = []

        if 'ai' in topic or 'artificial intelligence' in topic:
            results += [
                {'title': 'AI Research - arXiv',
                 'url': f'https://arxiv.org/search/?query={encoded}&searchtype=all'},
                {'title': 'AI News - VentureBeat',
                 'url': 'https://venturebeat.com/ai/'},
                {'title': 'AI Technology - MIT Technology Review',
                 'url': 'https://www.technologyreview.com/topic/artificial-intelligence/'},
            ]

        if 'health' in topic or 'medical' in topic:
            results += [
                {'title': 'Healthcare Research - PubMed',
                 'url': f'https://pubmed.ncbi.nlm.nih.gov/?term={encoded}'},
                {'title': 'Medical News - Healthcare IT News',
                 'url': 'https://www.healthcareitnews.com/'},
            ]

        if len(results) < MAX_SOURCES:
            results += [
                {'title': 'Technology News - TechCrunch',
                 'url': 'https://techcrunch.com/'},
                {'title': 'Tech Articles - The Verge',
                 'url': 'https://www.theverge.com/tech'},
                {'title': 'Industry Analysis - Forbes Technology',
                 'url': 'https://www.forbes.com/technology/'},
            ]

        logger.info("Built %d source URLs", len(results))
        return results[:MAX_SOURCES]


SEARCH_ENGINES = {
    'scholar': ScholarSearch,
    'duckduckgo': DuckDuckGoLiteSearch,
    'google_news': GoogleNewsSearch,
}


class SourceFinder:
    """Runs the strategies in order and returns the first non-empty result, capped."""

    def __init__(self, strategies, max_results=MAX_SOURCES):
        self.strategies = list(strategies)
        self.max_results = max_results

    def find(self, topic):
        logger.info('Searching for: "%s"', topic)
        for strategy in self.strategies:
            try:
                results = strategy.search(topic)
            except Exception as e:
                logger.warning("%s failed: %s", strategy.name, e)
                continue
            if results:
                logger.info("Found %d results from %s", len(results), strategy.name)
                return results[:self.max_results]
        return []


def build_source_finder(engines, timeout=10):
    unknown = [name for name in engines if name not in SEARCH_ENGINES]
    if unknown:
        raise ValueError(f"Unknown search engines: {', '.join(unknown)}")

    session = requests.Session()
    strategies = [SEARCH_ENGINES[name](timeout=timeout, session=session) for name in engines]
    strategies.append(HeuristicSources())
    return SourceFinder(strategies)
