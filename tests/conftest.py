import pytest

from articles.models import Article


class StubFetcher:
    def __init__(self, pages=None):
        self.pages = pages or {}
        self.requested = []

    def fetch(self, url):
        self.requested.append(url)
        return self.pages.get(url)


class StubFinder:
    def __init__(self, results):
        self.results = results
        self.topics = []

    def find(self, topic):
        self.topics.append(topic)
        return list(self.results)


class StubExtractor:
    def __init__(self, contents):
        self.contents = contents
        self.requested = []

    def extract(self, url):
        self.requested.append(url)
        return self.contents.get(url, '')


class StubGenerator:
    def __init__(self, text):
        self.text = text
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        return self.text


@pytest.fixture
def stubs():
    class Stubs:
        fetcher = StubFetcher
        finder = StubFinder
        extractor = StubExtractor
        generator = StubGenerator
    return Stubs


@pytest.fixture
def make_article(db):
    def _make(**fields):
        defaults = {
            'title': 'How chatbots change customer support',
            'original_url': f'https://beyondchats.com/blogs/article-{Article.objects.count() + 1}/',
            'original_content': 'Original text of the article.',
        }
        defaults.update(fields)
        return Article.objects.create(**defaults)
    return _make

