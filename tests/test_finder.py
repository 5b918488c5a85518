"""Tests for articles.services.finder."""

from unittest.mock import Mock

import pytest
import requests

from articles.services.finder import (
    DuckDuckGoLiteSearch,
    GoogleNewsSearch,
    HeuristicSources,
    ScholarSearch,
    SearchStrategy,
    SourceFinder,
    build_source_finder,
)

AI_URLS = [
    'https://arxiv.org/search/?query=',
    'https://venturebeat.com/ai/',
    'https://www.technologyreview.com/topic/artificial-intelligence/',
]
GENERAL_URLS = [
    'https://techcrunch.com/',
    'https://www.theverge.com/tech',
    'https://www.forbes.com/technology/',
]


def session_returning(html):
    response = Mock(text=html)
    session = Mock()
    session.get.return_value = response
    return session


class FixedStrategy(SearchStrategy):
    def __init__(self, name, results):
        self.name = name
        self.results = results
        self.calls = 0

    def search(self, query):
        self.calls += 1
        return list(self.results)


class BrokenStrategy(SearchStrategy):
    name = 'broken'

    def search(self, query):
        raise RuntimeError('parser exploded')


class TestHeuristicSources:
    def test_ai_topic_returns_fixed_ai_sources_in_order(self) -> None:
        results = SourceFinder([HeuristicSources()]).find('How AI is changing support')
        assert len(results) == 3
        assert results[0]['url'].startswith(AI_URLS[0])
        assert 'How%20AI%20is%20changing%20support' in results[0]['url']
        assert [r['url'] for r in results[1:]] == AI_URLS[1:]

    def test_healthcare_ai_topic_is_truncated_to_ai_sources(self) -> None:
        results = HeuristicSources().search('Healthcare AI breakthroughs')
        urls = [r['url'] for r in results]
        assert len(results) == 3
        assert urls[0].startswith(AI_URLS[0])
        assert urls[1:] == AI_URLS[1:]
        assert not any(url in GENERAL_URLS for url in urls)

    def test_health_topic_is_padded_with_general_sources(self) -> None:
        results = HeuristicSources().search('Medical records for clinics')
        urls = [r['url'] for r in results]
        assert urls[0].startswith('https://pubmed.ncbi.nlm.nih.gov/?term=')
        assert urls[1:] == ['https://www.healthcareitnews.com/', 'https://techcrunch.com/']

    def test_unrelated_topic_uses_general_sources(self) -> None:
        results = HeuristicSources().search('Cloud computing trends')
        assert [r['url'] for r in results] == GENERAL_URLS


class TestSourceFinder:
    def test_first_non_empty_strategy_wins(self) -> None:
        empty = FixedStrategy('empty', [])
        hit = FixedStrategy('hit', [{'title': 'A', 'url': 'https://a.example'}])
        never = FixedStrategy('never', [{'title': 'B', 'url': 'https://b.example'}])
        results = SourceFinder([empty, hit, never]).find('topic')
        assert results == [{'title': 'A', 'url': 'https://a.example'}]
        assert never.calls == 0

    def test_caps_results_at_three(self) -> None:
        many = [{'title': f'T{i}', 'url': f'https://{i}.example'} for i in range(8)]
        assert len(SourceFinder([FixedStrategy('many', many)]).find('topic')) == 3

    def test_strategy_errors_fall_through(self) -> None:
        results = SourceFinder([BrokenStrategy(), HeuristicSources()]).find('Cloud computing trends')
        assert [r['url'] for r in results] == GENERAL_URLS

    def test_returns_empty_when_every_strategy_is_empty(self) -> None:
        assert SourceFinder([FixedStrategy('empty', [])]).find('topic') == []

    def test_build_appends_heuristic_last(self) -> None:
        finder = build_source_finder(['scholar', 'google_news'], timeout=3)
        assert [type(s) for s in finder.strategies] == [ScholarSearch, GoogleNewsSearch, HeuristicSources]
        assert finder.strategies[0].timeout == 3

    def test_build_rejects_unknown_engine(self) -> None:
        with pytest.raises(ValueError):
            build_source_finder(['altavista'])


class TestScholarSearch:
    def test_parses_result_blocks(self) -> None:
        html = """
        <div class="gs_ri"><h3 class="gs_rt"><a href="https://papers.example/1">Paper one</a></h3></div>
        <div class="gs_ri"><h3 class="gs_rt"><a href="/relative">Relative link</a></h3></div>
        <div class="gs_ri"><h3 class="gs_rt">[CITATION] No link</h3></div>
        """
        strategy = ScholarSearch(timeout=2, session=session_returning(html))
        assert strategy.search('chatbots') == [{'title': 'Paper one', 'url': 'https://papers.example/1'}]
        args, kwargs = strategy.session.get.call_args
        assert args[0] == 'https://scholar.google.com/scholar?q=chatbots'
        assert kwargs['timeout'] == 2

    def test_network_error_returns_empty(self) -> None:
        session = Mock()
        session.get.side_effect = requests.Timeout('slow')
        assert ScholarSearch(session=session).search('chatbots') == []


class TestDuckDuckGoLiteSearch:
    def test_parses_result_links(self) -> None:
        html = """
        <a class="result-link" href="https://site.example/a">Result A</a>
        <a class="result-link" href="https://duckduckgo.com/ad">Sponsored</a>
        """
        strategy = DuckDuckGoLiteSearch(session=session_returning(html))
        assert strategy.search('q') == [{'title': 'Result A', 'url': 'https://site.example/a'}]

    def test_falls_back_to_table_rows(self) -> None:
        html = """
        <table>
          <tr><td><a href="https://site.example/long">A sufficiently long title</a></td></tr>
          <tr><td><a href="https://site.example/short">Short</a></td></tr>
          <tr><td><a href="https://duckduckgo.com/y">Another sufficiently long title</a></td></tr>
        </table>
        """
        strategy = DuckDuckGoLiteSearch(session=session_returning(html))
        assert strategy.search('q') == [
            {'title': 'A sufficiently long title', 'url': 'https://site.example/long'},
        ]


class TestGoogleNewsSearch:
    def test_resolves_relative_article_links(self) -> None:
        html = """
        <article><a href="./articles/abc123">Headline one</a></article>
        <article><a href="./articles/def456"></a></article>
        <a href="./articles/outside">Not in an article</a>
        """
        strategy = GoogleNewsSearch(session=session_returning(html))
        assert strategy.search('q') == [
            {'title': 'Headline one', 'url': 'https://news.google.com/articles/abc123'},
        ]
