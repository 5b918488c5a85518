"""Tests for the scrape, rewrite and clean management commands."""

from unittest.mock import patch

import pytest
from django.core.management import CommandError, call_command

from articles.models import Article
from articles.services.rewriter import ArticleAlreadyCompleted, RewriteResult

pytestmark = pytest.mark.django_db


@patch('articles.management.commands.scrape.build_crawler')
def test_scrape_stores_new_articles(mock_build) -> None:
    mock_build.return_value.listing_url = 'https://beyondchats.com/blogs/'
    mock_build.return_value.crawl.return_value = [
        {'title': 'A freshly scraped article', 'original_url': 'https://beyondchats.com/blogs/a/',
         'original_content': 'Body'},
    ]
    call_command('scrape', '--max', '3')
    assert Article.objects.get().original_url == 'https://beyondchats.com/blogs/a/'
    config = mock_build.call_args[0][0]
    assert config['MAX_LISTING_ARTICLES'] == 3


@patch('articles.management.commands.rewrite.build_rewriter')
def test_rewrite_without_pending_articles_does_nothing(mock_build) -> None:
    call_command('rewrite')
    mock_build.assert_not_called()


@patch('articles.management.commands.rewrite.build_rewriter')
def test_rewrite_processes_oldest_pending_first(mock_build, make_article) -> None:
    older = make_article()
    newer = make_article()
    make_article(status=Article.STATUS_COMPLETED)
    mock_build.return_value.process.side_effect = (
        lambda pk: RewriteResult(Article.objects.get(pk=pk), False, 'AI generation failed'))

    call_command('rewrite', '--limit', '5')

    processed = [c.args[0] for c in mock_build.return_value.process.call_args_list]
    assert processed == [older.pk, newer.pk]


@patch('articles.management.commands.rewrite.build_rewriter')
def test_rewrite_single_rejected_article_errors(mock_build, make_article) -> None:
    article = make_article(status=Article.STATUS_COMPLETED)
    mock_build.return_value.process.side_effect = ArticleAlreadyCompleted(article.pk)
    with pytest.raises(CommandError):
        call_command('rewrite', '--id', str(article.pk))


def test_clean_deletes_everything(make_article) -> None:
    make_article()
    make_article()
    call_command('clean', '--yes')
    assert not Article.objects.exists()
