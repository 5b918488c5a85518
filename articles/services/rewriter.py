import logging
import re
import time
from collections import namedtuple
from datetime import timedelta
from django.db.models import Q
from django.utils import timezone

from articles.models import Article
from .prompts import get_rewrite_prompt

logger = logging.getLogger(__name__)

MIN_SOURCE_CHARS = 300

ERROR_NO_RESULTS = 'No search results found'
ERROR_EXTRACTION = 'Content extraction failed'
ERROR_GENERATION = 'AI generation failed'

RewriteResult = namedtuple('RewriteResult', ['article', 'success', 'error'])


class RewriteRejected(Exception):
    """The article cannot be processed right now. Nothing is persisted."""

    message = 'Article cannot be processed'

    def __init__(self, article_id, message=None):
        self.article_id = article_id
        if message:
            self.message = message
        super().__init__(self.message)


class ArticleNotFound(RewriteRejected):
    message = 'Article not found'


class ArticleAlreadyCompleted(RewriteRejected):
    message = 'Article already processed'


class ArticleBusy(RewriteRejected):
    message = 'Article is already being processed'


def strip_code_fences(text):
    text = re.sub(r'```html', '', text, flags=re.IGNORECASE)
    return text.replace('```', '').strip()


class ArticleRewriter:
    """
    Rewrites one article end to end: find sources for its title, scrape
    them, ask the LLM for a new HTML body and store the outcome.

    Every run ends with the article persisted as ``completed`` or
    ``failed``; only business-rule rejections raise (``RewriteRejected``).
    """

    def __init__(self, finder, extractor, generator, delay=1.5, claim_timeout=900):
        self.finder = finder
        self.extractor = extractor
        self.generator = generator
        self.delay = delay
        self.claim_timeout = claim_timeout

    def claim(self, article_id):
        now = timezone.now()
        stale_before = now - timedelta(seconds=self.claim_timeout)
        claimed = (
            Article.objects
            .filter(pk=article_id)
            .exclude(status=Article.STATUS_COMPLETED)
            .filter(Q(claimed_at__isnull=True) | Q(claimed_at__lt=stale_before))
            .update(claimed_at=now)
        )
        if claimed:
            return Article.objects.get(pk=article_id)

        try:
            article = Article.objects.get(pk=article_id)
        except Article.DoesNotExist:
            raise ArticleNotFound(article_id)
        if article.is_completed:
            raise ArticleAlreadyCompleted(article_id)
        raise ArticleBusy(article_id)

    def process(self, article_id):
        article = self.claim(article_id)
        logger.info('Processing: "%s"', article.title)
        try:
            return self._rewrite(article)
        except Exception as e:
            logger.exception("Processing error for article %s", article.pk)
            return self._fail(article, f"Processing failed: {e}"[:500])

    def gather_sources(self, results):
        valid_sources = []
        for i, result in enumerate(results, start=1):
            logger.info("[%d/%d] %s", i, len(results), result['url'])
            content = self.extractor.extract(result['url'])
            if len(content) > MIN_SOURCE_CHARS:
                valid_sources.append({'title': result['title'], 'url': result['url'], 'content': content})
            else:
                logger.info("Skipped %s", result['url'])

            if i < len(results):
                time.sleep(self.delay)
        return valid_sources

    def _rewrite(self, article):
        # 1. Search for sources
        results = self.finder.find(article.title)
        if not results:
            return self._fail(article, ERROR_NO_RESULTS)
        logger.info("Found %d sources", len(results))

        # 2. Scrape content from sources
        valid_sources = self.gather_sources(results)
        if not valid_sources:
            return self._fail(article, ERROR_EXTRACTION)
        logger.info("Scraped %d sources", len(valid_sources))

        # 3. Generate the new body
        prompt = get_rewrite_prompt(article.title, valid_sources)
        generated = self.generator.generate(prompt)
        cleaned = strip_code_fences(generated) if generated else ''
        if not cleaned:
            return self._fail(article, ERROR_GENERATION)

        # 4. Save results
        article.updated_content = cleaned
        article.references = [{'title': s['title'], 'url': s['url']} for s in valid_sources]
        article.status = Article.STATUS_COMPLETED
        article.error = ''
        article.claimed_at = None
        article.save(update_fields=['updated_content', 'references', 'status', 'error',
                                    'claimed_at', 'updated_at'])
        logger.info("Article %s processed successfully (%d characters, %d sources)",
                    article.pk, len(cleaned), len(valid_sources))
        return RewriteResult(article, True, None)

    def _fail(self, article, error):
        logger.error("Article %s failed: %s", article.pk, error)
        article.status = Article.STATUS_FAILED
        article.error = error
        article.claimed_at = None
        article.save(update_fields=['status', 'error', 'claimed_at', 'updated_at'])
        return RewriteResult(article, False, error)
