import logging
from django.db import IntegrityError, transaction

from articles.models import Article

logger = logging.getLogger(__name__)


def save_new_articles(candidates):
    """
    Stores crawl candidates as pending articles, skipping any whose
    ``original_url`` is already in the database.

    Returns the number of rows created.
    """
    created_count = 0
    for item in candidates:
        try:
            with transaction.atomic():
                _, created = Article.objects.get_or_create(
                    original_url=item['original_url'],
                    defaults={
                        'title': item['title'][:500],
                        'original_content': item['original_content'],
                        'published_date': item.get('published_date'),
                        'status': Article.STATUS_PENDING,
                    }
                )
        except IntegrityError:
            # Inserted by a concurrent crawl between lookup and insert.
            created = False

        if created:
            created_count += 1
        else:
            logger.info("Already stored: %s", item['original_url'])

    return created_count
