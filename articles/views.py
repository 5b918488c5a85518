import json
import logging
from django.core.exceptions import ValidationError
from django.http import Http404, HttpResponse, JsonResponse
from django.shortcuts import render
from django.template.loader import render_to_string
from django.utils.dateparse import parse_datetime
from django.utils.text import slugify
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from .models import Article
from .services.ingest import save_new_articles
from .services.pipeline import build_crawler, build_rewriter
from .services.rewriter import ArticleAlreadyCompleted, ArticleBusy, ArticleNotFound

logger = logging.getLogger(__name__)

# status only moves through the rewrite pipeline.
EDITABLE_FIELDS = ['title', 'original_content', 'updated_content', 'published_date',
                   'references', 'error']


def not_found():
    return JsonResponse({'success': False, 'message': 'Article not found'}, status=404)


def index(request):
    """Renders the dashboard."""
    articles = Article.objects.all()
    context = {
        'articles': articles,
        'counts': {
            status: articles.filter(status=status).count()
            for status, _ in Article.STATUS_CHOICES
        },
    }
    return render(request, 'articles/index.html', context)


@require_http_methods(["GET"])
def article_list(request):
    articles = [article.to_dict() for article in Article.objects.all()]
    return JsonResponse(articles, safe=False)


@csrf_exempt
@require_http_methods(["GET", "POST"])
def trigger_scrape(request):
    """Crawls the listing page and stores articles not seen before."""
    try:
        candidates = build_crawler().crawl()
        saved_count = save_new_articles(candidates)
    except Exception as e:
        logger.error(f"Scrape failed: {e}", exc_info=True)
        return JsonResponse({'success': False, 'error': str(e)}, status=500)

    return JsonResponse({
        'success': True,
        'message': f'Scraping complete. Added {saved_count} new articles.',
        'total_found': len(candidates),
    })


@csrf_exempt
@require_http_methods(["POST"])
def process_article(request, pk):
    """
    Runs the rewrite pipeline for one article.
    Rejections (missing, completed, in flight) leave the article untouched.
    """
    try:
        result = build_rewriter().process(pk)
    except ArticleNotFound as e:
        return JsonResponse({'success': False, 'message': e.message}, status=404)
    except ArticleAlreadyCompleted as e:
        return JsonResponse({'success': False, 'message': e.message}, status=400)
    except ArticleBusy as e:
        return JsonResponse({'success': False, 'message': e.message}, status=409)

    if not result.success:
        return JsonResponse({
            'success': False,
            'message': result.error,
            'article': result.article.to_dict(),
        }, status=500)

    return JsonResponse({
        'success': True,
        'message': 'Article processed successfully',
        'article': result.article.to_dict(),
    })


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
def article_detail(request, pk):
    try:
        article = Article.objects.get(pk=pk)
    except Article.DoesNotExist:
        return not_found()

    if request.method == 'GET':
        return JsonResponse(article.to_dict())

    if request.method == 'DELETE':
        article.delete()
        return JsonResponse({'success': True, 'message': 'Article deleted'})

    try:
        payload = json.loads(request.body or b'{}')
    except json.JSONDecodeError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON body'}, status=400)
    if not isinstance(payload, dict):
        return JsonResponse({'success': False, 'error': 'Expected a JSON object'}, status=400)
    if 'status' in payload:
        return JsonResponse({'success': False, 'error': 'status cannot be edited directly'}, status=400)

    for field in EDITABLE_FIELDS:
        if field not in payload:
            continue
        value = payload[field]
        if field == 'published_date' and value:
            try:
                value = parse_datetime(str(value))
            except ValueError:
                value = None
            if value is None:
                return JsonResponse({'success': False, 'error': 'Invalid published_date'}, status=400)
        if field == 'error' and value is None:
            value = ''
        setattr(article, field, value)

    try:
        article.full_clean()
    except ValidationError as e:
        return JsonResponse({'success': False, 'error': e.message_dict}, status=400)

    article.save()
    return JsonResponse({'success': True, 'data': article.to_dict()})


@require_http_methods(["GET"])
def export_article(request, pk):
    """Downloads a completed article as a standalone HTML page."""
    try:
        article = Article.objects.get(pk=pk, status=Article.STATUS_COMPLETED)
    except Article.DoesNotExist:
        raise Http404("No completed article with this id")

    html = render_to_string('articles/export.html', {'article': article})
    filename = f"{slugify(article.title)[:80] or 'article'}.html"
    response = HttpResponse(html, content_type='text/html; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response
