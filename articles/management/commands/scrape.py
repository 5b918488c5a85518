from django.core.management.base import BaseCommand
from rich.console import Console

from articles.services.ingest import save_new_articles
from articles.services.pipeline import build_crawler, get_config

console = Console()


class Command(BaseCommand):
    help = 'Scrapes the blog listing page and stores new articles as pending'

    def add_arguments(self, parser):
        parser.add_argument('--url', type=str, help='Listing page to crawl (overrides LISTING_URL)')
        parser.add_argument('--max', type=int, help='Max articles to scrape from the listing')

    def handle(self, *args, **options):
        overrides = {}
        if options.get('url'):
            overrides['LISTING_URL'] = options['url']
        if options.get('max'):
            overrides['MAX_LISTING_ARTICLES'] = options['max']

        crawler = build_crawler(get_config(overrides))
        console.rule(f"[bold cyan]🕷️ Starting Crawl: {crawler.listing_url}[/bold cyan]")

        try:
            candidates = crawler.crawl()
        except KeyboardInterrupt:
            console.print("\n[yellow]👋 Interrupted, nothing saved.[/yellow]")
            return

        if not candidates:
            console.print("[yellow]⚠️ No articles found on the listing page.[/yellow]")
            return

        for item in candidates:
            console.print(f"[dim]{len(item['original_content'])} chars[/dim] {item['title']}")

        saved_count = save_new_articles(candidates)
        console.rule(
            f"[bold green]Crawl Complete: found {len(candidates)}, added {saved_count} new articles.[/bold green]")
