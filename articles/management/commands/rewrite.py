from django.core.management.base import BaseCommand, CommandError
from rich.console import Console

from articles.models import Article
from articles.services.pipeline import build_rewriter
from articles.services.rewriter import RewriteRejected

console = Console()


class Command(BaseCommand):
    help = 'Rewrites pending articles with web sources and an LLM'

    def add_arguments(self, parser):
        parser.add_argument('--id', type=int, dest='article_id', help='Process this article only')
        parser.add_argument('--limit', type=int, default=1,
                            help='Number of pending articles to process (oldest first)')

    def handle(self, *args, **options):
        if options['article_id'] is not None:
            article_ids = [options['article_id']]
        else:
            article_ids = list(
                Article.objects.filter(status=Article.STATUS_PENDING)
                .order_by('created_at', 'id')
                .values_list('id', flat=True)[:options['limit']]
            )

        if not article_ids:
            console.print("[green]✅ No pending articles found.[/green]")
            return

        rewriter = build_rewriter()
        failures = 0

        try:
            for article_id in article_ids:
                console.rule(f"[bold blue]🚀 Processing article {article_id}[/bold blue]")
                try:
                    result = rewriter.process(article_id)
                except RewriteRejected as e:
                    console.print(f"[yellow]⏭️  Skipped:[/yellow] {e.message}")
                    failures += 1
                    continue

                if result.success:
                    console.print(
                        f"[green]✨ Success:[/green] {result.article.title} "
                        f"[dim]({len(result.article.updated_content)} chars, "
                        f"{len(result.article.references)} sources)[/dim]")
                else:
                    console.print(f"[red]❌ Failed:[/red] {result.article.title} [dim]({result.error})[/dim]")
                    failures += 1
        except KeyboardInterrupt:
            console.print("\n[yellow]👋 Shutting down...[/yellow]")
            return

        if failures and options['article_id'] is not None:
            raise CommandError(f"Article {options['article_id']} was not rewritten")
