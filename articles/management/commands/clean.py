from django.core.management.base import BaseCommand
from rich.console import Console
from rich.prompt import Confirm

from articles.models import Article

console = Console()


class Command(BaseCommand):
    help = 'Deletes every stored article'

    def add_arguments(self, parser):
        parser.add_argument('--yes', action='store_true', help='Skip the confirmation prompt')

    def handle(self, *args, **options):
        total = Article.objects.count()
        if not total:
            console.print("[green]✅ Database already empty.[/green]")
            return

        if not options['yes'] and not Confirm.ask(f"Delete all {total} articles?", console=console):
            console.print("[yellow]Aborted.[/yellow]")
            return

        console.print("[cyan]🧹 Cleaning database...[/cyan]")
        deleted, _ = Article.objects.all().delete()
        console.print(f"[green]✅ Deleted {deleted} articles.[/green]")
