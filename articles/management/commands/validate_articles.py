from django.core.management.base import BaseCommand, CommandError

from articles.models import Article, ArticleStatus
from articles.validation import validate_article_payload
from input_validation.errors import ValidationErrors


class Command(BaseCommand):
    help = "Re-run the article validation phase against stored rows and report invalid articles."

    def add_arguments(self, parser):
        parser.add_argument(
            "--status",
            choices=ArticleStatus.values,
            help="Only check articles with this status",
        )
        parser.add_argument(
            "--strict",
            action="store_true",
            help="Exit with an error when any article is invalid",
        )

    def handle(self, *args, **options):
        queryset = Article.objects.order_by("pk")
        if options["status"]:
            queryset = queryset.filter(status=options["status"])

        checked = 0
        invalid = []
        for article in queryset.iterator():
            checked += 1
            errors = ValidationErrors()
            validate_article_payload(
                {
                    "title": article.title,
                    "body": article.body,
                    "status": article.status,
                    "source_url": article.source_url,
                },
                errors,
            )
            if errors:
                invalid.append(article.pk)
                for entry in errors:
                    self.stdout.write(
                        self.style.WARNING(f"Article {article.pk}: {entry.field} [{entry.code}] {entry.message}")
                    )

        if not invalid:
            self.stdout.write(self.style.SUCCESS(f"All articles valid. Articles checked: {checked}"))
            return

        summary = f"{len(invalid)} of {checked} articles failed validation: {', '.join(map(str, invalid))}"
        if options["strict"]:
            raise CommandError(summary)
        self.stdout.write(self.style.ERROR(summary))
