"""Articles app configuration."""

from django.apps import AppConfig


class ArticlesConfig(AppConfig):
    """App configuration for articles."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "articles"
    verbose_name = "Articles"
