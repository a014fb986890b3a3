"""
Business logic for articles.

Functions here run only after the validation phase succeeded and trust their
input. Failures that depend on stored state (a missing article) are raised as
domain exceptions for the controller to translate.
"""

import logging
from typing import Any, Dict, Optional

from django.db import transaction
from django.db.models import QuerySet

from .models import Article, ArticleStatus

logger = logging.getLogger(__name__)


class ArticleNotFound(Exception):
    def __init__(self, article_id: int):
        self.article_id = article_id
        super().__init__(f"Article {article_id} does not exist")


def get_article(article_id: int) -> Article:
    try:
        return Article.objects.get(pk=article_id)
    except Article.DoesNotExist:
        raise ArticleNotFound(article_id)


def list_articles(status: Optional[str] = None) -> QuerySet:
    queryset = Article.objects.all()
    if status:
        queryset = queryset.filter(status=status)
    return queryset


@transaction.atomic
def create_article(data: Dict[str, Any]) -> Article:
    article = Article(
        title=data["title"],
        body=data["body"],
        source_url=data.get("source_url", ""),
    )
    article.mark_status(data.get("status", ArticleStatus.DRAFT))
    article.save()

    logger.info(f"Created article {article.pk} with status {article.status}")
    return article


@transaction.atomic
def update_article(article_id: int, data: Dict[str, Any]) -> Article:
    article = get_article(article_id)

    for field in ("title", "body", "source_url"):
        if field in data:
            setattr(article, field, data[field])
    if "status" in data:
        article.mark_status(data["status"])

    article.save()
    logger.info(f"Updated article {article.pk}: {', '.join(sorted(data))}")
    return article


@transaction.atomic
def change_status(article_id: int, status: str) -> Article:
    """
    Move an article to ``status``.

    Moving to the current status is a no-op. The first move to Published
    stamps ``published_at``.
    """
    article = get_article(article_id)
    if article.status == status:
        return article

    previous = article.status
    article.mark_status(status)
    article.save(update_fields=["status", "published_at", "updated_at"])

    logger.info(f"Article {article.pk} status changed: {previous} -> {status}")
    return article
