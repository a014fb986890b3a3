"""
Article model.
"""

from django.db import models
from django.utils import timezone


SOURCE_URL_MAX_LENGTH = 2048


class ArticleStatus(models.TextChoices):
    """Closed set of article statuses. Values are case-sensitive."""

    DRAFT = "Draft", "Draft"
    PUBLISHED = "Published", "Published"
    PRIVATE = "Private", "Private"


class Article(models.Model):
    """
    An article managed through the API.

    ``published_at`` records the first time the article became Published and
    is never cleared afterwards.
    """

    title = models.CharField(max_length=200)
    body = models.TextField()
    source_url = models.URLField(max_length=SOURCE_URL_MAX_LENGTH, blank=True, default="")
    status = models.CharField(
        max_length=16,
        choices=ArticleStatus.choices,
        default=ArticleStatus.DRAFT,
        db_index=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    published_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"{self.title} ({self.status})"

    def mark_status(self, status: str) -> None:
        self.status = status
        if status == ArticleStatus.PUBLISHED and self.published_at is None:
            self.published_at = timezone.now()

    def to_dict(self):
        return {
            "id": self.pk,
            "title": self.title,
            "body": self.body,
            "source_url": self.source_url,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "published_at": self.published_at.isoformat() if self.published_at else None,
        }
