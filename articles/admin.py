from django.contrib import admin

from .models import Article


@admin.register(Article)
class ArticleAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "status", "published_at", "updated_at")
    list_filter = ("status",)
    search_fields = ("title", "body")
    readonly_fields = ("created_at", "updated_at", "published_at")
    ordering = ("-created_at",)
