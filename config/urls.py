"""
URL configuration for the article validation project.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/articles/", include("articles.urls")),
    path("api/v2/articles/", include("articles.api_urls")),
]
