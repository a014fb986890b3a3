"""
URL configuration for the REST framework controllers.
"""

from django.urls import path

from . import api

urlpatterns = [
    path("", api.ArticleListCreateAPIView.as_view(), name="api_article_collection"),
    path("<str:article_id>/status/", api.ArticleStatusAPIView.as_view(), name="api_article_status"),
]
