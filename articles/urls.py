"""
URL configuration for the article controllers.

Ids are captured as plain strings so a malformed id reaches the validation
phase and gets a 400 instead of a routing 404.
"""

from django.urls import path

from . import views

urlpatterns = [
    path("", views.article_collection, name="article_collection"),
    path("<str:article_id>/", views.article_detail, name="article_detail"),
    path("<str:article_id>/status/", views.article_status, name="article_status"),
]
