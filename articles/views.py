"""
Article controllers.

Each view is wrapped in a validation phase. By the time the view body runs,
``request.validated_data`` holds cleaned input and the view only calls
business logic and shapes the response.
"""

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from input_validation.decorators import validation_phase

from . import services
from .validation import (
    validate_article_filters,
    validate_article_lookup,
    validate_article_payload,
    validate_article_update,
    validate_status_change,
)


def _not_found(exc: services.ArticleNotFound) -> JsonResponse:
    return JsonResponse(
        {"error": "Not found", "message": str(exc)},
        status=404,
    )


@csrf_exempt
@require_http_methods(["GET", "POST"])
def article_collection(request):
    if request.method == "POST":
        return create_article(request)
    return list_articles(request)


@validation_phase(validate_article_filters)
def list_articles(request):
    articles = services.list_articles(status=request.validated_data.get("status"))
    return JsonResponse({"results": [article.to_dict() for article in articles]})


@validation_phase(validate_article_payload)
def create_article(request):
    article = services.create_article(request.validated_data)
    return JsonResponse(article.to_dict(), status=201)


@csrf_exempt
@require_http_methods(["GET", "PATCH"])
def article_detail(request, article_id):
    if request.method == "PATCH":
        return update_article(request, article_id=article_id)
    return retrieve_article(request, article_id=article_id)


@validation_phase(validate_article_lookup)
def retrieve_article(request, article_id):
    try:
        article = services.get_article(request.validated_data["id"])
    except services.ArticleNotFound as exc:
        return _not_found(exc)
    return JsonResponse(article.to_dict())


@validation_phase(validate_article_update)
def update_article(request, article_id):
    data = dict(request.validated_data)
    pk = data.pop("id")
    try:
        article = services.update_article(pk, data)
    except services.ArticleNotFound as exc:
        return _not_found(exc)
    return JsonResponse(article.to_dict())


@csrf_exempt
@require_http_methods(["POST"])
@validation_phase(validate_status_change)
def article_status(request, article_id):
    try:
        article = services.change_status(
            request.validated_data["id"], request.validated_data["status"]
        )
    except services.ArticleNotFound as exc:
        return _not_found(exc)
    return JsonResponse(article.to_dict())
