"""
REST framework controllers for articles.

Same contract as ``articles.views``: validate, answer 400 with the full error
list on failure, otherwise hand cleaned data to ``articles.services``.
"""

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from input_validation.errors import ValidationErrors
from input_validation.validators import reject_repeated

from . import services
from .serializers import ArticleSerializer, ArticleStatusSerializer
from .validation import validate_article_filters, validate_article_id


def validation_error_response(errors: ValidationErrors) -> Response:
    return Response(
        {"error": "Validation error", "errors": errors.as_list()},
        status=status.HTTP_400_BAD_REQUEST,
    )


def not_found_response(exc: services.ArticleNotFound) -> Response:
    return Response(
        {"error": "Not found", "message": str(exc)},
        status=status.HTTP_404_NOT_FOUND,
    )


class ArticleListCreateAPIView(APIView):
    def get(self, request):
        errors = ValidationErrors()
        reject_repeated(request.query_params, errors)
        filters = validate_article_filters(request.query_params.dict(), errors)
        if errors:
            return validation_error_response(errors)

        articles = services.list_articles(status=filters.get("status"))
        return Response({"results": ArticleSerializer(articles, many=True).data})

    def post(self, request):
        serializer = ArticleSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(
                ValidationErrors.from_serializer_errors(serializer.errors)
            )

        article = services.create_article(serializer.validated_data)
        return Response(ArticleSerializer(article).data, status=status.HTTP_201_CREATED)


class ArticleStatusAPIView(APIView):
    def post(self, request, article_id):
        errors = ValidationErrors()
        pk = validate_article_id(article_id, errors)

        serializer = ArticleStatusSerializer(data=request.data)
        if not serializer.is_valid():
            errors.extend(ValidationErrors.from_serializer_errors(serializer.errors))

        if errors:
            return validation_error_response(errors)

        try:
            article = services.change_status(pk, serializer.validated_data["status"])
        except services.ArticleNotFound as exc:
            return not_found_response(exc)
        return Response(ArticleSerializer(article).data)
