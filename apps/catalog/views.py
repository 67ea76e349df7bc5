from rest_framework import viewsets
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.entitlements.services import resolve_access
from .serializers import CatalogItemSerializer
from .services import get_visible_items


class CatalogPagination(PageNumberPagination):
    """Custom pagination for catalog items."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class CatalogItemViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Browse purchasable cheat sheets.

    list: Active, approved items (filter with ?course_code=)
    retrieve: A single visible item
    """

    serializer_class = CatalogItemSerializer
    permission_classes = [AllowAny]
    pagination_class = CatalogPagination

    def get_queryset(self):
        queryset = get_visible_items()
        course_code = self.request.query_params.get('course_code')
        if course_code:
            queryset = queryset.filter(course_code__iexact=course_code.strip())
        return queryset

    @extend_schema(
        parameters=[OpenApiParameter('course_code', str, description='Filter by course code')],
    )
    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        items = page if page is not None else list(queryset)

        # One purchase query for the whole page
        context = self.get_serializer_context()
        context['access'] = resolve_access(user=request.user, items=items)
        serializer = self.get_serializer_class()(items, many=True, context=context)

        if page is not None:
            return self.get_paginated_response(serializer.data)
        return Response(serializer.data)
