from django.http import FileResponse
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema

from apps.catalog.services import get_item_by_id, CatalogItemNotFoundError
from .serializers import AccessCheckSerializer, PurchaseSerializer
from .services import (
    access_reason,
    can_review,
    get_user_purchases,
    open_download,
    AccessDeniedError,
    DownloadUnavailableError,
)


def _error(e, status_code):
    return Response({'error': e.code, 'message': str(e)}, status=status_code)


class PurchasePagination(PageNumberPagination):
    """Custom pagination for purchases."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(
    responses={200: PurchaseSerializer(many=True)},
    description="Cheat sheets the current user has bought, newest first.",
    tags=['entitlements'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_purchases(request):
    """GET /api/entitlements/"""
    paginator = PurchasePagination()
    page = paginator.paginate_queryset(get_user_purchases(user=request.user), request)
    return paginator.get_paginated_response(PurchaseSerializer(page, many=True).data)


@extend_schema(
    responses={200: AccessCheckSerializer},
    description="Whether the current user may download and review an item, and why.",
    tags=['entitlements'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def check_access(request, item_id):
    """GET /api/entitlements/access/{item_id}/"""
    try:
        item = get_item_by_id(item_id=item_id)
    except CatalogItemNotFoundError as e:
        return _error(e, status.HTTP_404_NOT_FOUND)

    access = access_reason(user=request.user, item=item)
    data = {
        'item_id': item.pk,
        'has_access': access.has_access,
        'reason': access.reason,
        'order_id': access.order_id,
        'can_review': can_review(user=request.user, item=item),
    }
    return Response(AccessCheckSerializer(data).data)


@extend_schema(
    responses={(200, 'application/pdf'): OpenApiTypes.BINARY},
    description="Stream the cheat sheet file if the user has access.",
    tags=['entitlements'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def download(request, item_id):
    """GET /api/entitlements/download/{item_id}/"""
    try:
        item = get_item_by_id(item_id=item_id)
    except CatalogItemNotFoundError as e:
        return _error(e, status.HTTP_404_NOT_FOUND)

    try:
        handle = open_download(user=request.user, item=item)
    except AccessDeniedError as e:
        return _error(e, status.HTTP_403_FORBIDDEN)
    except DownloadUnavailableError as e:
        return _error(e, status.HTTP_404_NOT_FOUND)

    filename = f"{item.course_code}-{item.title}.pdf".replace('/', '-')
    return FileResponse(handle, as_attachment=True, filename=filename)
