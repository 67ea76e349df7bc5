from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, inline_serializer

from apps.accounts.permissions import IsVerifiedUser
from .serializers import AddToCartInputSerializer, CartEntrySerializer, CartSerializer
from .services import (
    add_to_cart,
    remove_from_cart,
    clear_cart,
    get_cart,
    get_cart_count,
    AlreadyOwnedError,
    ItemUnavailableError,
    CartEntryNotFoundError,
)


def _error(e, status_code):
    return Response({'error': e.code, 'message': str(e)}, status=status_code)


@extend_schema(
    methods=['GET'],
    responses={200: CartSerializer},
    description="List cart entries in the order they were added, with a priced summary.",
    tags=['cart'],
)
@extend_schema(
    methods=['DELETE'],
    responses={200: inline_serializer('ClearCartResponse', {'removed': drf_serializers.IntegerField()})},
    description="Remove every entry from the cart.",
    tags=['cart'],
)
@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated, IsVerifiedUser])
def cart(request):
    """
    GET    /api/cart/ - Cart entries + summary
    DELETE /api/cart/ - Clear cart
    """
    if request.method == 'DELETE':
        removed = clear_cart(user=request.user)
        return Response({'removed': removed})

    contents = get_cart(user=request.user)
    return Response(CartSerializer(contents).data)


@extend_schema(
    responses={200: inline_serializer('CartCountResponse', {'count': drf_serializers.IntegerField()})},
    description="Number of entries in the cart.",
    tags=['cart'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsVerifiedUser])
def cart_count(request):
    """GET /api/cart/count/"""
    return Response({'count': get_cart_count(user=request.user)})


@extend_schema(
    request=AddToCartInputSerializer,
    responses={201: CartEntrySerializer, 200: CartEntrySerializer},
    description="Add a catalog item to the cart. Returns 200 with already_in_cart when it was there already.",
    tags=['cart'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsVerifiedUser])
def add_item(request):
    """
    POST /api/cart/items/
    Body: {"catalog_item_id": "<uuid>"}
    """
    serializer = AddToCartInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        entry, created = add_to_cart(
            user=request.user,
            catalog_item_id=serializer.validated_data['catalog_item_id'],
        )
    except AlreadyOwnedError as e:
        return _error(e, status.HTTP_409_CONFLICT)
    except ItemUnavailableError as e:
        return _error(e, status.HTTP_400_BAD_REQUEST)

    data = CartEntrySerializer(entry).data
    data['already_in_cart'] = not created
    data['cart_count'] = get_cart_count(user=request.user)
    return Response(
        data,
        status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
    )


@extend_schema(
    request=None,
    responses={200: inline_serializer('RemoveFromCartResponse', {'cart_count': drf_serializers.IntegerField()})},
    description="Remove one entry from the cart.",
    tags=['cart'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsVerifiedUser])
def remove_item(request, entry_id):
    """DELETE /api/cart/items/{entry_id}/"""
    try:
        remove_from_cart(user=request.user, entry_id=entry_id)
    except CartEntryNotFoundError as e:
        return _error(e, status.HTTP_404_NOT_FOUND)

    return Response({'cart_count': get_cart_count(user=request.user)})
