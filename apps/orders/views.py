from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsVerifiedUser
from .permissions import IsOrderOwner, IsPaymentReviewer
from .serializers import (
    OrderSerializer,
    PaymentRequestSerializer,
    ApprovePaymentInputSerializer,
    RejectPaymentInputSerializer,
)
from .services import (
    checkout,
    get_user_orders,
    request_payment,
    get_payment_request,
    approve_payment,
    reject_payment,
    get_pending_orders,
    EmptyCartError,
    CheckoutItemUnavailableError,
    ConflictAlreadyOwnedError,
    CartChangedError,
    OrderNotFoundError,
    OrderNotPendingError,
    PaymentRequestNotFoundError,
    ForbiddenError,
    InvalidTransitionError,
    RejectionReasonRequiredError,
)


def _error(e, status_code, **extra):
    return Response({'error': e.code, 'message': str(e), **extra}, status=status_code)


class OrderPagination(PageNumberPagination):
    """Custom pagination for orders."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class OrderViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Orders, payment requests and reconciliation.

    list: The user's orders, newest first
    retrieve: One of the user's orders
    checkout: Turn the cart into a pending order
    payment_request: Get or create the PromptPay request for an order
    pending: Reviewer queue of pending orders
    approve / reject: Reviewer decisions
    """

    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated, IsOrderOwner]
    pagination_class = OrderPagination
    lookup_value_regex = '[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'

    def get_queryset(self):
        return get_user_orders(user=self.request.user).select_related('user', 'payment_request')

    def get_permissions(self):
        """Use different permissions for different actions."""
        if self.action == 'checkout':
            return [IsAuthenticated(), IsVerifiedUser()]
        if self.action in ['pending', 'approve', 'reject']:
            return [IsAuthenticated(), IsPaymentReviewer()]
        return super().get_permissions()

    @extend_schema(request=None, responses={201: OrderSerializer}, tags=['orders'])
    @action(detail=False, methods=['post'])
    def checkout(self, request):
        """
        Create a pending order from the cart.

        POST /api/orders/checkout/
        """
        try:
            order = checkout(user=request.user)
        except EmptyCartError as e:
            return _error(e, status.HTTP_400_BAD_REQUEST)
        except (ConflictAlreadyOwnedError, CheckoutItemUnavailableError) as e:
            return _error(e, status.HTTP_409_CONFLICT, items=e.items)
        except CartChangedError as e:
            return _error(e, status.HTTP_409_CONFLICT)

        order = self.get_queryset().get(pk=order.pk)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: PaymentRequestSerializer, 201: PaymentRequestSerializer}, tags=['orders'])
    @action(detail=True, methods=['get', 'post'])
    def payment_request(self, request, pk=None):
        """
        Payment instructions for a pending order.

        GET  /api/orders/{id}/payment_request/ - Existing request
        POST /api/orders/{id}/payment_request/ - Get or create (201 when created)
        """
        try:
            if request.method == 'GET':
                payment_request, created = get_payment_request(order_id=pk, user=request.user), False
            else:
                payment_request, created = request_payment(order_id=pk, user=request.user)
        except (OrderNotFoundError, PaymentRequestNotFoundError) as e:
            return _error(e, status.HTTP_404_NOT_FOUND)
        except OrderNotPendingError as e:
            return _error(e, status.HTTP_409_CONFLICT)

        return Response(
            PaymentRequestSerializer(payment_request).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )

    @extend_schema(responses={200: OrderSerializer(many=True)}, tags=['reconciliation'])
    @action(detail=False, methods=['get'])
    def pending(self, request):
        """
        Reviewer queue, oldest first.

        GET /api/orders/pending/
        """
        queryset = get_pending_orders()
        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response(OrderSerializer(page, many=True).data)
        return Response(OrderSerializer(queryset, many=True).data)

    @extend_schema(request=ApprovePaymentInputSerializer, responses={200: OrderSerializer}, tags=['reconciliation'])
    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        """
        Confirm the transfer and grant the items.

        POST /api/orders/{id}/approve/
        Body: {"bank_reference": "optional"}
        """
        input_serializer = ApprovePaymentInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            order = approve_payment(
                order_id=pk,
                reviewer=request.user,
                bank_reference=input_serializer.validated_data.get('bank_reference', ''),
            )
        except ForbiddenError as e:
            return _error(e, status.HTTP_403_FORBIDDEN)
        except OrderNotFoundError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)
        except ConflictAlreadyOwnedError as e:
            return _error(e, status.HTTP_409_CONFLICT, items=e.items)
        except InvalidTransitionError as e:
            return _error(e, status.HTTP_409_CONFLICT)

        return Response(OrderSerializer(order).data)

    @extend_schema(request=RejectPaymentInputSerializer, responses={200: OrderSerializer}, tags=['reconciliation'])
    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        """
        Reject the payment; no entitlements are granted.

        POST /api/orders/{id}/reject/
        Body: {"reason": "Transfer not found"}
        """
        input_serializer = RejectPaymentInputSerializer(data=request.data)
        if not input_serializer.is_valid():
            return Response(
                {
                    'error': 'validation_error',
                    'message': 'A rejection reason is required',
                    'details': input_serializer.errors,
                },
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            order = reject_payment(
                order_id=pk,
                reviewer=request.user,
                reason=input_serializer.validated_data['reason'],
            )
        except RejectionReasonRequiredError as e:
            return _error(e, status.HTTP_400_BAD_REQUEST)
        except ForbiddenError as e:
            return _error(e, status.HTTP_403_FORBIDDEN)
        except OrderNotFoundError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)
        except InvalidTransitionError as e:
            return _error(e, status.HTTP_409_CONFLICT)

        return Response(OrderSerializer(order).data)
