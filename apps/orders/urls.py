from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'orders'

router = SimpleRouter()
router.register(r'', views.OrderViewSet, basename='order')

urlpatterns = [
    # GET  /api/orders/                          - List my orders
    # GET  /api/orders/{id}/                     - Order detail
    # POST /api/orders/checkout/                 - Checkout cart
    # GET  /api/orders/pending/                  - Reviewer queue
    # GET|POST /api/orders/{id}/payment_request/ - PromptPay QR
    # POST /api/orders/{id}/approve/             - Approve payment
    # POST /api/orders/{id}/reject/              - Reject payment
    path('', include(router.urls)),
]
