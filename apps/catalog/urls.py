from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'catalog'

router = DefaultRouter()
router.register(r'items', views.CatalogItemViewSet, basename='item')

urlpatterns = [
    # GET /api/catalog/items/       - List visible items
    # GET /api/catalog/items/{id}/  - Item detail
    path('', include(router.urls)),
]
