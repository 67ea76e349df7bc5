from django.urls import path
from . import views

app_name = 'cart'

urlpatterns = [
    path('', views.cart, name='cart'),
    path('count/', views.cart_count, name='count'),
    path('items/', views.add_item, name='add-item'),
    path('items/<uuid:entry_id>/', views.remove_item, name='remove-item'),
]
