from django.urls import path
from . import views

app_name = 'entitlements'

urlpatterns = [
    path('', views.my_purchases, name='my-purchases'),
    path('access/<uuid:item_id>/', views.check_access, name='check-access'),
    path('download/<uuid:item_id>/', views.download, name='download'),
]
