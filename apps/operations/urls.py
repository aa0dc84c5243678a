from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'operations'

router = DefaultRouter()
router.register(r'', views.OperationViewSet, basename='operation')

urlpatterns = [
    # /api/operations/                        - List, open
    # /api/operations/{id}/                   - Detail with balance, edit, delete
    # /api/operations/{id}/close/             - Close
    # /api/operations/{id}/balance/           - Balance only
    # /api/operations/{id}/money-movements/   - Money movements
    # /api/operations/{id}/product-movements/ - Product movements
    path('', include(router.urls)),
]
