from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'sales'

router = DefaultRouter()
router.register(r'', views.SaleViewSet, basename='sale')

urlpatterns = [
    # GET    /api/sales/                - List sales
    # POST   /api/sales/                - Register sale
    # GET    /api/sales/{id}/           - Sale with payments
    # DELETE /api/sales/{id}/           - Delete sale
    # POST   /api/sales/{id}/payments/  - Record payment
    # GET    /api/sales/{id}/summary/   - Payment summary
    path('', include(router.urls)),
]
