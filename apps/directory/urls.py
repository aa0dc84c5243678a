from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'directory'

router = DefaultRouter()
router.register(r'providers', views.ProviderViewSet, basename='provider')
router.register(r'clients', views.ClientViewSet, basename='client')
router.register(r'products', views.ProductViewSet, basename='product')

urlpatterns = [
    # /api/directory/providers/  - Providers (owned or shared via organization)
    # /api/directory/clients/    - Clients
    # /api/directory/products/   - Products
    path('', include(router.urls)),
]
