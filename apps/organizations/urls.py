from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'organizations'

router = DefaultRouter()
router.register(r'', views.OrganizationViewSet, basename='organization')

urlpatterns = [
    # GET    /api/organizations/                          - List user's organizations
    # POST   /api/organizations/                          - Create organization
    # GET    /api/organizations/{id}/                     - Organization with members
    # PATCH  /api/organizations/{id}/                     - Rename (admin)
    # GET    /api/organizations/{id}/members/             - List members
    # POST   /api/organizations/{id}/members/             - Add member by email (admin)
    # PATCH  /api/organizations/{id}/members/{user_id}/   - Change role (admin)
    # DELETE /api/organizations/{id}/members/{user_id}/   - Remove member (admin)
    path('', include(router.urls)),
]
