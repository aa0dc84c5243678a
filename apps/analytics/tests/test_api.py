import pytest
from django.urls import reverse
from rest_framework import status


@pytest.mark.django_db
class TestDashboardAPI:

    def test_dashboard(self, authenticated_client, portfolio):
        response = authenticated_client.get(reverse('analytics:dashboard'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['summary']['total_operations'] == 2
        assert response.data['financial']['pending_balance'] == '670.00'
        assert len(response.data['top_providers']) == 2

    def test_foreign_organization_is_not_found(self, authenticated_client, outsider):
        from apps.organizations.models import Organization
        org = Organization.objects.create(name='Ajena', created_by=outsider)

        response = authenticated_client.get(reverse('analytics:dashboard'), {'organization': str(org.id)})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_requires_authentication(self, portfolio):
        from rest_framework.test import APIClient

        response = APIClient().get(reverse('analytics:dashboard'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
