import pytest
from django.urls import reverse
from rest_framework import status
from apps.organizations.models import Organization, OrganizationMember, OrganizationRole


# =============================================================================
# Organization CRUD
# =============================================================================

@pytest.mark.django_db
class TestOrganizationCreate:
    """Tests for POST /api/organizations/"""

    def test_create_makes_creator_admin(self, admin_client, org_admin):
        url = reverse('organizations:organization-list')
        response = admin_client.post(url, {'name': 'New Org', 'description': 'desc'})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'New Org'
        assert response.data['user_role'] == 'ADMIN'
        org = Organization.objects.get(id=response.data['id'])
        assert org.is_admin(org_admin)

    def test_create_requires_name(self, admin_client):
        url = reverse('organizations:organization-list')
        response = admin_client.post(url, {'description': 'no name'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_unauthenticated(self, api_client):
        url = reverse('organizations:organization-list')
        response = api_client.post(url, {'name': 'Nope'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestOrganizationRead:
    """Tests for list/retrieve."""

    def test_list_only_member_organizations(self, operator_client, outsider_client, organization):
        url = reverse('organizations:organization-list')

        response = operator_client.get(url)
        assert response.status_code == status.HTTP_200_OK
        assert [o['id'] for o in response.data] == [str(organization.id)]
        assert response.data[0]['member_count'] == 2

        response = outsider_client.get(url)
        assert response.data == []

    def test_retrieve_includes_members(self, operator_client, organization):
        url = reverse('organizations:organization-detail', args=[organization.id])
        response = operator_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['members']) == 2
        assert response.data['user_role'] == 'OPERATOR'

    def test_retrieve_as_outsider_is_not_found(self, outsider_client, organization):
        url = reverse('organizations:organization-detail', args=[organization.id])
        response = outsider_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'not_found'

    def test_operator_cannot_rename(self, operator_client, organization):
        url = reverse('organizations:organization-detail', args=[organization.id])
        response = operator_client.patch(url, {'name': 'Renamed'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_admin_can_rename(self, admin_client, organization):
        url = reverse('organizations:organization-detail', args=[organization.id])
        response = admin_client.patch(url, {'name': 'Renamed'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        organization.refresh_from_db()
        assert organization.name == 'Renamed'


# =============================================================================
# Membership
# =============================================================================

@pytest.mark.django_db
class TestMembers:
    """Tests for /api/organizations/{id}/members/"""

    def test_admin_adds_member(self, admin_client, organization, outsider):
        url = reverse('organizations:organization-members', args=[organization.id])
        response = admin_client.post(url, {'email': outsider.email, 'role': 'OPERATOR'})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['member']['user']['email'] == outsider.email
        assert organization.has_member(outsider)

    def test_duplicate_member_conflicts(self, admin_client, organization, operator_user):
        url = reverse('organizations:organization-members', args=[organization.id])
        response = admin_client.post(url, {'email': operator_user.email})

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'already_member'

    def test_unknown_email_not_found(self, admin_client, organization):
        url = reverse('organizations:organization-members', args=[organization.id])
        response = admin_client.post(url, {'email': 'ghost@example.com'})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_operator_cannot_add_member(self, operator_client, organization, outsider):
        url = reverse('organizations:organization-members', args=[organization.id])
        response = operator_client.post(url, {'email': outsider.email})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not organization.has_member(outsider)

    def test_list_members(self, operator_client, organization):
        url = reverse('organizations:organization-members', args=[organization.id])
        response = operator_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert {m['role'] for m in response.data} == {'ADMIN', 'OPERATOR'}

    def test_promote_member(self, admin_client, organization, operator_user):
        url = reverse('organizations:organization-member-detail', args=[organization.id, operator_user.id])
        response = admin_client.patch(url, {'role': 'ADMIN'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert organization.is_admin(operator_user)

    def test_cannot_demote_last_admin(self, admin_client, organization, org_admin):
        url = reverse('organizations:organization-member-detail', args=[organization.id, org_admin.id])
        response = admin_client.patch(url, {'role': 'OPERATOR'}, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'last_admin'

    def test_remove_member(self, admin_client, organization, operator_user):
        url = reverse('organizations:organization-member-detail', args=[organization.id, operator_user.id])
        response = admin_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not OrganizationMember.objects.filter(
            organization=organization, user=operator_user
        ).exists()

    def test_cannot_remove_last_admin(self, admin_client, organization, org_admin):
        url = reverse('organizations:organization-member-detail', args=[organization.id, org_admin.id])
        response = admin_client.delete(url)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert organization.get_user_role(org_admin) == OrganizationRole.ADMIN
