import pytest
from django.core import mail
from django.urls import reverse
from rest_framework import status
from rest_framework_simplejwt.tokens import AccessToken
from apps.accounts.models import User
from apps.accounts.services import make_reset_token


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /api/auth/register/"""

    def test_register_success(self, api_client):
        """Successfully register a new user."""
        url = reverse('users:register')
        data = {
            'email': 'newuser@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'name': 'New User',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['role'] == 'OPERATOR'
        assert User.objects.filter(email='newuser@example.com').exists()

    def test_register_without_name(self, api_client):
        """Name is optional."""
        url = reverse('users:register')
        data = {
            'email': 'minimal@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['user']['language'] == 'es'

    def test_register_duplicate_email_conflicts(self, api_client, user):
        """Registering an existing email is a conflict."""
        url = reverse('users:register')
        data = {
            'email': user.email,
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'email_taken'

    def test_register_password_mismatch(self, api_client):
        """Registration fails when passwords don't match."""
        url = reverse('users:register')
        data = {
            'email': 'mismatch@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'DifferentPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password_confirm' in response.data

    def test_register_weak_password(self, api_client):
        """Registration fails with weak password."""
        url = reverse('users:register')
        data = {
            'email': 'weak@example.com',
            'password': '123',
            'password_confirm': '123',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_register_invalid_email(self, api_client):
        """Registration fails with invalid email format."""
        url = reverse('users:register')
        data = {
            'email': 'not-an-email',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, user):
        """Successfully login with valid credentials."""
        url = reverse('users:login')
        data = {
            'email': user.email,
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['email'] == user.email

    def test_access_token_carries_role(self, api_client, admin_user):
        """Issued access tokens include the user's role claim."""
        url = reverse('users:login')
        response = api_client.post(url, {'email': admin_user.email, 'password': 'TestPass123!'})

        token = AccessToken(response.data['tokens']['access'])
        assert token['role'] == 'ADMIN'
        assert token['user_id'] == str(admin_user.id)

    def test_login_wrong_password(self, api_client, user):
        """Login fails with wrong password."""
        url = reverse('users:login')
        data = {
            'email': user.email,
            'password': 'WrongPassword123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['code'] == 'invalid_credentials'

    def test_login_nonexistent_user(self, api_client):
        """Login fails for non-existent user."""
        url = reverse('users:login')
        data = {
            'email': 'nonexistent@example.com',
            'password': 'SomePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_inactive_user(self, api_client, user_inactive):
        """Inactive users cannot log in."""
        url = reverse('users:login')
        data = {
            'email': user_inactive.email,
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_login_updates_last_login(self, api_client, user):
        """Login updates last_login timestamp."""
        url = reverse('users:login')
        response = api_client.post(url, {'email': user.email, 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.last_login is not None


# =============================================================================
# Profile Tests
# =============================================================================

@pytest.mark.django_db
class TestProfile:
    """Tests for GET/PATCH /api/auth/me/"""

    def test_get_current_user(self, authenticated_client, user):
        url = reverse('users:me')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == user.email
        assert response.data['name'] == 'Test User'

    def test_get_current_user_unauthenticated(self, api_client):
        url = reverse('users:me')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_update_preferences(self, authenticated_client, user):
        url = reverse('users:me')
        data = {'language': 'en', 'theme': 'dark', 'phone': '+34 600 000 000'}
        response = authenticated_client.patch(url, data, format='json')

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.language == 'en'
        assert user.theme == 'dark'

    def test_cannot_change_email_or_role(self, authenticated_client, user):
        """Email and role are read-only through the profile endpoint."""
        url = reverse('users:me')
        authenticated_client.patch(url, {'email': 'new@example.com', 'role': 'ADMIN'}, format='json')

        user.refresh_from_db()
        assert user.email == 'testuser@example.com'
        assert user.role == 'OPERATOR'


# =============================================================================
# Password Reset Tests
# =============================================================================

@pytest.mark.django_db
class TestPasswordReset:
    """Tests for the password reset flow."""

    def test_request_sends_email(self, api_client, user, django_capture_on_commit_callbacks):
        url = reverse('users:password-reset')
        with django_capture_on_commit_callbacks(execute=True):
            response = api_client.post(url, {'email': user.email})

        assert response.status_code == status.HTTP_200_OK
        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == [user.email]
        assert 'reset-password?token=' in mail.outbox[0].body

    def test_request_unknown_email_same_answer(self, api_client, user, django_capture_on_commit_callbacks):
        """The response does not reveal whether the account exists."""
        url = reverse('users:password-reset')
        with django_capture_on_commit_callbacks(execute=True):
            known = api_client.post(url, {'email': user.email})
            unknown = api_client.post(url, {'email': 'nobody@example.com'})

        assert known.data == unknown.data
        assert len(mail.outbox) == 1

    def test_confirm_sets_new_password(self, api_client, user):
        url = reverse('users:password-reset-confirm')
        data = {
            'token': make_reset_token(user),
            'new_password': 'BrandNewPass456!',
            'new_password_confirm': 'BrandNewPass456!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.check_password('BrandNewPass456!')

    def test_token_cannot_be_reused(self, api_client, user):
        url = reverse('users:password-reset-confirm')
        token = make_reset_token(user)
        data = {
            'token': token,
            'new_password': 'BrandNewPass456!',
            'new_password_confirm': 'BrandNewPass456!',
        }
        api_client.post(url, data)
        response = api_client.post(url, {**data, 'new_password': 'Another789!x', 'new_password_confirm': 'Another789!x'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'invalid_token'

    def test_confirm_invalid_token(self, api_client):
        url = reverse('users:password-reset-confirm')
        data = {
            'token': 'garbage',
            'new_password': 'BrandNewPass456!',
            'new_password_confirm': 'BrandNewPass456!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
