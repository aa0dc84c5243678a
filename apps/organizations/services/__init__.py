"""
Organizations services package.

Business logic for organizations and their memberships.
"""

from .exceptions import (
    OrganizationsServiceError,
    OrganizationNotFoundError,
    UserNotFoundError,
    NotMemberError,
    AlreadyMemberError,
    LastAdminError,
    InsufficientPermissionsError,
)
from .organization_management import (
    create_organization,
    list_organizations,
    get_organization,
    update_organization,
)
from .membership_management import (
    add_member,
    update_member_role,
    remove_member,
    get_organization_members,
)

__all__ = [
    # Exceptions
    'OrganizationsServiceError',
    'OrganizationNotFoundError',
    'UserNotFoundError',
    'NotMemberError',
    'AlreadyMemberError',
    'LastAdminError',
    'InsufficientPermissionsError',
    # Organization management
    'create_organization',
    'list_organizations',
    'get_organization',
    'update_organization',
    # Membership
    'add_member',
    'update_member_role',
    'remove_member',
    'get_organization_members',
]
