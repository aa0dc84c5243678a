# ==========================================
# apps/organizations/models.py
# ==========================================

from django.db import models
import uuid


class OrganizationRole(models.TextChoices):
    ADMIN = 'ADMIN', 'Admin'
    OPERATOR = 'OPERATOR', 'Operator'


class OrganizationQuerySet(models.QuerySet):

    def for_member(self, user):
        """Organizations the user belongs to."""
        return self.filter(
            id__in=OrganizationMember.objects.filter(user=user).values('organization_id')
        )


class Organization(models.Model):
    """Business unit whose members share operations and providers."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='created_organizations',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = OrganizationQuerySet.as_manager()

    class Meta:
        db_table = 'organizations'
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def has_member(self, user):
        return self.members.filter(user=user).exists()

    def get_user_role(self, user):
        try:
            return self.members.get(user=user).role
        except OrganizationMember.DoesNotExist:
            return None

    def is_admin(self, user):
        return self.get_user_role(user) == OrganizationRole.ADMIN


class OrganizationMember(models.Model):
    """User membership in an organization with role."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='organization_memberships',
    )
    organization = models.ForeignKey(
        Organization,
        on_delete=models.CASCADE,
        related_name='members',
    )
    role = models.CharField(
        max_length=10,
        choices=OrganizationRole.choices,
        default=OrganizationRole.OPERATOR,
    )
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'organization_members'
        unique_together = [['user', 'organization']]
        indexes = [
            models.Index(fields=['organization', 'role'], name='org_members_org_role_idx'),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user.get_display_name()} in {self.organization.name} ({self.role})"
