# ==========================================
# apps/directory/models.py
# ==========================================

from django.db import models
from django.db.models import Q
import uuid

from apps.organizations.models import Organization


class ProviderQuerySet(models.QuerySet):

    def accessible_to(self, user):
        """Providers the user owns or that are shared with one of their organizations."""
        return self.filter(
            Q(user=user) | Q(organization__in=Organization.objects.for_member(user))
        )


class OwnedQuerySet(models.QuerySet):

    def owned_by(self, user):
        return self.filter(user=user)


class Provider(models.Model):
    """Supplier that goods are purchased from."""

    # Ids may be generated offline by clients, so they are accepted as given
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=True)
    name = models.CharField(max_length=200)
    phone = models.CharField(max_length=50, blank=True)
    address = models.CharField(max_length=300, blank=True)
    notes = models.TextField(blank=True)

    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='providers',
    )
    organization = models.ForeignKey(
        'organizations.Organization',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='providers',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    objects = ProviderQuerySet.as_manager()

    class Meta:
        db_table = 'providers'
        ordering = ['name']
        indexes = [
            models.Index(fields=['user', 'updated_at'], name='providers_user_updated_idx'),
        ]

    def __str__(self):
        return self.name


class Client(models.Model):
    """Buyer that goods are sold to."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=True)
    name = models.CharField(max_length=200)
    phone = models.CharField(max_length=50, blank=True)
    address = models.CharField(max_length=300, blank=True)
    notes = models.TextField(blank=True)

    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='clients',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    objects = OwnedQuerySet.as_manager()

    class Meta:
        db_table = 'clients'
        ordering = ['name']
        indexes = [
            models.Index(fields=['user', 'updated_at'], name='clients_user_updated_idx'),
        ]

    def __str__(self):
        return self.name


class Product(models.Model):
    """Commodity being bought and sold (sugar cane, coffee, ...)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=True)
    name = models.CharField(max_length=200)
    unit = models.CharField(max_length=20, default='kg')
    description = models.TextField(blank=True)

    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='products',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    objects = OwnedQuerySet.as_manager()

    class Meta:
        db_table = 'products'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.unit})"
