from rest_framework import serializers
from .models import Provider, Client, Product


class ProviderSerializer(serializers.ModelSerializer):
    """Provider output serializer."""

    operation_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = Provider
        fields = [
            'id',
            'name',
            'phone',
            'address',
            'notes',
            'user',
            'organization',
            'operation_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ProviderCreateSerializer(serializers.Serializer):
    """Input for creating providers."""

    name = serializers.CharField(max_length=200)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True)
    address = serializers.CharField(max_length=300, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)
    organization_id = serializers.UUIDField(required=False, allow_null=True)


class ProviderUpdateSerializer(serializers.Serializer):
    """Input for partial provider updates."""

    name = serializers.CharField(max_length=200, required=False)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True)
    address = serializers.CharField(max_length=300, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class ClientSerializer(serializers.ModelSerializer):

    class Meta:
        model = Client
        fields = ['id', 'name', 'phone', 'address', 'notes', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']


class ProductSerializer(serializers.ModelSerializer):

    class Meta:
        model = Product
        fields = ['id', 'name', 'unit', 'description', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']
