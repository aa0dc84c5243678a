from rest_framework import viewsets, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .models import Client, Product
from .serializers import (
    ProviderSerializer,
    ProviderCreateSerializer,
    ProviderUpdateSerializer,
    ClientSerializer,
    ProductSerializer,
)
from .services import (
    create_provider,
    search_providers,
    get_provider,
    update_provider,
    delete_provider,
    delete_record,
)


class DirectoryPagination(PageNumberPagination):
    """Pagination for directory lists."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class ProviderViewSet(viewsets.ModelViewSet):
    """
    ViewSet for providers.

    list: Providers the user owns or shares through an organization
    create: Create a provider (optionally shared with an organization)
    retrieve: Get a provider
    partial_update: Update name, phone, address, notes
    destroy: Delete a provider without open operations
    """

    serializer_class = ProviderSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = DirectoryPagination
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        return search_providers(
            user=self.request.user,
            search=self.request.query_params.get('search'),
            organization_id=self.request.query_params.get('organization'),
        )

    @extend_schema(
        parameters=[
            OpenApiParameter('search', str, description='Match name, phone or address'),
            OpenApiParameter('organization', str, description='Only providers shared with this organization'),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=ProviderCreateSerializer, responses={201: ProviderSerializer})
    def create(self, request, *args, **kwargs):
        serializer = ProviderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        provider = create_provider(user=request.user, **serializer.validated_data)

        return Response(ProviderSerializer(provider).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        provider = get_provider(provider_id=pk, user=request.user)
        return Response(ProviderSerializer(provider).data)

    @extend_schema(request=ProviderUpdateSerializer, responses={200: ProviderSerializer})
    def partial_update(self, request, pk=None):
        serializer = ProviderUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        provider = update_provider(provider_id=pk, user=request.user, **serializer.validated_data)
        return Response(ProviderSerializer(provider).data)

    def destroy(self, request, pk=None):
        delete_provider(provider_id=pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class OwnedRecordViewSet(viewsets.ModelViewSet):
    """CRUD limited to records owned by the requesting user."""

    permission_classes = [IsAuthenticated]
    pagination_class = DirectoryPagination
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        queryset = self.queryset.owned_by(self.request.user)
        search = self.request.query_params.get('search')
        if search:
            queryset = queryset.filter(name__icontains=search)
        return queryset

    def perform_create(self, serializer):
        serializer.save(user=self.request.user)

    def perform_destroy(self, instance):
        delete_record(instance=instance)


class ClientViewSet(OwnedRecordViewSet):
    """Clients (buyers) owned by the user."""

    queryset = Client.objects.all()
    serializer_class = ClientSerializer


class ProductViewSet(OwnedRecordViewSet):
    """Products owned by the user."""

    queryset = Product.objects.all()
    serializer_class = ProductSerializer
