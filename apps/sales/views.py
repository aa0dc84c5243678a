from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .serializers import (
    SaleSerializer,
    SaleCreateSerializer,
    SaleFilterSerializer,
    SalePaymentSerializer,
    SalePaymentInputSerializer,
    SaleSummarySerializer,
)
from .services import (
    list_sales,
    get_sale,
    create_sale,
    add_sale_payment,
    get_sale_summary,
    delete_sale,
)


class SalePagination(PageNumberPagination):
    """Pagination for sales."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class SaleViewSet(viewsets.GenericViewSet):
    """
    ViewSet for sales.

    list: Own sales (filters: status, client)
    create: Register a sale
    retrieve: Sale with payments
    destroy: Delete a sale
    payments: Record an installment
    summary: Total, paid and outstanding
    """

    serializer_class = SaleSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = SalePagination

    def get_queryset(self):
        filter_serializer = SaleFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return list_sales(
            user=self.request.user,
            status=params.get('status'),
            client_id=params.get('client'),
        ).prefetch_related('payments')

    @extend_schema(parameters=[SaleFilterSerializer])
    def list(self, request):
        page = self.paginate_queryset(self.get_queryset())
        return self.get_paginated_response(SaleSerializer(page, many=True).data)

    @extend_schema(request=SaleCreateSerializer, responses={201: SaleSerializer})
    def create(self, request):
        serializer = SaleCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        sale = create_sale(user=request.user, **serializer.validated_data)
        return Response(SaleSerializer(sale).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        return Response(SaleSerializer(get_sale(sale_id=pk, user=request.user)).data)

    def destroy(self, request, pk=None):
        delete_sale(sale_id=pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=SalePaymentInputSerializer, responses={201: SalePaymentSerializer})
    @action(detail=True, methods=['post'])
    def payments(self, request, pk=None):
        """
        Record a payment against a sale.

        POST /api/sales/{id}/payments/
        """
        serializer = SalePaymentInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        payment = add_sale_payment(sale_id=pk, user=request.user, **serializer.validated_data)
        return Response(SalePaymentSerializer(payment).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: SaleSummarySerializer})
    @action(detail=True, methods=['get'])
    def summary(self, request, pk=None):
        """
        Get payment summary of a sale.

        GET /api/sales/{id}/summary/
        """
        sale = get_sale(sale_id=pk, user=request.user)
        return Response(SaleSummarySerializer(get_sale_summary(sale)).data)
