from rest_framework import viewsets, status, serializers as drf_serializers
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .serializers import (
    OperationSerializer,
    OperationListSerializer,
    OperationCreateSerializer,
    OperationUpdateSerializer,
    OperationFilterSerializer,
    MoneyMovementSerializer,
    MoneyMovementInputSerializer,
    ProductMovementSerializer,
    ProductMovementInputSerializer,
    BalanceSerializer,
)
from .services import (
    list_operations,
    get_operation_for_user,
    create_operation,
    update_operation,
    close_operation,
    delete_operation,
    add_money_movement,
    add_product_movement,
)


# Response serializers for API documentation
class OperationDetailResponseSerializer(drf_serializers.Serializer):
    operation = OperationSerializer()
    balance = BalanceSerializer()


class OperationPagination(PageNumberPagination):
    """Pagination for operation lists."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _detail_payload(operation):
    return {
        'operation': OperationSerializer(operation).data,
        'balance': BalanceSerializer(operation.get_balance().as_dict()).data,
    }


class OperationViewSet(viewsets.GenericViewSet):
    """
    ViewSet for purchase operations.

    list: Operations the user owns or shares through an organization
    create: Open an operation
    retrieve: Operation with movements and computed balance
    partial_update: Edit an open operation's agreement
    destroy: Delete an operation (owner only)
    close: Close an open operation
    money_movements: List or record money movements
    product_movements: List or record product movements
    """

    serializer_class = OperationSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = OperationPagination

    def get_queryset(self):
        filter_serializer = OperationFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return list_operations(
            user=self.request.user,
            status=params.get('status'),
            provider_id=params.get('provider'),
            organization_id=params.get('organization'),
            search=params.get('search'),
        )

    @extend_schema(parameters=[OperationFilterSerializer], responses={200: OperationListSerializer(many=True)})
    def list(self, request):
        queryset = self.get_queryset()
        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response(OperationListSerializer(page, many=True).data)
        return Response(OperationListSerializer(queryset, many=True).data)

    @extend_schema(request=OperationCreateSerializer, responses={201: OperationSerializer})
    def create(self, request):
        serializer = OperationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        operation = create_operation(user=request.user, **serializer.validated_data)
        return Response(OperationSerializer(operation).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: OperationDetailResponseSerializer})
    def retrieve(self, request, pk=None):
        """
        Get operation detail with its balance.

        GET /api/operations/{id}/
        """
        operation = get_operation_for_user(operation_id=pk, user=request.user)
        return Response(_detail_payload(operation))

    @extend_schema(request=OperationUpdateSerializer, responses={200: OperationSerializer})
    def partial_update(self, request, pk=None):
        serializer = OperationUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        operation = update_operation(operation_id=pk, user=request.user, **serializer.validated_data)
        return Response(OperationSerializer(operation).data)

    def destroy(self, request, pk=None):
        delete_operation(operation_id=pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={200: OperationDetailResponseSerializer})
    @action(detail=True, methods=['post'])
    def close(self, request, pk=None):
        """
        Close an open operation.

        POST /api/operations/{id}/close/
        """
        operation = close_operation(operation_id=pk, user=request.user)
        return Response(_detail_payload(operation))

    @extend_schema(responses={200: BalanceSerializer})
    @action(detail=True, methods=['get'])
    def balance(self, request, pk=None):
        """GET /api/operations/{id}/balance/"""
        operation = get_operation_for_user(operation_id=pk, user=request.user)
        return Response(BalanceSerializer(operation.get_balance().as_dict()).data)

    @extend_schema(
        methods=['GET'],
        responses={200: MoneyMovementSerializer(many=True)},
    )
    @extend_schema(
        methods=['POST'],
        request=MoneyMovementInputSerializer,
        responses={201: MoneyMovementSerializer},
    )
    @action(detail=True, methods=['get', 'post'], url_path='money-movements')
    def money_movements(self, request, pk=None):
        """
        List or record money movements.

        GET/POST /api/operations/{id}/money-movements/
        """
        if request.method == 'GET':
            operation = get_operation_for_user(operation_id=pk, user=request.user)
            return Response(MoneyMovementSerializer(operation.money_movements.all(), many=True).data)

        serializer = MoneyMovementInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        movement = add_money_movement(operation_id=pk, user=request.user, **serializer.validated_data)
        return Response(MoneyMovementSerializer(movement).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        methods=['GET'],
        responses={200: ProductMovementSerializer(many=True)},
    )
    @extend_schema(
        methods=['POST'],
        request=ProductMovementInputSerializer,
        responses={201: ProductMovementSerializer},
    )
    @action(detail=True, methods=['get', 'post'], url_path='product-movements')
    def product_movements(self, request, pk=None):
        """
        List or record product movements.

        GET/POST /api/operations/{id}/product-movements/
        """
        if request.method == 'GET':
            operation = get_operation_for_user(operation_id=pk, user=request.user)
            return Response(ProductMovementSerializer(operation.product_movements.all(), many=True).data)

        serializer = ProductMovementInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        movement = add_product_movement(operation_id=pk, user=request.user, **serializer.validated_data)
        return Response(ProductMovementSerializer(movement).data, status=status.HTTP_201_CREATED)
