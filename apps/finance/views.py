from rest_framework import viewsets, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .serializers import (
    ExpenseSerializer,
    ExpenseInputSerializer,
    ExpenseFilterSerializer,
    IncomeSerializer,
    IncomeInputSerializer,
    IncomeFilterSerializer,
    FinanceSummarySerializer,
)
from .services import (
    list_expenses,
    get_expense,
    create_expense,
    update_expense,
    delete_expense,
    list_incomes,
    get_income,
    create_income,
    update_income,
    delete_income,
    get_finance_summary,
)


class FinancePagination(PageNumberPagination):
    """Pagination for expense and income lists."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class ExpenseViewSet(viewsets.GenericViewSet):
    """
    ViewSet for expenses.

    list: Own expenses (filters: scope, expense_type, operation, general)
    create: Record an expense, optionally against an operation
    retrieve: Get an expense
    partial_update: Update an expense
    destroy: Delete an expense
    """

    serializer_class = ExpenseSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = FinancePagination

    def get_queryset(self):
        filter_serializer = ExpenseFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return list_expenses(
            user=self.request.user,
            scope=params.get('scope'),
            expense_type=params.get('expense_type'),
            operation_id=params.get('operation'),
            general=params.get('general'),
        )

    @extend_schema(parameters=[ExpenseFilterSerializer])
    def list(self, request):
        page = self.paginate_queryset(self.get_queryset())
        return self.get_paginated_response(ExpenseSerializer(page, many=True).data)

    @extend_schema(request=ExpenseInputSerializer, responses={201: ExpenseSerializer})
    def create(self, request):
        serializer = ExpenseInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        expense = create_expense(user=request.user, **serializer.validated_data)
        return Response(ExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        return Response(ExpenseSerializer(get_expense(expense_id=pk, user=request.user)).data)

    @extend_schema(request=ExpenseInputSerializer, responses={200: ExpenseSerializer})
    def partial_update(self, request, pk=None):
        serializer = ExpenseInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        expense = update_expense(expense_id=pk, user=request.user, **serializer.validated_data)
        return Response(ExpenseSerializer(expense).data)

    def destroy(self, request, pk=None):
        delete_expense(expense_id=pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class IncomeViewSet(viewsets.GenericViewSet):
    """
    ViewSet for incomes.

    list: Own incomes (filter: scope)
    create: Record an income
    retrieve: Get an income
    partial_update: Update an income
    destroy: Delete an income
    """

    serializer_class = IncomeSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = FinancePagination

    def get_queryset(self):
        filter_serializer = IncomeFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        return list_incomes(user=self.request.user, scope=filter_serializer.validated_data.get('scope'))

    @extend_schema(parameters=[IncomeFilterSerializer])
    def list(self, request):
        page = self.paginate_queryset(self.get_queryset())
        return self.get_paginated_response(IncomeSerializer(page, many=True).data)

    @extend_schema(request=IncomeInputSerializer, responses={201: IncomeSerializer})
    def create(self, request):
        serializer = IncomeInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        income = create_income(user=request.user, **serializer.validated_data)
        return Response(IncomeSerializer(income).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        return Response(IncomeSerializer(get_income(income_id=pk, user=request.user)).data)

    @extend_schema(request=IncomeInputSerializer, responses={200: IncomeSerializer})
    def partial_update(self, request, pk=None):
        serializer = IncomeInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        income = update_income(income_id=pk, user=request.user, **serializer.validated_data)
        return Response(IncomeSerializer(income).data)

    def destroy(self, request, pk=None):
        delete_income(income_id=pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(responses={200: FinanceSummarySerializer})
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def finance_summary(request):
    """
    Expense and income totals per scope.

    GET /api/finance/summary/
    """
    summary = get_finance_summary(user=request.user)
    return Response(FinanceSummarySerializer(summary).data)
