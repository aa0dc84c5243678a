from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'finance'

router = DefaultRouter()
router.register(r'expenses', views.ExpenseViewSet, basename='expense')
router.register(r'incomes', views.IncomeViewSet, basename='income')

urlpatterns = [
    # /api/finance/expenses/  - Expenses (general or per operation)
    # /api/finance/incomes/   - Incomes
    # /api/finance/summary/   - Totals per scope
    path('summary/', views.finance_summary, name='summary'),
    path('', include(router.urls)),
]
