"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data

This creates:
- 3 users (admin, ana, luis)
- 1 organization shared by ana and luis
- Providers, clients and products
- Operations with money and product movements
- Sales with payments
- Expenses and incomes
"""

from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.directory.models import Client, Product
from apps.directory.services import create_provider
from apps.finance.models import Expense, ExpenseType, Income
from apps.finance.services import create_expense, create_income
from apps.operations.models import Operation, MoneyMovementType, ProductMovementType
from apps.operations.services import (
    create_operation,
    add_money_movement,
    add_product_movement,
    close_operation,
)
from apps.organizations.models import Organization, OrganizationRole
from apps.organizations.services import create_organization, add_member
from apps.sales.models import Sale
from apps.sales.services import create_sale, add_sale_payment


class Command(BaseCommand):
    help = 'Create sample data for trying out the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        if User.objects.filter(email='ana@example.com').exists():
            self.stdout.write(self.style.WARNING('Sample data already present, use --clear to recreate it.'))
            return

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        organization = self.create_organization(users)
        directory = self.create_directory(users, organization)
        operations = self.create_operations(users, organization, directory)
        self.create_sales(users, directory)
        self.create_finance(users, operations)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (superuser)')
        self.stdout.write('  ana@example.com / password123')
        self.stdout.write('  luis@example.com / password123')

    def clear_data(self):
        """Clear all sample data from the database."""
        Sale.objects.all().delete()
        Expense.objects.all().delete()
        Income.objects.all().delete()
        Operation.objects.all().delete()
        Client.objects.all().delete()
        Product.objects.all().delete()
        Organization.objects.all().delete()
        User.objects.filter(email__in=['admin@example.com', 'ana@example.com', 'luis@example.com']).delete()

    def create_users(self):
        self.stdout.write('  Creating users...')

        admin, created = User.objects.get_or_create(
            email='admin@example.com',
            defaults={'name': 'Admin User', 'is_staff': True, 'is_superuser': True},
        )
        if created:
            admin.set_password('admin123')
            admin.save()

        ana = User.objects.create_user(email='ana@example.com', password='password123', name='Ana Torres')
        luis = User.objects.create_user(email='luis@example.com', password='password123', name='Luis Mejía')

        return {'admin': admin, 'ana': ana, 'luis': luis}

    def create_organization(self, users):
        self.stdout.write('  Creating organization...')

        organization = create_organization(
            name='Acopio del Valle',
            creator=users['ana'],
            description='Collection center shared by the buying team',
        )
        add_member(
            organization_id=organization.id,
            actor=users['ana'],
            email=users['luis'].email,
            role=OrganizationRole.OPERATOR,
        )
        return organization

    def create_directory(self, users, organization):
        self.stdout.write('  Creating providers, clients and products...')

        ana = users['ana']
        providers = [
            create_provider(user=ana, name='Finca El Roble', phone='555-0101', address='Vereda Alta'),
            create_provider(user=ana, name='Cooperativa San Isidro', organization_id=organization.id),
            create_provider(user=users['luis'], name='Finca La Palma', address='Km 12'),
        ]
        clients = [
            Client.objects.create(user=ana, name='Exportadora Norte', phone='555-0200'),
            Client.objects.create(user=ana, name='Tostadora Central'),
        ]
        products = [
            Product.objects.create(user=ana, name='Café pergamino', unit='kg'),
            Product.objects.create(user=ana, name='Cacao seco', unit='kg'),
        ]
        return {'providers': providers, 'clients': clients, 'products': products}

    def create_operations(self, users, organization, directory):
        self.stdout.write('  Creating operations...')

        ana = users['ana']
        coffee, cacao = directory['products']
        roble, cooperativa, _ = directory['providers']
        today = timezone.now()

        # Open personal operation, partially paid and delivered
        first = create_operation(
            user=ana,
            provider_id=roble.id,
            product_id=coffee.id,
            price_per_unit=Decimal('9.50'),
            agreed_quantity=Decimal('500'),
            description='Main harvest',
            operation_date=today - timedelta(days=10),
        )
        add_money_movement(operation_id=first.id, user=ana, amount=Decimal('1500'),
                           movement_type=MoneyMovementType.ADVANCE)
        add_product_movement(operation_id=first.id, user=ana, movement_type=ProductMovementType.DELIVERY,
                             gross_weight=Decimal('212.5'), tare=Decimal('2.5'))
        add_product_movement(operation_id=first.id, user=ana, movement_type=ProductMovementType.LOSS,
                             net_weight=Decimal('4'), description='Humidity loss')

        # Shared operation, settled and closed by the operator
        second = create_operation(
            user=ana,
            provider_id=cooperativa.id,
            product_id=cacao.id,
            price_per_unit=Decimal('12.00'),
            agreed_quantity=Decimal('200'),
            organization_id=organization.id,
            operation_date=today - timedelta(days=30),
        )
        add_money_movement(operation_id=second.id, user=users['luis'], amount=Decimal('2400'),
                           movement_type=MoneyMovementType.PAYMENT)
        add_product_movement(operation_id=second.id, user=users['luis'], movement_type=ProductMovementType.DELIVERY,
                             net_weight=Decimal('200'))
        close_operation(operation_id=second.id, user=users['luis'])

        return [first, second]

    def create_sales(self, users, directory):
        self.stdout.write('  Creating sales...')

        ana = users['ana']
        exportadora, tostadora = directory['clients']
        coffee, cacao = directory['products']

        paid = create_sale(user=ana, client_id=exportadora.id, product_id=coffee.id,
                           quantity=Decimal('150'), price_per_unit=Decimal('14.00'))
        add_sale_payment(sale_id=paid.id, user=ana, amount=paid.total_amount)

        partial = create_sale(user=ana, client_id=tostadora.id, product_id=cacao.id,
                              quantity=Decimal('80'), price_per_unit=Decimal('16.25'))
        add_sale_payment(sale_id=partial.id, user=ana, amount=Decimal('600'))

    def create_finance(self, users, operations):
        self.stdout.write('  Creating expenses and incomes...')

        ana = users['ana']
        create_expense(user=ana, amount=Decimal('120.00'), expense_type=ExpenseType.FREIGHT,
                       description='Truck to collection center', operation_id=operations[0].id)
        create_expense(user=ana, amount=Decimal('35.50'), expense_type=ExpenseType.FOOD,
                       description='Crew lunch')
        create_income(user=ana, amount=Decimal('900.00'), description='Drying service')
