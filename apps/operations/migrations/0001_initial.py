import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('directory', '0001_initial'),
        ('organizations', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Operation',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, primary_key=True, serialize=False)),
                ('operation_number', models.CharField(max_length=20, unique=True)),
                ('status', models.CharField(choices=[('OPEN', 'Open'), ('CLOSED', 'Closed')], default='OPEN', max_length=10)),
                ('description', models.TextField(blank=True)),
                ('price_per_unit', models.DecimalField(decimal_places=2, max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('agreed_quantity', models.DecimalField(blank=True, decimal_places=3, max_digits=14, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('total_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('operation_date', models.DateTimeField(default=django.utils.timezone.now)),
                ('closed_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True, db_index=True)),
                ('organization', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='operations', to='organizations.organization')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='operations', to='directory.product')),
                ('provider', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='operations', to='directory.provider')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='operations', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'operations',
                'ordering': ['-operation_date', '-created_at'],
                'indexes': [
                    models.Index(fields=['user', 'status'], name='operations_user_status_idx'),
                    models.Index(fields=['user', 'updated_at'], name='operations_user_updated_idx'),
                    models.Index(fields=['provider', 'status'], name='operations_prov_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='MoneyMovement',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, primary_key=True, serialize=False)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('movement_type', models.CharField(choices=[('ADVANCE', 'Advance'), ('PAYMENT', 'Payment'), ('ADJUSTMENT', 'Adjustment'), ('DISCOUNT', 'Discount')], max_length=12)),
                ('payment_method', models.CharField(choices=[('CASH', 'Cash'), ('TRANSFER', 'Transfer')], default='CASH', max_length=10)),
                ('description', models.TextField(blank=True)),
                ('movement_date', models.DateTimeField(default=django.utils.timezone.now)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('operation', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='money_movements', to='operations.operation')),
            ],
            options={
                'db_table': 'money_movements',
                'ordering': ['-movement_date', '-created_at'],
                'indexes': [models.Index(fields=['operation', 'movement_date'], name='money_mov_op_date_idx')],
                'constraints': [models.CheckConstraint(condition=models.Q(('amount__gt', 0)), name='money_movement_amount_positive')],
            },
        ),
        migrations.CreateModel(
            name='ProductMovement',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, primary_key=True, serialize=False)),
                ('net_weight', models.DecimalField(decimal_places=3, max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal('0.001'))])),
                ('gross_weight', models.DecimalField(blank=True, decimal_places=3, max_digits=14, null=True)),
                ('tare', models.DecimalField(blank=True, decimal_places=3, max_digits=14, null=True)),
                ('movement_type', models.CharField(choices=[('DELIVERY', 'Delivery'), ('ADJUSTMENT', 'Adjustment'), ('LOSS', 'Loss')], max_length=12)),
                ('description', models.TextField(blank=True)),
                ('movement_date', models.DateTimeField(default=django.utils.timezone.now)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('operation', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='product_movements', to='operations.operation')),
            ],
            options={
                'db_table': 'product_movements',
                'ordering': ['-movement_date', '-created_at'],
                'indexes': [models.Index(fields=['operation', 'movement_date'], name='product_mov_op_date_idx')],
                'constraints': [models.CheckConstraint(condition=models.Q(('net_weight__gt', 0)), name='product_movement_net_positive')],
            },
        ),
    ]
