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
    ]

    operations = [
        migrations.CreateModel(
            name='ClientRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('full_name', models.CharField(help_text="Policy holder's full name.", max_length=200)),
                ('phone', models.CharField(db_index=True, help_text='Kenyan phone number (+254... or 0...).', max_length=20)),
                ('email', models.CharField(blank=True, default='', max_length=254)),
                ('address', models.CharField(blank=True, default='', max_length=255)),
                ('vehicle_number', models.CharField(db_index=True, help_text='Vehicle registration number.', max_length=20)),
                ('policy_type', models.CharField(choices=[('Comprehensive', 'Comprehensive'), ('Third-Party', 'Third-Party'), ('Act-Only', 'Act-Only')], max_length=20)),
                ('start_date', models.DateField(help_text='Policy inception date.')),
                ('renewal_date', models.DateField(blank=True, help_text='Explicit renewal date. Empty means start_date + 1 year.', null=True)),
                ('premium', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('earned', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('commission', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('created_by', models.ForeignKey(editable=False, help_text='Agent who captured this record.', on_delete=django.db.models.deletion.PROTECT, related_name='client_records', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'client_records',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['created_by', 'created_at'], name='idx_client_agent_created')],
            },
        ),
    ]
