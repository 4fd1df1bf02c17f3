from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='UserProfile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(blank=True, default='', max_length=200)),
                ('phone', models.CharField(blank=True, default='', max_length=20)),
                ('address', models.CharField(blank=True, default='', max_length=255)),
                ('must_change_password', models.BooleanField(default=True, help_text='Agent is still on the password they were provisioned with.')),
                ('password_changed_at', models.DateTimeField(blank=True, null=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'user_profiles',
            },
        ),
        migrations.CreateModel(
            name='AgentSettings',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('company_name', models.CharField(blank=True, default='', max_length=200)),
                ('company_address', models.CharField(blank=True, default='', max_length=255)),
                ('company_phone', models.CharField(blank=True, default='', max_length=20)),
                ('company_email', models.CharField(blank=True, default='', max_length=254)),
                ('default_commission', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Default commission rate (%).', max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('comprehensive_rate', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('third_party_rate', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('act_only_rate', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('dark_mode', models.BooleanField(default=False)),
                ('language', models.CharField(choices=[('en', 'English'), ('sw', 'Kiswahili')], default='en', max_length=5)),
                ('email_notifications', models.BooleanField(default=True)),
                ('expiry_alerts', models.BooleanField(default=True)),
                ('commission_updates', models.BooleanField(default=False)),
                ('default_page', models.CharField(choices=[('dashboard', 'Dashboard'), ('clients', 'Clients')], default='dashboard', max_length=20)),
                ('items_per_page', models.PositiveIntegerField(default=25)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='agent_settings', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'agent_settings',
                'verbose_name_plural': 'agent settings',
            },
        ),
    ]
