import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='BundleDiscount',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('min_items', models.PositiveIntegerField(help_text='Minimum number of items in the order for this tier.', validators=[MinValueValidator(2)])),
                ('discount_percentage', models.DecimalField(decimal_places=2, max_digits=5, validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))])),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'bundle_discounts',
                'ordering': ['min_items'],
            },
        ),
        migrations.CreateModel(
            name='CatalogItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('course_code', models.CharField(db_index=True, max_length=20)),
                ('description', models.TextField(blank=True)),
                ('price_minor', models.PositiveIntegerField(default=0, help_text='Price in satang (1 THB = 100 satang). 0 means free.')),
                ('is_active', models.BooleanField(default=True)),
                ('approval_status', models.CharField(choices=[('pending', 'Pending review'), ('approved', 'Approved'), ('rejected', 'Rejected')], default='pending', max_length=20)),
                ('file_path', models.CharField(blank=True, max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='catalog_items', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'catalog_items',
                'ordering': ['course_code', 'title'],
                'indexes': [
                    models.Index(fields=['is_active', 'approval_status'], name='catalog_visible_idx'),
                    models.Index(fields=['created_by'], name='catalog_created_by_idx'),
                ],
            },
        ),
    ]
