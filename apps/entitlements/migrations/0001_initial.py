import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('catalog', '0001_initial'),
        ('orders', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Purchase',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('granted_at', models.DateTimeField(auto_now_add=True)),
                ('catalog_item', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='purchases', to='catalog.catalogitem')),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='purchases', to='orders.order')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='purchases', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'purchases',
                'ordering': ['-granted_at'],
                'constraints': [
                    models.UniqueConstraint(fields=('user', 'catalog_item'), name='unique_purchase_per_user_item'),
                    models.UniqueConstraint(fields=('order', 'catalog_item'), name='unique_purchase_per_order_item'),
                ],
            },
        ),
    ]
