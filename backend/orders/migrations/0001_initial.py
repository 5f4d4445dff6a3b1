import django.db.models.deletion
import django.utils.timezone
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("code", models.CharField(help_text="Short tracking code given to the customer", max_length=6, unique=True)),
                ("pickup_date", models.DateField(db_index=True)),
                ("pickup_start_minute", models.PositiveIntegerField(help_text="Minutes since midnight of pickup_date")),
                ("pickup_time_label", models.CharField(max_length=20)),
                ("total", models.DecimalField(decimal_places=2, max_digits=10)),
                ("status", models.CharField(choices=[("NEW", "New"), ("IN_PROGRESS", "In progress"), ("READY", "Ready")], db_index=True, default="NEW", max_length=20)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Order",
                "verbose_name_plural": "Orders",
                "ordering": ["pickup_date", "pickup_start_minute", "created_at"],
                "indexes": [
                    models.Index(fields=["pickup_date", "pickup_start_minute"], name="order_pickup_idx"),
                    models.Index(fields=["status", "pickup_date"], name="order_status_date_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("product_id", models.PositiveBigIntegerField(blank=True, null=True)),
                ("name", models.CharField(max_length=200)),
                ("display_name", models.CharField(max_length=500)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("custom", models.JSONField(blank=True, help_text="Chosen options and salads, when the product is configurable", null=True)),
                ("position", models.PositiveIntegerField(default=0)),
                ("order", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="items", to="orders.order")),
            ],
            options={
                "ordering": ["position", "id"],
            },
        ),
        migrations.CreateModel(
            name="PublicOrderStatus",
            fields=[
                ("code", models.CharField(max_length=6, primary_key=True, serialize=False)),
                ("status", models.CharField(choices=[("NEW", "New"), ("IN_PROGRESS", "In progress"), ("READY", "Ready")], default="NEW", max_length=20)),
                ("pickup_time_label", models.CharField(max_length=20)),
                ("pickup_date", models.DateField()),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "verbose_name": "Public Order Status",
                "verbose_name_plural": "Public Order Statuses",
            },
        ),
        migrations.CreateModel(
            name="PublicCapacityEntry",
            fields=[
                ("order_id", models.UUIDField(primary_key=True, serialize=False)),
                ("pickup_time_label", models.CharField(max_length=20)),
                ("pickup_start_minute", models.PositiveIntegerField()),
                ("pickup_date", models.DateField()),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "verbose_name": "Public Capacity Entry",
                "verbose_name_plural": "Public Capacity Entries",
                "indexes": [
                    models.Index(fields=["pickup_date", "pickup_start_minute"], name="capacity_entry_slot_idx"),
                ],
            },
        ),
    ]
