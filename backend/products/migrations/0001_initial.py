import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Category",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(help_text="Name of the product category.", max_length=100, unique=True)),
                ("order", models.IntegerField(default=0, help_text="Display order for this category. Lower numbers appear first.")),
                ("is_active", models.BooleanField(db_index=True, default=True)),
            ],
            options={
                "verbose_name": "Category",
                "verbose_name_plural": "Categories",
                "ordering": ["order", "name"],
            },
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("price", models.DecimalField(decimal_places=2, help_text="Base price before any customisation surcharge.", max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal("0.01"))])),
                ("is_active", models.BooleanField(db_index=True, default=True, help_text="Inactive products are hidden from the menu and cannot be ordered.")),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("category", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="products", to="products.category")),
            ],
            options={
                "verbose_name": "Product",
                "verbose_name_plural": "Products",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["is_active", "category"], name="product_active_cat_idx")],
            },
        ),
        migrations.CreateModel(
            name="SaladConfig",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("enabled", models.BooleanField(default=True)),
                ("included", models.PositiveIntegerField(default=0, help_text="Number of salads covered by the base price.")),
                ("extra_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), help_text="Charge for each salad beyond the included quota.", max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal("0.00"))])),
                ("items", models.JSONField(blank=True, default=list, help_text="Salad names on offer.")),
                ("product", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="salad_config", to="products.product")),
            ],
        ),
        migrations.CreateModel(
            name="ProductOption",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("key", models.SlugField(help_text="Stable key used in cart selections.")),
                ("label", models.CharField(help_text="Customer-facing name, e.g., 'Bread'", max_length=100)),
                ("selection_type", models.CharField(choices=[("single", "Single Choice"), ("multi", "Multiple Choices")], default="single", max_length=10)),
                ("is_required", models.BooleanField(default=False)),
                ("items", models.JSONField(blank=True, default=list)),
                ("display_order", models.PositiveIntegerField(default=0)),
                ("product", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="options", to="products.product")),
            ],
            options={
                "ordering": ["display_order", "id"],
                "constraints": [models.UniqueConstraint(fields=("product", "key"), name="unique_option_key_per_product")],
            },
        ),
    ]
