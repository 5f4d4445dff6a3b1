from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class Category(models.Model):
    name = models.CharField(
        max_length=100, unique=True, help_text=_("Name of the product category.")
    )
    order = models.IntegerField(
        default=0,
        help_text=_("Display order for this category. Lower numbers appear first."),
    )
    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        verbose_name = _("Category")
        verbose_name_plural = _("Categories")
        ordering = ["order", "name"]

    def __str__(self):
        return self.name


class Product(models.Model):
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
        help_text=_("Base price before any customisation surcharge."),
    )
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )
    is_active = models.BooleanField(
        default=True,
        db_index=True,
        help_text=_("Inactive products are hidden from the menu and cannot be ordered."),
    )
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Product")
        verbose_name_plural = _("Products")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["is_active", "category"], name="product_active_cat_idx"),
        ]

    def __str__(self):
        return self.name

    @property
    def is_configurable(self):
        salads = getattr(self, "salad_config", None)
        has_salads = bool(salads and salads.enabled)
        return has_salads or self.options.exists()


class SaladConfig(models.Model):
    """
    "Included quota + overage price" side-salad rule attached to a product.

    The first `included` salads are part of the base price; each salad beyond
    that adds `extra_price`.
    """

    product = models.OneToOneField(
        Product, on_delete=models.CASCADE, related_name="salad_config"
    )
    enabled = models.BooleanField(default=True)
    included = models.PositiveIntegerField(
        default=0, help_text=_("Number of salads covered by the base price.")
    )
    extra_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text=_("Charge for each salad beyond the included quota."),
    )
    items = models.JSONField(default=list, blank=True, help_text=_("Salad names on offer."))

    def __str__(self):
        return f"Salads for {self.product.name} ({self.included} included)"


class ProductOption(models.Model):
    class SelectionType(models.TextChoices):
        SINGLE = "single", _("Single Choice")
        MULTI = "multi", _("Multiple Choices")

    product = models.ForeignKey(
        Product, on_delete=models.CASCADE, related_name="options"
    )
    key = models.SlugField(max_length=50, help_text=_("Stable key used in cart selections."))
    label = models.CharField(max_length=100, help_text=_("Customer-facing name, e.g., 'Bread'"))
    selection_type = models.CharField(
        max_length=10, choices=SelectionType.choices, default=SelectionType.SINGLE
    )
    is_required = models.BooleanField(default=False)
    items = models.JSONField(default=list, blank=True)
    display_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["display_order", "id"]
        constraints = [
            models.UniqueConstraint(fields=["product", "key"], name="unique_option_key_per_product"),
        ]

    def __str__(self):
        return f"{self.product.name} - {self.label}"
