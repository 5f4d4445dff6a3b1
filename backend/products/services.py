from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, List, Optional

from django.db import transaction
import logging

from core_backend.errors import DomainError
from users.authorization import AuthorizationContext, require_admin
from .models import Category, Product, ProductOption, SaladConfig
from .pricing import ProductSnapshot

logger = logging.getLogger(__name__)


class ProductUnavailableError(DomainError):
    """A cart line references a product that does not exist or is switched off."""

    code = "product_unavailable"
    kind = "invalid-argument"

    def __init__(self, product_id, message=None):
        self.product_id = product_id
        super().__init__(message or f"Product {product_id} is not available.", product_id=product_id)


class ProductService:
    """Catalog reads for ordering, and the admin-only catalog edits."""

    @staticmethod
    def _with_config(queryset):
        return queryset.select_related("category", "salad_config").prefetch_related("options")

    @staticmethod
    def get_active_products():
        return ProductService._with_config(Product.objects.filter(is_active=True))

    @staticmethod
    def get_snapshots(product_ids: Iterable[int]) -> Dict[int, ProductSnapshot]:
        """
        Load authoritative snapshots for the given ids in one round trip.

        Raises ProductUnavailableError for the first id that is unknown or inactive.
        """
        ids = {int(pid) for pid in product_ids}
        products = {
            p.pk: p for p in ProductService._with_config(Product.objects.filter(pk__in=ids))
        }
        snapshots = {}
        for pid in sorted(ids):
            product = products.get(pid)
            if product is None:
                raise ProductUnavailableError(pid)
            if not product.is_active:
                raise ProductUnavailableError(pid, f"'{product.name}' is currently unavailable.")
            snapshots[pid] = ProductSnapshot.from_product(product)
        return snapshots

    @staticmethod
    def validate_price(price) -> Decimal:
        try:
            value = Decimal(str(price))
        except (InvalidOperation, TypeError, ValueError):
            raise ValueError("Invalid price")
        if not value.is_finite() or value <= 0:
            raise ValueError("Invalid price")
        return value

    @staticmethod
    @transaction.atomic
    def create_product(
        auth: AuthorizationContext,
        name: str,
        price,
        category: Optional[Category] = None,
        description: str = "",
        salads: Optional[dict] = None,
        options: Optional[List[dict]] = None,
    ) -> Product:
        require_admin(auth)

        name = (name or "").strip()
        if not name:
            raise ValueError("Product name is required")

        product = Product.objects.create(
            name=name,
            price=ProductService.validate_price(price),
            category=category,
            description=description or "",
        )
        ProductService.replace_configuration(product, salads=salads, options=options)
        logger.info(f"Created product {product.pk} '{product.name}'")
        return product

    @staticmethod
    def replace_configuration(product: Product, salads: Optional[dict] = None, options: Optional[List[dict]] = None):
        """Overwrite the salad rule and option list of a product. None leaves a part untouched."""
        if salads is not None:
            config, _ = SaladConfig.objects.update_or_create(
                product=product,
                defaults={
                    "enabled": salads.get("enabled", True),
                    "included": salads.get("included", 0),
                    "extra_price": salads.get("extra_price", Decimal("0.00")),
                    "items": list(salads.get("items", [])),
                },
            )
            product.salad_config = config

        if options is not None:
            product.options.all().delete()
            for index, option in enumerate(options):
                ProductOption.objects.create(
                    product=product,
                    key=option["key"],
                    label=option.get("label") or option["key"],
                    selection_type=option.get("selection_type", ProductOption.SelectionType.SINGLE),
                    is_required=option.get("is_required", False),
                    items=list(option.get("items", [])),
                    display_order=option.get("display_order", index),
                )
            getattr(product, "_prefetched_objects_cache", {}).pop("options", None)

    @staticmethod
    @transaction.atomic
    def update_product(auth: AuthorizationContext, product: Product, **fields) -> Product:
        require_admin(auth)

        salads = fields.pop("salads", None)
        options = fields.pop("options", None)
        if "price" in fields:
            fields["price"] = ProductService.validate_price(fields["price"])
        if "name" in fields:
            fields["name"] = (fields["name"] or "").strip()
            if not fields["name"]:
                raise ValueError("Product name is required")

        for attr, value in fields.items():
            setattr(product, attr, value)
        product.save()

        ProductService.replace_configuration(product, salads=salads, options=options)
        return product

    @staticmethod
    def update_price(auth: AuthorizationContext, product: Product, price) -> Product:
        require_admin(auth)
        product.price = ProductService.validate_price(price)
        product.save(update_fields=["price", "updated_at"])
        logger.info(f"Updated price of product {product.pk} to {product.price}")
        return product

    @staticmethod
    def toggle_active(auth: AuthorizationContext, product: Product) -> Product:
        require_admin(auth)
        product.is_active = not product.is_active
        product.save(update_fields=["is_active", "updated_at"])
        logger.info(f"Product {product.pk} is now {'active' if product.is_active else 'inactive'}")
        return product

    @staticmethod
    def delete_product(auth: AuthorizationContext, product: Product) -> None:
        # Past orders keep their own copy of name and price, so a hard delete is safe.
        require_admin(auth)
        logger.info(f"Deleting product {product.pk} '{product.name}'")
        product.delete()
