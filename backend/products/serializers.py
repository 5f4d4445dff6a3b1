from decimal import Decimal

from rest_framework import serializers

from .models import Category, Product, ProductOption, SaladConfig
from .pricing import is_well_formed_selection


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "order", "is_active"]


class SaladConfigSerializer(serializers.ModelSerializer):
    items = serializers.ListField(child=serializers.CharField(max_length=100), required=False)

    class Meta:
        model = SaladConfig
        fields = ["enabled", "included", "extra_price", "items"]


class ProductOptionSerializer(serializers.ModelSerializer):
    items = serializers.ListField(child=serializers.CharField(max_length=100), required=False)

    class Meta:
        model = ProductOption
        fields = ["key", "label", "selection_type", "is_required", "items", "display_order"]
        extra_kwargs = {"display_order": {"required": False}}


class ProductSerializer(serializers.ModelSerializer):
    """
    Catalog product with its customisation config nested under `salads`/`options`.

    Writes go through ProductService so the admin capability check and the
    price rule live in one place.
    """

    category_name = serializers.CharField(source="category.name", read_only=True, default=None)
    salads = SaladConfigSerializer(source="salad_config", required=False, allow_null=True)
    options = ProductOptionSerializer(many=True, required=False)
    is_configurable = serializers.BooleanField(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price",
            "category",
            "category_name",
            "is_active",
            "is_configurable",
            "salads",
            "options",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "is_active", "created_at", "updated_at"]

    def validate_price(self, value):
        if value is None or value <= Decimal("0"):
            raise serializers.ValidationError("Price must be greater than zero.")
        return value

    def validate_options(self, value):
        keys = [opt["key"] for opt in value]
        if len(keys) != len(set(keys)):
            raise serializers.ValidationError("Option keys must be unique per product.")
        return value


class PriceUpdateSerializer(serializers.Serializer):
    price = serializers.DecimalField(max_digits=10, decimal_places=2)


class ResolveLineSerializer(serializers.Serializer):
    """Input of a price/display preview for one product."""

    salads = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    selections = serializers.DictField(required=False, default=dict)

    def validate_selections(self, value):
        for key, choice in value.items():
            if not is_well_formed_selection(choice):
                raise serializers.ValidationError(f"Selection '{key}' must be a string or a list of strings.")
        return value


class ResolvedLineSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(allow_null=True)
    name = serializers.CharField()
    display_name = serializers.CharField()
    final_price = serializers.DecimalField(max_digits=10, decimal_places=2)
    is_valid = serializers.BooleanField()
    errors = serializers.ListField(child=serializers.CharField())
