from django_filters import rest_framework as filters
from .models import Product


class ProductFilter(filters.FilterSet):
    category = filters.CharFilter(method="filter_by_category")

    class Meta:
        model = Product
        fields = ["category", "is_active"]

    def filter_by_category(self, queryset, name, value):
        # "uncategorized" selects products without a category
        if value == "uncategorized":
            return queryset.filter(category__isnull=True)
        try:
            return queryset.filter(category_id=int(value))
        except ValueError:
            return queryset.none()
