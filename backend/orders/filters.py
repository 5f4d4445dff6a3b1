import django_filters

from .models import Order, OrderStatus


class OrderFilter(django_filters.FilterSet):
    """
    Staff board filters.

    `open_only=true` hides orders that are already Ready.
    """

    open_only = django_filters.BooleanFilter(method="filter_open_only")
    status = django_filters.MultipleChoiceFilter(choices=OrderStatus.choices)
    pickup_date = django_filters.DateFilter(field_name="pickup_date")
    date_from = django_filters.DateFilter(field_name="pickup_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="pickup_date", lookup_expr="lte")
    code = django_filters.CharFilter(field_name="code", lookup_expr="iexact")

    class Meta:
        model = Order
        fields = ["open_only", "status", "pickup_date", "date_from", "date_to", "code"]

    def filter_open_only(self, queryset, name, value):
        if value:
            return queryset.exclude(status=OrderStatus.READY)
        return queryset
