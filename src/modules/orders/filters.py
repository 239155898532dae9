import django_filters

from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    # status and customerEmail are applied by OrderService.list_orders
    startDate = django_filters.DateFilter(field_name="created_at", lookup_expr="date__gte")
    endDate = django_filters.DateFilter(field_name="created_at", lookup_expr="date__lte")

    class Meta:
        model = Order
        fields = ["startDate", "endDate"]
