import django_filters

from modules.products.models import Product


class ProductFilter(django_filters.FilterSet):
    minPrice = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    maxPrice = django_filters.NumberFilter(field_name="price", lookup_expr="lte")

    class Meta:
        model = Product
        fields = ["minPrice", "maxPrice"]
