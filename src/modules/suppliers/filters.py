import django_filters

from modules.suppliers.models import Supplier


class SupplierFilter(django_filters.FilterSet):
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")

    class Meta:
        model = Supplier
        fields = ["name"]
