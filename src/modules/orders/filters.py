import django_filters

from modules.orders.constants import OrderStatus
from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=OrderStatus.choices)
    supplier = django_filters.NumberFilter(field_name="supplier_id")
    customer = django_filters.NumberFilter(field_name="customer_id")
    customer_email = django_filters.CharFilter(
        field_name="customer_email", lookup_expr="iexact"
    )
    start_date = django_filters.DateFilter(
        field_name="order_date", lookup_expr="date__gte"
    )
    end_date = django_filters.DateFilter(
        field_name="order_date", lookup_expr="date__lte"
    )

    class Meta:
        model = Order
        fields = [
            "status",
            "supplier",
            "customer",
            "customer_email",
            "start_date",
            "end_date",
        ]
