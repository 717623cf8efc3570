from django.apps import AppConfig


class ExternalOrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.external_orders"
    label = "external_orders"
    verbose_name = "External supplier orders"
