"""External order URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.external_orders.views import ExternalOrderViewSet

router = DefaultRouter(trailing_slash=True)
router.register("external-orders", ExternalOrderViewSet, basename="external-order")

urlpatterns = router.urls
