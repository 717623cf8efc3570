"""External order API views.

Receives Speedy and Vault payloads and hands them to
``ExternalOrderService``.  Status mapping:

- malformed body                    -> 400 with the validation errors
- unknown customer / product / code -> 400 with the reference
- store failure                     -> 500 with a generic message
"""

from __future__ import annotations

from typing import Callable, Type

import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.external_orders.exceptions import PersistenceFailure, ReferenceNotFound
from modules.external_orders.schemas import SpeedyOrderPayload, VaultOrderPayload
from modules.external_orders.services import ExternalOrderService
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.products.repositories.django_repository import ProductDjangoRepository

logger = structlog.get_logger(__name__)

PERSISTENCE_ERROR = {
    "detail": "The order could not be saved. Please try again later."
}


class ExternalOrderViewSet(GenericViewSet):
    """Endpoints for orders received from external suppliers.

    No model backs this ViewSet; every route is an ``@action``.
    """

    pagination_class = None

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ExternalOrderService(
            order_repository=OrderDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )

    def _handle(
        self,
        request: Request,
        schema: Type[BaseModel],
        use_case: Callable[[BaseModel], BaseModel],
        success_status: int,
    ) -> Response:
        try:
            payload = schema.model_validate(request.data)
        except PydanticValidationError as exc:
            return Response(
                {"detail": "Invalid order payload.", "errors": exc.errors(
                    include_url=False, include_context=False, include_input=False
                )},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            result = use_case(payload)
        except ReferenceNotFound as exc:
            return Response(
                {
                    "detail": str(exc),
                    "kind": str(exc.kind),
                    "identifier": str(exc.identifier),
                },
                status=status.HTTP_400_BAD_REQUEST,
            )
        except PersistenceFailure:
            logger.exception("external_order.request_failed", path=request.path)
            return Response(
                PERSISTENCE_ERROR, status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return Response(result.model_dump(mode="json"), status=success_status)

    # ------------------------------------------------------------------
    # Transform
    # ------------------------------------------------------------------

    @action(detail=False, methods=["post"], url_path="speedy")
    def speedy(self, request: Request) -> Response:
        """POST /api/v1/external-orders/speedy/"""
        return self._handle(
            request,
            SpeedyOrderPayload,
            self._service.transform_speedy,
            status.HTTP_200_OK,
        )

    @action(detail=False, methods=["post"], url_path="vault")
    def vault(self, request: Request) -> Response:
        """POST /api/v1/external-orders/vault/"""
        return self._handle(
            request,
            VaultOrderPayload,
            self._service.transform_vault,
            status.HTTP_200_OK,
        )

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    @action(detail=False, methods=["post"], url_path="speedy/create")
    def create_speedy(self, request: Request) -> Response:
        """POST /api/v1/external-orders/speedy/create/"""
        return self._handle(
            request,
            SpeedyOrderPayload,
            self._service.create_speedy,
            status.HTTP_201_CREATED,
        )

    @action(detail=False, methods=["post"], url_path="vault/create")
    def create_vault(self, request: Request) -> Response:
        """POST /api/v1/external-orders/vault/create/"""
        return self._handle(
            request,
            VaultOrderPayload,
            self._service.create_vault,
            status.HTTP_201_CREATED,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @action(detail=False, methods=["get"], url_path="suppliers")
    def suppliers(self, request: Request) -> Response:
        """GET /api/v1/external-orders/suppliers/"""
        return Response(
            [s.model_dump(mode="json") for s in self._service.supported_suppliers()]
        )
