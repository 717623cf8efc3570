"""External order service layer (Use Cases).

Validates, normalizes and persists orders posted by the Speedy and Vault
suppliers.  Two kinds of use-case per supplier:

- *transform*: map the payload to the canonical order and return it,
  without existence checks and without persisting.  Vault still has to
  resolve product codes; an unresolvable code is rejected here.
- *create*: check every referenced entity, map, persist through the
  order repository and return a summary with the order reference.

Vault product codes are resolved exactly once per request and the same
resolutions feed both validation and mapping.

Failure classification:
- ``ReferenceNotFound``: a customer / product / product code does not
  exist (client error, nothing is persisted).
- ``PersistenceFailure``: the store raised while checking references,
  resolving product codes or saving (server error, never retried here).
"""

from __future__ import annotations

from concurrent.futures import Executor, ThreadPoolExecutor
from functools import lru_cache
from typing import TYPE_CHECKING, Dict, List, Optional
from uuid import UUID

import structlog
from asgiref.sync import async_to_sync
from django.conf import settings
from django.db import DatabaseError, close_old_connections

from modules.external_orders.constants import SPEEDY, VAULT, SupportedSupplier
from modules.external_orders.dtos import (
    ProductCodeResolutionDTO,
    SpeedyCreateResult,
    SpeedyTransformResult,
    SupportedSupplierDTO,
    TransformedOrderDTO,
    VaultCreateResult,
    VaultTransformResult,
)
from modules.external_orders.exceptions import (
    PersistenceFailure,
    ReferenceKind,
    ReferenceNotFound,
)
from modules.external_orders.mappers import speedy_to_order, vault_to_order
from modules.external_orders.resolution import (
    ProductResolution,
    ResolutionStatus,
    resolve_product_codes,
)
from modules.orders.constants import OrderStatus

if TYPE_CHECKING:
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.external_orders.schemas import SpeedyOrderPayload, VaultOrderPayload
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


@lru_cache(maxsize=1)
def lookup_executor() -> ThreadPoolExecutor:
    """Process-wide worker pool for product-code lookups."""
    return ThreadPoolExecutor(
        max_workers=settings.EXTERNAL_ORDERS_LOOKUP_WORKERS,
        thread_name_prefix="product-lookup",
    )


class ExternalOrderService:
    """Application service for supplier order use-cases.

    Receives repositories via constructor injection.  ``lookup_timeout``
    bounds each product-code lookup (seconds) and defaults to
    ``settings.EXTERNAL_ORDERS_LOOKUP_TIMEOUT``.  Lookups run on
    ``executor`` (the shared ``lookup_executor()`` pool by default), never
    on the request thread, so a slow lookup is abandoned at its timeout
    while the others complete.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        customer_repository: ICustomerRepository,
        product_repository: IProductRepository,
        lookup_timeout: Optional[float] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        self._order_repo = order_repository
        self._customer_repo = customer_repository
        self._product_repo = product_repository
        self._lookup_timeout = (
            lookup_timeout
            if lookup_timeout is not None
            else settings.EXTERNAL_ORDERS_LOOKUP_TIMEOUT
        )
        self._executor = executor or lookup_executor()

    # ------------------------------------------------------------------
    # Transform (preview only)
    # ------------------------------------------------------------------

    def transform_speedy(self, payload: SpeedyOrderPayload) -> SpeedyTransformResult:
        order = speedy_to_order(payload)
        logger.info(
            "external_order.transformed",
            supplier=SPEEDY.display_name,
            item_count=order.item_count,
        )
        return SpeedyTransformResult(
            message="Speedy order transformed successfully.",
            supplier=SPEEDY.display_name,
            transformed_order=TransformedOrderDTO.from_order(order, SPEEDY),
        )

    def transform_vault(self, payload: VaultOrderPayload) -> VaultTransformResult:
        """Raises ``ReferenceNotFound`` for the first unresolvable product code."""
        log = logger.bind(supplier=VAULT.display_name)
        resolutions = self._resolve(payload.product_codes)
        self._ensure_resolved(resolutions, log)

        order = vault_to_order(payload, resolutions)
        log.info("external_order.transformed", item_count=order.item_count)
        return VaultTransformResult(
            message="Vault order transformed successfully.",
            supplier=VAULT.display_name,
            transformed_order=TransformedOrderDTO.from_order(order, VAULT),
            product_code_resolution=self._resolution_records(resolutions),
        )

    # ------------------------------------------------------------------
    # Create (validate + persist)
    # ------------------------------------------------------------------

    def create_speedy(self, payload: SpeedyOrderPayload) -> SpeedyCreateResult:
        """Validate and persist a Speedy order.

        The customer is checked first; when it is missing no product is
        checked and nothing is persisted.

        Raises:
            ReferenceNotFound: unknown customer id or product id.
            PersistenceFailure: the store failed.
        """
        log = logger.bind(
            supplier=SPEEDY.display_name, customer_id=payload.customer_id
        )
        try:
            if not self._customer_repo.exists(payload.customer_id):
                raise self._not_found(log, ReferenceKind.CUSTOMER, payload.customer_id)

            product_ids = dict.fromkeys(i.product_id for i in payload.line_items or [])
            for product_id in product_ids:
                if not self._product_repo.exists(product_id):
                    raise self._not_found(log, ReferenceKind.PRODUCT, product_id)

            order = speedy_to_order(payload)
            created = self._order_repo.create(order)
        except DatabaseError as exc:
            log.error("external_order.persistence_failed", error=str(exc))
            raise PersistenceFailure(exc) from exc

        log.info(
            "external_order.created",
            order_id=created.id,
            detail=f"Speedy order {created.id} created and saved successfully.",
        )
        return SpeedyCreateResult(
            **self._summary(SPEEDY, created),
        )

    def create_vault(self, payload: VaultOrderPayload) -> VaultCreateResult:
        """Validate and persist a Vault order.

        Raises:
            ReferenceNotFound: a product code does not resolve (or timed out).
            PersistenceFailure: the store failed.
        """
        log = logger.bind(
            supplier=VAULT.display_name, customer_email=payload.customer_email
        )
        resolutions = self._resolve(payload.product_codes)
        self._ensure_resolved(resolutions, log)

        order = vault_to_order(payload, resolutions)
        try:
            created = self._order_repo.create(order)
        except DatabaseError as exc:
            log.error("external_order.persistence_failed", error=str(exc))
            raise PersistenceFailure(exc) from exc

        log.info(
            "external_order.created",
            order_id=created.id,
            detail=f"Vault order {created.id} created and saved successfully.",
        )
        return VaultCreateResult(
            **self._summary(VAULT, created),
            product_resolutions=self._resolution_records(resolutions),
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def supported_suppliers(self) -> List[SupportedSupplierDTO]:
        return [
            SupportedSupplierDTO(
                id=SPEEDY.supplier_id,
                name=SPEEDY.display_name,
                reference_tag=SPEEDY.tag,
                customer_identification="customer_id",
                description=(
                    "ISO-8601 timestamps, numeric customer and product ids."
                ),
                transform_endpoint="/api/v1/external-orders/speedy/",
                create_endpoint="/api/v1/external-orders/speedy/create/",
            ),
            SupportedSupplierDTO(
                id=VAULT.supplier_id,
                name=VAULT.display_name,
                reference_tag=VAULT.tag,
                customer_identification="customer_email",
                description=(
                    "Unix-seconds timestamps, customer email and GUID product codes."
                ),
                transform_endpoint="/api/v1/external-orders/vault/",
                create_endpoint="/api/v1/external-orders/vault/create/",
            ),
        ]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve(self, codes: List[UUID]) -> Dict[UUID, ProductResolution]:
        return async_to_sync(resolve_product_codes)(
            codes,
            self._lookup_product,
            self._lookup_timeout,
            executor=self._executor,
        )

    def _lookup_product(self, code: UUID):
        """Runs on a lookup worker, which holds its own database connection."""
        try:
            return self._product_repo.get_by_product_code(code)
        finally:
            close_old_connections()

    def _ensure_resolved(
        self, resolutions: Dict[UUID, ProductResolution], log
    ) -> None:
        for code, resolution in resolutions.items():
            if resolution.status is ResolutionStatus.FAILED:
                log.error(
                    "external_order.persistence_failed",
                    product_code=str(code),
                    error=str(resolution.error),
                )
                raise PersistenceFailure(resolution.error)
            if resolution.missing:
                raise self._not_found(log, ReferenceKind.PRODUCT_CODE, code)

    @staticmethod
    def _not_found(log, kind: ReferenceKind, identifier) -> ReferenceNotFound:
        exc = ReferenceNotFound(kind, identifier)
        log.warning(
            "external_order.reference_not_found",
            kind=str(kind),
            identifier=str(identifier),
            detail=str(exc),
        )
        return exc

    @staticmethod
    def _resolution_records(
        resolutions: Dict[UUID, ProductResolution],
    ) -> List[ProductCodeResolutionDTO]:
        return [
            ProductCodeResolutionDTO.from_resolution(r)
            for r in resolutions.values()
            if r.resolved
        ]

    @staticmethod
    def _summary(supplier: SupportedSupplier, created: Order) -> dict:
        """Summarize the order as stored, not as posted."""
        order_id = created.id
        return {
            "success": True,
            "message": f"{supplier.display_name} order created successfully.",
            "order_id": order_id,
            "order_reference": supplier.order_reference(order_id),
            "supplier": supplier.display_name,
            "total_amount": created.total_amount,
            "item_count": created.item_count,
            "order_date": created.order_date,
            "status": OrderStatus(created.status).label,
        }
