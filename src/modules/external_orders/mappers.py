"""Translate supplier payloads into the canonical ``OrderDTO``.

``speedy_to_order`` and ``vault_to_order`` are pure: no I/O, same input
gives an identical order.  ``map_vault_order`` is the asynchronous
entry point that first resolves Vault product codes and then maps.

Vault items whose code does not resolve are left out of the mapped
order without raising.  The create and transform services reject such
payloads before they get here; only direct mapper callers see the drop.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional
from uuid import UUID

import structlog

from modules.external_orders.constants import SPEEDY, VAULT
from modules.external_orders.resolution import (
    ProductLookup,
    ProductResolution,
    resolve_product_codes,
)
from modules.external_orders.schemas import (
    SpeedyAddressPayload,
    SpeedyOrderPayload,
    VaultLocationPayload,
    VaultOrderPayload,
)
from modules.orders.constants import OrderStatus
from modules.orders.dtos import AddressDTO, OrderDTO, OrderItemDTO

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Speedy
# ---------------------------------------------------------------------------


def _speedy_address(address: Optional[SpeedyAddressPayload]) -> Optional[AddressDTO]:
    if address is None:
        return None
    return AddressDTO(
        street=address.street_address,
        city=address.city,
        county=address.region,
        postal_code=address.post_code,
        country=address.country,
    )


def speedy_to_order(payload: SpeedyOrderPayload) -> OrderDTO:
    return OrderDTO(
        customer_id=payload.customer_id,
        customer_email=None,
        supplier_id=SPEEDY.supplier_id,
        order_date=payload.order_timestamp,
        status=OrderStatus.RECEIVED,
        billing_address=_speedy_address(payload.bill_to),
        delivery_address=_speedy_address(payload.ship_to),
        items=[
            OrderItemDTO(
                product_id=item.product_id,
                quantity=item.qty,
                price=item.unit_price,
            )
            for item in payload.line_items or []
        ],
    )


# ---------------------------------------------------------------------------
# Vault
# ---------------------------------------------------------------------------


def _vault_address(location: Optional[VaultLocationPayload]) -> Optional[AddressDTO]:
    if location is None:
        return None
    return AddressDTO(
        street=location.address_line,
        city=location.city_name,
        county=location.state_province,
        postal_code=location.zip_postal,
        country=location.country_code,
    )


def vault_to_order(
    payload: VaultOrderPayload,
    resolutions: Mapping[UUID, ProductResolution],
) -> OrderDTO:
    """Map a Vault payload using already-resolved product codes."""
    details = payload.delivery_details
    items: List[OrderItemDTO] = []
    for item in payload.items or []:
        resolution = resolutions.get(item.product_code)
        if resolution is None or not resolution.resolved:
            logger.info(
                "vault_order.item_dropped",
                product_code=str(item.product_code),
                status=resolution.status if resolution else "unresolved",
            )
            continue
        items.append(
            OrderItemDTO(
                product_id=resolution.product_id,
                quantity=item.quantity_ordered,
                price=item.price_per_unit,
            )
        )

    return OrderDTO(
        customer_id=None,
        customer_email=payload.customer_email,
        supplier_id=VAULT.supplier_id,
        order_date=payload.placed_at_utc,
        status=OrderStatus.RECEIVED,
        billing_address=_vault_address(details.billing_location if details else None),
        delivery_address=_vault_address(
            details.shipping_location if details else None
        ),
        items=items,
    )


async def map_vault_order(
    payload: VaultOrderPayload,
    lookup: ProductLookup,
    timeout: float,
    thread_sensitive: bool = True,
) -> OrderDTO:
    """Resolve the payload's product codes, then map it."""
    resolutions: Dict[UUID, ProductResolution] = await resolve_product_codes(
        payload.product_codes, lookup, timeout, thread_sensitive
    )
    return vault_to_order(payload, resolutions)
