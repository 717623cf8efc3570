"""Product-code resolution for Vault orders.

Vault line items name products by GUID ``product_code``; the canonical
order needs the numeric product id.  Each distinct code is looked up
once, all lookups are issued concurrently, and each one is bounded by
its own timeout.  The outcome of every lookup is recorded as a
``ProductResolution`` instead of being raised, so one slow or failing
lookup never prevents the others from completing.  Callers decide what
an unresolved code means for them (drop the item, or reject the order).

The lookup itself is an ordinary synchronous callable (typically
``ProductDjangoRepository.get_by_product_code``) and is run through
``asgiref``'s ``sync_to_async``.  Pass an ``executor`` to run lookups on
its worker threads: a thread-sensitive lookup runs on the caller's thread,
so lookups queue behind each other and a timeout cannot free the caller.
"""

from __future__ import annotations

import asyncio
from concurrent.futures import Executor
from dataclasses import dataclass
from enum import StrEnum
from typing import Callable, Dict, Iterable, Optional, Protocol
from uuid import UUID

import structlog
from asgiref.sync import sync_to_async

logger = structlog.get_logger(__name__)


class ResolvedProduct(Protocol):
    id: int
    name: str


ProductLookup = Callable[[UUID], Optional[ResolvedProduct]]


class ResolutionStatus(StrEnum):
    RESOLVED = "resolved"
    NOT_FOUND = "not_found"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


@dataclass(frozen=True)
class ProductResolution:
    product_code: UUID
    status: ResolutionStatus
    product_id: Optional[int] = None
    product_name: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def resolved(self) -> bool:
        return self.status is ResolutionStatus.RESOLVED

    @property
    def missing(self) -> bool:
        """Not found, or took too long: both read as "no such product"."""
        return self.status in (ResolutionStatus.NOT_FOUND, ResolutionStatus.TIMED_OUT)


async def resolve_product_code(
    code: UUID,
    lookup: ProductLookup,
    timeout: float,
    thread_sensitive: bool = True,
    executor: Optional[Executor] = None,
) -> ProductResolution:
    """Resolve a single product code; never raises for lookup problems."""
    log = logger.bind(product_code=str(code))
    if executor is not None:
        run = sync_to_async(lookup, thread_sensitive=False, executor=executor)
    else:
        run = sync_to_async(lookup, thread_sensitive=thread_sensitive)
    try:
        product = await asyncio.wait_for(
            run(code),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        log.warning("product_code.lookup_timed_out", timeout=timeout)
        return ProductResolution(code, ResolutionStatus.TIMED_OUT)
    except Exception as exc:
        log.error("product_code.lookup_failed", error=str(exc))
        return ProductResolution(code, ResolutionStatus.FAILED, error=exc)

    if product is None:
        return ProductResolution(code, ResolutionStatus.NOT_FOUND)
    return ProductResolution(
        code,
        ResolutionStatus.RESOLVED,
        product_id=product.id,
        product_name=product.name,
    )


async def resolve_product_codes(
    codes: Iterable[UUID],
    lookup: ProductLookup,
    timeout: float,
    thread_sensitive: bool = True,
    executor: Optional[Executor] = None,
) -> Dict[UUID, ProductResolution]:
    """Resolve every distinct code concurrently.

    Returns a dict keyed by product code, in first-seen input order.
    """
    distinct = list(dict.fromkeys(codes))
    results = await asyncio.gather(
        *(
            resolve_product_code(code, lookup, timeout, thread_sensitive, executor)
            for code in distinct
        )
    )
    resolutions = dict(zip(distinct, results))
    logger.debug(
        "product_codes.resolved",
        requested=len(distinct),
        resolved=sum(1 for r in results if r.resolved),
    )
    return resolutions
