"""External order exceptions.

``ReferenceNotFound`` is a client error: the payload names a customer,
product or product code that does not exist.  ``PersistenceFailure`` is
a server error: the store failed while validating or saving.  Views map
the first to 400 and the second to 500.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ReferenceKind(StrEnum):
    CUSTOMER = "Customer"
    PRODUCT = "Product"
    PRODUCT_CODE = "ProductCode"


_MESSAGES = {
    ReferenceKind.CUSTOMER: "Customer ID {identifier} not found.",
    ReferenceKind.PRODUCT: "Product ID {identifier} not found.",
    ReferenceKind.PRODUCT_CODE: "Product Code {identifier} not found.",
}


class ReferenceNotFound(Exception):
    """A referenced entity could not be validated."""

    def __init__(self, kind: ReferenceKind, identifier: Any) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(_MESSAGES[kind].format(identifier=identifier))


class PersistenceFailure(Exception):
    """The store raised while an order was being validated or saved."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Failed to persist order: {cause}")
