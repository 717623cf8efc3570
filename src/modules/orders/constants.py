"""Order domain constants.

Defines the fulfilment status choices and the forward-only transitions
between them.  The integer values are part of the wire contract.
"""

from django.db import models


class OrderStatus(models.IntegerChoices):
    RECEIVED = 0, "Received"
    PICKING = 1, "Picking"
    DISPATCHED = 2, "Dispatched"
    DELIVERED = 3, "Delivered"


VALID_TRANSITIONS: dict[int, set[int]] = {
    OrderStatus.RECEIVED: {OrderStatus.PICKING},
    OrderStatus.PICKING: {OrderStatus.DISPATCHED},
    OrderStatus.DISPATCHED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),
}

TERMINAL_STATES: set[int] = {OrderStatus.DELIVERED}
