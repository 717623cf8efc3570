"""Unit tests for the Speedy payload schema and mapper.

Covers:
- field-by-field mapping of customer, addresses and line items.
- timestamp normalization to UTC.
- absent line items and addresses.
- derived total and item count.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.external_orders.mappers import speedy_to_order
from modules.external_orders.schemas import SpeedyOrderPayload
from modules.orders.constants import OrderStatus

pytestmark = pytest.mark.unit


def _payload(**overrides) -> dict:
    data = {
        "customerId": 123,
        "orderTimestamp": "2024-01-15T10:30:00Z",
        "billTo": {
            "streetAddress": "1 High Street",
            "city": "London",
            "region": "Greater London",
            "postCode": "EC1A 1BB",
            "country": "GB",
        },
        "shipTo": {
            "streetAddress": "2 Dock Road",
            "city": "Leeds",
            "region": "West Yorkshire",
            "postCode": "LS1 4AP",
            "country": "GB",
        },
        "lineItems": [
            {"productId": 1, "qty": 5, "unitPrice": 29.99},
            {"productId": 2, "qty": 3, "unitPrice": 49.99},
            {"productId": 3, "qty": 2, "unitPrice": 10.00},
        ],
    }
    data.update(overrides)
    return data


class TestSpeedyToOrder:
    def test_maps_identity_and_supplier(self):
        order = speedy_to_order(SpeedyOrderPayload.model_validate(_payload()))

        assert order.customer_id == 123
        assert order.customer_email is None
        assert order.supplier_id == 1
        assert order.status == OrderStatus.RECEIVED

    def test_maps_addresses(self):
        order = speedy_to_order(SpeedyOrderPayload.model_validate(_payload()))

        assert order.billing_address.street == "1 High Street"
        assert order.billing_address.county == "Greater London"
        assert order.billing_address.postal_code == "EC1A 1BB"
        assert order.delivery_address.city == "Leeds"
        assert order.delivery_address.country == "GB"

    def test_maps_line_items_in_order(self):
        order = speedy_to_order(SpeedyOrderPayload.model_validate(_payload()))

        assert [(i.product_id, i.quantity) for i in order.items] == [
            (1, 5),
            (2, 3),
            (3, 2),
        ]
        assert order.items[0].price == Decimal("29.99")

    def test_total_and_item_count(self):
        order = speedy_to_order(SpeedyOrderPayload.model_validate(_payload()))

        assert order.total_amount == Decimal("319.92")
        assert order.item_count == 3

    def test_same_payload_maps_to_equal_orders(self):
        payload = SpeedyOrderPayload.model_validate(_payload())
        assert speedy_to_order(payload) == speedy_to_order(payload)


class TestSpeedyOptionalParts:
    def test_missing_line_items_gives_empty_order(self):
        data = _payload()
        del data["lineItems"]
        order = speedy_to_order(SpeedyOrderPayload.model_validate(data))

        assert order.items == []
        assert order.total_amount == Decimal("0")
        assert order.item_count == 0

    def test_null_line_items_gives_empty_order(self):
        order = speedy_to_order(
            SpeedyOrderPayload.model_validate(_payload(lineItems=None))
        )
        assert order.items == []

    def test_missing_addresses_are_none(self):
        data = _payload()
        del data["billTo"]
        del data["shipTo"]
        order = speedy_to_order(SpeedyOrderPayload.model_validate(data))

        assert order.billing_address is None
        assert order.delivery_address is None

    def test_partial_address_keeps_absent_fields_none(self):
        order = speedy_to_order(
            SpeedyOrderPayload.model_validate(_payload(billTo={"city": "Bath"}))
        )
        assert order.billing_address.city == "Bath"
        assert order.billing_address.street is None


class TestSpeedyTimestamp:
    def test_zulu_timestamp_kept_in_utc(self):
        order = speedy_to_order(SpeedyOrderPayload.model_validate(_payload()))
        assert order.order_date == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_offset_timestamp_converted_to_utc(self):
        order = speedy_to_order(
            SpeedyOrderPayload.model_validate(
                _payload(orderTimestamp="2024-01-15T12:30:00+02:00")
            )
        )
        assert order.order_date == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
        assert order.order_date.utcoffset().total_seconds() == 0

    def test_naive_timestamp_taken_as_utc(self):
        order = speedy_to_order(
            SpeedyOrderPayload.model_validate(
                _payload(orderTimestamp="2024-01-15T10:30:00")
            )
        )
        assert order.order_date.tzinfo is not None
        assert order.order_date == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


class TestSpeedyPayloadValidation:
    def test_missing_customer_id_rejected(self):
        data = _payload()
        del data["customerId"]
        with pytest.raises(ValidationError):
            SpeedyOrderPayload.model_validate(data)

    def test_unparseable_timestamp_rejected(self):
        with pytest.raises(ValidationError):
            SpeedyOrderPayload.model_validate(_payload(orderTimestamp="yesterday"))

    def test_line_item_without_price_rejected(self):
        with pytest.raises(ValidationError):
            SpeedyOrderPayload.model_validate(
                _payload(lineItems=[{"productId": 1, "qty": 1}])
            )

    @pytest.mark.parametrize("qty", [0, -1])
    def test_non_positive_quantity_rejected(self, qty):
        with pytest.raises(ValidationError):
            SpeedyOrderPayload.model_validate(
                _payload(lineItems=[{"productId": 1, "qty": qty, "unitPrice": 1}])
            )

    @pytest.mark.parametrize("price", ["-0.01", "0.333"])
    def test_negative_or_sub_cent_price_rejected(self, price):
        with pytest.raises(ValidationError):
            SpeedyOrderPayload.model_validate(
                _payload(lineItems=[{"productId": 1, "qty": 1, "unitPrice": price}])
            )

    def test_snake_case_names_accepted(self):
        payload = SpeedyOrderPayload.model_validate(
            {"customer_id": 5, "order_timestamp": "2024-01-15T10:30:00Z"}
        )
        assert payload.customer_id == 5

    def test_payload_is_immutable(self):
        payload = SpeedyOrderPayload.model_validate(_payload())
        with pytest.raises(ValidationError):
            payload.customer_id = 9
