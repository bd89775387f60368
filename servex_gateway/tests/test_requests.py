"""
Unit tests for inbound order and review validation.
"""

import pytest

from shared.errors import ValidationError
from servex_gateway.app.domain.requests import (
    ORDER_ITEMS_MESSAGE,
    ORDER_REQUIRED_MESSAGE,
    REVIEW_REQUIRED_MESSAGE,
    OrderLine,
    parse_order_request,
    parse_review_request,
    to_number,
)


@pytest.fixture
def order_payload():
    return {
        "tableNumber": 5,
        "customer": {"name": "A", "email": "a@example.com", "phone": "555"},
        "items": [{"itemId": "x", "quantity": 2}],
    }


class TestToNumber:

    @pytest.mark.parametrize(
        "value, expected",
        [
            (5, 5),
            ("5", 5),
            (" 7 ", 7),
            ("2.5", 2.5),
            (3.0, 3),
            ("", None),
            ("abc", None),
            (None, None),
            (True, None),
            ("inf", None),
            (float("nan"), None),
            ([1], None),
        ],
    )
    def test_coercion(self, value, expected):
        assert to_number(value) == expected


class TestParseOrderRequest:
    """Test cases for order validation."""

    def test_valid_order(self, order_payload):
        order = parse_order_request(order_payload)

        assert order.table_number == 5
        assert order.customer["name"] == "A"
        assert order.items == (OrderLine(item_id="x", quantity=2),)

    def test_backend_shape(self, order_payload):
        order_payload["tableNumber"] = "5"
        order_payload["items"][0]["quantity"] = "2"

        assert parse_order_request(order_payload).to_backend() == {
            "tableNumber": 5,
            "customer": {"name": "A", "email": "a@example.com", "phone": "555"},
            "items": [{"itemId": "x", "quantity": 2}],
        }

    @pytest.mark.parametrize("table_number", [0, -1, "abc", "", None, 2.5, True])
    def test_invalid_table_number(self, order_payload, table_number):
        order_payload["tableNumber"] = table_number

        with pytest.raises(ValidationError) as exc_info:
            parse_order_request(order_payload)

        assert exc_info.value.message == ORDER_REQUIRED_MESSAGE
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize("field", ["customer", "items"])
    def test_missing_top_level_field(self, order_payload, field):
        del order_payload[field]

        with pytest.raises(ValidationError, match=ORDER_REQUIRED_MESSAGE):
            parse_order_request(order_payload)

    def test_empty_items(self, order_payload):
        order_payload["items"] = []

        with pytest.raises(ValidationError, match=ORDER_REQUIRED_MESSAGE):
            parse_order_request(order_payload)

    def test_top_level_check_runs_before_item_check(self, order_payload):
        order_payload["tableNumber"] = 0
        order_payload["items"] = [{"itemId": "x", "quantity": 0}]

        with pytest.raises(ValidationError) as exc_info:
            parse_order_request(order_payload)

        assert exc_info.value.message == ORDER_REQUIRED_MESSAGE

    def test_invalid_lines_are_dropped(self, order_payload):
        order_payload["items"] = [
            {"itemId": "x", "quantity": 2},
            {"itemId": "", "quantity": 1},
            {"itemId": "y", "quantity": 0},
            {"itemId": "z", "quantity": "many"},
            "not-a-line",
            {"itemId": "w", "quantity": "3"},
        ]

        order = parse_order_request(order_payload)

        assert [line.item_id for line in order.items] == ["x", "w"]
        assert order.items[1].quantity == 3

    def test_all_lines_invalid(self, order_payload):
        order_payload["items"] = [
            {"itemId": "x", "quantity": 0},
            {"itemId": "y", "quantity": -3},
            {"itemId": "z"},
        ]

        with pytest.raises(ValidationError) as exc_info:
            parse_order_request(order_payload)

        assert exc_info.value.message == ORDER_ITEMS_MESSAGE

    def test_non_object_payload(self):
        with pytest.raises(ValidationError, match=ORDER_REQUIRED_MESSAGE):
            parse_order_request(["not", "an", "object"])


class TestParseReviewRequest:
    """Test cases for review validation."""

    def test_valid_review(self):
        review = parse_review_request({"itemId": "x", "text": "  Great pasta  ", "rating": 5})

        assert review.item_id == "x"
        assert review.text == "Great pasta"
        assert review.rating == 5

    @pytest.mark.parametrize(
        "payload",
        [
            {"text": "Nice"},
            {"itemId": "", "text": "Nice"},
            {"itemId": "x"},
            {"itemId": "x", "text": "   "},
            {"itemId": "x", "text": None},
        ],
    )
    def test_missing_fields(self, payload):
        with pytest.raises(ValidationError) as exc_info:
            parse_review_request(payload)

        assert exc_info.value.message == REVIEW_REQUIRED_MESSAGE

    @pytest.mark.parametrize("rating", ["abc", "", None, float("inf"), {"stars": 4}])
    def test_unusable_rating_is_absent(self, rating):
        review = parse_review_request({"itemId": "x", "text": "ok", "rating": rating})

        assert review.rating is None
        assert review.to_backend() == {"itemId": "x", "text": "ok", "rating": None}

    def test_numeric_string_rating(self):
        assert parse_review_request({"itemId": "x", "text": "ok", "rating": "4"}).rating == 4

    def test_rating_omitted(self):
        assert parse_review_request({"itemId": "x", "text": "ok"}).rating is None
