"""Tests for Subscription entity rules: creation, partial update, presentation"""
import uuid
from datetime import date, datetime

import pytest

from app.domain.period import InvalidPeriodFormat
from app.domain.subscription import (
    Subscription, SubscriptionPatch, SubscriptionValidationError,
    MAX_PRICE, MAX_SERVICE_NAME_LENGTH,
    build_new, apply_partial_update, to_presentation,
)

USER = uuid.UUID("60601fee-2bf1-4721-ae6f-7636e79a0cba")


class TestBuildNew:
    def test_valid_open_ended(self):
        sub = build_new("Yandex Plus", 400, USER, "07-2025")
        assert isinstance(sub.id, uuid.UUID)
        assert sub.service_name == "Yandex Plus"
        assert sub.price == 400
        assert sub.user_id == USER
        assert sub.start_date == date(2025, 7, 1)
        assert sub.end_date is None
        assert sub.created_at is None
        assert sub.updated_at is None

    def test_end_after_start(self):
        sub = build_new("Yandex Plus", 400, USER, "07-2025", "08-2025")
        assert sub.end_date == date(2025, 8, 1)

    def test_end_equal_start_rejected(self):
        with pytest.raises(SubscriptionValidationError):
            build_new("Yandex Plus", 400, USER, "07-2025", "07-2025")

    def test_end_before_start_rejected(self):
        with pytest.raises(SubscriptionValidationError):
            build_new("Yandex Plus", 400, USER, "07-2025", "06-2025")

    def test_price_zero_rejected(self):
        with pytest.raises(SubscriptionValidationError):
            build_new("Yandex Plus", 0, USER, "07-2025")

    def test_negative_price_rejected(self):
        with pytest.raises(SubscriptionValidationError):
            build_new("Yandex Plus", -5, USER, "07-2025")

    def test_price_one_accepted(self):
        assert build_new("Yandex Plus", 1, USER, "07-2025").price == 1

    def test_price_upper_bound(self):
        assert build_new("Yandex Plus", MAX_PRICE, USER, "07-2025").price == MAX_PRICE
        with pytest.raises(SubscriptionValidationError):
            build_new("Yandex Plus", MAX_PRICE + 1, USER, "07-2025")

    def test_name_length_bound(self):
        name = "x" * MAX_SERVICE_NAME_LENGTH
        assert build_new(name, 1, USER, "07-2025").service_name == name
        with pytest.raises(SubscriptionValidationError):
            build_new(name + "x", 1, USER, "07-2025")

    def test_bool_price_rejected(self):
        with pytest.raises(SubscriptionValidationError):
            build_new("Yandex Plus", True, USER, "07-2025")

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_rejected(self, name):
        with pytest.raises(SubscriptionValidationError):
            build_new(name, 400, USER, "07-2025")

    def test_name_is_stripped(self):
        assert build_new("  Netflix ", 400, USER, "07-2025").service_name == "Netflix"

    def test_bad_start_propagates_format_error(self):
        with pytest.raises(InvalidPeriodFormat):
            build_new("Yandex Plus", 400, USER, "2025-07")

    def test_bad_end_propagates_format_error(self):
        with pytest.raises(InvalidPeriodFormat):
            build_new("Yandex Plus", 400, USER, "07-2025", "13-2025")

    def test_ids_are_unique(self):
        a = build_new("A", 1, USER, "07-2025")
        b = build_new("A", 1, USER, "07-2025")
        assert a.id != b.id


class TestApplyPartialUpdate:
    def test_empty_patch_is_noop(self):
        patch = SubscriptionPatch()
        assert patch.is_empty()
        assert apply_partial_update(patch) == {}

    def test_only_supplied_fields(self):
        fields = apply_partial_update(SubscriptionPatch(price=500))
        assert fields == {"price": 500}

    def test_all_fields(self):
        fields = apply_partial_update(SubscriptionPatch(
            service_name=" Kinopoisk ", price=299, start_date="01-2025", end_date="03-2025",
        ))
        assert fields == {
            "service_name": "Kinopoisk",
            "price": 299,
            "start_date": date(2025, 1, 1),
            "end_date": date(2025, 3, 1),
        }

    def test_price_rule_still_applies(self):
        with pytest.raises(SubscriptionValidationError):
            apply_partial_update(SubscriptionPatch(price=0))
        with pytest.raises(SubscriptionValidationError):
            apply_partial_update(SubscriptionPatch(price=MAX_PRICE + 1))

    def test_non_empty_patch(self):
        assert not SubscriptionPatch(end_date="12-2025").is_empty()

    def test_empty_name_rejected(self):
        with pytest.raises(SubscriptionValidationError):
            apply_partial_update(SubscriptionPatch(service_name=" "))

    def test_bad_date_rejected(self):
        with pytest.raises(InvalidPeriodFormat):
            apply_partial_update(SubscriptionPatch(end_date="2025-07"))

    def test_start_end_order_not_cross_checked(self):
        # Fields are validated one by one; ordering against the stored record is not checked
        fields = apply_partial_update(SubscriptionPatch(start_date="09-2025", end_date="01-2025"))
        assert fields["start_date"] > fields["end_date"]


class TestToPresentation:
    def _sub(self, end_date=None):
        return Subscription(
            id=uuid.uuid4(), service_name="Yandex Plus", price=400, user_id=USER,
            start_date=date(2025, 7, 1), end_date=end_date,
            created_at=datetime(2025, 7, 1, 10, 0), updated_at=datetime(2025, 7, 2, 10, 0),
        )

    def test_formats_dates(self):
        payload = to_presentation(self._sub(end_date=date(2025, 12, 1)))
        assert payload["start_date"] == "07-2025"
        assert payload["end_date"] == "12-2025"
        assert payload["price"] == 400
        assert payload["updated_at"] == datetime(2025, 7, 2, 10, 0)

    def test_omits_missing_end_date(self):
        assert "end_date" not in to_presentation(self._sub())
