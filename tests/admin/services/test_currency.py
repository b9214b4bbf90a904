"""Unit tests for CurrencyNormalizer."""

import uuid
from datetime import UTC, datetime

import pytest

from lms_api.admin.schemas.admin_analytics import PaymentRecord
from lms_api.admin.services.analytics.currency import CurrencyNormalizer
from lms_api.core.constants import DEFAULT_CURRENCY_RATES
from tests.utils.factories import make_commission


def _payment(**kwargs) -> PaymentRecord:
    return PaymentRecord(id=uuid.uuid4(), created_at=datetime(2025, 1, 1, tzinfo=UTC), **kwargs)


class TestToUsd:
    """Tests for CurrencyNormalizer.to_usd."""

    @pytest.fixture
    def normalizer(self):
        return CurrencyNormalizer()

    def test_usd_passes_through(self, normalizer):
        assert normalizer.to_usd(42.5, "USD") == 42.5

    def test_missing_currency_defaults_to_usd(self, normalizer):
        assert normalizer.to_usd(10, None) == 10
        assert normalizer.to_usd(10, "") == 10

    def test_known_currency_divides_by_rate(self, normalizer):
        assert normalizer.to_usd(1600, "NGN") == pytest.approx(1.0)
        assert normalizer.to_usd(140, "GHS") == pytest.approx(10.0)

    def test_currency_is_case_insensitive(self, normalizer):
        assert normalizer.to_usd(140, "ghs") == pytest.approx(10.0)

    def test_unknown_currency_passes_through(self, normalizer):
        assert normalizer.to_usd(99, "JPY") == 99

    def test_missing_amount_counts_as_zero(self, normalizer):
        assert normalizer.to_usd(None, "GHS") == 0

    @pytest.mark.parametrize("code", sorted(DEFAULT_CURRENCY_RATES))
    def test_rate_round_trip(self, normalizer, code):
        """Converting x * rate back to USD recovers x."""
        x = 123.45
        usd = normalizer.to_usd(x, "USD")
        assert normalizer.to_usd(usd * DEFAULT_CURRENCY_RATES[code], code) == pytest.approx(x)

    def test_injected_rates_replace_defaults(self):
        normalizer = CurrencyNormalizer({"kes": 130})
        assert normalizer.to_usd(260, "KES") == pytest.approx(2.0)
        # Defaults are not merged in
        assert normalizer.to_usd(1600, "NGN") == 1600


class TestPaymentUsd:
    """Tests for CurrencyNormalizer.payment_usd."""

    def test_prefers_usd_base_amount(self):
        payment = _payment(amount=1400, currency="GHS", base_amount=99.5, base_currency="usd")
        assert CurrencyNormalizer().payment_usd(payment) == 99.5

    def test_ignores_non_usd_base_amount(self):
        payment = _payment(amount=1400, currency="GHS", base_amount=1400, base_currency="GHS")
        assert CurrencyNormalizer().payment_usd(payment) == pytest.approx(100.0)

    def test_zero_base_amount_falls_back_to_amount(self):
        payment = _payment(amount=28, currency="GHS", base_amount=0, base_currency="USD")
        assert CurrencyNormalizer().payment_usd(payment) == pytest.approx(2.0)


class TestCommissionUsd:
    def test_missing_amount_and_currency(self):
        normalizer = CurrencyNormalizer()
        assert normalizer.commission_usd(make_commission(None, None)) == 0
        assert normalizer.commission_usd(make_commission(12.0, None)) == 12.0
