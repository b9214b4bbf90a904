"""Conversion of transaction amounts into the reporting currency."""

import logging
from collections.abc import Mapping

from lms_api.admin.schemas.admin_analytics import CommissionRecord, PaymentRecord
from lms_api.core.constants import DEFAULT_CURRENCY_RATES, REPORTING_CURRENCY

logger = logging.getLogger(__name__)


class CurrencyNormalizer:
    """Convert amounts to USD with a fixed table of divisor rates.

    Each rate is the number of units of that currency per 1 USD. Currencies
    missing from the table pass through unconverted. That is an
    approximation: the amount is reported as if it were already USD.
    """

    def __init__(self, rates: Mapping[str, float] | None = None):
        source = DEFAULT_CURRENCY_RATES if rates is None else rates
        self.rates = {code.upper(): float(rate) for code, rate in source.items()}

    def to_usd(self, amount: float | None, currency: str | None) -> float:
        """Convert ``amount`` in ``currency`` to USD.

        Args:
            amount: Amount in the source currency. ``None`` counts as 0.
            currency: ISO code, case-insensitive. Empty or ``None`` means USD.

        Returns:
            The USD amount, or ``amount`` unchanged for an unknown currency.
        """
        value = float(amount or 0)
        code = (currency or REPORTING_CURRENCY).upper()
        if code == REPORTING_CURRENCY:
            return value
        rate = self.rates.get(code)
        if rate is None:
            logger.debug("No rate for currency %s, passing amount through", code)
            return value
        return value / rate

    def payment_usd(self, payment: PaymentRecord) -> float:
        """USD value of a payment, preferring the gateway's own USD conversion."""
        if payment.base_amount and (payment.base_currency or "").upper() == REPORTING_CURRENCY:
            return float(payment.base_amount)
        return self.to_usd(payment.amount, payment.currency)

    def commission_usd(self, commission: CommissionRecord) -> float:
        return self.to_usd(commission.commission_amount or 0, commission.commission_currency)
