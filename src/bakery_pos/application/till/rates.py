from __future__ import annotations

import json
import logging
from decimal import Decimal, InvalidOperation

from bakery_pos.application.ports.key_value import KeyValueStore
from bakery_pos.application.till.audit import AuditEmitter
from bakery_pos.domain.audit.entities import AuditAction
from bakery_pos.domain.order.totals import Rates
from bakery_pos.domain.staff.entities import Actor

RATES_KEY = "bakery_rates"

logger = logging.getLogger(__name__)


def _percent(rate: Decimal) -> str:
    return f"{rate * 100:.1f}%"


class RateSettings:
    """VAT and service-charge rates kept on the till."""

    def __init__(self, store: KeyValueStore, audit: AuditEmitter | None = None) -> None:
        self._store = store
        self._audit = audit

    def load(self) -> Rates:
        raw = self._store.get(RATES_KEY)
        if not raw:
            return Rates()
        try:
            payload = json.loads(raw)
            return Rates(
                vat=Decimal(str(payload["vat"])),
                service=Decimal(str(payload["service"])),
            )
        except (ValueError, KeyError, TypeError, InvalidOperation):
            logger.warning("stored_rates_unreadable")
            return Rates()

    def save(self, rates: Rates, actor: Actor) -> Rates:
        self._store.set(
            RATES_KEY,
            json.dumps({"vat": float(rates.vat), "service": float(rates.service)}),
        )
        if self._audit is not None:
            self._audit.emit(
                actor,
                AuditAction.RATES_UPDATED,
                f"VAT {_percent(rates.vat)} - Service {_percent(rates.service)}",
            )
        return rates

    def save_percentages(
        self,
        vat_percent: Decimal | str,
        service_percent: Decimal | str,
        actor: Actor,
    ) -> Rates:
        """Save rates typed as percentages, e.g. ``"20"`` for 20%."""
        try:
            rates = Rates(
                vat=Decimal(str(vat_percent)) / 100,
                service=Decimal(str(service_percent)) / 100,
            )
        except InvalidOperation as exc:
            raise ValueError("rates must be numbers") from exc
        return self.save(rates, actor)
