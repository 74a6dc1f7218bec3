from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Protocol
from uuid import uuid4

from bakery_pos.domain.common.clock import Clock, utc_now
from bakery_pos.domain.common.money import CURRENCY, Money, format_pence
from bakery_pos.domain.order.entities import PaymentMethod
from bakery_pos.domain.order.totals import OrderTotals

CARD_PROCESSING_DELAY = timedelta(seconds=2)
CARD_APPROVED_DELAY = timedelta(milliseconds=1200)
QR_LIFETIME = timedelta(minutes=5)
CASH_MAX_DIGITS = 6
CASH_PRESETS: dict[str, int] = {
    "exact": 0,
    "+£5": 500,
    "+£10": 1000,
    "+£20": 2000,
}
MERCHANT_NAME = "Happy Day Everyday Bakery"


class WorkflowState(str, Enum):
    SELECTING = "selecting"
    METHOD_ACTIVE = "method_active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class CardStage(str, Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    APPROVED = "approved"


class CancelResolution(str, Enum):
    HOLD = "hold"
    DISCARD = "discard"


class PaymentWorkflowError(Exception):
    pass


class ActionNotPermittedError(PaymentWorkflowError):
    pass


@dataclass(frozen=True)
class PaymentOutcome:
    method: PaymentMethod
    occurred_at: datetime
    reference: str | None = None
    tendered: Money | None = None


@dataclass(frozen=True)
class CompletedPayment:
    method: PaymentMethod
    paid_at: datetime
    totals: OrderTotals
    reference: str | None = None
    tendered: Money | None = None

    @property
    def change_due(self) -> Money | None:
        if self.tendered is None:
            return None
        return Money(amount_pence=self.tendered.amount_pence - self.totals.total.amount_pence)


OutcomeCallback = Callable[[PaymentOutcome], None]


class PaymentPanel(Protocol):
    """A payment method's input surface.

    A real processor replaces a simulated panel by reporting through the same
    ``on_outcome`` callback; the workflow never inspects how the outcome was
    produced.
    """

    method: PaymentMethod

    def dispose(self) -> None: ...


PanelFactory = Callable[[Money, Clock, OutcomeCallback], PaymentPanel]


class _Panel:
    method: PaymentMethod

    def __init__(self, total: Money, clock: Clock, on_outcome: OutcomeCallback) -> None:
        self._total = total
        self._clock = clock
        self._on_outcome = on_outcome
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        self._disposed = True

    def _ensure_live(self) -> None:
        if self._disposed:
            raise ActionNotPermittedError(f"{self.method.value} panel is no longer active")

    def _emit(self, outcome: PaymentOutcome) -> None:
        if not self._disposed:
            self._on_outcome(outcome)


class CardPanel(_Panel):
    method = PaymentMethod.CARD

    def __init__(self, total: Money, clock: Clock, on_outcome: OutcomeCallback) -> None:
        super().__init__(total, clock, on_outcome)
        self._tapped_at: datetime | None = None
        self._reported = False

    @property
    def stage(self) -> CardStage:
        if self._tapped_at is None:
            return CardStage.IDLE
        if self._clock() - self._tapped_at < CARD_PROCESSING_DELAY:
            return CardStage.PROCESSING
        return CardStage.APPROVED

    def tap(self) -> None:
        self._ensure_live()
        if self._tapped_at is not None:
            return
        self._tapped_at = self._clock()

    def poll(self) -> CardStage:
        stage = self.stage
        if self._disposed or self._reported or self._tapped_at is None:
            return stage
        approved_at = self._tapped_at + CARD_PROCESSING_DELAY
        if self._clock() >= approved_at + CARD_APPROVED_DELAY:
            self._reported = True
            self._emit(PaymentOutcome(method=self.method, occurred_at=self._clock()))
        return stage


class CashPanel(_Panel):
    method = PaymentMethod.CASH

    def __init__(self, total: Money, clock: Clock, on_outcome: OutcomeCallback) -> None:
        super().__init__(total, clock, on_outcome)
        self._input = ""

    @property
    def input(self) -> str:
        return self._input

    @property
    def tendered_pence(self) -> int:
        return _parse_pence(self._input)

    @property
    def can_tender(self) -> bool:
        return self.tendered_pence >= self._total.amount_pence

    @property
    def change_due_pence(self) -> int | None:
        if not self.can_tender:
            return None
        return self.tendered_pence - self._total.amount_pence

    @property
    def shortfall_pence(self) -> int | None:
        if self.can_tender:
            return None
        return self._total.amount_pence - self.tendered_pence

    def press(self, key: str) -> None:
        """Apply one keypad press: a digit, ``"."`` or ``"back"``."""
        self._ensure_live()
        value = self._input
        if key == "back":
            self._input = value[:-1]
            return
        if key == ".":
            if "." in value:
                return
            self._input = (value or "0") + "."
            return
        if len(key) != 1 or not key.isdigit():
            raise ValueError(f"unsupported keypad key: {key!r}")
        if len(value.replace(".", "")) >= CASH_MAX_DIGITS:
            return
        if "." in value and len(value.split(".", 1)[1]) >= 2:
            return
        value += key
        if len(value) > 1 and value.startswith("0") and value[1].isdigit():
            value = value.lstrip("0") or "0"
        self._input = value

    def enter(self, text: str) -> None:
        self._ensure_live()
        self._input = ""
        for key in text:
            self.press(key)

    def apply_preset(self, label: str) -> None:
        self._ensure_live()
        try:
            offset = CASH_PRESETS[label]
        except KeyError as exc:
            raise ValueError(f"unknown cash preset: {label}") from exc
        pence = self._total.amount_pence + offset
        self._input = f"{pence // 100}.{pence % 100:02d}"

    def tender(self) -> None:
        self._ensure_live()
        if not self.can_tender:
            raise ActionNotPermittedError(
                f"tendered {format_pence(self.tendered_pence)} is below {self._total.format()}"
            )
        self._emit(
            PaymentOutcome(
                method=self.method,
                occurred_at=self._clock(),
                tendered=Money(amount_pence=self.tendered_pence),
            )
        )


class QrPanel(_Panel):
    method = PaymentMethod.QR

    def __init__(
        self,
        total: Money,
        clock: Clock,
        on_outcome: OutcomeCallback,
        order_ref: str,
        reference_factory: Callable[[], str] | None = None,
    ) -> None:
        super().__init__(total, clock, on_outcome)
        self._order_ref = order_ref
        self._reference_factory = reference_factory or _qr_reference
        self.reference = ""
        self.expires_at = self._clock()
        self.regenerate()

    @property
    def seconds_left(self) -> int:
        remaining = (self.expires_at - self._clock()).total_seconds()
        return max(0, math.ceil(remaining))

    @property
    def is_expired(self) -> bool:
        return self._clock() >= self.expires_at

    @property
    def can_confirm(self) -> bool:
        return not self._disposed and not self.is_expired

    def countdown(self) -> str:
        minutes, seconds = divmod(self.seconds_left, 60)
        return f"{minutes:02d}:{seconds:02d}"

    def regenerate(self) -> None:
        self._ensure_live()
        self.reference = self._reference_factory()
        self.expires_at = self._clock() + QR_LIFETIME

    def payload(self) -> dict[str, str]:
        return {
            "ref": self.reference,
            "orderId": self._order_ref,
            "amount": str(self._total.to_decimal()),
            "currency": CURRENCY,
            "merchant": MERCHANT_NAME,
            "expires": self.expires_at.isoformat(),
        }

    def confirm_received(self) -> None:
        self._ensure_live()
        if self.is_expired:
            raise ActionNotPermittedError("QR code expired; generate a new one first")
        self._emit(
            PaymentOutcome(
                method=self.method,
                occurred_at=self._clock(),
                reference=self.reference,
            )
        )


class PaymentWorkflow:
    """Method selection and completion for one order.

    ``selecting -> method_active -> completed``, with ``cancel`` allowed from
    either of the first two states. Only one panel is live at a time;
    switching method disposes the previous one.
    """

    def __init__(
        self,
        order_ref: str,
        totals: OrderTotals,
        clock: Clock = utc_now,
        on_completed: Callable[[CompletedPayment], None] | None = None,
        qr_reference_factory: Callable[[], str] | None = None,
        panel_factories: dict[PaymentMethod, PanelFactory] | None = None,
    ) -> None:
        self.order_ref = order_ref
        self.totals = totals
        self._clock = clock
        self._on_completed = on_completed
        self._factories: dict[PaymentMethod, PanelFactory] = {
            PaymentMethod.CARD: CardPanel,
            PaymentMethod.CASH: CashPanel,
            PaymentMethod.QR: lambda total, clock, on_outcome: QrPanel(
                total,
                clock,
                on_outcome,
                order_ref=order_ref,
                reference_factory=qr_reference_factory,
            ),
        }
        self._factories.update(panel_factories or {})
        self.state = WorkflowState.SELECTING
        self.panel: PaymentPanel | None = None
        self.completed: CompletedPayment | None = None
        self.cancel_resolution: CancelResolution | None = None

    @property
    def method(self) -> PaymentMethod | None:
        return self.panel.method if self.panel else None

    def select_method(self, method: PaymentMethod) -> PaymentPanel:
        self._ensure_open()
        self._dispose_panel()
        panel = self._factories[method](self.totals.total, self._clock, self._handle_outcome)
        self.panel = panel
        self.state = WorkflowState.METHOD_ACTIVE
        return panel

    def close_method(self) -> None:
        self._ensure_open()
        self._dispose_panel()
        self.state = WorkflowState.SELECTING

    def poll(self) -> WorkflowState:
        if isinstance(self.panel, CardPanel):
            self.panel.poll()
        return self.state

    def cancel(self, resolution: CancelResolution) -> CancelResolution:
        self._ensure_open()
        self._dispose_panel()
        self.state = WorkflowState.CANCELLED
        self.cancel_resolution = resolution
        return resolution

    def dispose(self) -> None:
        self._dispose_panel()

    def _handle_outcome(self, outcome: PaymentOutcome) -> None:
        if self.state != WorkflowState.METHOD_ACTIVE or self.panel is None:
            return
        if outcome.method != self.panel.method:
            return
        self.completed = CompletedPayment(
            method=outcome.method,
            paid_at=outcome.occurred_at,
            totals=self.totals,
            reference=outcome.reference,
            tendered=outcome.tendered,
        )
        self.state = WorkflowState.COMPLETED
        self._dispose_panel()
        if self._on_completed is not None:
            self._on_completed(self.completed)

    def _dispose_panel(self) -> None:
        if self.panel is not None:
            self.panel.dispose()
        self.panel = None

    def _ensure_open(self) -> None:
        if self.state in (WorkflowState.COMPLETED, WorkflowState.CANCELLED):
            raise PaymentWorkflowError(f"payment workflow already {self.state.value}")


def _parse_pence(text: str) -> int:
    if not text:
        return 0
    pounds, _, fraction = text.partition(".")
    return int(pounds or "0") * 100 + int((fraction + "00")[:2])


def _qr_reference() -> str:
    return f"QR-{uuid4().hex[:12].upper()}"
