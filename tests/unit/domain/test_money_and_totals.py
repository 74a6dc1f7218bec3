from __future__ import annotations

import sys
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from bakery_pos.domain.common.money import InvalidAmountError, Money, format_pence, to_pence
from bakery_pos.domain.menu.entities import OrderType
from bakery_pos.domain.order.totals import OrderTotals, Rates, compute_totals


def test_to_pence_handles_float_noise() -> None:
    assert to_pence(10.1) == 1010
    assert to_pence("8.16") == 816
    assert to_pence(Decimal("0.68")) == 68


def test_to_pence_rejects_fractional_pence() -> None:
    with pytest.raises(InvalidAmountError):
        to_pence("1.005")
    with pytest.raises(InvalidAmountError):
        to_pence("not-money")


def test_money_rejects_negative_amounts() -> None:
    with pytest.raises(ValueError):
        Money(amount_pence=-1)


def test_apply_rate_rounds_half_up() -> None:
    assert Money(amount_pence=25).apply_rate(Decimal("0.10")).amount_pence == 3
    assert Money(amount_pence=24).apply_rate(Decimal("0.10")).amount_pence == 2


def test_format_pence() -> None:
    assert format_pence(884) == "£8.84"
    assert format_pence(5) == "£0.05"
    assert format_pence(-250) == "-£2.50"


def test_takeaway_totals_skip_service() -> None:
    lines = [(Money(amount_pence=250), 2), (Money(amount_pence=180), 1)]

    totals = compute_totals(lines, rates=Rates(), order_type=OrderType.TAKEAWAY)

    assert totals.subtotal.amount_pence == 680
    assert totals.vat.amount_pence == 136
    assert totals.service.amount_pence == 0
    assert totals.total.amount_pence == 816


def test_eat_in_totals_add_service() -> None:
    lines = [(Money(amount_pence=250), 2), (Money(amount_pence=180), 1)]

    totals = compute_totals(lines, rates=Rates(), order_type=OrderType.EAT_IN)

    assert totals.service.amount_pence == 68
    assert totals.total.amount_pence == 884


def test_no_order_type_means_no_service() -> None:
    totals = compute_totals([(Money(amount_pence=1000), 1)], rates=Rates(), order_type=None)
    assert totals.service == Money.zero()


def test_total_is_always_the_sum_of_displayed_figures() -> None:
    rates = Rates(vat=Decimal("0.175"), service=Decimal("0.125"))
    totals = compute_totals([(Money(amount_pence=333), 3)], rates=rates, order_type=OrderType.EAT_IN)

    assert totals.total == totals.subtotal + totals.vat + totals.service


def test_order_totals_reject_inconsistent_breakdown() -> None:
    with pytest.raises(ValueError):
        OrderTotals(
            subtotal=Money(amount_pence=100),
            vat=Money(amount_pence=20),
            service=Money.zero(),
            total=Money(amount_pence=121),
        )


def test_rates_must_be_non_negative() -> None:
    with pytest.raises(ValueError):
        Rates(vat=Decimal("-0.01"))
