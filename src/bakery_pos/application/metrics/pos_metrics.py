from __future__ import annotations

from prometheus_client import Counter, Histogram

from bakery_pos.domain.order.entities import Order

ORDERS_SUBMITTED_TOTAL = Counter(
    "bakery_orders_submitted_total",
    "Total number of paid orders written.",
    ["order_type", "payment_method"],
)

ORDER_REJECTED_TOTAL = Counter(
    "bakery_order_rejected_total",
    "Total number of order submissions rejected before any write.",
    ["reason"],
)

ORDER_VALUE_POUNDS = Histogram(
    "bakery_order_value_pounds",
    "Order totals in pounds.",
    buckets=(1, 2, 5, 10, 15, 20, 30, 50, 100, 200),
)

AUDIT_ENTRIES_TOTAL = Counter(
    "bakery_audit_entries_total",
    "Total number of audit entries written.",
    ["action"],
)

AUDIT_DELIVERY_FAILURES_TOTAL = Counter(
    "bakery_audit_delivery_failures_total",
    "Audit entries the till could not deliver to the backend.",
    ["action"],
)

MENU_CACHE_REQUESTS_TOTAL = Counter(
    "bakery_menu_cache_requests_total",
    "Menu catalog cache lookups by result.",
    ["result"],
)

WASTE_RECORDED_TOTAL = Counter(
    "bakery_waste_recorded_total",
    "Total number of waste entries recorded.",
    ["category_name"],
)


def record_order_submitted(order: Order) -> None:
    method = order.payment.method.value if order.payment else "none"
    ORDERS_SUBMITTED_TOTAL.labels(order_type=order.order_type.value, payment_method=method).inc()
    if order.payment is not None:
        ORDER_VALUE_POUNDS.observe(float(order.payment.totals.total.to_decimal()))


def record_order_rejected(reason: str) -> None:
    ORDER_REJECTED_TOTAL.labels(reason=reason).inc()


def record_audit_entry(action: str) -> None:
    AUDIT_ENTRIES_TOTAL.labels(action=action).inc()


def record_audit_delivery_failure(action: str) -> None:
    AUDIT_DELIVERY_FAILURES_TOTAL.labels(action=action).inc()


def record_menu_cache(result: str) -> None:
    MENU_CACHE_REQUESTS_TOTAL.labels(result=result).inc()


def record_waste(category_name: str) -> None:
    WASTE_RECORDED_TOTAL.labels(category_name=category_name).inc()
