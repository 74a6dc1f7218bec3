from __future__ import annotations

import logging

from bakery_pos.application.dto.requests import AuditLogCreateRequest
from bakery_pos.application.dto.responses import AuditLogResponse
from bakery_pos.application.metrics.pos_metrics import record_audit_delivery_failure
from bakery_pos.application.ports.bakery_api import ApiError, ApiUnavailableError, BakeryApi
from bakery_pos.domain.audit.entities import AuditAction
from bakery_pos.domain.staff.entities import Actor

logger = logging.getLogger(__name__)


class AuditEmitter:
    """Fire-and-forget audit writes.

    The action being audited has already happened, so a failed write is
    logged and counted but never raised.
    """

    def __init__(self, api: BakeryApi) -> None:
        self._api = api

    def emit(
        self,
        actor: Actor,
        action: AuditAction | str,
        details: str = "",
    ) -> AuditLogResponse | None:
        label = action.value if isinstance(action, AuditAction) else action
        request_dto = AuditLogCreateRequest(
            staff_id=int(actor.staff_id),
            action=label,
            details=details,
            user_name=actor.full_name,
            role=actor.role_name,
        )
        try:
            return self._api.append_audit_log(request_dto)
        except (ApiError, ApiUnavailableError):
            logger.warning(
                "audit_write_failed",
                exc_info=True,
                extra={"action": label, "staff_id": int(actor.staff_id)},
            )
            record_audit_delivery_failure(label)
            return None
