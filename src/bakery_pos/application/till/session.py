from __future__ import annotations

import json
import logging

from bakery_pos.application.ports.bakery_api import BakeryApi
from bakery_pos.application.ports.key_value import KeyValueStore
from bakery_pos.application.till.audit import AuditEmitter
from bakery_pos.domain.audit.entities import AuditAction
from bakery_pos.domain.common.ids import StaffId
from bakery_pos.domain.staff.entities import Actor

AUTH_USER_KEY = "bakery_auth_user"

logger = logging.getLogger(__name__)


class NotSignedInError(Exception):
    pass


class TillSession:
    def __init__(self, api: BakeryApi, store: KeyValueStore, audit: AuditEmitter) -> None:
        self._api = api
        self._store = store
        self._audit = audit

    @property
    def current(self) -> Actor | None:
        raw = self._store.get(AUTH_USER_KEY)
        if not raw:
            return None
        try:
            payload = json.loads(raw)
            return Actor(
                staff_id=StaffId(int(payload["staff_id"])),
                full_name=str(payload["full_name"]),
                role_name=str(payload["role_name"]),
            )
        except (ValueError, KeyError, TypeError):
            logger.warning("session_user_unreadable")
            self._store.clear(AUTH_USER_KEY)
            return None

    def require_actor(self) -> Actor:
        actor = self.current
        if actor is None:
            raise NotSignedInError("no staff member is signed in")
        return actor

    def login(self, access_code: str) -> Actor:
        staff = self._api.login(access_code)
        actor = Actor(
            staff_id=StaffId(staff.staff_id),
            full_name=staff.full_name,
            role_name=staff.role_name,
        )
        self._store.set(
            AUTH_USER_KEY,
            json.dumps(
                {
                    "staff_id": int(actor.staff_id),
                    "full_name": actor.full_name,
                    "role_name": actor.role_name,
                }
            ),
        )
        self._audit.emit(actor, AuditAction.SESSION_STARTED, f"{actor.full_name} signed in")
        return actor

    def logout(self) -> None:
        actor = self.current
        if actor is None:
            return
        self._audit.emit(actor, AuditAction.SESSION_ENDED, f"{actor.full_name} signed out")
        self._store.clear(AUTH_USER_KEY)
