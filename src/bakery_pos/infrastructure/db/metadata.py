from __future__ import annotations

from bakery_pos.infrastructure.db.models import audit, menu, order, staff, table, waste

Base = menu.Base
metadata = Base.metadata

__all__ = ["Base", "metadata", "audit", "menu", "order", "staff", "table", "waste"]
