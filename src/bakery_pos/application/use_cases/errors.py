from __future__ import annotations


class FieldValidationError(Exception):
    """Input that parsed but failed a business or referential check.

    ``fields`` maps a dotted field path to its messages, the same shape the
    API uses for schema validation failures.
    """

    def __init__(self, fields: dict[str, list[str]]) -> None:
        self.fields = fields
        self.details = {"fields": fields}
        super().__init__("; ".join(f"{path}: {', '.join(msgs)}" for path, msgs in fields.items()))
