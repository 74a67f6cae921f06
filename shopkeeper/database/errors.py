# shopkeeper/database/errors.py
from __future__ import annotations


class DomainError(Exception):
    """Domain-level error the controller/UI can surface (toast/snackbar)."""
    pass


class ValidationError(DomainError):
    """
    Caller input broke a business rule. Nothing was mutated.

    `errors` maps a field name to a user-facing message so forms can render
    each message next to the offending input.
    """

    def __init__(self, errors: dict[str, str] | str, field: str = "__all__"):
        if isinstance(errors, str):
            errors = {field: errors}
        self.errors: dict[str, str] = dict(errors)
        super().__init__("; ".join(self.errors.values()))

    def __contains__(self, field: str) -> bool:
        return field in self.errors


class InsufficientStockError(ValidationError):
    def __init__(self, message: str, available: int):
        self.available = available
        super().__init__({"quantity": message})


class NotFoundError(DomainError):
    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class StoreError(Exception):
    """Storage unavailable or write rejected. Not retried."""
    pass


class UnknownStoreError(StoreError):
    """A store or index name that does not exist was used."""
    pass
