"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class StoreUnavailable(Exception):
    """Raised when the relational store cannot be reached. Never retried."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Entity store unavailable: {message}")


class UpstreamUnavailable(Exception):
    """Raised when a Steam endpoint fails or answers with a non-success envelope."""

    def __init__(self, source: str, message: str, status_code: int | None = None):
        self.source = source
        self.status_code = status_code
        self.message = message
        prefix = f"[{source}] {status_code}" if status_code is not None else f"[{source}]"
        super().__init__(f"{prefix}: {message}")


class InvalidPayload(Exception):
    """Raised when a payload lacks the natural key needed to store it,
    or a row is rejected by a store constraint.

    Callers fall back exactly as they do for ``UpstreamUnavailable``.
    """

    def __init__(self, entity_type: str, message: str):
        self.entity_type = entity_type
        self.message = message
        super().__init__(f"Invalid {entity_type} payload: {message}")
