"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str, message: str | None = None):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        self.message = message or f"{entity_type} with {field}='{value}' already exists"
        super().__init__(self.message)


class RemoteServiceError(Exception):
    """Raised when the hosted data service is unreachable or answers with an error.

    ``status_code`` is None for transport failures (DNS, timeouts, refused
    connections) where no HTTP response was received.
    """

    def __init__(self, service: str, status_code: int | None, message: str):
        self.service = service
        self.status_code = status_code
        self.message = message
        code = status_code if status_code is not None else "unavailable"
        super().__init__(f"[{service}] {code}: {message}")


class RegistrationValidationError(Exception):
    """Raised when submitted input fails validation, before any I/O happens.

    ``errors`` maps a form field name to a user-facing message.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Invalid input for: {fields}")


class CacheError(Exception):
    """Failure reading, writing or decoding a cache entry. Never leaves the cache."""


class StorageError(Exception):
    """Raised by a key/value store when a read or write cannot be completed."""


class StorageQuotaExceededError(StorageError):
    """Raised when a write would exceed the key/value store capacity."""

    def __init__(self, key: str, required: int, quota: int):
        self.key = key
        self.required = required
        self.quota = quota
        super().__init__(
            f"Writing '{key}' needs {required} bytes but the store quota is {quota}"
        )
