"""Error types shared by the metadata store, services and routers."""


class ValidationError(ValueError):
    """A mutation request is missing a required field.

    Raised before any document is loaded, so the store is never touched.
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class StorageFailure(RuntimeError):
    """The underlying object store could not complete a read or write."""

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key


def require_fields(**values) -> None:
    """Raise ValidationError for the first blank value, in argument order."""
    for name, value in values.items():
        if value is None or not str(value).strip():
            raise ValidationError(f"Missing required field: {name}", field=name)
