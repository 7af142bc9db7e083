"""Errors raised at the intake boundary."""


class BatchValidationError(Exception):
    """Raised when a source record cannot be normalized into a RawItem."""

    def __init__(self, source: str, index: int, errors: list[dict[str, str]]) -> None:
        """Initialize the error.

        Args:
            source: Name of the batch (file path or query label).
            index: Position of the offending record, or -1 for a file-level error.
            errors: Validation error details as ``{loc, msg, type}``.
        """
        self.source = source
        self.index = index
        self.errors = errors
        where = f"record #{index} in {source}" if index >= 0 else f"batch {source}"
        super().__init__(f"Invalid {where}: {len(errors)} errors")


class RecordShapeError(ValueError):
    """Raised when a nested record field has the wrong JSON type."""

    def __init__(self, loc: str, expected: str) -> None:
        """Initialize the error.

        Args:
            loc: Dotted location of the field within the record.
            expected: Description of the expected type.
        """
        self.loc = loc
        self.expected = expected
        super().__init__(f"{loc} must be {expected}")

    def to_error(self) -> dict[str, str]:
        """Error detail in the ``{loc, msg, type}`` form."""
        return {"loc": self.loc, "msg": str(self), "type": "record_shape"}
