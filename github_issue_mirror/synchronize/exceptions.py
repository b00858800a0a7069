"""Custom exceptions for the synchronize module."""


class MalformedRecordError(Exception):
    """Raised when GitHub returns a record that does not fit the canonical shape.

    A single malformed record fails the whole fetch it came from.
    """

    def __init__(self, kind: str, record_id: object, detail: str) -> None:
        """Initializes the exception with the record kind, its id when known, and the validation detail."""
        super().__init__(f"Malformed {kind} record (id={record_id}): {detail}")
        self.kind = kind
        self.record_id = record_id
        self.detail = detail
