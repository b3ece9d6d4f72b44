"""Domain errors raised by the services and translated to HTTP by the API layer."""


class TimeLedgerError(Exception):
    status_code = 400

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class InvalidTimeRangeError(TimeLedgerError):
    """Zero-length, negative or otherwise unusable interval."""

    status_code = 400


class BlockOverlapError(TimeLedgerError):
    status_code = 409


class NotFoundError(TimeLedgerError):
    status_code = 404

    def __init__(self, resource: str) -> None:
        super().__init__(f"{resource} not found")
        self.resource = resource


class TemplateEmptyError(TimeLedgerError):
    status_code = 400


class InvalidPeriodError(TimeLedgerError):
    """Month or ISO week that does not exist."""

    status_code = 400
