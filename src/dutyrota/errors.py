"""Error types raised by the scheduler."""


class DutyRotaError(Exception):
    """Base class for scheduler errors."""


class ValidationError(DutyRotaError, ValueError):
    """Rejected input; nothing was mutated."""


class CsvImportError(DutyRotaError, ValueError):
    """The whole CSV import was aborted."""


class HolidayFetchError(DutyRotaError):
    """The holiday provider could not supply data."""

    def __init__(self, year: int, detail: str):
        self.year = year
        self.detail = detail
        super().__init__(f"Failed to load holidays for {year}. Error: {detail}")
