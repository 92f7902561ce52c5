"""
Holiday Providers
=================
Supply the holiday list consumed by generation. Failures never propagate:
they become an empty list plus an error message for display, so generation
can proceed without holiday awareness.
"""
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from dutyrota.errors import HolidayFetchError
from dutyrota.models.holiday import Holiday
from dutyrota.models.settings import DEFAULT_COUNTRY
from dutyrota.utils.logging_setup import get_logger

logger = get_logger("dutyrota.io.holidays")

NAGER_BASE_URL = "https://date.nager.at/api/v3/PublicHolidays"


@dataclass
class HolidayFetchResult:
    holidays: List[Holiday] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _build_session(retries: int, backoff: float) -> requests.Session:
    session = requests.Session()
    retry = Retry(
        total=retries,
        backoff_factor=backoff,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=frozenset(["GET"]),
    )
    session.mount("https://", HTTPAdapter(max_retries=retry))
    session.mount("http://", HTTPAdapter(max_retries=retry))
    return session


class NagerDateProvider:
    """Public holidays from the Nager.Date API for one country."""

    def __init__(
        self,
        country_code: str = DEFAULT_COUNTRY,
        session: Optional[requests.Session] = None,
        base_url: str = NAGER_BASE_URL,
        timeout: float = 10.0,
        retries: int = 2,
        backoff: float = 0.5,
    ):
        self.country_code = country_code.upper()
        self.session = session or _build_session(retries, backoff)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def fetch_year(self, year: int) -> List[Holiday]:
        """
        Holidays for one year.

        Raises:
            HolidayFetchError: on HTTP or payload errors
        """
        url = f"{self.base_url}/{year}/{self.country_code}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise HolidayFetchError(year, str(e)) from e
        if not response.ok:
            raise HolidayFetchError(year, f"HTTP error! status: {response.status_code} for year {year}")
        try:
            payload = response.json()
        except ValueError as e:
            raise HolidayFetchError(year, f"invalid JSON: {e}") from e
        if not isinstance(payload, list):
            raise HolidayFetchError(year, "unexpected payload, expected a list")
        return [Holiday.from_dict(item) for item in payload if isinstance(item, dict)]

    def fetch(self, year: int) -> HolidayFetchResult:
        """
        Holidays for ``year`` and ``year + 1`` (the blackout spans New Year).

        A failure for ``year`` yields an empty list and an error message; a
        failure for the following year only drops that year's holidays.
        """
        try:
            current = self.fetch_year(year)
        except HolidayFetchError as e:
            logger.error(f"Failed to fetch holidays: {e}")
            return HolidayFetchResult(holidays=[], error=str(e))

        try:
            following = self.fetch_year(year + 1)
        except HolidayFetchError as e:
            logger.warning(f"{e.detail}. Holiday period calculation might be affected.")
            following = []

        logger.info(f"Loaded {len(current) + len(following)} holidays for {year}-{year + 1} ({self.country_code})")
        return HolidayFetchResult(holidays=current + following)


def load_holidays_file(path: Union[str, Path]) -> HolidayFetchResult:
    """
    Read holidays from a CSV (``date``, ``name`` columns) or JSON list.

    Errors are converted into an empty result with a message.
    """
    path = Path(path)
    try:
        if path.suffix.lower() == ".json":
            with open(path, encoding="utf-8") as f:
                rows = json.load(f)
            if not isinstance(rows, list):
                raise ValueError("expected a JSON list of {date, name} objects")
        else:
            df = pd.read_csv(path, dtype=str).fillna("")
            if "date" not in df.columns:
                raise ValueError("CSV must have a 'date' column")
            rows = df.to_dict(orient="records")
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load holidays from {path}: {e}")
        return HolidayFetchResult(holidays=[], error=f"Failed to load holidays from {path}. Error: {e}")

    holidays = [Holiday.from_dict(r) for r in rows if isinstance(r, dict)]
    logger.info(f"Loaded {len(holidays)} holidays from {path}")
    return HolidayFetchResult(holidays=holidays)
