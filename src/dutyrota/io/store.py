"""
Settings Store
==============
JSON file persistence for the title, start day/month and roster. The
schedule year is not stored; each session starts on the current year.
Unreadable content is logged and replaced by defaults.
"""
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from pydantic import ValidationError as PydanticValidationError

from dutyrota.errors import ValidationError
from dutyrota.engine.roster import Roster
from dutyrota.models.settings import SchedulerSettings
from dutyrota.models.validated import ValidatedSettings
from dutyrota.utils.logging_setup import get_logger

logger = get_logger("dutyrota.io.store")

DEFAULT_STORE_PATH = Path("data/dutyrota.json")


@dataclass
class StoredState:
    settings: SchedulerSettings = field(default_factory=SchedulerSettings)
    roster: Roster = field(default_factory=Roster.default)


class SettingsStore:
    """Key-value JSON file: ``title``, ``start_weekday``, ``start_month``, ``country_code``, ``people``."""

    def __init__(self, path: Union[str, Path] = DEFAULT_STORE_PATH):
        self.path = Path(path)

    def load(self) -> StoredState:
        state = StoredState()
        if not self.path.exists():
            return state
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read {self.path}: {e}")
            return state
        if not isinstance(data, dict):
            logger.error(f"Ignoring {self.path}: expected a JSON object")
            return state

        stored = {k: data[k] for k in ("title", "start_weekday", "start_month", "country_code") if k in data}
        try:
            state.settings = ValidatedSettings(**stored).to_dataclass()
        except PydanticValidationError as e:
            logger.error(f"Invalid stored settings, using defaults: {e}")

        if "people" in data:
            try:
                state.roster = Roster.from_list(data["people"])
            except (KeyError, TypeError, ValueError, ValidationError) as e:
                logger.error(f"Failed to parse people from {self.path}: {e}")
        return state

    def save(self, settings: SchedulerSettings, roster: Roster) -> None:
        data = settings.to_dict()
        data.pop("year", None)
        data["people"] = roster.to_list()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
        except OSError as e:
            logger.error(f"Failed to save {self.path}: {e}")
