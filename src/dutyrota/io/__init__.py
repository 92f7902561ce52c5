# dutyrota/io - Input/output handling
from .csv_codec import CSV_HEADERS, ImportResult, decode_schedule, encode_schedule, export_filename
from .csv_loader import load_team, save_team
from .excel_export import export_schedule_to_excel
from .holidays import HolidayFetchResult, NagerDateProvider, load_holidays_file
from .store import SettingsStore, StoredState

__all__ = [
    "CSV_HEADERS",
    "ImportResult",
    "decode_schedule",
    "encode_schedule",
    "export_filename",
    "load_team",
    "save_team",
    "export_schedule_to_excel",
    "HolidayFetchResult",
    "NagerDateProvider",
    "load_holidays_file",
    "SettingsStore",
    "StoredState",
]
