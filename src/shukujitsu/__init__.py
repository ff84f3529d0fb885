"""Japanese national holiday calendar."""

from shukujitsu.core.errors import DataError, HolidayError, ResolutionError
from shukujitsu.services.holidays import Holiday, holiday

__all__ = ["DataError", "Holiday", "HolidayError", "ResolutionError", "holiday"]
