"""Errors raised while loading holiday data or computing a year's calendar."""


class HolidayError(Exception):
    """Base class for every failure surfaced by ``holiday()``."""


class DataError(HolidayError):
    """An embedded resource table is missing or malformed."""


class ResolutionError(HolidayError):
    """A rule cannot be turned into a concrete date for the requested year."""
