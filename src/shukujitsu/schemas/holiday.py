from datetime import date

from pydantic import BaseModel

from shukujitsu.services.holidays import Holiday


class HolidayRead(BaseModel):
    name: str
    date: date
    substitute: bool

    @classmethod
    def from_holiday(cls, item: Holiday) -> "HolidayRead":
        return cls(name=item.name, date=item.date, substitute=item.is_substitute)
