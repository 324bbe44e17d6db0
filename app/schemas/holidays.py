from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, TypeAdapter

Month = Literal[
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

MONTHS: tuple[str, ...] = get_args(Month)


class HolidayEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    year: str
    month: str
    location: str


HolidayEntryList = TypeAdapter(list[HolidayEntry])


class HolidayFormRequest(BaseModel):
    year: str = ""
    month: Month | Literal[""] = ""
    location: str = ""


class HolidayFormUpdateRequest(BaseModel):
    year: str | None = None
    month: Month | Literal[""] | None = None
    location: str | None = None


class HolidayFormResponse(BaseModel):
    year: str
    month: str
    location: str


class HolidayListResponse(BaseModel):
    entries: list[HolidayEntry]
    count: int


class HolidaySubmitResponse(BaseModel):
    added: bool
    entry: HolidayEntry | None = None
    form: HolidayFormResponse


class HolidayDeleteResponse(BaseModel):
    deleted: bool
    confirmation: str


class HolidayImportResponse(BaseModel):
    loaded: bool
    count: int
