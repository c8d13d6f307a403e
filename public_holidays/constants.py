import datetime

from django.db import models


NATIONAL_REGION = "national"
AUCKLAND_REGION = "auckland"


class HolidaySource(models.TextChoices):
    API = "api", "Holiday API"
    FALLBACK = "fallback", "Computed fallback"


# Names the holiday API uses for provincial anniversary days. These are
# regional and never counted as national holidays.
REGIONAL_ANNIVERSARY_NAMES = (
    "Auckland Anniversary Day",
    "Auckland/Northland Anniversary Day",
    "Northland Anniversary Day",
    "Nelson Anniversary Day",
    "Wellington Anniversary Day",
    "Canterbury Anniversary Day",
    "Otago Anniversary Day",
    "Southland Anniversary Day",
    "Taranaki Anniversary Day",
    "Hawke's Bay Anniversary Day",
    "Marlborough Anniversary Day",
    "Westland Anniversary Day",
    "Chatham Islands Anniversary Day",
    "Canterbury (South) Anniversary Day",
    "Canterbury (North and Central) Anniversary Day",
)

# (month, day) the anniversary is anchored to, observed on the closest Monday.
REGIONAL_ANNIVERSARIES: dict[str, tuple[tuple[int, int], str]] = {
    "auckland": ((1, 29), "Auckland Anniversary Day"),
    "wellington": ((1, 22), "Wellington Anniversary Day"),
    "canterbury": ((11, 16), "Canterbury Anniversary Day"),
    "otago": ((3, 23), "Otago Anniversary Day"),
    "southland": ((1, 17), "Southland Anniversary Day"),
    "taranaki": ((3, 31), "Taranaki Anniversary Day"),
    "hawkes-bay": ((11, 1), "Hawke's Bay Anniversary Day"),
    "marlborough": ((11, 1), "Marlborough Anniversary Day"),
    "nelson": ((2, 1), "Nelson Anniversary Day"),
    "westland": ((12, 1), "Westland Anniversary Day"),
    "chatham-islands": ((11, 30), "Chatham Islands Anniversary Day"),
}

# Matariki is set by the New Zealand government; it cannot be computed.
MATARIKI_DATES: dict[int, datetime.date] = {
    2022: datetime.date(2022, 6, 24),
    2023: datetime.date(2023, 7, 14),
    2024: datetime.date(2024, 6, 28),
    2025: datetime.date(2025, 6, 20),
    2026: datetime.date(2026, 7, 10),
    2027: datetime.date(2027, 6, 25),
    2028: datetime.date(2028, 7, 14),
    2029: datetime.date(2029, 7, 6),
    2030: datetime.date(2030, 6, 21),
    2031: datetime.date(2031, 7, 11),
    2032: datetime.date(2032, 7, 2),
    2033: datetime.date(2033, 6, 24),
    2034: datetime.date(2034, 7, 7),
    2035: datetime.date(2035, 6, 29),
    2036: datetime.date(2036, 7, 18),
    2037: datetime.date(2037, 7, 10),
    2038: datetime.date(2038, 6, 25),
    2039: datetime.date(2039, 7, 15),
    2040: datetime.date(2040, 7, 6),
    2041: datetime.date(2041, 7, 19),
    2042: datetime.date(2042, 7, 11),
    2043: datetime.date(2043, 7, 3),
    2044: datetime.date(2044, 6, 24),
    2045: datetime.date(2045, 7, 7),
    2046: datetime.date(2046, 6, 29),
    2047: datetime.date(2047, 7, 19),
    2048: datetime.date(2048, 7, 3),
    2049: datetime.date(2049, 6, 25),
    2050: datetime.date(2050, 7, 15),
    2051: datetime.date(2051, 6, 30),
    2052: datetime.date(2052, 6, 21),
}
