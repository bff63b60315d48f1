"""
South Korean public holidays, 2024-2027.

Lunar holidays (설날, 추석, 석가탄신일) are stored already resolved to solar
dates, together with the 대체공휴일 dates under the 2023 expanded
substitute-holiday law. There is no lunar calendar conversion: for a year
outside the table only the fixed solar holidays are returned.
"""
from typing import Dict, NamedTuple


class Holiday(NamedTuple):
    name: str
    substitute: bool = False


SUBSTITUTE = Holiday("대체공휴일", True)

HOLIDAY_DATA: Dict[int, Dict[str, Holiday]] = {
    2024: {
        "01-01": Holiday("신정"),
        "02-09": Holiday("설날 연휴"),
        "02-10": Holiday("설날"),
        "02-11": Holiday("설날 연휴"),
        "02-12": SUBSTITUTE,
        "03-01": Holiday("삼일절"),
        "05-05": Holiday("어린이날"),
        "05-06": SUBSTITUTE,
        "05-15": Holiday("석가탄신일"),
        "06-06": Holiday("현충일"),
        "08-15": Holiday("광복절"),
        "09-16": Holiday("추석 연휴"),
        "09-17": Holiday("추석"),
        "09-18": Holiday("추석 연휴"),
        "10-03": Holiday("개천절"),
        "10-09": Holiday("한글날"),
        "12-25": Holiday("기독탄신일"),
    },
    2025: {
        "01-01": Holiday("신정"),
        "01-28": Holiday("설날 연휴"),
        "01-29": Holiday("설날"),
        "01-30": Holiday("설날 연휴"),
        "03-01": Holiday("삼일절"),
        "03-03": SUBSTITUTE,
        "05-05": Holiday("어린이날·석가탄신일"),
        "05-06": SUBSTITUTE,
        "06-06": Holiday("현충일"),
        "08-15": Holiday("광복절"),
        "10-03": Holiday("개천절"),
        "10-05": Holiday("추석 연휴"),
        "10-06": Holiday("추석"),
        "10-07": Holiday("추석 연휴"),
        "10-08": SUBSTITUTE,
        "10-09": Holiday("한글날"),
        "12-25": Holiday("기독탄신일"),
    },
    2026: {
        "01-01": Holiday("신정"),
        "02-16": Holiday("설날 연휴"),
        "02-17": Holiday("설날"),
        "02-18": Holiday("설날 연휴"),
        "03-01": Holiday("삼일절"),
        "03-02": SUBSTITUTE,
        "05-05": Holiday("어린이날"),
        "05-24": Holiday("석가탄신일"),
        "05-25": SUBSTITUTE,
        "06-06": Holiday("현충일"),
        "08-15": Holiday("광복절"),
        "08-17": SUBSTITUTE,
        "09-24": Holiday("추석 연휴"),
        "09-25": Holiday("추석"),
        "09-26": Holiday("추석 연휴"),
        "09-28": SUBSTITUTE,
        "10-03": Holiday("개천절"),
        "10-05": SUBSTITUTE,
        "10-09": Holiday("한글날"),
        "12-25": Holiday("기독탄신일"),
    },
    2027: {
        "01-01": Holiday("신정"),
        "02-05": Holiday("설날 연휴"),
        "02-06": Holiday("설날"),
        "02-07": Holiday("설날 연휴"),
        "02-08": SUBSTITUTE,
        "03-01": Holiday("삼일절"),
        "05-05": Holiday("어린이날"),
        "05-13": Holiday("석가탄신일"),
        "06-06": Holiday("현충일"),
        "08-15": Holiday("광복절"),
        "08-16": SUBSTITUTE,
        "09-14": Holiday("추석 연휴"),
        "09-15": Holiday("추석"),
        "09-16": Holiday("추석 연휴"),
        "10-03": Holiday("개천절"),
        "10-04": SUBSTITUTE,
        "10-09": Holiday("한글날"),
        "10-11": SUBSTITUTE,
        "12-25": Holiday("기독탄신일"),
        "12-27": SUBSTITUTE,
    },
}

FIXED_SOLAR_HOLIDAYS = [
    ("01-01", "신정"),
    ("03-01", "삼일절"),
    ("05-05", "어린이날"),
    ("06-06", "현충일"),
    ("08-15", "광복절"),
    ("10-03", "개천절"),
    ("10-09", "한글날"),
    ("12-25", "기독탄신일"),
]


def get_korean_holidays(year: int) -> Dict[str, str]:
    """Map of 'YYYY-MM-DD' -> holiday name for the given year."""
    data = HOLIDAY_DATA.get(year)
    if data is None:
        return {f"{year}-{mmdd}": name for mmdd, name in FIXED_SOLAR_HOLIDAYS}
    return {f"{year}-{mmdd}": entry.name for mmdd, entry in data.items()}


def holiday_name(date_str: str):
    """Holiday name for a 'YYYY-MM-DD' string, or None."""
    year = int(date_str[:4])
    return get_korean_holidays(year).get(date_str)


def is_substitute_holiday(date_str: str) -> bool:
    entry = HOLIDAY_DATA.get(int(date_str[:4]), {}).get(date_str[5:])
    return bool(entry and entry.substitute)
