from gagyebu.utils.holidays import get_korean_holidays, holiday_name, is_substitute_holiday


def test_lunar_new_year_2025():
    holidays = get_korean_holidays(2025)
    assert holidays["2025-01-29"] == "설날"
    assert holidays["2025-01-28"] == "설날 연휴"
    assert holidays["2025-01-30"] == "설날 연휴"


def test_keys_are_full_dates_for_the_year():
    holidays = get_korean_holidays(2026)
    assert all(key.startswith("2026-") and len(key) == 10 for key in holidays)
    assert holidays["2026-09-25"] == "추석"


def test_substitute_holidays():
    assert holiday_name("2025-03-03") == "대체공휴일"
    assert is_substitute_holiday("2025-03-03")
    assert not is_substitute_holiday("2025-03-01")
    assert not is_substitute_holiday("2025-03-04")


def test_year_outside_table_falls_back_to_solar_holidays():
    holidays = get_korean_holidays(2030)
    assert holidays["2030-03-01"] == "삼일절"
    assert holidays["2030-12-25"] == "기독탄신일"
    assert len(holidays) == 8
    # Lunar holidays are unknown without the table
    assert "2030-01-29" not in holidays
    assert "추석" not in holidays.values()


def test_holiday_name_for_ordinary_day():
    assert holiday_name("2025-04-15") is None
