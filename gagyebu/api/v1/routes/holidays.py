# gagyebu/api/v1/routes/holidays.py
from fastapi import APIRouter, Path
from typing import Dict

from gagyebu.utils.holidays import HOLIDAY_DATA, get_korean_holidays

router = APIRouter(prefix="/holidays", tags=["holidays"])

@router.get("/{year}")
async def read_holidays(year: int = Path(..., ge=1900, le=9999)) -> Dict:
    """Public holidays for the year; lunar dates are only known for the tabled years."""
    return {
        "year": year,
        "includes_lunar": year in HOLIDAY_DATA,
        "holidays": get_korean_holidays(year),
    }
