"""Season derivation from calendar month."""
from datetime import datetime
from enum import Enum
from typing import Dict


class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"
    WINTER = "winter"


# Meteorological seasons (northern hemisphere).
SEASON_BY_MONTH: Dict[int, Season] = {
    1: Season.WINTER,
    2: Season.WINTER,
    3: Season.SPRING,
    4: Season.SPRING,
    5: Season.SPRING,
    6: Season.SUMMER,
    7: Season.SUMMER,
    8: Season.SUMMER,
    9: Season.FALL,
    10: Season.FALL,
    11: Season.FALL,
    12: Season.WINTER,
}


def get_season(moment: datetime) -> Season:
    """Return the season that ``moment`` falls in."""
    return SEASON_BY_MONTH[moment.month]
