from enum import StrEnum


class Rating(StrEnum):
    """Age rating of an event"""

    TWO_STAR = 'two_star'
    THREE_STAR = 'three_star'
    FOUR_STAR = 'four_star'
    FIVE_STAR = 'five_star'
