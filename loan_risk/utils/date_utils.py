"""Date manipulation utilities"""

from datetime import date


def age_in_years(date_of_birth: date, today: date) -> int:
    """
    Whole years between date_of_birth and today.

    A birthday not yet reached in today's year does not count, so someone born
    on 2000-06-15 is 23 on 2024-06-14 and 24 on 2024-06-15.
    """
    years = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        years -= 1
    return years
