"""
Clock face text: time in four formats, 12/24h, day-month and year.
"""

from enum import Enum

_MONTHS = ("JAN", "FEB", "MAR", "APR", "MAY", "JUN",
           "JUL", "AUG", "SEP", "OCT", "NOV", "DEC")


class HourFormat(Enum):
    H24 = "24"
    H12 = "12"

    def toggled(self):
        return HourFormat.H12 if self is HourFormat.H24 else HourFormat.H24


class TimeFormat(Enum):
    HH_MM_SS = "hh:mm:ss"
    HH_MM = "hh:mm"
    MM_SS = "mm:ss"
    ISO_TIME = "iso"

    def next(self):
        order = list(TimeFormat)
        return order[(order.index(self) + 1) % len(order)]


def display_hour(hour, hour_format):
    if hour_format is HourFormat.H12:
        hour %= 12
        if hour == 0:
            hour = 12
    return hour


def format_time(now, hour_format=HourFormat.H24, time_format=TimeFormat.HH_MM_SS):
    hour = display_hour(now.hour, hour_format)
    if time_format is TimeFormat.HH_MM:
        return f"{hour:02d}:{now.minute:02d}"
    if time_format is TimeFormat.MM_SS:
        return f"{now.minute:02d}:{now.second:02d}"
    return f"{hour:02d}:{now.minute:02d}:{now.second:02d}"


def am_pm_suffix(now, hour_format):
    """None in 24h mode."""
    if hour_format is HourFormat.H24:
        return None
    return "PM" if now.hour >= 12 else "AM"


def format_day_month(now):
    return f"{now.day:02d}{_MONTHS[now.month - 1]}"


def format_year(now):
    return str(now.year)


def parse_hour_format(value, default=HourFormat.H24):
    try:
        return HourFormat(str(value))
    except ValueError:
        return default


def parse_time_format(value, default=TimeFormat.HH_MM_SS):
    try:
        return TimeFormat(value)
    except ValueError:
        return default
