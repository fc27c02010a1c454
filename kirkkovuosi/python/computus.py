"""Easter computus and the date arithmetic the church calendar is built on.

All helpers work on naive ``datetime.date`` values, so there is no timezone
to drift across. Weekday arguments use Python's numbering (Monday = 0,
Sunday = 6).
"""

import datetime

SATURDAY = 5
SUNDAY = 6


def easter_sunday(year: int) -> datetime.date:
  """Calculates the date of Western Easter for a given year.

  Uses the anonymous Gregorian algorithm (Meeus/Jones/Butcher).
  """
  a = year % 19
  b = year // 100
  c = year % 100
  d = b // 4
  e = b % 4
  f = (b + 8) // 25
  g = (b - f + 1) // 3
  h = (19 * a + b - d - g + 15) % 30
  i = c // 4
  k = c % 4
  l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
  m = (a + 11 * h + 22 * l) // 451
  month = (h + l - 7 * m + 114) // 31
  day = ((h + l - 7 * m + 114) % 31) + 1
  return datetime.date(year, month, day)


def add_days(date: datetime.date, days: int) -> datetime.date:
  return date + datetime.timedelta(days=days)


def _days_since_sunday(date):
  return (date.weekday() + 1) % 7


def nearest_sunday(date: datetime.date) -> datetime.date:
  """Returns the Sunday closest to the date.

  Monday to Wednesday go back to the previous Sunday, Thursday to Saturday
  go forward to the next one.
  """
  days_since = _days_since_sunday(date)
  if days_since <= 3:
    return add_days(date, -days_since)
  return add_days(date, 7 - days_since)


def weekday_on_or_before(date: datetime.date, weekday: int) -> datetime.date:
  diff = (date.weekday() - weekday) % 7
  return add_days(date, -diff)


def weekday_on_or_after(date: datetime.date, weekday: int) -> datetime.date:
  diff = (weekday - date.weekday()) % 7
  return add_days(date, diff)


def sunday_on_or_before(date: datetime.date) -> datetime.date:
  return weekday_on_or_before(date, SUNDAY)


def sunday_on_or_after(date: datetime.date) -> datetime.date:
  return weekday_on_or_after(date, SUNDAY)


def saturday_on_or_before(date: datetime.date) -> datetime.date:
  return weekday_on_or_before(date, SATURDAY)


def first_advent_sunday(year: int) -> datetime.date:
  """1st Advent Sunday is the Sunday nearest to November 30."""
  return nearest_sunday(datetime.date(year, 11, 30))


def get_year_cycle(start_year: int) -> int:
  """Returns the lectionary year cycle (1, 2 or 3) of a church year."""
  return (start_year % 3) + 1


def get_church_year_start(date: datetime.date) -> int:
  """Returns the calendar year in which the church year of `date` began."""
  if date < first_advent_sunday(date.year):
    return date.year - 1
  return date.year


class EasterCycle:
  """Key dates of the Easter cycle that falls inside one church year.

  A church year starting in `start_year` celebrates Easter in the following
  calendar year.
  """

  def __init__(self, start_year: int):
    self.start_year = start_year
    self.easter_date = easter_sunday(start_year + 1)
    self.septuagesima = add_days(self.easter_date, -63)
    self.sexagesima = add_days(self.easter_date, -56)
    self.quinquagesima = add_days(self.easter_date, -49)
    self.ash_wednesday = add_days(self.easter_date, -46)
    self.palm_sunday = add_days(self.easter_date, -7)
    self.ascension = add_days(self.easter_date, 39)
    self.pentecost = add_days(self.easter_date, 49)
    self.holy_trinity = add_days(self.pentecost, 7)

  def offset(self, days: int) -> datetime.date:
    """Returns the date `days` away from Easter Sunday."""
    return add_days(self.easter_date, days)
