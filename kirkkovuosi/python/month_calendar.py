"""Builds the month grid of the liturgical calendar."""

import calendar
import datetime

GREEN = "vihreä"
WHITE = "valkoinen"
RED = "punainen"
VIOLET = "violetti"
BLACK = "musta"

PRE_LENT_KEYWORDS = ["ennen-paastonaikaa", "laskiaissunnuntai"]
BLACK_KEYWORDS = ["pitkaperjantai", "kuolinhetki", "hiljainen-lauantai"]
RED_KEYWORDS = [
    "helluntaiaatto",
    "helluntaipaiva",
    "helluntaiviikko",
    "apostolien",
    "tapanin",
    "viattomien",
    "reformaation",
    "pyhainpaiva",
    "henrikin",
]
WHITE_KEYWORDS = [
    "joulu",
    "uudenvuoden",
    "johanneksen",
    "loppiainen",
    "kynttilan",
    "marian",
    "kiirastorstai",
    "paasiai",
    "helatorstai",
    "kolminaisuuden",
    "kirkastus",
    "juhannus",
    "mikkelin",
]
VIOLET_KEYWORDS = ["adventti", "paasto", "tuhka", "palmu", "hiljaisen-viikon"]

# Week-tag weekdays are not shown by name in the grid.
SUPPRESS_KEYWORDS = ["jalkeinen-viikko"]


def get_liturgical_color(slug):
  """Determines a liturgical color from the slug when the data has none."""
  if not slug:
    return GREEN
  if any(k in slug for k in PRE_LENT_KEYWORDS):
    return GREEN
  if any(k in slug for k in BLACK_KEYWORDS):
    return BLACK
  if any(k in slug for k in RED_KEYWORDS):
    return RED
  if any(k in slug for k in WHITE_KEYWORDS):
    return WHITE
  if any(k in slug for k in VIOLET_KEYWORDS):
    return VIOLET
  return GREEN


def _display_name(resolved):
  holy_day = resolved["holyDay"]
  if not holy_day:
    return ""
  days = [holy_day] + resolved["additionalServices"]
  names = [
      day["name"]
      for day in days
      if not any(k in day["slug"] for k in SUPPRESS_KEYWORDS)
  ]
  return " / ".join(names)


def generate_calendar_data(resolver, year, month, today=None):
  """Generates calendar data for the given month and year.

  Weeks start on Monday. Days from the neighbouring months are included to
  fill the first and last week.
  """
  cal = calendar.Calendar(firstweekday=calendar.MONDAY)
  today = today or datetime.date.today()

  calendar_rows = []
  for week in cal.monthdatescalendar(year, month):
    week_data = []
    for day in week:
      resolved = resolver.resolve_date(day)
      reference_day = resolved["holyDay"] or resolved["precedingSunday"] or {}
      slug = reference_day.get("slug")
      color = reference_day.get("liturgicalColor") or get_liturgical_color(slug)

      week_data.append({
          "day": day.day,
          "date": resolved["date"],
          "name": _display_name(resolved),
          "slug": resolved["holyDay"]["slug"] if resolved["holyDay"] else None,
          "color": color,
          "season": resolved["season"],
          "isToday": day == today,
          "isCurrentMonth": day.month == month,
      })
    calendar_rows.append(week_data)

  return calendar_rows
