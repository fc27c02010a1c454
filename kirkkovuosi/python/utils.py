"""Shared paths and helpers for the church year service."""

import datetime
import json
import os
import re

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.path.join(SCRIPT_DIR, "..", "data")
ALL_DAYS_JSON_FILENAME = "all_days.json"
PROPERS_JSON_FILENAME = "propers.json"
LECTIONARY_INDEX_JSON_FILENAME = "lectionary_index.json"

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Indexed by datetime.date.weekday(), Monday first.
FINNISH_DAY_NAMES = [
    "maanantai",
    "tiistai",
    "keskiviikko",
    "torstai",
    "perjantai",
    "lauantai",
    "sunnuntai",
]


def load_json(path):
  """Loads a JSON file."""
  with open(path, "r", encoding="utf-8") as f:
    return json.load(f)


def format_date(date: datetime.date) -> str:
  """Formats a date as YYYY-MM-DD."""
  return date.strftime("%Y-%m-%d")


def parse_date(date_str: str) -> datetime.date:
  """Parses a YYYY-MM-DD string.

  Raises:
    ValueError: if the string is not a valid calendar date.
  """
  if not DATE_PATTERN.match(date_str):
    raise ValueError(f"Invalid date format: {date_str}")
  return datetime.datetime.strptime(date_str, "%Y-%m-%d").date()


def to_date(value) -> datetime.date:
  """Normalizes a date, datetime or YYYY-MM-DD string to a date.

  Timezone-aware datetimes are converted to UTC before taking the date.
  """
  if isinstance(value, str):
    return parse_date(value)
  # datetime is a subclass of date, so check it first
  if isinstance(value, datetime.datetime):
    if value.tzinfo is not None:
      value = value.astimezone(datetime.timezone.utc)
    return value.date()
  return value


def finnish_day_name(date: datetime.date) -> str:
  """Returns the Finnish weekday name for a date."""
  return FINNISH_DAY_NAMES[date.weekday()]


def church_year_label(start_year: int) -> str:
  """Returns the display label of a church year, e.g. 2025–2026."""
  return f"{start_year}–{start_year + 1}"
