"""Data models for church years, calendar entries and reading sets."""

import dataclasses
import datetime
from typing import Optional

import utils


# Precedence when several entries share a date; lower wins.
TYPE_PRIORITY = {
    "feast": 1,
    "special": 2,
    "sunday": 3,
    "weekday": 4,
    "service": 5,
}


@dataclasses.dataclass(frozen=True)
class ChurchYear:
  """One church year, from 1st Advent Sunday to the Saturday before the next."""

  start: int
  label: str
  year_cycle: int

  def to_dict(self):
    return {"start": self.start, "label": self.label, "yearCycle": self.year_cycle}


@dataclasses.dataclass(frozen=True)
class CalendarEntry:
  """A dated observance produced by the church year generator."""

  date: datetime.date
  slug: str
  name: str
  type: str = "sunday"

  @property
  def date_str(self) -> str:
    return utils.format_date(self.date)

  @property
  def priority(self) -> int:
    return TYPE_PRIORITY.get(self.type, 9)

  def to_dict(self):
    return {
        "date": self.date_str,
        "slug": self.slug,
        "name": self.name,
        "type": self.type,
    }


@dataclasses.dataclass(frozen=True)
class SundayReadings:
  """Readings that rotate over the three year cycles."""

  cycles: dict

  def for_cycle(self, year_cycle: int) -> Optional[dict]:
    return self.cycles.get(str(year_cycle))


@dataclasses.dataclass(frozen=True)
class WeekdayReadings:
  """Flat weekday lectionary: Old and New Testament options plus a gospel."""

  ot_readings: list
  nt_readings: list
  gospel: Optional[dict] = None

  def to_dict(self):
    return {
        "otReadings": list(self.ot_readings),
        "ntReadings": list(self.nt_readings),
        "gospel": self.gospel,
    }


@dataclasses.dataclass(frozen=True)
class SimpleReadings:
  """A single set of readings used every year."""

  readings: list
  gospel: Optional[dict] = None

  def to_dict(self):
    return {"readings": list(self.readings), "gospel": self.gospel}


def _simple_readings(texts):
  return SimpleReadings(
      readings=texts.get("readings") or [],
      gospel=texts.get("gospel"),
  )


def readings_from_record(record: dict):
  """Picks the reading variant of a holy day record.

  Single-set services (e.g. Jeesuksen kuolinhetki) store their readings
  under ``weekdayTexts`` as ``{readings, gospel}``, so the variant follows
  the shape of the object rather than its key. ``simpleTexts`` is accepted
  as an alias.

  Returns:
    A SundayReadings, WeekdayReadings or SimpleReadings instance, or None if
    the record carries no readings.
  """
  if record.get("yearCycles"):
    return SundayReadings(cycles=record["yearCycles"])
  weekday = record.get("weekdayTexts")
  if weekday:
    if "readings" in weekday and not (
        weekday.get("otReadings") or weekday.get("ntReadings")):
      return _simple_readings(weekday)
    return WeekdayReadings(
        ot_readings=weekday.get("otReadings") or [],
        nt_readings=weekday.get("ntReadings") or [],
        gospel=weekday.get("gospel"),
    )
  simple = record.get("simpleTexts")
  if simple:
    return _simple_readings(simple)
  return None
