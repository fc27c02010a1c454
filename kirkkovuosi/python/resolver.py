"""Resolves calendar dates to their place in the church year.

Given any date, finds the holy day(s) that fall on it, picks the governing
one by precedence and enriches it with readings, prayers and propers from the
reference data.
"""

import copy
import logging

import calendar_cache
import church_year
import computus
import models
import propers
import utils

logger = logging.getLogger(__name__)

READING_KEYS = ("firstReading", "secondReading", "gospel")
OPTIONAL_FIELDS = ("psalm", "hallelujah", "psalmVerse", "prayers", "hymns")
CROSS_REFERENCE_NOTE = "Teksti sama kuin 1. vuosikerta"

# Keyword rules for days whose record does not name a season.
SEASON_RULES = [
    (("adventti", "advent"), "Joulujakso"),
    (("joulu", "christmas"), "Joulujakso"),
    (("loppiai",), "Joulujakso"),
    (("paasto", "laskiai"), "Pääsiäisjakso"),
    (("hiljai", "kiiras", "pitkap", "palmu"), "Pääsiäisjakso"),
    (("paasiai",), "Pääsiäisjakso"),
    (("helluntai", "kolminai", "helatorstai"), "Helluntaijakso"),
    (("shel", "helluntaista"), "Helluntaijakso"),
]

SEASON_PERIODS = {
    "advent": "Adventtiaika",
    "christmas": "Jouluaika",
    "epiphany": "Loppiaisaika",
    "lent": "Paastonaika",
    "easter": "Pääsiäisaika",
    "pentecost": "Helluntain jälkeinen aika",
}


def infer_season(slug):
  """Guesses the season of a slug from keywords, or returns None."""
  for keywords, season in SEASON_RULES:
    if any(keyword in slug for keyword in keywords):
      return season
  return None


def prioritize_entries(entries):
  """Orders same-date entries: feast, special, sunday, weekday, service.

  Entries of equal type keep their generation order.
  """
  return sorted(entries, key=lambda entry: entry.priority)


def find_preceding_sunday(calendar, date):
  """Returns the latest Sunday or feast entry on or before `date`."""
  best = None
  for entry in calendar:
    if entry.type not in ("sunday", "feast") or entry.date > date:
      continue
    if best is None or entry.date > best.date:
      best = entry
  return best


def _resolve_cross_references(texts, readings):
  """Fills readings that only point to year cycle 1 ("ks. ...")."""
  cycle1 = readings.for_cycle(1) or {}
  for key in READING_KEYS:
    reading = texts.get(key)
    if not reading or reading.get("text"):
      continue
    if "ks." not in (reading.get("reference") or ""):
      continue
    source = cycle1.get(key) or {}
    if source.get("text"):
      texts[key] = dict(
          reading,
          text=source["text"],
          bookIntro=source.get("bookIntro"),
          crossReference=CROSS_REFERENCE_NOTE,
      )


class DateResolver:
  """Answers date and church year queries from loaded reference data."""

  def __init__(self, reference_data, cache=None):
    self.data = reference_data
    if cache is None:
      cache = calendar_cache.CalendarCache()
    self.cache = cache
    self.propers = propers.PropersResolver(reference_data.propers)

  def get_day_data(self, slug):
    return self.data.get_day(slug)

  def get_all_days(self):
    return self.data.get_all_days()

  def get_propers(self, slug, day_data=None):
    return self.propers.get_propers(slug, day_data)

  def get_season(self, entry):
    """Returns the season of an entry from its record or its slug."""
    if entry is None:
      return None
    data = self.data.get_day(entry.slug)
    if data and data.get("season"):
      return data["season"]
    return infer_season(entry.slug)

  def _cycle_texts(self, readings, year_cycle):
    cycle_data = readings.for_cycle(year_cycle)
    if not cycle_data:
      return None
    texts = {"yearCycle": year_cycle}
    for key in READING_KEYS:
      texts[key] = cycle_data.get(key) or None
    texts["alternativeSermonTexts"] = cycle_data.get("alternativeSermonTexts") or []
    _resolve_cross_references(texts, readings)
    return texts

  def enrich_entry(self, entry, year_cycle):
    """Merges a calendar entry with its holy day record and propers."""
    data = self.data.get_day(entry.slug) or {}
    result = entry.to_dict()
    result["liturgicalColor"] = data.get("liturgicalColor") or None
    result["description"] = data.get("description") or None
    result["latinName"] = data.get("latinName") or None

    readings = self.data.get_readings(entry.slug)
    if isinstance(readings, models.SundayReadings):
      texts = self._cycle_texts(readings, year_cycle)
      if texts:
        result["texts"] = texts
      result["allYearCycles"] = readings.cycles
    elif isinstance(readings, (models.WeekdayReadings, models.SimpleReadings)):
      result["texts"] = readings.to_dict()

    for key in OPTIONAL_FIELDS:
      if data.get(key):
        result[key] = data[key]

    result["propers"] = self.propers.get_propers(entry.slug, data or None)
    # Callers may mutate the result; the reference data must stay intact.
    return copy.deepcopy(result)

  def resolve_date(self, date):
    """Resolves a date to its church calendar information.

    Args:
      date: A datetime.date, datetime.datetime or YYYY-MM-DD string.

    Returns:
      A dict with the date, church year, the governing holy day (or None),
      the preceding Sunday when no holy day falls on the date, any
      additional services, the Finnish weekday name and the season.
    """
    date = utils.to_date(date)
    start_year = computus.get_church_year_start(date)
    year = church_year.get_church_year(start_year)
    calendar = self.cache.get(start_year)

    matches = [entry for entry in calendar if entry.date == date]
    result = {
        "date": utils.format_date(date),
        "churchYear": year.to_dict(),
        "holyDay": None,
        "precedingSunday": None,
        "additionalServices": [],
        "dayOfWeek": utils.finnish_day_name(date),
        "season": None,
    }

    if not matches:
      preceding = find_preceding_sunday(calendar, date)
      if preceding:
        result["precedingSunday"] = self.enrich_entry(preceding, year.year_cycle)
      result["season"] = self.get_season(preceding)
      return result

    prioritized = prioritize_entries(matches)
    primary = prioritized[0]
    logger.debug("%s resolves to %s", result["date"], primary.slug)
    result["holyDay"] = self.enrich_entry(primary, year.year_cycle)
    result["additionalServices"] = [
        self.enrich_entry(entry, year.year_cycle) for entry in prioritized[1:]
    ]
    result["season"] = self.get_season(primary)
    return result

  def get_church_year_calendar(self, start_year: int):
    """Returns the church year header and all its dated entries."""
    return {
        "churchYear": church_year.get_church_year(start_year).to_dict(),
        "entries": [entry.to_dict() for entry in self.cache.get(start_year)],
    }

  def get_season_entries(self, start_year: int, season: str):
    """Returns the enriched entries of one season, or None if unknown.

    Args:
      start_year: Start year of the church year.
      season: One of advent, christmas, epiphany, lent, easter, pentecost.
    """
    season = season.lower()
    period = SEASON_PERIODS.get(season)
    if not period:
      return None

    year = church_year.get_church_year(start_year)
    matching = []
    for entry in self.cache.get(start_year):
      data = self.data.get_day(entry.slug) or {}
      if data.get("period") == period or season in (data.get("season") or "").lower():
        matching.append(entry)

    return {
        "season": season,
        "churchYear": year.to_dict(),
        "entries": [self.enrich_entry(entry, year.year_cycle) for entry in matching],
    }

  def search_texts(self, query: str):
    """Finds holy days whose reading references contain `query`."""
    q = query.lower().strip()
    results = []
    for day in self.data.get_all_days():
      for cycle, readings in (day.get("yearCycles") or {}).items():
        for key in READING_KEYS:
          reference = (readings.get(key) or {}).get("reference") or ""
          if q in reference.lower():
            results.append({
                "holyDay": day["name"],
                "slug": day["slug"],
                "yearCycle": int(cycle),
                "readingType": key,
                "reference": reference,
            })

      weekday = day.get("weekdayTexts") or {}
      for key in ("otReadings", "ntReadings", "readings"):
        for reading in weekday.get(key) or []:
          reference = reading.get("reference") or ""
          if q in reference.lower():
            results.append({
                "holyDay": day["name"],
                "slug": day["slug"],
                "readingType": key,
                "reference": reference,
            })
    return {"query": q, "count": len(results), "results": results}
