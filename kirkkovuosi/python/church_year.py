"""Generates the dated observances of one church year.

A church year runs from 1st Advent Sunday of `start_year` to the Saturday
before 1st Advent Sunday of the next year. Every moveable observance is an
offset from the Easter that falls inside it.
"""

import datetime

import computus
import models
import utils


def _add(entries, date, slug, name, entry_type="sunday"):
  entries.append(models.CalendarEntry(date, slug, name, entry_type))


def _add_weekdays(entries, sunday, slug, name, until=None):
  """Adds Monday to Saturday after `sunday`, stopping before `until`."""
  for offset in range(1, 7):
    date = computus.add_days(sunday, offset)
    if until is not None and date >= until:
      break
    _add(entries, date, slug, name, "weekday")


def _sunday_after_in_range(after, range_start, range_end):
  """Returns the first Sunday after `after` if it lies within the range."""
  candidate = computus.sunday_on_or_after(computus.add_days(after, 1))
  if range_start <= candidate <= range_end:
    return candidate
  return None


def _add_advent(entries, start_year):
  advent1 = computus.first_advent_sunday(start_year)
  christmas_eve = datetime.date(start_year, 12, 24)
  for week in range(1, 5):
    sunday = computus.add_days(advent1, (week - 1) * 7)
    _add(entries, sunday, f"{week}-adventtisunnuntai", f"{week}. adventtisunnuntai")
    _add_weekdays(
        entries,
        sunday,
        f"{week}-adventtisunnuntain-jalkeinen-viikko",
        f"{week}. adventtisunnuntain jälkeinen viikko",
        until=christmas_eve,
    )


def _add_christmas(entries, start_year):
  next_year = start_year + 1
  christmas = datetime.date(start_year, 12, 25)
  _add(entries, datetime.date(start_year, 12, 24), "jouluaatto", "Jouluaatto", "feast")
  _add(entries, christmas, "joulupaiva", "Joulupäivä", "feast")
  _add(entries, datetime.date(start_year, 12, 26), "tapaninpaiva", "Tapaninpäivä", "feast")
  _add(
      entries,
      datetime.date(start_year, 12, 27),
      "apostoli-johanneksen-paiva",
      "Apostoli Johanneksen päivä",
      "feast",
  )
  _add(
      entries,
      datetime.date(start_year, 12, 28),
      "viattomien-lasten-paiva",
      "Viattomien lasten päivä",
      "feast",
  )

  first_sunday = _sunday_after_in_range(
      christmas, datetime.date(start_year, 12, 27), datetime.date(next_year, 1, 2)
  )
  if first_sunday:
    _add(entries, first_sunday, "1-sunnuntai-joulusta", "1. sunnuntai joulusta")

  _add(
      entries,
      datetime.date(start_year, 12, 31),
      "uudenvuodenaatto",
      "Uudenvuodenaatto",
      "feast",
  )
  _add(
      entries,
      datetime.date(next_year, 1, 1),
      "uudenvuodenpaiva",
      "Uudenvuodenpäivä",
      "feast",
  )

  second_sunday = _sunday_after_in_range(
      datetime.date(next_year, 1, 1),
      datetime.date(next_year, 1, 2),
      datetime.date(next_year, 1, 5),
  )
  if second_sunday:
    _add(entries, second_sunday, "2-sunnuntai-joulusta", "2. sunnuntai joulusta")


def _add_epiphany(entries, start_year, cycle):
  epiphany = datetime.date(start_year + 1, 1, 6)
  _add(entries, epiphany, "loppiainen", "Loppiainen", "feast")

  # The Sundays after Epiphany fill the gap up to the pre-Lent Sundays.
  sunday = computus.sunday_on_or_after(computus.add_days(epiphany, 1))
  count = 1
  while sunday < cycle.septuagesima and count <= 6:
    _add(
        entries,
        sunday,
        f"{count}-sunnuntai-loppiaisesta",
        f"{count}. sunnuntai loppiaisesta",
    )
    sunday = computus.add_days(sunday, 7)
    count += 1


def _add_lent(entries, cycle):
  _add(
      entries,
      cycle.septuagesima,
      "3-sunnuntai-ennen-paastonaikaa",
      "3. sunnuntai ennen paastonaikaa",
  )
  _add(
      entries,
      cycle.sexagesima,
      "2-sunnuntai-ennen-paastonaikaa",
      "2. sunnuntai ennen paastonaikaa",
  )
  _add(entries, cycle.quinquagesima, "laskiaissunnuntai", "Laskiaissunnuntai")
  _add(entries, cycle.ash_wednesday, "tuhkakeskiviikko", "Tuhkakeskiviikko", "weekday")

  for week in range(1, 6):
    _add(
        entries,
        cycle.offset(-49 + week * 7),
        f"{week}-paastonajan-sunnuntai",
        f"{week}. paastonajan sunnuntai",
    )


HOLY_WEEK_AND_EASTER = [
    (-7, "palmusunnuntai", "Palmusunnuntai", "sunday"),
    (-6, "hiljaisen-viikon-maanantai", "Hiljaisen viikon maanantai", "weekday"),
    (-5, "hiljaisen-viikon-tiistai", "Hiljaisen viikon tiistai", "weekday"),
    (-4, "hiljaisen-viikon-keskiviikko", "Hiljaisen viikon keskiviikko", "weekday"),
    (-3, "kiirastorstai", "Kiirastorstai", "feast"),
    (-2, "pitkaperjantai", "Pitkäperjantai", "feast"),
    (-2, "jeesuksen-kuolinhetki", "Jeesuksen kuolinhetki", "service"),
    (-2, "pitkaperjantain-ilta", "Pitkäperjantain ilta", "service"),
    (-1, "hiljainen-lauantai", "Hiljainen lauantai", "weekday"),
    (-1, "paasiaisyo", "Pääsiäisyö", "service"),
    (0, "paasiaispaiva", "Pääsiäispäivä", "feast"),
    (1, "2-paasiaispaiva", "2. pääsiäispäivä", "feast"),
    (2, "paasiaisen-jalkeinen-tiistai", "Pääsiäisen jälkeinen tiistai", "weekday"),
    (3, "paasiaisen-jalkeinen-keskiviikko", "Pääsiäisen jälkeinen keskiviikko", "weekday"),
    (4, "paasiaisen-jalkeinen-torstai", "Pääsiäisen jälkeinen torstai", "weekday"),
    (5, "paasiaisen-jalkeinen-perjantai", "Pääsiäisen jälkeinen perjantai", "weekday"),
    (6, "paasiaisen-jalkeinen-lauantai", "Pääsiäisen jälkeinen lauantai", "weekday"),
]


def _add_easter(entries, cycle):
  for offset, slug, name, entry_type in HOLY_WEEK_AND_EASTER:
    _add(entries, cycle.offset(offset), slug, name, entry_type)

  for week in range(1, 7):
    _add(
        entries,
        cycle.offset(week * 7),
        f"{week}-sunnuntai-paasiaisesta",
        f"{week}. sunnuntai pääsiäisestä",
    )

  _add(entries, cycle.ascension, "helatorstai", "Helatorstai", "feast")
  _add(
      entries,
      computus.add_days(cycle.pentecost, -1),
      "helluntaiaatto",
      "Helluntaiaatto",
      "service",
  )
  _add(entries, cycle.pentecost, "helluntaipaiva", "Helluntaipäivä", "feast")
  _add_weekdays(
      entries,
      cycle.pentecost,
      "helluntain-jalkeinen-viikko-eli-helluntaiviikko",
      "Helluntain jälkeinen viikko",
  )
  _add(
      entries,
      cycle.holy_trinity,
      "pyhan-kolminaisuuden-paiva",
      "Pyhän Kolminaisuuden päivä",
  )


# Sundays after Pentecost that carry a feast of their own, by running index.
NUMBERED_SUNDAY_FEASTS = {
    6: ("apostolien-paiva", "Apostolien päivä"),
    8: ("kirkastussunnuntai", "Kirkastussunnuntai"),
    22: ("reformaation-paiva", "Reformaation päivä"),
}


def _add_sundays_after_pentecost(entries, start_year, cycle):
  next_advent1 = computus.first_advent_sunday(start_year + 1)
  last_sunday = computus.add_days(next_advent1, -7)

  sundays = []
  sunday = computus.add_days(cycle.pentecost, 14)
  while sunday <= last_sunday:
    sundays.append(sunday)
    sunday = computus.add_days(sunday, 7)

  for i, date in enumerate(sundays):
    number = i + 2
    from_end = len(sundays) - i
    # The last two Sundays of the year win over the numbered feasts.
    if from_end == 1:
      _add(entries, date, "tuomiosunnuntai", "Tuomiosunnuntai")
    elif from_end == 2:
      _add(entries, date, "valvomisen-sunnuntai", "Valvomisen sunnuntai")
    elif number in NUMBERED_SUNDAY_FEASTS:
      slug, name = NUMBERED_SUNDAY_FEASTS[number]
      _add(entries, date, slug, name)
    else:
      _add(
          entries,
          date,
          f"{number}-sunnuntai-helluntaista",
          f"{number}. sunnuntai helluntaista",
      )


def annunciation_date(start_year: int, cycle=None) -> datetime.date:
  """Returns the date Marian ilmestyspäivä is kept in the church year.

  March 25 unless it falls between Holy Monday and the 1st Sunday after
  Easter, in which case it moves to the Sunday before Palm Sunday.
  """
  cycle = cycle or computus.EasterCycle(start_year)
  annunciation = datetime.date(start_year + 1, 3, 25)
  if cycle.offset(-6) <= annunciation <= cycle.offset(7):
    return cycle.offset(-14)
  return annunciation


def _add_special_feasts(entries, start_year, cycle):
  year = start_year + 1
  _add(entries, datetime.date(year, 2, 2), "kynttilanpaiva", "Kynttilänpäivä", "special")
  _add(
      entries,
      annunciation_date(start_year, cycle),
      "marian-ilmestyspaiva",
      "Marian ilmestyspäivä",
      "special",
  )

  midsummer = computus.saturday_on_or_before(datetime.date(year, 6, 26))
  if midsummer >= datetime.date(year, 6, 20):
    _add(entries, midsummer, "juhannuspaiva", "Juhannuspäivä", "special")

  michaelmas = computus.sunday_on_or_after(datetime.date(year, 9, 29))
  if michaelmas <= datetime.date(year, 10, 5):
    _add(entries, michaelmas, "mikkelinpaiva", "Mikkelinpäivä", "special")

  all_saints = computus.saturday_on_or_before(datetime.date(year, 11, 6))
  if all_saints >= datetime.date(year, 10, 31):
    _add(entries, all_saints, "pyhainpaiva", "Pyhäinpäivä", "special")

  _add(
      entries,
      datetime.date(year, 1, 19),
      "pyhan-henrikin-muistopaiva",
      "Pyhän Henrikin muistopäivä",
      "special",
  )
  # Dec 6 of the start year; Dec 6 of the next year already belongs to the
  # following church year.
  _add(
      entries,
      datetime.date(start_year, 12, 6),
      "itsenaisyyspaiva",
      "Itsenäisyyspäivä",
      "special",
  )
  _add(
      entries,
      datetime.date(year, 1, 18),
      "kansalliset-rukouspaivat",
      "Kristittyjen ykseyden rukouspäivä",
      "special",
  )
  _add(
      entries,
      datetime.date(year, 10, 24),
      "kansalliset-rukouspaivat",
      "Rauhan, ihmisoikeuksien ja kansainvälisen vastuun rukouspäivä",
      "special",
  )


def get_church_year(start_year: int) -> models.ChurchYear:
  return models.ChurchYear(
      start=start_year,
      label=utils.church_year_label(start_year),
      year_cycle=computus.get_year_cycle(start_year),
  )


def generate_church_year(start_year: int) -> list:
  """Generates the complete, date-ordered calendar of a church year.

  Args:
    start_year: The calendar year in which the church year begins, e.g. 2025
      for church year 2025–2026.

  Returns:
    A list of CalendarEntry objects sorted by date. Entries sharing a date
    keep the order in which they were generated.
  """
  cycle = computus.EasterCycle(start_year)
  entries = []

  _add_advent(entries, start_year)
  _add_christmas(entries, start_year)
  _add_epiphany(entries, start_year, cycle)
  _add_lent(entries, cycle)
  _add_easter(entries, cycle)
  _add_sundays_after_pentecost(entries, start_year, cycle)
  _add_special_feasts(entries, start_year, cycle)

  # sorted() is stable, so same-date entries stay in generation order
  return sorted(entries, key=lambda entry: entry.date)
