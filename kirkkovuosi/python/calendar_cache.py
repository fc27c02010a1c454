"""Process-lifetime cache of generated church year calendars."""

import logging
import threading

import church_year

logger = logging.getLogger(__name__)


class CalendarCache:
  """Maps a church year's start year to its generated calendar.

  Calendars are generated on first request and kept for the lifetime of the
  cache. Population is guarded by a lock so concurrent requests for the same
  year generate it once.
  """

  def __init__(self, generator=church_year.generate_church_year):
    self._generator = generator
    self._calendars = {}
    self._lock = threading.Lock()

  def get(self, start_year: int) -> tuple:
    calendar = self._calendars.get(start_year)
    if calendar is not None:
      return calendar
    with self._lock:
      if start_year not in self._calendars:
        logger.debug("Generating church year %d", start_year)
        self._calendars[start_year] = tuple(self._generator(start_year))
      return self._calendars[start_year]

  def __contains__(self, start_year):
    return start_year in self._calendars

  def __len__(self):
    return len(self._calendars)
