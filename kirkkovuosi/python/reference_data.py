"""Loads the read-only reference datasets the resolver works from."""

import logging
import os

import models
import utils

logger = logging.getLogger(__name__)

PROPERS_COLLECTIONS = (
    "prefaatiot",
    "kyrieLitaniat",
    "kertosaakeet",
    "synninpaastot",
    "kiitosrukoukset",
)


class DataLoadError(RuntimeError):
  """Raised when a reference dataset is missing or corrupt."""


def _load(path):
  try:
    return utils.load_json(path)
  except (OSError, ValueError) as e:
    raise DataLoadError(f"Could not load reference data {path}") from e


def _validate_days(days, path):
  if not isinstance(days, list):
    raise DataLoadError(f"{path}: expected a list of holy days")
  for i, day in enumerate(days):
    if not isinstance(day, dict) or not day.get("slug") or not day.get("name"):
      raise DataLoadError(f"{path}: entry {i} has no slug or name")


def _validate_propers(propers, path):
  if not isinstance(propers, dict):
    raise DataLoadError(f"{path}: expected an object")
  for key in PROPERS_COLLECTIONS:
    value = propers.setdefault(key, [])
    if not isinstance(value, list):
      raise DataLoadError(f"{path}: {key} must be a list")
  propers.setdefault("improperia", None)


class ReferenceData:
  """Holy day records, propers and the lectionary index, loaded once.

  Every record is indexed by slug and its readings are classified into a
  SundayReadings, WeekdayReadings or SimpleReadings variant up front, so
  lookups during resolution never touch the file system.
  """

  def __init__(self, days, propers, lectionary_index=None):
    self.days = days
    self.propers = propers
    self.lectionary_index = lectionary_index or {}
    self._by_slug = {}
    self._readings = {}
    for day in days:
      slug = day["slug"]
      if slug in self._by_slug:
        logger.warning("Duplicate holy day slug %s, keeping the first", slug)
        continue
      self._by_slug[slug] = day
      self._readings[slug] = models.readings_from_record(day)

  @classmethod
  def from_directory(cls, data_dir):
    """Loads all datasets from `data_dir`.

    Raises:
      DataLoadError: if a required file cannot be read or is malformed.
    """
    days_path = os.path.join(data_dir, utils.ALL_DAYS_JSON_FILENAME)
    propers_path = os.path.join(data_dir, utils.PROPERS_JSON_FILENAME)
    index_path = os.path.join(data_dir, utils.LECTIONARY_INDEX_JSON_FILENAME)

    days = _load(days_path)
    _validate_days(days, days_path)
    propers = _load(propers_path)
    _validate_propers(propers, propers_path)

    lectionary_index = None
    if os.path.exists(index_path):
      lectionary_index = _load(index_path)
    else:
      logger.warning("Lectionary index %s not found", index_path)

    logger.info(
        "Loaded %d holy days and %d preface endings from %s",
        len(days),
        len(propers["prefaatiot"]),
        data_dir,
    )
    return cls(days, propers, lectionary_index)

  def get_day(self, slug):
    """Returns the holy day record for a slug, or None."""
    return self._by_slug.get(slug)

  def get_readings(self, slug):
    """Returns the reading variant for a slug, or None."""
    return self._readings.get(slug)

  def get_all_days(self):
    return self.days
