"""Reads runtime settings from environment variables."""

import logging
import os

import pytz
import utils

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "Europe/Helsinki"
DEFAULT_PORT = 3000


def _get_setting(environment_variable, default=None):
  """Returns an environment variable, or the default if it is unset."""
  value = os.getenv(environment_variable)
  if value is None or value == "":
    return default
  return value


def get_data_dir():
  """Returns the directory holding the reference JSON files."""
  return _get_setting("KIRKKOVUOSI_DATA_DIR", utils.DATA_DIR)


def get_timezone():
  """Returns the timezone used to decide what "today" is."""
  tz_str = _get_setting("KIRKKOVUOSI_TIMEZONE", DEFAULT_TIMEZONE)
  try:
    return pytz.timezone(tz_str)
  except pytz.UnknownTimeZoneError:
    logger.warning("Unknown timezone %s, falling back to UTC", tz_str)
    return pytz.UTC


def get_log_level():
  """Returns the logging level name."""
  return _get_setting("LOG_LEVEL", "INFO").upper()


def get_port():
  """Returns the port the development server listens on."""
  try:
    return int(_get_setting("PORT", DEFAULT_PORT))
  except ValueError:
    logger.warning("Invalid PORT value, using %d", DEFAULT_PORT)
    return DEFAULT_PORT
