"""Flask application serving the church year API.

Church year calendar and lectionary of the Evangelical Lutheran Church of
Finland, based on Evankeliumikirja (Kirkkokäsikirja II, 2021) and
Jumalanpalvelusten kirja (2000).
"""

import datetime
import logging
import random

import config
import flask
import lectionary
import month_calendar
import reference_data
import resolver
import utils

logging.basicConfig(
    level=config.get_log_level(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

PROPERS_SOURCE = "Jumalanpalvelusten kirja (2000)"
MIN_YEAR = 1900
MAX_YEAR = 2100

ENDPOINTS = [
    "GET /api/v1/today: Current day info with propers",
    "GET /api/v1/today/texts: Bible texts for today",
    "GET /api/v1/today/texts?cycle=2: Texts for specific year cycle",
    "GET /api/v1/today/prayer: Prayer for today",
    "GET /api/v1/today/prayer?n=2: Specific prayer by number",
    "GET /api/v1/today/gospel: Gospel reading for today",
    "GET /api/v1/today/propers: Liturgical propers for today",
    "GET /api/v1/date/<date>: Info for a specific date (YYYY-MM-DD)",
    "GET /api/v1/date/<date>/color: Liturgical color for a date",
    "GET /api/v1/date/<date>/propers: Propers for a specific date",
    "GET /api/v1/holy-day/<slug>: Full data for a specific holy day",
    "GET /api/v1/year/<year>/calendar: Church year calendar",
    "GET /api/v1/year/<year>/season/<season>: Entries of one season",
    "GET /api/v1/calendar/<year>/<month>: Month grid with colors",
    "GET /api/v1/days: List all holy days",
    "GET /api/v1/search/text?q=Matt. 21: Search by Bible reference",
    "GET /api/v1/propers/prefaatiot: All preface endings by season",
    "GET /api/v1/propers/kyrie-litaniat: Seasonal Kyrie litanies",
    "GET /api/v1/propers/synninpaastot: Absolution texts",
    "GET /api/v1/propers/kiitosrukoukset: Thanksgiving prayers",
    "GET /api/v1/propers/kertosaakeet: Seasonal psalm refrains",
    "GET /api/v1/propers/improperia: Good Friday Improperia",
    "GET /api/v1/lectionary: Lectionary index metadata",
    "GET /api/v1/lectionary/holy-days: All holy day names in the lectionary",
    "GET /api/v1/lectionary/by-holy-day?q=pääsiäisyö: Readings for a holy day",
    "GET /api/v1/lectionary/search?q=Matt. 5: Search lectionary by reference",
]

app = flask.Flask(__name__)
app.json.ensure_ascii = False
app.json.sort_keys = False

# Reference data is loaded once; a DataLoadError here aborts startup.
REFERENCE_DATA = reference_data.ReferenceData.from_directory(
    config.get_data_dir()
)
RESOLVER = resolver.DateResolver(REFERENCE_DATA)
LECTIONARY = lectionary.LectionaryIndex(REFERENCE_DATA.lectionary_index)
TIMEZONE = config.get_timezone()


def _today():
  """Returns today's date in the configured timezone."""
  return datetime.datetime.now(TIMEZONE).date()


def _bad_request(message):
  return flask.jsonify({"error": message}), 400


def _parse_date_param(date_str):
  """Parses a YYYY-MM-DD path parameter, or returns None if invalid."""
  try:
    date = utils.parse_date(date_str)
  except ValueError:
    return None
  if not MIN_YEAR <= date.year <= MAX_YEAR:
    return None
  return date


def _parse_year_param(year_str):
  try:
    year = int(year_str)
  except ValueError:
    return None
  if not MIN_YEAR <= year <= MAX_YEAR:
    return None
  return year


def _int_arg(name):
  """Returns an integer query parameter, None if absent.

  Raises:
    ValueError: if the parameter is present but not an integer.
  """
  value = flask.request.args.get(name)
  if value is None or value == "":
    return None
  return int(value)


def _governing_day(resolved):
  return resolved["holyDay"] or resolved["precedingSunday"]


INVALID_DATE_MESSAGE = "Invalid date. Use YYYY-MM-DD between 1900 and 2100."
INVALID_YEAR_MESSAGE = "Invalid year. Must be between 1900 and 2100."


@app.route("/")
@app.route("/api")
@app.route("/api/v1")
def index_route():
  """Returns basic service information."""
  return flask.jsonify({
      "name": "Kirkkovuosi API",
      "version": "1.0.0",
      "description": (
          "Church year calendar and lectionary for the Evangelical-Lutheran "
          "Church of Finland"
      ),
      "source": "Evankeliumikirja (Kirkkokäsikirja II, 2021)",
      "endpoints": ENDPOINTS,
  })


@app.route("/api/v1/today")
def today_route():
  """Returns the resolved church day for today."""
  return flask.jsonify(RESOLVER.resolve_date(_today()))


@app.route("/api/v1/date/<date_str>")
def date_route(date_str):
  """Returns the resolved church day for a date."""
  date = _parse_date_param(date_str)
  if date is None:
    return _bad_request(INVALID_DATE_MESSAGE)
  return flask.jsonify(RESOLVER.resolve_date(date))


@app.route("/api/v1/today/texts")
def today_texts_route():
  """Returns the Bible texts of today's holy day."""
  try:
    cycle = _int_arg("cycle")
  except ValueError:
    return _bad_request("cycle must be 1, 2 or 3.")
  if cycle is not None and cycle not in (1, 2, 3):
    return _bad_request("cycle must be 1, 2 or 3.")

  resolved = RESOLVER.resolve_date(_today())
  holy_day = resolved["holyDay"]
  if not holy_day:
    return flask.jsonify({
        "date": resolved["date"],
        "texts": None,
        "note": "Ei pyhäpäivää, käytä edellisen sunnuntain tekstejä.",
        "precedingSunday": resolved["precedingSunday"],
    })

  if cycle and holy_day.get("allYearCycles"):
    return flask.jsonify({
        "date": resolved["date"],
        "yearCycle": cycle,
        "texts": holy_day["allYearCycles"].get(str(cycle)),
    })

  return flask.jsonify({
      "date": resolved["date"],
      "yearCycle": resolved["churchYear"]["yearCycle"],
      "texts": holy_day.get("texts"),
  })


@app.route("/api/v1/today/prayer")
def today_prayer_route():
  """Returns one prayer for today, random unless ?n= is given."""
  try:
    n = _int_arg("n")
  except ValueError:
    return _bad_request("n must be a number.")

  resolved = RESOLVER.resolve_date(_today())
  day = _governing_day(resolved)
  prayers = (day or {}).get("prayers") or []
  if not prayers:
    return flask.jsonify({"date": resolved["date"], "prayer": None})

  if n is not None and 1 <= n <= len(prayers):
    return flask.jsonify({
        "date": resolved["date"],
        "holyDay": day["name"],
        "prayer": prayers[n - 1],
    })

  return flask.jsonify({
      "date": resolved["date"],
      "holyDay": day["name"],
      "prayer": random.choice(prayers),
      "totalPrayers": len(prayers),
  })


@app.route("/api/v1/today/gospel")
def today_gospel_route():
  """Returns the gospel of today's (or the preceding Sunday's) texts."""
  resolved = RESOLVER.resolve_date(_today())
  day = _governing_day(resolved) or {}
  texts = day.get("texts") or {}
  return flask.jsonify({
      "date": resolved["date"],
      "holyDay": day.get("name"),
      "yearCycle": resolved["churchYear"]["yearCycle"],
      "gospel": texts.get("gospel"),
  })


def _propers_response(resolved):
  day = _governing_day(resolved)
  if not day:
    return flask.jsonify({"date": resolved["date"], "holyDay": None, "propers": None})
  return flask.jsonify({
      "date": resolved["date"],
      "holyDay": day["name"],
      "propers": day["propers"],
  })


@app.route("/api/v1/today/propers")
def today_propers_route():
  """Returns the liturgical propers for today."""
  return _propers_response(RESOLVER.resolve_date(_today()))


@app.route("/api/v1/date/<date_str>/propers")
def date_propers_route(date_str):
  """Returns the liturgical propers for a date."""
  date = _parse_date_param(date_str)
  if date is None:
    return _bad_request(INVALID_DATE_MESSAGE)
  return _propers_response(RESOLVER.resolve_date(date))


@app.route("/api/v1/date/<date_str>/color")
def date_color_route(date_str):
  """Returns the liturgical color for a date."""
  date = _parse_date_param(date_str)
  if date is None:
    return _bad_request(INVALID_DATE_MESSAGE)
  resolved = RESOLVER.resolve_date(date)
  day = _governing_day(resolved) or {}
  return flask.jsonify({
      "date": resolved["date"],
      "liturgicalColor": day.get("liturgicalColor"),
      "holyDay": day.get("name"),
  })


@app.route("/api/v1/holy-day/<slug>")
def holy_day_route(slug):
  """Returns the full reference record of a holy day."""
  data = RESOLVER.get_day_data(slug)
  if data is None:
    return flask.jsonify({"error": f"Holy day not found: {slug}"}), 404
  return flask.jsonify(data)


@app.route("/api/v1/days")
def days_route():
  """Lists all holy days in the reference data."""
  return flask.jsonify([
      {
          "name": day.get("name"),
          "slug": day.get("slug"),
          "season": day.get("season"),
          "period": day.get("period"),
          "latinName": day.get("latinName"),
          "liturgicalColor": day.get("liturgicalColor"),
      }
      for day in RESOLVER.get_all_days()
  ])


@app.route("/api/v1/year/<year_str>/calendar")
def year_calendar_route(year_str):
  """Returns every dated entry of a church year."""
  year = _parse_year_param(year_str)
  if year is None:
    return _bad_request(INVALID_YEAR_MESSAGE)
  return flask.jsonify(RESOLVER.get_church_year_calendar(year))


@app.route("/api/v1/year/<year_str>/season/<season>")
def year_season_route(year_str, season):
  """Returns the enriched entries of one season of a church year."""
  year = _parse_year_param(year_str)
  if year is None:
    return _bad_request(INVALID_YEAR_MESSAGE)
  result = RESOLVER.get_season_entries(year, season)
  if result is None:
    return flask.jsonify({"error": f"Unknown season: {season}"}), 404
  return flask.jsonify(result)


@app.route("/api/v1/calendar/<year_str>/<month_str>")
def month_calendar_route(year_str, month_str):
  """Returns the liturgical calendar grid of one month."""
  year = _parse_year_param(year_str)
  if year is None:
    return _bad_request(INVALID_YEAR_MESSAGE)
  try:
    month = int(month_str)
  except ValueError:
    month = 0
  if not 1 <= month <= 12:
    return _bad_request("Invalid month. Must be between 1 and 12.")

  weeks = month_calendar.generate_calendar_data(
      RESOLVER, year, month, today=_today()
  )
  return flask.jsonify({"year": year, "month": month, "weeks": weeks})


@app.route("/api/v1/search/text")
def search_text_route():
  """Searches reading references of all holy days."""
  q = flask.request.args.get("q", "").strip()
  if not q:
    return _bad_request("Query parameter ?q= is required.")
  return flask.jsonify(RESOLVER.search_texts(q))


@app.route("/api/v1/propers/prefaatiot")
def prefaatiot_route():
  """Returns all preface endings."""
  return flask.jsonify({
      "source": PROPERS_SOURCE,
      "prefaatiot": RESOLVER.propers.get_all_prefaatiot(),
  })


@app.route("/api/v1/propers/kyrie-litaniat")
def kyrie_litaniat_route():
  """Returns all seasonal Kyrie litanies."""
  return flask.jsonify({
      "source": PROPERS_SOURCE,
      "kyrieLitaniat": RESOLVER.propers.get_all_kyrie_litaniat(),
  })


@app.route("/api/v1/propers/synninpaastot")
def synninpaastot_route():
  """Returns all absolutions."""
  return flask.jsonify({
      "source": PROPERS_SOURCE,
      "synninpaastot": RESOLVER.propers.get_all_synninpaastot(),
  })


@app.route("/api/v1/propers/kiitosrukoukset")
def kiitosrukoukset_route():
  """Returns the thanksgiving prayers said after the absolution."""
  return flask.jsonify({
      "source": PROPERS_SOURCE,
      "kiitosrukoukset": RESOLVER.propers.get_all_kiitosrukoukset(),
  })


@app.route("/api/v1/propers/kertosaakeet")
def kertosaakeet_route():
  """Returns all seasonal psalm refrains."""
  return flask.jsonify({
      "source": PROPERS_SOURCE,
      "kertosaakeet": RESOLVER.propers.get_all_kertosaakeet(),
  })


@app.route("/api/v1/propers/improperia")
def improperia_route():
  """Returns the Good Friday Improperia."""
  return flask.jsonify({
      "source": PROPERS_SOURCE,
      "improperia": RESOLVER.propers.get_improperia(),
  })


@app.route("/api/v1/lectionary")
def lectionary_route():
  """Returns lectionary index metadata."""
  return flask.jsonify(LECTIONARY.get_index_meta())


@app.route("/api/v1/lectionary/holy-days")
def lectionary_holy_days_route():
  """Returns all holy day names used in the lectionary index."""
  return flask.jsonify(LECTIONARY.get_holy_day_names())


@app.route("/api/v1/lectionary/by-holy-day")
def lectionary_by_holy_day_route():
  """Returns lectionary readings for holy days matching ?q=."""
  q = flask.request.args.get("q", "").strip()
  if not q:
    return _bad_request("Query parameter ?q= is required.")
  return flask.jsonify({"query": q, "results": LECTIONARY.get_by_holy_day(q)})


@app.route("/api/v1/lectionary/search")
def lectionary_search_route():
  """Searches the lectionary index by Bible reference."""
  q = flask.request.args.get("q", "").strip()
  if not q:
    return _bad_request("Query parameter ?q= is required.")
  results = LECTIONARY.search_by_reference(q)
  return flask.jsonify({"query": q, "count": len(results), "results": results})


@app.after_request
def add_cors_headers(response):
  """Allows cross-origin GET requests."""
  response.headers["Access-Control-Allow-Origin"] = "*"
  response.headers["Access-Control-Allow-Methods"] = "GET, OPTIONS"
  response.headers["Access-Control-Allow-Headers"] = "Content-Type"
  return response


@app.errorhandler(404)
def not_found(e):
  return flask.jsonify({"error": "Not found"}), 404


@app.errorhandler(405)
def method_not_allowed(e):
  return flask.jsonify({"error": "Method not allowed"}), 405


@app.errorhandler(500)
def internal_error(e):
  app.logger.exception("Error handling request %s: %s", flask.request.path, e)
  return flask.jsonify({"error": "Internal server error"}), 500


if __name__ == "__main__":
  app.run(
      debug=config.get_log_level() == "DEBUG",
      host="0.0.0.0",
      port=config.get_port(),
  )
