"""Tests for loading and indexing the reference datasets."""

import json

import pytest

import models
import reference_data
import utils

MINIMAL_PROPERS = {"prefaatiot": []}


def _write(directory, filename, content):
  path = directory / filename
  if isinstance(content, str):
    path.write_text(content, encoding="utf-8")
  else:
    path.write_text(json.dumps(content), encoding="utf-8")
  return path


def test_loads_bundled_data(data):
  assert data.get_day("paasiaispaiva")["name"] == "Pääsiäispäivä"
  assert data.get_day("ei-olemassa") is None
  assert data.lectionary_index["entryCount"] == 4
  assert data.propers["improperia"] is not None


def test_reading_variants(data):
  assert isinstance(data.get_readings("paasiaispaiva"), models.SundayReadings)
  assert isinstance(
      data.get_readings("helluntain-jalkeinen-viikko-eli-helluntaiviikko"),
      models.WeekdayReadings,
  )
  assert isinstance(data.get_readings("jeesuksen-kuolinhetki"), models.SimpleReadings)
  assert data.get_readings("ei-olemassa") is None


def test_readings_from_record():
  assert models.readings_from_record({"slug": "x", "name": "X"}) is None
  sunday = models.readings_from_record({"yearCycles": {"1": {"gospel": {}}}})
  assert sunday.for_cycle(1) == {"gospel": {}}
  assert sunday.for_cycle(2) is None
  weekday = models.readings_from_record({"weekdayTexts": {"otReadings": [{}]}})
  assert weekday.to_dict() == {"otReadings": [{}], "ntReadings": [], "gospel": None}
  simple = models.readings_from_record(
      {"weekdayTexts": {"readings": [{"reference": "Valit. 3:22–33"}], "gospel": None}}
  )
  assert isinstance(simple, models.SimpleReadings)
  assert simple.to_dict()["readings"] == [{"reference": "Valit. 3:22–33"}]
  alias = models.readings_from_record({"simpleTexts": {"readings": []}})
  assert isinstance(alias, models.SimpleReadings)


def test_missing_directory_is_fatal(tmp_path):
  with pytest.raises(reference_data.DataLoadError) as e:
    reference_data.ReferenceData.from_directory(str(tmp_path / "puuttuu"))
  assert isinstance(e.value.__cause__, OSError)


def test_corrupt_json_is_fatal(tmp_path):
  _write(tmp_path, utils.ALL_DAYS_JSON_FILENAME, "[{")
  _write(tmp_path, utils.PROPERS_JSON_FILENAME, MINIMAL_PROPERS)
  with pytest.raises(reference_data.DataLoadError) as e:
    reference_data.ReferenceData.from_directory(str(tmp_path))
  assert isinstance(e.value.__cause__, ValueError)


@pytest.mark.parametrize(
    "days",
    [
        {"slug": "joulupaiva"},
        [{"slug": "joulupaiva"}],
        [{"name": "Joulupäivä"}],
        ["joulupaiva"],
    ],
)
def test_malformed_days_are_fatal(tmp_path, days):
  _write(tmp_path, utils.ALL_DAYS_JSON_FILENAME, days)
  _write(tmp_path, utils.PROPERS_JSON_FILENAME, MINIMAL_PROPERS)
  with pytest.raises(reference_data.DataLoadError):
    reference_data.ReferenceData.from_directory(str(tmp_path))


def test_malformed_propers_are_fatal(tmp_path):
  _write(tmp_path, utils.ALL_DAYS_JSON_FILENAME, [])
  _write(tmp_path, utils.PROPERS_JSON_FILENAME, {"prefaatiot": {}})
  with pytest.raises(reference_data.DataLoadError):
    reference_data.ReferenceData.from_directory(str(tmp_path))


def test_missing_lectionary_index_is_not_fatal(tmp_path):
  _write(tmp_path, utils.ALL_DAYS_JSON_FILENAME, [{"slug": "a", "name": "A"}])
  _write(tmp_path, utils.PROPERS_JSON_FILENAME, MINIMAL_PROPERS)

  loaded = reference_data.ReferenceData.from_directory(str(tmp_path))

  assert loaded.lectionary_index == {}
  assert loaded.propers["kertosaakeet"] == []
  assert loaded.propers["improperia"] is None
  assert loaded.get_day("a")["name"] == "A"


def test_duplicate_slug_keeps_first(caplog):
  days = [{"slug": "a", "name": "First"}, {"slug": "a", "name": "Second"}]
  loaded = reference_data.ReferenceData(days, dict(MINIMAL_PROPERS))
  assert loaded.get_day("a")["name"] == "First"
  assert "Duplicate holy day slug a" in caplog.text
