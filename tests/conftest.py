import pytest

import main
import reference_data
import resolver
import utils


@pytest.fixture(scope="session")
def data():
  """Reference data loaded from the bundled JSON files."""
  return reference_data.ReferenceData.from_directory(utils.DATA_DIR)


@pytest.fixture()
def date_resolver(data):
  """A resolver with a fresh calendar cache."""
  return resolver.DateResolver(data)


@pytest.fixture()
def client():
  """Flask test client for the API."""
  main.app.config["TESTING"] = True
  return main.app.test_client()


@pytest.fixture()
def pin_today(monkeypatch):
  """Returns a function that fixes the date the API treats as today."""

  def _pin(date):
    monkeypatch.setattr(main, "_today", lambda: date)

  return _pin
