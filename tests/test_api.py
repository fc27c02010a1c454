"""Tests for the HTTP API."""

import datetime

import pytest

D = datetime.date


def test_index(client):
  for path in ("/", "/api", "/api/v1"):
    rv = client.get(path)
    assert rv.status_code == 200
    data = rv.get_json()
    assert data["name"] == "Kirkkovuosi API"
    assert data["endpoints"]


def test_cors_headers(client):
  rv = client.get("/api/v1/date/2026-04-05")
  assert rv.headers["Access-Control-Allow-Origin"] == "*"
  assert "GET" in rv.headers["Access-Control-Allow-Methods"]


def test_responses_are_utf8_json(client):
  rv = client.get("/api/v1/holy-day/paasiaispaiva")
  assert rv.content_type.startswith("application/json")
  assert "Pääsiäispäivä".encode("utf-8") in rv.data


class TestDates:

  def test_date(self, client):
    rv = client.get("/api/v1/date/2026-04-05")
    assert rv.status_code == 200
    data = rv.get_json()
    assert data["holyDay"]["slug"] == "paasiaispaiva"
    assert data["churchYear"]["label"] == "2025–2026"

  @pytest.mark.parametrize(
      "value",
      ["2026-13-01", "2026-02-30", "20260405", "5.4.2026", "1899-12-31", "2101-01-01"],
  )
  def test_invalid_date(self, client, value):
    rv = client.get(f"/api/v1/date/{value}")
    assert rv.status_code == 400
    assert "error" in rv.get_json()

  def test_today(self, client, pin_today):
    pin_today(D(2026, 4, 5))
    data = client.get("/api/v1/today").get_json()
    assert data["date"] == "2026-04-05"
    assert data["holyDay"]["slug"] == "paasiaispaiva"

  def test_date_color(self, client):
    data = client.get("/api/v1/date/2026-04-03/color").get_json()
    assert data == {
        "date": "2026-04-03",
        "liturgicalColor": "musta",
        "holyDay": "Pitkäperjantai",
    }

  def test_date_propers_falls_back_to_preceding_sunday(self, client):
    data = client.get("/api/v1/date/2026-02-03/propers").get_json()
    assert data["holyDay"] == "3. sunnuntai ennen paastonaikaa"
    assert data["propers"]["prefaatio"]["period"] == "loppiaisena ja loppiaisaikana"


class TestToday:

  def test_texts(self, client, pin_today):
    pin_today(D(2026, 4, 5))
    data = client.get("/api/v1/today/texts").get_json()
    assert data["yearCycle"] == 1
    assert data["texts"]["gospel"]["reference"] == "Mark. 16:1–8"

  def test_texts_for_cycle(self, client, pin_today):
    pin_today(D(2026, 4, 5))
    data = client.get("/api/v1/today/texts?cycle=3").get_json()
    assert data["yearCycle"] == 3
    assert data["texts"]["gospel"]["reference"] == "Luuk. 24:1–12"

  @pytest.mark.parametrize("cycle", ["0", "4", "kaksi"])
  def test_texts_invalid_cycle(self, client, pin_today, cycle):
    pin_today(D(2026, 4, 5))
    rv = client.get("/api/v1/today/texts", query_string={"cycle": cycle})
    assert rv.status_code == 400

  def test_texts_without_holy_day(self, client, pin_today):
    pin_today(D(2026, 2, 3))
    data = client.get("/api/v1/today/texts").get_json()
    assert data["texts"] is None
    assert data["precedingSunday"]["slug"] == "3-sunnuntai-ennen-paastonaikaa"

  def test_numbered_prayer(self, client, pin_today):
    pin_today(D(2026, 4, 5))
    data = client.get("/api/v1/today/prayer?n=2").get_json()
    assert data["holyDay"] == "Pääsiäispäivä"
    assert data["prayer"]["number"] == 2

  def test_random_prayer(self, client, pin_today):
    pin_today(D(2026, 4, 5))
    data = client.get("/api/v1/today/prayer").get_json()
    assert data["totalPrayers"] == 2
    assert data["prayer"]["number"] in (1, 2)

  def test_no_prayer(self, client, pin_today):
    pin_today(D(2026, 1, 11))
    data = client.get("/api/v1/today/prayer").get_json()
    assert data["prayer"] is None

  def test_gospel(self, client, pin_today):
    pin_today(D(2026, 4, 5))
    data = client.get("/api/v1/today/gospel").get_json()
    assert data["gospel"]["reference"] == "Mark. 16:1–8"
    assert data["yearCycle"] == 1

  def test_propers(self, client, pin_today):
    pin_today(D(2026, 4, 3))
    data = client.get("/api/v1/today/propers").get_json()
    assert data["holyDay"] == "Pitkäperjantai"
    assert data["propers"]["kertosae"]["number"] == 14


class TestDays:

  def test_holy_day(self, client):
    rv = client.get("/api/v1/holy-day/joulupaiva")
    assert rv.status_code == 200
    assert rv.get_json()["latinName"] == "Nativitas Domini"

  def test_unknown_holy_day(self, client):
    rv = client.get("/api/v1/holy-day/ei-olemassa")
    assert rv.status_code == 404
    assert "ei-olemassa" in rv.get_json()["error"]

  def test_days(self, client, data):
    days = client.get("/api/v1/days").get_json()
    assert len(days) == len(data.get_all_days())
    assert set(days[0]) == {
        "name", "slug", "season", "period", "latinName", "liturgicalColor"
    }


class TestYears:

  def test_calendar(self, client):
    data = client.get("/api/v1/year/2025/calendar").get_json()
    assert data["churchYear"]["yearCycle"] == 1
    assert data["entries"][0]["date"] == "2025-11-30"

  @pytest.mark.parametrize("year", ["1899", "2101", "vuosi"])
  def test_invalid_year(self, client, year):
    assert client.get(f"/api/v1/year/{year}/calendar").status_code == 400

  def test_season(self, client):
    rv = client.get("/api/v1/year/2025/season/advent")
    assert rv.status_code == 200
    assert rv.get_json()["entries"][0]["slug"] == "1-adventtisunnuntai"

  def test_unknown_season(self, client):
    assert client.get("/api/v1/year/2025/season/kesa").status_code == 404

  def test_month_calendar(self, client):
    data = client.get("/api/v1/calendar/2026/4").get_json()
    assert data["year"] == 2026
    assert data["month"] == 4
    assert len(data["weeks"]) == 5

  @pytest.mark.parametrize("month", ["0", "13", "huhtikuu"])
  def test_invalid_month(self, client, month):
    assert client.get(f"/api/v1/calendar/2026/{month}").status_code == 400


class TestSearch:

  def test_search_text(self, client):
    rv = client.get("/api/v1/search/text", query_string={"q": "Matt. 21"})
    data = rv.get_json()
    assert data["count"] == 1
    assert data["results"][0]["slug"] == "1-adventtisunnuntai"

  @pytest.mark.parametrize(
      "path",
      [
          "/api/v1/search/text",
          "/api/v1/lectionary/by-holy-day",
          "/api/v1/lectionary/search",
      ],
  )
  def test_query_is_required(self, client, path):
    assert client.get(path).status_code == 400
    assert client.get(path, query_string={"q": "  "}).status_code == 400


@pytest.mark.parametrize(
    "path,key",
    [
        ("prefaatiot", "prefaatiot"),
        ("kyrie-litaniat", "kyrieLitaniat"),
        ("synninpaastot", "synninpaastot"),
        ("kiitosrukoukset", "kiitosrukoukset"),
        ("kertosaakeet", "kertosaakeet"),
        ("improperia", "improperia"),
    ],
)
def test_propers_collections(client, path, key):
  data = client.get(f"/api/v1/propers/{path}").get_json()
  assert data["source"] == "Jumalanpalvelusten kirja (2000)"
  assert data[key]


class TestLectionary:

  def test_meta(self, client):
    data = client.get("/api/v1/lectionary").get_json()
    assert data["entryCount"] == 4

  def test_holy_days(self, client):
    assert len(client.get("/api/v1/lectionary/holy-days").get_json()) == 4

  def test_by_holy_day(self, client):
    rv = client.get("/api/v1/lectionary/by-holy-day", query_string={"q": "pääsiäisyö"})
    data = rv.get_json()
    assert data["query"] == "pääsiäisyö"
    assert list(data["results"]) == ["Pääsiäisyö"]

  def test_search(self, client):
    rv = client.get("/api/v1/lectionary/search", query_string={"q": "Matt. 5"})
    data = rv.get_json()
    assert data["count"] == 1
    assert data["results"][0]["occurrences"][0]["holyDay"] == "Pyhäinpäivä"


def test_unknown_route(client):
  rv = client.get("/api/v2/today")
  assert rv.status_code == 404
  assert rv.get_json() == {"error": "Not found"}


def test_method_not_allowed(client):
  rv = client.post("/api/v1/today")
  assert rv.status_code == 405
  assert rv.get_json() == {"error": "Method not allowed"}
