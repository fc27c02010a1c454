"""Maps holy days to the liturgical propers of Jumalanpalvelusten kirja.

A holy day is first mapped to a set of season keys (e.g. "adventtiaika",
"karsimysaika"). The keys then select a preface ending, a Kyrie litany and a
psalm refrain. Each selection is an ordered rule table evaluated first match
wins, so the order of the tables (and of the propers collections) encodes
priority.
"""

import re

SEASON_KEYS = frozenset([
    "1-adventtisunnuntai",
    "adventtiaika",
    "jouluaatto",
    "jouluyo",
    "joulupaiva",
    "jouluaika",
    "uudenvuodenaatto",
    "loppiainen",
    "loppiaisaika",
    "paastonaikaa-edeltavat",
    "paastonaika",
    "karsimysaika",
    "kiirastorstai",
    "pitkaperjantai",
    "paasiaisyo",
    "paasiaispaiva",
    "paasiaisaika",
    "helatorstai-helluntaiaatto",
    "helluntai",
    "pyhan-kolminaisuuden-paiva",
    "helluntain-jalkeinen-aika",
    "apostolien-paiva",
    "kirkastussunnuntai",
    "juhannuspaiva",
    "mikkelinpaiva",
    "reformaation-paiva",
    "pyhainpaiva",
    "valvomisen-sunnuntai",
    "tuomiosunnuntai",
    "kynttilanpaiva",
    "marian-ilmestyspaiva",
    "pyhan-henrikin-muistopaiva",
    "itsenaisyyspaiva",
    "kansalliset-rukouspaivat",
])


def _is(*slugs):
  return lambda slug: slug in slugs


def _contains(*parts):
  return lambda slug: all(part in slug for part in parts)


def _matches(pattern):
  regex = re.compile(pattern)
  return lambda slug: regex.search(slug) is not None


def _lent_sunday_from(first_week):
  """Matches N-paastonajan-sunnuntai for N >= first_week."""
  regex = re.compile(r"^(\d+)-paastonajan-sunnuntai$")

  def predicate(slug):
    match = regex.match(slug)
    return match is not None and int(match.group(1)) >= first_week

  return predicate


SEASON_KEY_RULES = [
    (_is("1-adventtisunnuntai"), ["1-adventtisunnuntai"]),
    (_contains("adventti"), ["adventtiaika"]),
    (_is("jouluaatto"), ["jouluaatto", "jouluaika"]),
    (_is("jouluyo"), ["jouluyo", "jouluaika"]),
    (_is("joulupaiva"), ["joulupaiva", "jouluaika"]),
    (_is("tapaninpaiva"), ["jouluaika"]),
    (_contains("sunnuntai-joulusta"), ["jouluaika"]),
    (_is("uudenvuodenaatto"), ["uudenvuodenaatto", "jouluaika"]),
    (_is("uudenvuodenpaiva"), ["jouluaika"]),
    (_is("loppiainen"), ["loppiainen"]),
    (
        _contains("sunnuntai-loppiaisesta"),
        ["loppiaisaika", "paastonaikaa-edeltavat"],
    ),
    (
        _contains("ennen-paastonaikaa"),
        ["loppiaisaika", "paastonaikaa-edeltavat"],
    ),
    (
        _is("laskiaissunnuntai"),
        ["loppiaisaika", "paastonaikaa-edeltavat"],
    ),
    (_is("tuhkakeskiviikko"), ["paastonaika"]),
    (_matches(r"\d-paastonajan-sunnuntai"), ["paastonaika"]),
    # From the 5th Sunday in Lent on, Lent turns into Passiontide.
    (_lent_sunday_from(5), ["karsimysaika"]),
    (_is("palmusunnuntai"), ["karsimysaika"]),
    (_contains("hiljaisen-viikon"), ["karsimysaika"]),
    (_is("kiirastorstai"), ["karsimysaika", "kiirastorstai"]),
    (_is("pitkaperjantai"), ["karsimysaika", "pitkaperjantai"]),
    (_is("hiljainen-lauantai"), ["karsimysaika"]),
    (_is("paasiaisyo"), ["paasiaisyo", "paasiaispaiva"]),
    (_is("paasiaispaiva"), ["paasiaispaiva"]),
    (_is("2-paasiaispaiva"), ["paasiaisaika"]),
    (_contains("jalkeinen", "paasiai"), ["paasiaisaika"]),
    (_matches(r"\d-sunnuntai-paasiaisesta"), ["paasiaisaika"]),
    (
        _is("helatorstai", "6-sunnuntai-paasiaisesta", "helluntaiaatto"),
        ["helatorstai-helluntaiaatto"],
    ),
    (_is("helluntaipaiva"), ["helluntai"]),
    (_is("pyhan-kolminaisuuden-paiva"), ["pyhan-kolminaisuuden-paiva"]),
    (_contains("sunnuntai-helluntaista"), ["helluntain-jalkeinen-aika"]),
    (_is("apostolien-paiva"), ["apostolien-paiva"]),
    (_is("kirkastussunnuntai"), ["kirkastussunnuntai"]),
    (_is("juhannuspaiva"), ["juhannuspaiva"]),
    (_is("pyhan-henrikin-muistopaiva"), ["pyhan-henrikin-muistopaiva"]),
    (_is("mikkelinpaiva"), ["mikkelinpaiva"]),
    (_is("reformaation-paiva"), ["reformaation-paiva"]),
    (_is("pyhainpaiva"), ["pyhainpaiva"]),
    (_is("valvomisen-sunnuntai"), ["valvomisen-sunnuntai"]),
    (_is("tuomiosunnuntai"), ["tuomiosunnuntai"]),
    (_is("kynttilanpaiva"), ["kynttilanpaiva", "jouluaika"]),
    (_is("marian-ilmestyspaiva"), ["marian-ilmestyspaiva", "jouluaika"]),
    (_is("itsenaisyyspaiva"), ["itsenaisyyspaiva"]),
    (_is("kansalliset-rukouspaivat"), ["kansalliset-rukouspaivat"]),
]

# Used only when no slug rule applies, e.g. for weekdays of a period.
PERIOD_SEASON_KEYS = {
    "Adventtiaika": "adventtiaika",
    "Jouluaika": "jouluaika",
    "Loppiaisaika": "loppiaisaika",
    "Paastonaika": "paastonaika",
    "Pääsiäisaika": "paasiaisaika",
    "Helluntain jälkeinen aika": "helluntain-jalkeinen-aika",
}

KYRIE_LITANIES = {
    "1-adventtisunnuntai": "1-adventtisunnuntai",
    "adventtiaika": "adventtiaika",
    "jouluaatto": "joulu-jouluaika",
    "jouluyo": "joulu-jouluaika",
    "joulupaiva": "joulu-jouluaika",
    "jouluaika": "joulu-jouluaika",
    "paastonaika": "paastonaika",
    "karsimysaika": "karsimysaika",
    "pitkaperjantai": "pitkaperjantai-hiljainen-lauantai",
    "paasiaisyo": "paasiainen-paasiaisaika",
    "paasiaispaiva": "paasiainen-paasiaisaika",
    "paasiaisaika": "paasiainen-paasiaisaika",
    "helatorstai-helluntaiaatto": "helatorstai-helluntaiaatto",
    "helluntai": "helluntai",
}

# Phrases that identify a day's own refrain in the free-text occasion field.
REFRAIN_OCCASIONS = {
    "1-adventtisunnuntai": "1. adventtisunnuntai",
    "jouluaatto": "Jouluaattona",
    "jouluyo": "Jouluyönä",
    "joulupaiva": "joulupäivänä",
    "tapaninpaiva": "Tapaninpäivänä",
    "loppiainen": "Loppiaisena",
    "laskiaissunnuntai": "Laskiaissunnuntaina",
    "palmusunnuntai": "Palmusunnuntaina",
    "kiirastorstai": "Kiirastorstaina",
    "pitkaperjantai": "Pitkäperjantaina",
    "paasiaisyo": "Pääsiäisyönä",
    "paasiaispaiva": "Pääsiäis",
    "helluntaipaiva": "Helluntaina",
    "pyhan-kolminaisuuden-paiva": "Pyhän Kolminaisuuden",
    "reformaation-paiva": "Uskonpuhdistuksen",
    "kynttilanpaiva": "Kynttilänpäivänä",
    "marian-ilmestyspaiva": "Marian ilmestyspäivänä",
    "juhannuspaiva": "Juhannuspäivänä",
    "mikkelinpaiva": "Mikkelinpäivänä",
    "pyhainpaiva": "Pyhäinpäivänä",
    "pyhan-henrikin-muistopaiva": "Pyhän Henrikin",
}

REFRAIN_SEASON_KEYWORDS = {
    "adventtiaika": ["Adventtiaikana"],
    "loppiaisaika": ["Loppiaisaikana"],
    "paastonaika": ["Paastonajan", "paastonajan"],
    "paasiaisaika": ["Pääsiäisaikana"],
    "jouluaika": ["jouluaikana"],
}


def get_season_keys(slug, day_data=None):
  """Maps a holy day to its season keys for propers lookup.

  Args:
    slug: Holy day slug.
    day_data: The holy day record, or None.

  Returns:
    A list of distinct keys from SEASON_KEYS, in rule order. The order is a
    lookup preference for the Kyrie and refrain tables.
  """
  keys = []
  for predicate, rule_keys in SEASON_KEY_RULES:
    if predicate(slug):
      keys.extend(rule_keys)

  if not keys and day_data:
    period_key = PERIOD_SEASON_KEYS.get(day_data.get("period") or "")
    if period_key:
      keys.append(period_key)

  return list(dict.fromkeys(keys))


class PropersResolver:
  """Selects propers from a loaded propers dataset."""

  def __init__(self, propers):
    self.propers = propers

  def get_prefaatio(self, slug, day_data=None):
    """Returns the first preface ending that applies to the day, or None."""
    season_keys = set(get_season_keys(slug, day_data))
    for prefaatio in self.propers.get("prefaatiot", []):
      if season_keys.intersection(prefaatio.get("appliesTo") or []):
        return {
            "title": prefaatio.get("title"),
            "period": prefaatio.get("period"),
            "text": prefaatio.get("text"),
        }
    return None

  def get_kyrie_litania(self, slug, day_data=None):
    """Returns the seasonal Kyrie litany for the day, or None."""
    litanies = self.propers.get("kyrieLitaniat", [])
    for key in get_season_keys(slug, day_data):
      litany_slug = KYRIE_LITANIES.get(key)
      if not litany_slug:
        continue
      for litania in litanies:
        if litania.get("slug") == litany_slug:
          return litania
    return None

  def get_kertosae(self, slug, day_data=None):
    """Returns the psalm refrain whose occasion mentions the day, or None."""
    keywords = []
    if slug in REFRAIN_OCCASIONS:
      keywords.append(REFRAIN_OCCASIONS[slug])
    for key in get_season_keys(slug, day_data):
      keywords.extend(REFRAIN_SEASON_KEYWORDS.get(key, []))

    for refrain in self.propers.get("kertosaakeet", []):
      occasion = refrain.get("occasion") or ""
      if any(keyword in occasion for keyword in keywords):
        return refrain
    return None

  def get_propers(self, slug, day_data=None):
    """Returns all propers for the day; any of them may be None."""
    return {
        "prefaatio": self.get_prefaatio(slug, day_data),
        "kyrieLitania": self.get_kyrie_litania(slug, day_data),
        "kertosae": self.get_kertosae(slug, day_data),
    }

  def get_all_prefaatiot(self):
    return self.propers.get("prefaatiot", [])

  def get_all_kyrie_litaniat(self):
    return self.propers.get("kyrieLitaniat", [])

  def get_all_synninpaastot(self):
    return self.propers.get("synninpaastot", [])

  def get_all_kiitosrukoukset(self):
    return self.propers.get("kiitosrukoukset", [])

  def get_all_kertosaakeet(self):
    return self.propers.get("kertosaakeet", [])

  def get_improperia(self):
    return self.propers.get("improperia")
