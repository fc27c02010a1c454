"""Lookups into the weekday lectionary index.

The index lists the Bible texts of the church year's holy days and weekdays
as printed in "Kirkkovuoden pyhäpäivien ja arkipäivien raamatuntekstit
Evankeliumikirjassa ja viikkolektionaarissa".
"""


class LectionaryIndex:
  """Read-only view over the loaded lectionary index."""

  def __init__(self, data):
    self.data = data or {}

  def get_all_entries(self):
    return self.data.get("entries", [])

  def get_index_meta(self):
    """Returns title, description and counts of the index."""
    return {
        "title": self.data.get("title"),
        "description": self.data.get("description"),
        "note": self.data.get("note"),
        "entryCount": self.data.get("entryCount", len(self.get_all_entries())),
        "holyDayCount": len(self.data.get("byHolyDay", {})),
    }

  def get_by_holy_day(self, holy_day_name):
    """Returns readings of every holy day whose name contains the query.

    Matching is case-insensitive, e.g. "pääsiäisyö" or "adventtisunnuntai".
    """
    q = holy_day_name.lower().strip()
    return {
        key: readings
        for key, readings in self.data.get("byHolyDay", {}).items()
        if q in key.lower()
    }

  def search_by_reference(self, query):
    """Finds entries by book, abbreviation or reference, e.g. "Matt. 5"."""
    q = query.lower().strip()
    results = []
    for entry in self.get_all_entries():
      abbreviation = (entry.get("abbreviation") or "").lower()
      reference = (entry.get("reference") or "").lower()
      book = (entry.get("book") or "").lower()
      if (
          q in abbreviation
          or q in reference
          or q in book
          or q in f"{abbreviation} {reference}"
      ):
        results.append(entry)
    return results

  def get_holy_day_names(self):
    return sorted(self.data.get("byHolyDay", {}).keys())
