"""Animal registry record parsing and date handling utilities."""

from collections.abc import Iterable, Mapping
import json
import logging
from pathlib import Path
import re

from models import Animal

logger = logging.getLogger(__name__)


# Month name mappings (English and French registry exports)
MONTH_MAP = {
    "JAN": 1,
    "JANUARY": 1,
    "JANV": 1,
    "JANVIER": 1,
    "FEB": 2,
    "FEBRUARY": 2,
    "FEVR": 2,
    "FEVRIER": 2,
    "MAR": 3,
    "MARCH": 3,
    "MARS": 3,
    "APR": 4,
    "APRIL": 4,
    "AVR": 4,
    "AVRIL": 4,
    "MAY": 5,
    "MAI": 5,
    "JUN": 6,
    "JUNE": 6,
    "JUIN": 6,
    "JUL": 7,
    "JULY": 7,
    "JUIL": 7,
    "JUILLET": 7,
    "AUG": 8,
    "AUGUST": 8,
    "AOUT": 8,
    "SEP": 9,
    "SEPT": 9,
    "SEPTEMBER": 9,
    "SEPTEMBRE": 9,
    "OCT": 10,
    "OCTOBER": 10,
    "OCTOBRE": 10,
    "NOV": 11,
    "NOVEMBER": 11,
    "NOVEMBRE": 11,
    "DEC": 12,
    "DECEMBER": 12,
    "DECEMBRE": 12,
}

# Registry spellings of the two sexes
GENDER_MAP = {
    "MALE": "Male",
    "M": "Male",
    "MÂLE": "Male",
    "FEMALE": "Female",
    "F": "Female",
    "FEMELLE": "Female",
}


def parse_date_string(date_str: str | None) -> str | None:
    """
    Parse a registry birth date into ISO format (YYYY-MM-DD).
    Returns None if the date cannot be parsed.

    Handles formats like:
    - "2021-03-14"
    - "2021-03-14T00:00:00.000Z"
    - "14/03/2021" or "14-03-2021" (day first)
    - "14 Mar 2021" or "14 mars 2021"
    - "Mar 2021"
    - "2021"
    """
    if not date_str:
        return None

    s = date_str.strip()
    if not s:
        return None

    year: int | None = None
    month: int | None = None
    day: int | None = None

    # Pattern 0: ISO date, optionally followed by a time part
    match = re.match(r"^(\d{4})-(\d{2})-(\d{2})(?:[T ].*)?$", s)
    if match:
        year = int(match.group(1))
        month = int(match.group(2))
        day = int(match.group(3))
        if 1 <= month <= 12 and 1 <= day <= 31:
            return f"{year:04d}-{month:02d}-{day:02d}"
        return None

    # Pattern 1: "14/03/2021" or "14-03-2021" or "14.03.2021" (DD/MM/YYYY)
    match = re.match(r"^(\d{1,2})[-/.](\d{1,2})[-/.](\d{4})$", s)
    if match:
        day = int(match.group(1))
        month = int(match.group(2))
        year = int(match.group(3))
        if 1 <= month <= 12 and 1 <= day <= 31:
            return f"{year:04d}-{month:02d}-{day:02d}"
        return None

    # Pattern 2: "14 Mar 2021" or "14 mars 2021" (day month year)
    match = re.match(r"^(\d{1,2})\s+([A-Za-zÀ-ÿ]+)\.?\s*(\d{4})$", s)
    if match:
        day = int(match.group(1))
        month = MONTH_MAP.get(_fold_month(match.group(2)))
        year = int(match.group(3))
        if month and 1 <= day <= 31:
            return f"{year:04d}-{month:02d}-{day:02d}"

    # Pattern 3: "Mar 2021" or "March, 2021" (month year)
    match = re.match(r"^([A-Za-zÀ-ÿ]+)\.?,?\s*(\d{4})$", s)
    if match:
        month = MONTH_MAP.get(_fold_month(match.group(1)))
        year = int(match.group(2))
        if month:
            return f"{year:04d}-{month:02d}-01"

    # Pattern 4: "2021" (year only)
    match = re.match(r"^(\d{4})$", s)
    if match:
        year = int(match.group(1))
        return f"{year:04d}-01-01"

    return None


def _fold_month(name: str) -> str:
    # "févr." -> "FEVR"
    return (
        name.upper()
        .rstrip(".")
        .replace("É", "E")
        .replace("È", "E")
        .replace("Û", "U")
    )


def normalize_gender(value: str | None) -> str:
    """Map registry sex spellings onto "Male"/"Female"; anything unknown is Female."""
    if not value:
        return "Female"
    return GENDER_MAP.get(value.strip().upper(), "Female")


def _optional_id(value) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_animal(record: Mapping) -> Animal | None:
    """Build an Animal from a registry record; records without an id are rejected."""
    animal_id = _optional_id(record.get("id"))
    if animal_id is None:
        return None

    return Animal(
        id=animal_id,
        name=str(record.get("name") or animal_id),
        gender=normalize_gender(record.get("gender") or record.get("sex")),
        sire_id=_optional_id(record.get("sireId")),
        dam_id=_optional_id(record.get("damId")),
        photo_url=record.get("photoUrl") or None,
        tag_id=record.get("tagId") or None,
        birth_date=parse_date_string(record.get("birthDate")),
        breed=record.get("breed") or None,
    )


def parse_animals(records: Iterable[Mapping]) -> list[Animal]:
    """Parse registry records, skipping the ones that carry no id."""
    animals: list[Animal] = []
    skipped = 0

    for record in records:
        animal = parse_animal(record)
        if animal is None:
            skipped += 1
            continue
        animals.append(animal)

    if skipped:
        logger.warning("Skipped %d animal record(s) without an id", skipped)
    return animals


def load_animals(path: Path) -> list[Animal]:
    """
    Load animals from a JSON export.

    The file holds either a list of records or an object with an "animals" list.
    """
    with open(path, encoding="utf-8") as f:
        payload = json.load(f)

    if isinstance(payload, Mapping):
        payload = payload.get("animals")
    if not isinstance(payload, list):
        raise ValueError(f"{path}: expected a list of animal records")

    return parse_animals(r for r in payload if isinstance(r, Mapping))
