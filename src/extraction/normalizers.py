"""Value normalizers shared by the MRZ decoder and the heuristic matcher.

Converts raw OCR fragments into display values: title-cased names,
ISO ``YYYY-MM-DD`` dates and nationality demonyms.
"""

import re
from types import MappingProxyType

MONTHS: MappingProxyType[str, str] = MappingProxyType(
    {
        "JAN": "01",
        "FEB": "02",
        "MAR": "03",
        "APR": "04",
        "MAY": "05",
        "JUN": "06",
        "JUL": "07",
        "AUG": "08",
        "SEP": "09",
        "OCT": "10",
        "NOV": "11",
        "DEC": "12",
    }
)

COUNTRY_NATIONALITIES: MappingProxyType[str, str] = MappingProxyType(
    {
        "IDN": "Indonesian",
        "MYS": "Malaysian",
        "SGP": "Singaporean",
        "PHL": "Filipino",
        "GBR": "British",
        "IND": "Indian",
        "USA": "American",
        "AUS": "Australian",
        "CHN": "Chinese",
        "JPN": "Japanese",
        "KOR": "South Korean",
        "THA": "Thai",
        "VNM": "Vietnamese",
        "BGD": "Bangladeshi",
        "NPL": "Nepali",
        "PAK": "Pakistani",
        "LKA": "Sri Lankan",
        "MMR": "Myanmar",
        "KHM": "Cambodian",
        "TWN": "Taiwanese",
        "HKG": "Hong Konger",
    }
)

# Two-digit years up to and including this value belong to the 2000s.
CENTURY_PIVOT = 30

_WORD_START = re.compile(r"(^|[\s\-'])(\w)")
_DATE_SEPARATORS = re.compile(r"[.\s/]")
_REPEATED_DASHES = re.compile(r"-{2,}")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def title_case(value: str) -> str:
    """Capitalize each word, treating hyphens and apostrophes as word breaks.

    Args:
        value: Text in any casing.

    Returns:
        Lower-cased text with the first letter of each word upper-cased,
        e.g. ``"O'BRIEN-SMITH"`` becomes ``"O'Brien-Smith"``.
    """
    return _WORD_START.sub(
        lambda m: m.group(1) + m.group(2).upper(), value.lower()
    )


def expand_two_digit_year(yy: int) -> int:
    """Map a two-digit year onto 1931-2030."""
    return 2000 + yy if yy <= CENTURY_PIVOT else 1900 + yy


def mrz_date_to_iso(yymmdd: str) -> str:
    """Convert an MRZ ``YYMMDD`` date into ``YYYY-MM-DD``.

    Args:
        yymmdd: Six-character date field from an MRZ line.

    Returns:
        ISO date string, or an empty string when the input is not
        six digits.
    """
    if len(yymmdd) != 6 or not yymmdd.isdigit():
        return ""
    year = expand_two_digit_year(int(yymmdd[:2]))
    return f"{year}-{yymmdd[2:4]}-{yymmdd[4:6]}"


def normalize_date_string(date_str: str) -> str:
    """Best-effort conversion of a printed date into ``YYYY-MM-DD``.

    Accepts ``DD MON YYYY``, ``DD.MM.YYYY``, ``DD/MM/YY`` and
    ``YYYY MM DD`` style inputs. Month abbreviations are matched on
    their first three letters.

    Args:
        date_str: Date text as captured from OCR output.

    Returns:
        The normalized ISO date, or ``date_str`` unchanged when its
        structure is not recognized.
    """
    if not date_str:
        return ""

    cleaned = _REPEATED_DASHES.sub("-", _DATE_SEPARATORS.sub("-", date_str))
    if _ISO_DATE.match(cleaned):
        return cleaned

    parts = cleaned.split("-")
    if len(parts) != 3:
        return date_str

    day_or_year, month, year_or_day = parts
    month = MONTHS.get(month.upper()[:3], month).zfill(2)

    if len(day_or_year) == 4:
        return f"{day_or_year}-{month}-{year_or_day.zfill(2)}"
    if len(year_or_day) == 4:
        return f"{year_or_day}-{month}-{day_or_year.zfill(2)}"
    if len(year_or_day) == 2 and year_or_day.isdigit():
        year = expand_two_digit_year(int(year_or_day))
        return f"{year}-{month}-{day_or_year.zfill(2)}"
    return date_str


def country_code_to_nationality(code: str) -> str:
    """Look up the demonym for an ISO alpha-3 code; unknown codes pass through."""
    return COUNTRY_NATIONALITIES.get(code, code)
