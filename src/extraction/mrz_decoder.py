"""Machine-readable zone detection and TD3 decoding.

TD3 is the two-line, 44-character MRZ printed at the bottom of a
passport identity page. Line 1 carries the document type, issuing
state and name; line 2 carries the document number, nationality,
birth date, sex and expiry at fixed offsets.
"""

import re

from src.utils.logger import get_logger

from .models import ParsedPassport
from .normalizers import country_code_to_nationality, mrz_date_to_iso, title_case

logger = get_logger(__name__)

MIN_MRZ_LINE_LENGTH = 42
MIN_LINE2_LENGTH = 28

_MRZ_CHARS = re.compile(r"^[A-Z0-9<]+$")
_WHITESPACE = re.compile(r"\s")

_GENDERS = {"F": "Female", "M": "Male"}


def find_mrz_lines(lines: list[str]) -> list[str]:
    """Select the lines that look like MRZ rows.

    Args:
        lines: Trimmed, non-empty OCR lines.

    Returns:
        Lines at least 42 characters long made up only of ``A-Z``,
        ``0-9`` and ``<`` once internal whitespace is removed, in
        their original order.
    """
    return [
        line
        for line in lines
        if len(line) >= MIN_MRZ_LINE_LENGTH
        and _MRZ_CHARS.match(_WHITESPACE.sub("", line))
    ]


def decode_td3(mrz_lines: list[str]) -> ParsedPassport:
    """Decode the last two MRZ lines as a TD3 passport zone.

    Decoding errors are logged and whatever was decoded before the
    failure is returned.

    Args:
        mrz_lines: MRZ candidate lines; the final two are used.

    Returns:
        Parsed passport fields, possibly partially filled.
    """
    result = ParsedPassport()

    try:
        line1 = _WHITESPACE.sub("", mrz_lines[-2])
        line2 = _WHITESPACE.sub("", mrz_lines[-1])

        if line1.startswith("P"):
            _decode_line1(line1, result)
        if len(line2) >= MIN_LINE2_LENGTH:
            _decode_line2(line2, result)
    except (IndexError, ValueError) as exc:
        logger.warning("MRZ decoding failed: %s", exc)

    return result


def _decode_line1(line1: str, result: ParsedPassport) -> None:
    country_code = line1[2:5].replace("<", "")
    result.place_of_issue = country_code

    name_parts = [part for part in line1[5:].split("<<") if part]
    surname = name_parts[0].replace("<", " ").strip() if name_parts else ""
    given_names = (
        name_parts[1].replace("<", " ").strip() if len(name_parts) > 1 else ""
    )
    if surname or given_names:
        result.full_name = title_case(f"{given_names} {surname}".strip())

    result.nationality = country_code_to_nationality(country_code)


def _decode_line2(line2: str, result: ParsedPassport) -> None:
    result.passport_number = line2[0:9].replace("<", "")

    nationality_code = line2[10:13].replace("<", "")
    if nationality_code and not result.nationality:
        result.nationality = country_code_to_nationality(nationality_code)

    result.date_of_birth = mrz_date_to_iso(line2[13:19])
    result.gender = _GENDERS.get(line2[20], "")
    result.passport_expiry = mrz_date_to_iso(line2[21:27])
