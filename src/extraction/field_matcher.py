"""Label-driven regex extraction of passport fields from free-form OCR text.

Used when a document has no readable MRZ. Each field is matched on its
own: a missing or garbled label only costs that one field.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from src.utils.logger import get_logger

from .models import ParsedPassport
from .normalizers import normalize_date_string, title_case

logger = get_logger(__name__)

_FLAGS = re.IGNORECASE

# Shared value grammar for printed dates: "15 AUG 1995", "15.08.95", "1995-08-15".
_DATE_VALUE = (
    r"(\d{1,2}[\s./-]\w{2,9}[\s./-]\d{2,4}|\d{4}[\s./-]\d{2}[\s./-]\d{2})"
)

# A value slot that holds the next line's label means the value was left blank.
_NOT_A_LABEL = (
    r"(?!(?:DATE|PLACE|SEX|GENDER|NATIONALITY|CITIZENSHIP|SURNAME|FAMILY|GIVEN"
    r"|FIRST|PRENOMS?|NAMES?|DOB|EXPIRY|VALID|ISSUING|AUTHORITY|TANGGAL|TEMPAT"
    r"|JENIS|BERLAKU|KEWARGANEGARAAN|PASSPORT\s*(?:NO|NUMBER))\b)"
)

_PASSPORT_NUMBER_PATTERNS = [
    re.compile(
        r"PASSPORT\s*(?:NO|NUMBER|NUM|#)[.\s:]*([A-Z]?\d{6,9}[A-Z]?\d?)", _FLAGS
    ),
    re.compile(r"\b([A-Z]\d{7,8})\b", _FLAGS),
]

_SURNAME_PATTERN = re.compile(
    r"(?:SURNAME|FAMILY\s*NAME)[:\s/]*" + _NOT_A_LABEL + r"([A-Z][A-Z '-]*)",
    _FLAGS,
)
_GIVEN_NAME_PATTERN = re.compile(
    r"(?:GIVEN\s*NAMES?|FIRST\s*NAMES?|PRENOMS?)[:\s/]*"
    + _NOT_A_LABEL
    + r"([A-Z][A-Z '-]*)",
    _FLAGS,
)
_NAME_PATTERN = re.compile(
    r"NAMES?[:\s/]+" + _NOT_A_LABEL + r"([A-Z][A-Z '-]{2,30})", _FLAGS
)

_NATIONALITY_PATTERN = re.compile(
    r"(?:NATIONALITY|KEWARGANEGARAAN|CITIZENSHIP)[:\s/]*"
    + _NOT_A_LABEL
    + r"([A-Z][A-Z ]*)",
    _FLAGS,
)
_BIRTH_DATE_PATTERN = re.compile(
    r"(?:DATE\s*OF\s*BIRTH|DOB|BIRTH\s*DATE|TANGGAL\s*LAHIR|BORN)[:\s/]*"
    + _DATE_VALUE,
    _FLAGS,
)
_GENDER_PATTERN = re.compile(
    r"(?:SEX|GENDER|JENIS\s*KELAMIN)[:\s/]*"
    r"(FEMALE|MALE|PEREMPUAN|LELAKI|F|M)(?![A-Z])",
    _FLAGS,
)
_EXPIRY_PATTERN = re.compile(
    r"(?:DATE\s*OF\s*EXPIR|EXPIRY|EXPIRATION|VALID\s*UNTIL|BERLAKU\s*HINGGA)"
    r"[:\s/Y]*" + _DATE_VALUE,
    _FLAGS,
)
_PLACE_OF_ISSUE_PATTERN = re.compile(
    r"(?:PLACE\s*OF\s*ISSUE|ISSUING\s*AUTHORITY|AUTHORITY|ISSUING"
    r"|TEMPAT\s*DIKELUARKAN)[:\s/]*" + _NOT_A_LABEL + r"([A-Z][A-Z ,'-]*)",
    _FLAGS,
)

_MALE_TOKENS = frozenset({"M", "MALE", "LELAKI"})

_DIGITS = re.compile(r"\d")
_REPEATED_SPACE = re.compile(r"\s{2,}")


def _search(*patterns: re.Pattern[str]) -> Callable[[str], str | None]:
    """Build a matcher returning the first group of the first pattern that hits."""

    def matcher(text: str) -> str | None:
        for pattern in patterns:
            match = pattern.search(text)
            if match:
                return match.group(1).strip()
        return None

    return matcher


def _match_full_name(text: str) -> str | None:
    surname = _SURNAME_PATTERN.search(text)
    given = _GIVEN_NAME_PATTERN.search(text)
    if surname and given:
        return f"{given.group(1).strip()} {surname.group(1).strip()}"

    name = _NAME_PATTERN.search(text)
    return name.group(1).strip() if name else None


def _clean_name(raw: str) -> str:
    without_digits = _DIGITS.sub("", raw)
    return title_case(_REPEATED_SPACE.sub(" ", without_digits).strip())


def _to_gender(token: str) -> str:
    return "Male" if token.upper() in _MALE_TOKENS else "Female"


@dataclass(frozen=True)
class FieldRule:
    """How one passport field is located and cleaned up."""

    field_name: str
    matcher: Callable[[str], str | None]
    post_process: Callable[[str], str] = str.strip


FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule("passport_number", _search(*_PASSPORT_NUMBER_PATTERNS)),
    FieldRule("full_name", _match_full_name, _clean_name),
    FieldRule("nationality", _search(_NATIONALITY_PATTERN), title_case),
    FieldRule("date_of_birth", _search(_BIRTH_DATE_PATTERN), normalize_date_string),
    FieldRule("gender", _search(_GENDER_PATTERN), _to_gender),
    FieldRule("passport_expiry", _search(_EXPIRY_PATTERN), normalize_date_string),
    FieldRule("place_of_issue", _search(_PLACE_OF_ISSUE_PATTERN), title_case),
)


class FieldMatcher:
    """Applies a table of :class:`FieldRule` entries to OCR text.

    Args:
        rules: Rules to apply, in order. Defaults to :data:`FIELD_RULES`.
    """

    def __init__(self, rules: tuple[FieldRule, ...] = FIELD_RULES) -> None:
        self.rules = rules

    def match(self, text: str) -> ParsedPassport:
        """Extract every field the rules can find in ``text``.

        Args:
            text: OCR text, ideally already upper-cased.

        Returns:
            Parsed passport with unmatched fields left empty.
        """
        result = ParsedPassport()
        for rule in self.rules:
            raw = rule.matcher(text)
            if raw:
                setattr(result, rule.field_name, rule.post_process(raw))

        logger.debug("Heuristic matching filled %s", result.filled_fields())
        return result
