"""Output record for passport field extraction."""

from dataclasses import asdict, dataclass, fields


@dataclass
class ParsedPassport:
    """Passport fields recovered from OCR text.

    Every field is a plain string and stays empty when it could not be
    extracted. Dates use ``YYYY-MM-DD``; gender is ``"Male"``,
    ``"Female"`` or empty.
    """

    full_name: str = ""
    passport_number: str = ""
    nationality: str = ""
    date_of_birth: str = ""
    gender: str = ""
    passport_expiry: str = ""
    place_of_issue: str = ""

    def to_dict(self) -> dict[str, str]:
        """Return the record as a JSON-serializable dict."""
        return asdict(self)

    def filled_fields(self) -> list[str]:
        """Names of the fields that hold a non-empty value."""
        return [f.name for f in fields(self) if getattr(self, f.name)]
