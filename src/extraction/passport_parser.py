"""Passport field extraction from recognized text.

Tries the machine-readable zone first and falls back to label-based
matching over the visual zone when no usable MRZ is found.
"""

from src.utils.logger import get_logger

from .field_matcher import FieldMatcher
from .models import ParsedPassport
from .mrz_decoder import decode_td3, find_mrz_lines

logger = get_logger(__name__)


class PassportParser:
    """Two-strategy passport parser: MRZ decoding, then heuristics.

    The MRZ result is trusted whenever it yields a name. Otherwise the
    heuristic matcher runs over the whole text.

    Args:
        field_matcher: Heuristic matcher used as the fallback strategy.
    """

    def __init__(self, field_matcher: FieldMatcher | None = None) -> None:
        self.field_matcher = field_matcher or FieldMatcher()

    def parse(self, full_text: str) -> ParsedPassport:
        """Parse OCR text into passport fields.

        Args:
            full_text: Text returned by a text-detection backend.

        Returns:
            Parsed passport; fields that could not be found are empty.
        """
        lines = [line.strip() for line in full_text.split("\n")]
        lines = [line for line in lines if line]

        mrz_lines = find_mrz_lines(lines)
        if len(mrz_lines) >= 2:
            mrz_result = decode_td3(mrz_lines)
            if mrz_result.full_name:
                logger.debug("Parsed passport from MRZ")
                return mrz_result
            logger.debug("MRZ found but yielded no name, using heuristics")

        return self.field_matcher.match(full_text.upper())


_default_parser = PassportParser()


def parse_passport_text(full_text: str) -> ParsedPassport:
    """Parse OCR text with the default :class:`PassportParser`."""
    return _default_parser.parse(full_text)
