"""Tests for MRZ line detection and TD3 decoding."""

from src.extraction.models import ParsedPassport
from src.extraction.mrz_decoder import decode_td3, find_mrz_lines

LINE1 = "P<UTOERIKSSON<<ANNA<MARIA".ljust(44, "<")
LINE2 = "L898902C36UTO7408122F1204159ZE184226B<<<<<10"


class TestFindMrzLines:
    """Tests for MRZ candidate selection."""

    def test_selects_mrz_rows_only(self) -> None:
        lines = ["PASSPORT", "ANNA MARIA ERIKSSON", LINE1, LINE2]
        assert find_mrz_lines(lines) == [LINE1, LINE2]

    def test_internal_whitespace_is_ignored(self) -> None:
        spaced = LINE1[:20] + " " + LINE1[20:]
        assert find_mrz_lines([spaced]) == [spaced]

    def test_short_lines_rejected(self) -> None:
        assert find_mrz_lines([LINE1[:41]]) == []

    def test_lower_case_rejected(self) -> None:
        assert find_mrz_lines([LINE1.lower()]) == []

    def test_punctuation_rejected(self) -> None:
        assert find_mrz_lines([LINE1[:-1] + "."]) == []


class TestDecodeTd3:
    """Tests for fixed-offset TD3 decoding."""

    def test_icao_specimen(self) -> None:
        result = decode_td3([LINE1, LINE2])
        assert result == ParsedPassport(
            full_name="Anna Maria Eriksson",
            passport_number="L898902C3",
            nationality="UTO",
            date_of_birth="1974-08-12",
            gender="Female",
            passport_expiry="2012-04-15",
            place_of_issue="UTO",
        )

    def test_uses_last_two_lines(self) -> None:
        noise = "X" * 44
        result = decode_td3([noise, LINE1, LINE2])
        assert result.full_name == "Anna Maria Eriksson"

    def test_known_country_becomes_demonym(self) -> None:
        line1 = "P<MYSTAN<<WEI<LIN".ljust(44, "<")
        line2 = "A123456780MYS9001015M3012315".ljust(44, "<")
        result = decode_td3([line1, line2])
        assert result.full_name == "Wei Lin Tan"
        assert result.nationality == "Malaysian"
        assert result.place_of_issue == "MYS"
        assert result.gender == "Male"
        assert result.date_of_birth == "1990-01-01"
        assert result.passport_expiry == "2030-12-31"

    def test_passport_number_fillers_stripped(self) -> None:
        line2 = "AB1234<<<0UTO7408122F1204159".ljust(44, "<")
        assert decode_td3([LINE1, line2]).passport_number == "AB1234"

    def test_nationality_from_line2_when_issuer_missing(self) -> None:
        line1 = "P<<<<ERIKSSON<<ANNA".ljust(44, "<")
        result = decode_td3([line1, LINE2])
        assert result.nationality == "UTO"
        assert result.place_of_issue == ""

    def test_surname_only(self) -> None:
        line1 = "P<UTOERIKSSON".ljust(44, "<")
        assert decode_td3([line1, LINE2]).full_name == "Eriksson"

    def test_line1_not_passport(self) -> None:
        line1 = "V<UTOERIKSSON<<ANNA<MARIA".ljust(44, "<")
        result = decode_td3([line1, LINE2])
        assert result.full_name == ""
        assert result.passport_number == "L898902C3"

    def test_short_line2_ignored(self) -> None:
        result = decode_td3([LINE1, LINE2[:27]])
        assert result.full_name == "Anna Maria Eriksson"
        assert result.passport_number == ""
        assert result.date_of_birth == ""

    def test_unknown_gender_marker(self) -> None:
        line2 = LINE2[:20] + "<" + LINE2[21:]
        assert decode_td3([LINE1, line2]).gender == ""

    def test_too_few_lines_returns_empty_record(self) -> None:
        assert decode_td3([LINE1]) == ParsedPassport()
