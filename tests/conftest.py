"""Shared test fixtures for the passport OCR test suite."""

import base64
import io
from pathlib import Path

import pytest
from PIL import Image

ICAO_MRZ_LINE1 = "P<UTOERIKSSON<<ANNA<MARIA".ljust(44, "<")
ICAO_MRZ_LINE2 = "L898902C36UTO7408122F1204159ZE184226B<<<<<10"

MALAYSIAN_MRZ_LINE1 = "P<MYSTAN<<WEI<LIN".ljust(44, "<")
MALAYSIAN_MRZ_LINE2 = "A123456780MYS9001015M3012315".ljust(42, "<") + "02"


@pytest.fixture
def icao_mrz_text() -> str:
    """OCR output of the ICAO 9303 specimen passport page."""
    return (
        "PASSPORT\n"
        "Utopia\n"
        "ERIKSSON\n"
        "ANNA MARIA\n"
        f"{ICAO_MRZ_LINE1}\n"
        f"{ICAO_MRZ_LINE2}\n"
    )


@pytest.fixture
def malaysian_mrz_text() -> str:
    """OCR output with a Malaysian TD3 zone."""
    return f"MALAYSIA\nPASSPORT\n{MALAYSIAN_MRZ_LINE1}\n{MALAYSIAN_MRZ_LINE2}"


@pytest.fixture
def visual_zone_text() -> str:
    """Labelled visual-zone text with no MRZ."""
    return (
        "REPUBLIC OF SINGAPORE\n"
        "PASSPORT\n"
        "Passport No: A12345678\n"
        "Surname: TAN\n"
        "Given Names: WEI LIN\n"
        "Nationality: SINGAPOREAN\n"
        "Date of Birth: 15 AUG 1995\n"
        "Sex: F\n"
        "Date of Expiry: 01 JAN 2030\n"
        "Place of Issue: SINGAPORE\n"
    )


@pytest.fixture
def png_b64() -> str:
    """A small white PNG image, base64-encoded."""
    buf = io.BytesIO()
    Image.new("RGB", (40, 20), (255, 255, 255)).save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("ascii")


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent
