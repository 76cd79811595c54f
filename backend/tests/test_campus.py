import pytest
from backend.cabshare.campus import looks_like_hostel, normalize_code_text


def test_normalize_code_text_strips_punctuation():
    assert normalize_code_text("  s.d.   hall ") == "S D HALL"
    assert normalize_code_text("") == ""


@pytest.mark.parametrize(
    "value",
    ["SD", "sd hall", "KMS Hostel", "near CVR", "room 12, HB block", "s.d.", "mss-hostel", "GDB"],
)
def test_hostel_codes_are_recognized(value):
    assert looks_like_hostel(value)


@pytest.mark.parametrize("value", ["", "   ", "Rourkela Railway Station", "Panposh Market"])
def test_other_places_are_not_hostels(value):
    assert not looks_like_hostel(value)
