import pytest

from oews_import.oews_schema import HEADER_ALIASES
from oews_import.services.column_mapper import build_rename_plan, map_column


@pytest.mark.parametrize("header", ["st", "ST", "St", "AREA", "area", "MSA"])
def test_area_spellings_map_to_area(header):
    assert map_column(header) == "area"


@pytest.mark.parametrize("header,expected", sorted(HEADER_ALIASES.items()))
def test_every_known_spelling_is_case_insensitive(header, expected):
    assert map_column(header) == expected
    assert map_column(header.lower()) == expected
    assert map_column(header.title()) == expected


def test_known_examples():
    assert map_column("OCC_CODE") == "occ_code"
    assert map_column("MSA_TITLE") == "area_title"
    assert map_column(" A_MEAN ") == "a_mean"


def test_unknown_headers_pass_through_lower_cased():
    assert map_column("LOC_QUOTIENT") == "loc_quotient"
    assert map_column("Pct_Total") == "pct_total"


def test_rename_plan_keeps_first_duplicate():
    rename_map, drops = build_rename_plan(["AREA", "ST", "OCC_TITLE", "EXTRA"])

    assert rename_map == {"AREA": "area", "OCC_TITLE": "occ_title", "EXTRA": "extra"}
    assert drops == ["ST"]
