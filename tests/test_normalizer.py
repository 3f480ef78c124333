import math

import pandas as pd
import pytest

from oews_import.oews_schema import CANONICAL_COLUMNS, NUMERIC_COLUMNS
from oews_import.services.normalizer import coerce_flag, coerce_numeric, normalize, to_records


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("$45,231.50", 45231.50),
        ("12.3%", 12.3),
        ("-4.5", -4.5),
        (" 1,200 ", 1200.0),
        (42, 42.0),
        (3.25, 3.25),
    ],
)
def test_coerce_numeric_parses_noisy_text(raw, expected):
    assert coerce_numeric(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", ["*", "", "N/A", "#", "**", "-", "1.2.3", None, float("nan")])
def test_coerce_numeric_returns_none_for_unparseable(raw):
    assert coerce_numeric(raw) is None


def test_coerce_flag():
    assert coerce_flag("TRUE") == "T"
    assert coerce_flag("y") == "Y"
    assert coerce_flag("") is None
    assert coerce_flag(None) is None
    assert coerce_flag(float("nan")) is None


def test_normalize_produces_canonical_columns_in_order():
    raw = pd.DataFrame(
        {
            "ST": ["01", "02"],
            "OCC_CODE": ["00-0000", "11-0000"],
            "LOC_QUOTIENT": ["1.0", "0.8"],
        }
    )

    result = normalize(raw, 2004)

    assert list(result.columns) == CANONICAL_COLUMNS
    assert len(result.columns) == 29
    assert "loc_quotient" not in result.columns
    assert result["area"].tolist() == ["01", "02"]
    assert result["occ_title"].isna().all()


def test_year_comes_from_the_source_not_the_row():
    raw = pd.DataFrame({"AREA": ["99"], "YEAR": ["1999"]})

    result = normalize(raw, 2015)

    assert result["year"].tolist() == [2015]


def test_numeric_columns_are_coerced_and_prse_left_as_text():
    raw = pd.DataFrame(
        {
            "OCC_CODE": ["11-1011", "11-1021", "11-1031"],
            "TOT_EMP": ["1,200", "**", "350"],
            "EMP_PRSE": ["1.2", "*", "N/A"],
            "A_MEAN": ["$45,231.50", "*", ""],
            "H_MEDIAN": ["21.75", "#", "10.5"],
            "ANNUAL": [None, "TRUE", None],
        }
    )

    result = normalize(raw, 2019)

    assert result["tot_emp"].tolist()[0] == 1200
    assert pd.isna(result["tot_emp"].iloc[1])
    assert result["a_mean"].iloc[0] == pytest.approx(45231.50)
    assert result["a_mean"].iloc[1:].isna().all()
    assert result["h_median"].iloc[1] is None or math.isnan(result["h_median"].iloc[1])
    assert result["emp_prse"].tolist() == ["1.2", "*", "N/A"]
    assert result["annual"].tolist()[1] == "T"
    for column in NUMERIC_COLUMNS:
        assert pd.api.types.is_numeric_dtype(result[column])


def test_to_records_uses_none_for_nulls():
    raw = pd.DataFrame({"OCC_CODE": ["11-1011", "11-1021"], "TOT_EMP": ["10", "*"], "A_MEAN": ["N/A", "5"]})

    records = to_records(normalize(raw, 2010))

    assert len(records) == 2
    assert list(records[0]) == CANONICAL_COLUMNS
    assert records[0]["a_mean"] is None
    assert records[0]["tot_emp"] == 10
    assert isinstance(records[0]["tot_emp"], int)
    assert records[1]["tot_emp"] is None
    assert records[1]["a_mean"] == 5.0
    assert records[1]["year"] == 2010
    assert records[1]["area"] is None
