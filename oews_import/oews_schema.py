"""Centralized OEWS schema metadata shared by the normalizer and the store."""

from __future__ import annotations

from typing import Dict, List

# Historical header spellings (upper-cased) -> canonical column name.
HEADER_ALIASES: Dict[str, str] = {
    "AREA": "area",
    "ST": "area",
    "MSA": "area",
    "AREA_TITLE": "area_title",
    "MSA_TITLE": "area_title",
    "NAICS": "naics",
    "NAIC": "naics",
    "NAICS_TITLE": "naics_title",
    "I_GROUP": "i_group",
    "IGROUP": "i_group",
    "OWN_CODE": "own_code",
    "OWNERSHIP_CODE": "own_code",
    "OCC_CODE": "occ_code",
    "OCCCODE": "occ_code",
    "OCC_TITLE": "occ_title",
    "OCCTITLE": "occ_title",
    "O_GROUP": "o_group",
    "GROUP": "o_group",
    "TOT_EMP": "tot_emp",
    "TOTAL_EMP": "tot_emp",
    "EMP_PRSE": "emp_prse",
    "JOBS_1000": "jobs_1000",
    "JOBS_PER_1000": "jobs_1000",
    "JOBS_1000_PRSE": "jobs_1000_prse",
    "H_MEAN": "h_mean",
    "HOURLY_MEAN": "h_mean",
    "A_MEAN": "a_mean",
    "ANNUAL_MEAN": "a_mean",
    "MEAN_PRSE": "mean_prse",
    "H_PCT10": "h_pct10",
    "H_PCT25": "h_pct25",
    "H_MEDIAN": "h_median",
    "H_PCT75": "h_pct75",
    "H_PCT90": "h_pct90",
    "A_PCT10": "a_pct10",
    "A_PCT25": "a_pct25",
    "A_MEDIAN": "a_median",
    "A_PCT75": "a_pct75",
    "A_PCT90": "a_pct90",
    "ANNUAL": "annual",
    "HOURLY": "hourly",
}

DATA_COLUMNS: List[str] = [
    "area",
    "area_title",
    "naics",
    "naics_title",
    "i_group",
    "own_code",
    "occ_code",
    "occ_title",
    "o_group",
    "tot_emp",
    "emp_prse",
    "jobs_1000",
    "jobs_1000_prse",
    "h_mean",
    "a_mean",
    "mean_prse",
    "h_pct10",
    "h_pct25",
    "h_median",
    "h_pct75",
    "h_pct90",
    "a_pct10",
    "a_pct25",
    "a_median",
    "a_pct75",
    "a_pct90",
    "annual",
    "hourly",
]

YEAR_COLUMN = "year"

# Persisted column order: the data columns followed by the source year.
CANONICAL_COLUMNS: List[str] = DATA_COLUMNS + [YEAR_COLUMN]

NUMERIC_COLUMNS: List[str] = [
    "tot_emp",
    "jobs_1000",
    "h_mean",
    "a_mean",
    "h_pct10",
    "h_pct25",
    "h_median",
    "h_pct75",
    "h_pct90",
    "a_pct10",
    "a_pct25",
    "a_median",
    "a_pct75",
    "a_pct90",
]

INTEGER_COLUMNS: List[str] = ["tot_emp"]

FLAG_COLUMNS: List[str] = ["annual", "hourly"]

TABLE_NAME = "oews_data"

__all__ = [
    "HEADER_ALIASES",
    "DATA_COLUMNS",
    "YEAR_COLUMN",
    "CANONICAL_COLUMNS",
    "NUMERIC_COLUMNS",
    "INTEGER_COLUMNS",
    "FLAG_COLUMNS",
    "TABLE_NAME",
]
