from pathlib import Path

import pytest

from oews_import.lib.exceptions import FileDiscoveryException
from oews_import.services.discovery import (
    InputMode,
    discover_inputs,
    extract_archive,
    preview_inputs,
)

from conftest import write_archive


def _touch(path: Path, payload: bytes = b"x") -> Path:
    path.write_bytes(payload)
    return path


def test_discover_creates_missing_directory(tmp_path):
    data_dir = tmp_path / "bls_oews_data"

    assert discover_inputs(data_dir, InputMode.ARCHIVES) == []
    assert data_dir.is_dir()


def test_discover_filters_by_mode_and_sorts(tmp_path):
    for name in ["oesm16nat.zip", "oesm15nat.zip", "notes.txt", "oes_2019.xlsx", "oes98.xls", "~$oes_2019.xlsx"]:
        _touch(tmp_path / name)
    (tmp_path / "nested.zip").mkdir()

    archives = discover_inputs(tmp_path, InputMode.ARCHIVES)
    files = discover_inputs(tmp_path, InputMode.FILES)

    assert [path.name for path in archives] == ["oesm15nat.zip", "oesm16nat.zip"]
    assert [path.name for path in files] == ["oes98.xls", "oes_2019.xlsx"]


def test_mode_extensions():
    assert InputMode("archives") is InputMode.ARCHIVES
    assert InputMode.ARCHIVES.extensions == (".zip",)
    assert InputMode.FILES.extensions == (".xlsx", ".xls")


def test_preview_sorts_by_year_with_unresolved_last(tmp_path):
    _touch(tmp_path / "archive_misc.zip")
    _touch(tmp_path / "oesm18nat.zip", b"x" * 2048)
    _touch(tmp_path / "oesm99nat.zip")

    previews = preview_inputs(tmp_path, InputMode.ARCHIVES)

    assert [(item.file_name, item.extracted_year) for item in previews] == [
        ("oesm99nat.zip", 1999),
        ("oesm18nat.zip", 2018),
        ("archive_misc.zip", None),
    ]
    assert previews[1].full_path == tmp_path / "oesm18nat.zip"
    assert previews[1].file_size_mb == 0.0


def test_extract_archive_flattens_and_skips_metadata(tmp_path):
    archive = write_archive(
        tmp_path / "oesm17nat.zip",
        {
            "oesm17nat/national_M2017_dl.xlsx": "data",
            "oesm17nat/field_descriptions.xlsx": "fields",
            "__MACOSX/oesm17nat/._national_M2017_dl.xlsx": "junk",
            "oesm17nat/.DS_Store": "junk",
            "other/national_M2017_dl.xlsx": "duplicate",
        },
    )
    target = tmp_path / "out"
    target.mkdir()

    extracted = extract_archive(archive, target)

    assert [path.name for path in extracted] == ["field_descriptions.xlsx", "national_M2017_dl.xlsx"]
    assert all(path.parent == target for path in extracted)
    assert (target / "national_M2017_dl.xlsx").read_text() == "data"


def test_extract_archive_rejects_corrupt_zip(tmp_path):
    broken = _touch(tmp_path / "oesm10nat.zip", b"not a zip")
    target = tmp_path / "out"
    target.mkdir()

    with pytest.raises(FileDiscoveryException) as exc_info:
        extract_archive(broken, target)

    assert "oesm10nat.zip" in exc_info.value.message
