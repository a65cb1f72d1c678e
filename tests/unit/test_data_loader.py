"""Unit tests for the résumé data loader."""

import asyncio
import json

import pytest

from vitae.contexts.intake import DataLoadError, load_resume_data, read_resume_data
from vitae.exceptions import VitaeError


@pytest.mark.unit
def test_read_valid_file(tmp_path, resume_dict):
    data_file = tmp_path / "resume-data.json"
    data_file.write_text(json.dumps(resume_dict), encoding="utf-8")

    assert read_resume_data(data_file) == resume_dict


@pytest.mark.unit
def test_load_is_async_variant(tmp_path):
    data_file = tmp_path / "resume-data.json"
    data_file.write_text('{"personal": {"name": "Ana"}}', encoding="utf-8")

    assert asyncio.run(load_resume_data(data_file)) == {"personal": {"name": "Ana"}}


@pytest.mark.unit
def test_missing_file(tmp_path):
    missing = tmp_path / "nope.json"

    with pytest.raises(DataLoadError) as exc_info:
        read_resume_data(missing)

    assert exc_info.value.path == missing
    assert isinstance(exc_info.value.original_error, FileNotFoundError)


@pytest.mark.unit
def test_invalid_json(tmp_path):
    data_file = tmp_path / "resume-data.json"
    data_file.write_text('{"personal": ', encoding="utf-8")

    with pytest.raises(DataLoadError, match="not valid JSON"):
        read_resume_data(data_file)


@pytest.mark.unit
def test_invalid_utf8(tmp_path):
    data_file = tmp_path / "resume-data.json"
    data_file.write_bytes(b'{"name": "\xff\xfe"}')

    with pytest.raises(DataLoadError, match="not valid UTF-8") as exc_info:
        read_resume_data(data_file)

    assert isinstance(exc_info.value.original_error, UnicodeDecodeError)


@pytest.mark.unit
def test_top_level_must_be_object(tmp_path):
    data_file = tmp_path / "resume-data.json"
    data_file.write_text("[1, 2, 3]", encoding="utf-8")

    with pytest.raises(DataLoadError, match="must be a JSON object"):
        read_resume_data(data_file)


@pytest.mark.unit
def test_data_load_error_is_vitae_error(tmp_path):
    with pytest.raises(VitaeError):
        asyncio.run(load_resume_data(tmp_path / "missing.json"))
