import logging

from jaegerdev import overrides
from jaegerdev.models import OverrideSet


def _paths(tmp_path):
    return tmp_path / "jaeger-ui.config.js", tmp_path / "jaeger-ui.config.json"


def test_no_files_gives_empty_override_set(tmp_path):
    js, patch = _paths(tmp_path)
    result = overrides.load(js, patch)

    assert result == OverrideSet()
    assert result.found() == []


def test_full_override_is_returned_as_raw_text(tmp_path):
    js, patch = _paths(tmp_path)
    source = "return { menu: [{ label: 'Docs', url: 'https://example.com' }] };  // not parsed\n"
    js.write_text(source, encoding="utf-8")

    result = overrides.load(js, patch)
    assert result.full_override_source == source
    assert result.json_patch is None
    assert result.found() == ["jaeger-ui.config.js"]


def test_empty_full_override_still_counts_as_present(tmp_path):
    js, patch = _paths(tmp_path)
    js.write_text("", encoding="utf-8")

    assert overrides.load(js, patch).full_override_source == ""


def test_json_patch_is_parsed(tmp_path):
    js, patch = _paths(tmp_path)
    patch.write_text('{"b": 3, "c": 4}', encoding="utf-8")

    result = overrides.load(js, patch)
    assert result.json_patch == {"b": 3, "c": 4}
    assert result.full_override_source is None


def test_both_files_are_read_independently(tmp_path):
    js, patch = _paths(tmp_path)
    js.write_text("return {};", encoding="utf-8")
    patch.write_text('{"a": 1}', encoding="utf-8")

    result = overrides.load(js, patch)
    assert result.found() == ["jaeger-ui.config.js", "jaeger-ui.config.json"]


def test_malformed_json_patch_is_logged_and_dropped(tmp_path, caplog):
    js, patch = _paths(tmp_path)
    patch.write_text('{"b": 3,', encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="jaegerdev.overrides"):
        result = overrides.load(js, patch)

    assert result.json_patch is None
    assert "Malformed JSON" in caplog.text


def test_non_object_json_patch_is_dropped(tmp_path, caplog):
    js, patch = _paths(tmp_path)
    patch.write_text("[1, 2, 3]", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="jaegerdev.overrides"):
        result = overrides.load(js, patch)

    assert result.json_patch is None
    assert "must contain a JSON object" in caplog.text


def test_unreadable_full_override_is_treated_as_absent(tmp_path, caplog):
    js, patch = _paths(tmp_path)
    js.write_bytes(b"\xff\xfe\x00 not utf-8 \xc3\x28")

    with caplog.at_level(logging.WARNING, logger="jaegerdev.overrides"):
        result = overrides.load(js, patch)

    assert result.full_override_source is None
    assert "Could not read" in caplog.text


def test_directory_in_place_of_file_is_ignored(tmp_path):
    js, patch = _paths(tmp_path)
    js.mkdir()

    assert overrides.load(js, patch).full_override_source is None
