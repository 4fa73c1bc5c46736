import json

import pytest

from infrastructure.settings import DEFAULTS, JsonSettings


def test_defaults_without_file():
    settings = JsonSettings()
    assert settings.get("export.filename") == "AuctionLots.docx"
    assert settings.get("lot_view.max_images") == 3
    assert settings.get("log_dir") is None


def test_missing_file_falls_back_to_defaults(tmp_path):
    settings = JsonSettings(tmp_path / "absent.json")
    assert settings.get("preview.max_side") == 1600


def test_file_values_override_nested_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"export": {"image_side_pt": 120}, "extra": {"k": 1}}), encoding="utf-8")
    settings = JsonSettings(path)
    assert settings.get("export.image_side_pt") == 120
    assert settings.get("export.filename") == "AuctionLots.docx"
    assert settings.get("extra.k") == 1
    # module defaults are not mutated by the overlay
    assert DEFAULTS["export"]["image_side_pt"] == 150


def test_unknown_keys_return_default():
    settings = JsonSettings()
    assert settings.get("nope") is None
    assert settings.get("export.nope", "x") == "x"
    assert settings.get("export.filename.deeper", 5) == 5


def test_non_object_root_is_rejected(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        JsonSettings(path)


@pytest.mark.parametrize("raw,expected", [(200, 200), ("250", 250), (0, 300), (-5, 300), ("big", 300)])
def test_get_int_requires_positive_values(tmp_path, raw, expected):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"lot_view": {"thumb_side": raw}}), encoding="utf-8")
    assert JsonSettings(path).get_int("lot_view.thumb_side", 300) == expected
