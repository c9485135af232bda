from __future__ import annotations

import json

from combat_logger.preferences import PREFERENCES_FILE, Preferences, SecondaryMetric


def test_defaults_when_file_missing(tmp_path):
    prefs = Preferences(tmp_path)
    assert prefs.enable_overlay is True
    assert prefs.show_overlay_avatar is True
    assert prefs.secondary_metric is SecondaryMetric.DPS
    assert prefs.log_to_file is False
    assert prefs.log_retention == 5


def test_round_trip_save_and_load(tmp_path):
    prefs = Preferences(tmp_path)
    prefs.enable_overlay = False
    prefs.show_overlay_avatar = False
    prefs.secondary_metric = SecondaryMetric.TICKS
    prefs.log_retention = 3
    prefs.save()

    saved = json.loads((tmp_path / PREFERENCES_FILE).read_text(encoding="utf-8"))
    assert saved["secondary_metric"] == "ticks"

    reloaded = Preferences(tmp_path)
    assert reloaded.enable_overlay is False
    assert reloaded.show_overlay_avatar is False
    assert reloaded.secondary_metric is SecondaryMetric.TICKS
    assert reloaded.log_retention == 3


def test_invalid_values_fall_back(tmp_path):
    (tmp_path / PREFERENCES_FILE).write_text(
        json.dumps({"secondary_metric": "bogus", "log_retention": "lots"}),
        encoding="utf-8",
    )
    prefs = Preferences(tmp_path)
    assert prefs.secondary_metric is SecondaryMetric.DPS
    assert prefs.log_retention == 5


def test_metric_accepts_enum_names_and_clamps_retention(tmp_path):
    (tmp_path / PREFERENCES_FILE).write_text(
        json.dumps({"secondary_metric": "NONE", "log_retention": 500}),
        encoding="utf-8",
    )
    prefs = Preferences(tmp_path)
    assert prefs.secondary_metric is SecondaryMetric.NONE
    assert prefs.log_retention == 20


def test_corrupt_file_uses_defaults(tmp_path):
    (tmp_path / PREFERENCES_FILE).write_text("{not json", encoding="utf-8")
    prefs = Preferences(tmp_path)
    assert prefs.enable_overlay is True
    assert prefs.secondary_metric is SecondaryMetric.DPS


def test_undecodable_file_uses_defaults(tmp_path):
    (tmp_path / PREFERENCES_FILE).write_bytes(b"\xff\xfe\x00garbage")
    prefs = Preferences(tmp_path)
    assert prefs.enable_overlay is True
    assert prefs.show_overlay_avatar is True
    assert prefs.log_retention == 5
