from __future__ import annotations

import logging

import pytest

from damage_overlay import images


def test_missing_image_logs_and_returns_none(tmp_path, caplog):
    missing = tmp_path / "nope.png"
    with caplog.at_level(logging.ERROR, logger="CombatLogger.Overlay"):
        assert images.load_image(missing) is None
    assert "Image not found" in caplog.text


@pytest.mark.pyqt_required
def test_corrupt_image_logs_and_returns_none(tmp_path, caplog):
    corrupt = tmp_path / "broken.png"
    corrupt.write_bytes(b"not a png")
    with caplog.at_level(logging.ERROR, logger="CombatLogger.Overlay"):
        assert images.load_image(corrupt) is None
    assert "Error loading image" in caplog.text


@pytest.mark.pyqt_required
def test_bundled_images_load_and_scale():
    settings_icon = images.load_image(images.IMAGE_SETTINGS_PATH)
    avatar = images.load_image(images.IMAGE_DEFAULT_AVATAR_PATH)
    assert settings_icon is not None
    assert avatar is not None

    scaled = images.scale_image(avatar, 20, 20)
    assert (scaled.width(), scaled.height()) == (20, 20)
