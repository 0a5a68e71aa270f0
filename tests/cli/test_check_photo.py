"""Tests for the check-photo CLI."""
import sys

import cv2
import numpy as np
import pytest

from facematch.cli import check_photo as cli
from facematch.core.config import settings
from facematch.domain.entities.face import ImageDimensions
from facematch.domain.value_objects.detection import DetectionResult
from facematch.services.face_quality import assess_faces

from conftest import FakeDetectionProvider, make_face


def write_image(path, size: int = 1000) -> None:
    cv2.imwrite(str(path), np.zeros((size, size, 3), dtype=np.uint8))


async def test_missing_file(tmp_path):
    assert await cli.check_photo(str(tmp_path / "missing.jpg")) == 1


async def test_accepted_face_saves_annotated_image(tmp_path, monkeypatch):
    image_path = tmp_path / "photo.png"
    write_image(image_path)
    provider = FakeDetectionProvider([make_face(300, 300), make_face(50, 50, x=600, y=600)])
    monkeypatch.setattr(cli, "get_face_detection_provider", lambda: provider)

    exit_code = await cli.check_photo(str(image_path))

    assert exit_code == 0
    assert (tmp_path / "photo_checked.png").exists()


async def test_only_rejected_faces(tmp_path, monkeypatch):
    image_path = tmp_path / "photo.png"
    write_image(image_path)
    monkeypatch.setattr(cli, "get_face_detection_provider", lambda: FakeDetectionProvider([make_face(50, 50)]))

    assert await cli.check_photo(str(image_path), save_output=False) == 2
    assert not (tmp_path / "photo_checked.png").exists()


def test_draw_assessments_does_not_modify_input():
    image = np.zeros((1000, 1000, 3), dtype=np.uint8)
    detection = DetectionResult(
        image_dimensions=ImageDimensions(width=1000, height=1000),
        faces=[make_face(300, 300)],
    )

    annotated = cli.draw_assessments(image, assess_faces(detection))

    assert not image.any()
    assert annotated.any()


def test_version_flag(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["facematch-check-photo", "--version"])

    with pytest.raises(SystemExit) as exc_info:
        cli.main()

    assert exc_info.value.code == 0
    assert settings.VERSION in capsys.readouterr().out
