import cv2
import numpy as np
import pytest
import yaml

from dryfire.app.cli import main, parse_roi
from dryfire.api import Roi

from conftest import block


def write_frame(path, spots=(), size=(20, 20)):
    w, h = size
    frame = np.zeros((h, w, 3), dtype=np.uint8)
    for points, bgr in spots:
        for x, y in points:
            frame[y, x] = bgr
    assert cv2.imwrite(str(path), frame)
    return path


RED_BGR = (0, 0, 220)
GREEN_BGR = (0, 220, 0)


def test_prints_hits(tmp_path, capsys):
    img = write_frame(tmp_path / "shot.png", [(block(4, 4, 2, 2), RED_BGR), (block(14, 10, 2, 2), GREEN_BGR)])
    assert main([str(img)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [f"{img} red 5 5", f"{img} green 15 11"]


def test_roi_and_background(tmp_path, capsys):
    bg = write_frame(tmp_path / "bg.png", [(block(4, 4, 2, 2), RED_BGR)])
    img = write_frame(tmp_path / "shot.png", [(block(4, 4, 2, 2), RED_BGR), (block(14, 10, 2, 2), RED_BGR)])

    assert main([str(img), "--background", str(bg)]) == 0
    assert capsys.readouterr().out.splitlines() == [f"{img} red 15 11"]

    assert main([str(img), "--roi", "0,10,0,10"]) == 0
    assert capsys.readouterr().out.splitlines() == [f"{img} red 5 5"]


def test_debug_and_overlay(tmp_path, capsys):
    img = write_frame(tmp_path / "shot.png", [(block(4, 4, 2, 2), RED_BGR)])
    out_dir = tmp_path / "overlays"
    assert main([str(img), "--debug", "--overlay-dir", str(out_dir)]) == 0
    err = capsys.readouterr().err
    assert err.count("pixel") == 4
    assert "strict" in err
    assert (out_dir / "shot_overlay.png").exists()


def test_config_profile(tmp_path, capsys):
    profile = tmp_path / "strict.yaml"
    profile.write_text("min_laser_size: 5\n", encoding="utf-8")
    img = write_frame(tmp_path / "shot.png", [(block(4, 4, 2, 2), RED_BGR)])
    assert main([str(img), "--config", str(profile)]) == 0
    assert capsys.readouterr().out == ""


def test_print_config(tmp_path, capsys):
    profile = tmp_path / "p.yaml"
    profile.write_text("cluster_radius: 4\n", encoding="utf-8")
    assert main(["--config", str(profile), "--print-config"]) == 0
    data = yaml.safe_load(capsys.readouterr().out)
    assert data["cluster_radius"] == 4
    assert data["red"] == {"r": 150, "g": 70, "b": 70}


def test_unreadable_image(tmp_path, capsys):
    assert main([str(tmp_path / "missing.png")]) == 1
    assert "ERROR" in capsys.readouterr().err


def test_bad_roi_reports_error(tmp_path, capsys):
    img = write_frame(tmp_path / "shot.png")
    assert main([str(img), "--roi", "0,50,0,10"]) == 1
    assert "outside" in capsys.readouterr().err


def test_parse_roi():
    assert parse_roi("1,2,3,4") == Roi(1, 2, 3, 4)
    with pytest.raises(SystemExit):
        main(["x.png", "--roi", "1,2"])


def test_images_required_without_print_config():
    with pytest.raises(SystemExit):
        main([])


@pytest.mark.parametrize("text", [
    "min_brightness: high\n",
    "min_brightness:\n",
    "red: [a, 1, 2]\n",
    "red: {r: 1\n",
])
def test_malformed_profile_reports_error(tmp_path, capsys, text):
    profile = tmp_path / "bad.yaml"
    profile.write_text(text, encoding="utf-8")
    assert main(["--config", str(profile), "--print-config"]) == 1
    assert "ERROR" in capsys.readouterr().err
