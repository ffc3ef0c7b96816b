import dataclasses
import json

import pytest

from kochflake import (
    FlakeConfig,
    FlakeStyle,
    GenerationRequest,
    Point,
    compute_flake_start,
    generate,
    load_config,
)


def test_default_appearance():
    cfg = FlakeConfig()
    assert cfg.length == 175.0
    assert cfg.density == 5
    assert cfg.stroke_width == 3.0
    assert (cfg.stroke_color, cfg.fill_start, cfg.fill_end) == ("darkgray", "blue", "cyan")
    assert cfg.export_path is None


def test_config_is_frozen():
    cfg = FlakeConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.density = 2


@pytest.mark.parametrize("kwargs", [
    {"length": 0.0},
    {"length": -5.0},
    {"density": -1},
    {"density": 11},
    {"stroke_color": "not-a-colour"},
    {"fill_end": "#12"},
    {"stroke_width": -1.0},
    {"stroke_width": float("nan")},
    {"stroke_width": "3"},
    {"stroke_width": True},
    {"length": "175"},
])
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ValueError):
        FlakeConfig(**kwargs)


def test_style_from_config():
    cfg = FlakeConfig(stroke_color="black", stroke_width=1.5, fill_start="#ff0000", fill_end="white")
    assert cfg.style == FlakeStyle("black", 1.5, "#ff0000", "white")


def test_request_uses_frame_and_legacy_start():
    cfg = FlakeConfig(length=60.0, density=2)
    req = cfg.request()
    assert req.depth == 2
    assert req.length == 60.0
    assert req.base_angle == 0.0
    assert req.origin == compute_flake_start(60.0, cfg.frame)
    assert cfg.frame.width == 240.0


def test_generation_request_validates():
    with pytest.raises(ValueError):
        GenerationRequest(Point(0.0, 0.0), depth=-1, length=1.0)
    with pytest.raises(ValueError):
        GenerationRequest(Point(0.0, 0.0), depth=1, length=0.0)


def test_generate_from_request():
    path = generate(GenerationRequest(Point(0.0, 0.0), depth=2, length=9.0, base_angle=45.0))
    assert len(path) == 48
    assert path[0].angle == pytest.approx(45.0)


def test_dict_round_trip():
    cfg = FlakeConfig(length=20.0, density=3, export_path="flake.svg")
    assert FlakeConfig.from_dict(cfg.to_dict()) == cfg


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ValueError, match="colour_scheme"):
        FlakeConfig.from_dict({"length": 10.0, "colour_scheme": "x"})


def test_load_config(tmp_path):
    f = tmp_path / "flake.json"
    f.write_text(json.dumps({"length": 42.0, "density": 2, "fill_end": "white"}))
    cfg = load_config(f)
    assert cfg == FlakeConfig(length=42.0, density=2, fill_end="white")


def test_load_config_requires_object(tmp_path):
    f = tmp_path / "flake.json"
    f.write_text("[1, 2]")
    with pytest.raises(ValueError, match="JSON object"):
        load_config(f)


@pytest.mark.parametrize("payload", [
    {"stroke_width": "wide"},
    {"length": "long"},
    {"density": 2.5},
])
def test_load_config_bad_types_raise_value_error(tmp_path, payload):
    f = tmp_path / "flake.json"
    f.write_text(json.dumps(payload))
    with pytest.raises(ValueError):
        load_config(f)
