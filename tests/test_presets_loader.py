import json
import math

import pytest

from pendulum_core.presets_loader import DEFAULT_PRESET, list_presets, load_preset


def write(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
    return name


def test_bundled_default_preset():
    preset = load_preset(DEFAULT_PRESET)
    assert preset is not None
    assert preset.angles() == pytest.approx([math.pi / 4, math.pi / 4])
    assert [(l.length, l.mass) for l in preset.links] == [(1.0, 1.0), (1.0, 1.0)]


def test_bundled_presets_all_load():
    items = list_presets()
    assert DEFAULT_PRESET in [fn for fn, _ in items]
    for fn, _ in items:
        assert load_preset(fn) is not None, fn


def test_list_uses_display_name_or_file_stem(tmp_path):
    write(tmp_path, "b.json", {"name": "Bee", "links": []})
    write(tmp_path, "a.json", {"links": []})
    write(tmp_path, "notes.txt", "ignored")
    assert list_presets(str(tmp_path)) == [("a.json", "a"), ("b.json", "Bee")]


def test_list_missing_dir(tmp_path):
    assert list_presets(str(tmp_path / "nope")) == []


def test_defaults_fill_missing_fields(tmp_path):
    fn = write(tmp_path, "p.json", {"links": [{}, {"angle_deg": 90, "length": 0.5}]})
    preset = load_preset(fn, str(tmp_path))
    assert preset.name == "p"
    assert preset.angles() == pytest.approx([math.pi / 4, math.pi / 2])
    assert preset.links[1].length == 0.5
    assert preset.links[1].mass == 1.0


@pytest.mark.parametrize("data", [
    "{not json",
    [1, 2],
    {"links": [{}]},
    {"links": [{}, {}, {}]},
    {"links": [{}, {"length": 0}]},
    {"links": [{}, {"mass": -1}]},
    {"links": [{}, {"angle_deg": "left"}]},
    {"links": [{}, 3]},
])
def test_malformed_presets_are_rejected(tmp_path, data):
    fn = write(tmp_path, "bad.json", data)
    assert load_preset(fn, str(tmp_path)) is None


def test_missing_file(tmp_path):
    assert load_preset("absent.json", str(tmp_path)) is None
