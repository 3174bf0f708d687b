import csv
import json

import pytest

from sketchroute.dataio import Instance, list_instances, read_instance, write_instance, write_tour_csv
from sketchroute.synth import grid_instance, sketch_example


def test_instance_roundtrip(tmp_path):
    inst = sketch_example()
    inst.meta["source"] = "test"
    p = write_instance(inst, tmp_path / "sketch.json")

    back = read_instance(p)
    assert back.name == "sketch"
    assert back.points == inst.points
    assert back.edges == inst.edges
    assert back.meta == {"source": "test"}


def test_name_defaults_to_file_stem(tmp_path):
    p = tmp_path / "tiny.json"
    p.write_text(json.dumps({"points": [[0, 0], [1, 0]], "edges": [[0, 1]]}), encoding="utf-8")
    assert read_instance(p).name == "tiny"


@pytest.mark.parametrize("raw", [
    {"points": [[0, 0]]},
    {"points": [[0, 0], "x"], "edges": []},
    {"points": [[0, 0], [1, 1]], "edges": [[0]]},
])
def test_bad_instances(tmp_path, raw):
    p = tmp_path / "bad.json"
    p.write_text(json.dumps(raw), encoding="utf-8")
    with pytest.raises(ValueError):
        read_instance(p)


def test_list_instances_sorted(tmp_path):
    for name in ("b", "a", "c"):
        write_instance(Instance(name=name, points=[(0.0, 0.0)], edges=[]), tmp_path / f"{name}.json")
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")
    assert [p.stem for p in list_instances(tmp_path)] == ["a", "b", "c"]


def test_tour_csv(tmp_path):
    p = write_tour_csv(tmp_path / "out" / "tour.csv", [0, 1, 0], [(0.0, 0.0), (2.5, 1.0), (0.0, 0.0)])
    with open(p, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [r["vid"] for r in rows] == ["0", "1", "0"]
    assert float(rows[1]["x"]) == 2.5


def test_grid_is_reproducible():
    a = grid_instance(3, 3, jitter=1.0, seed=7)
    b = grid_instance(3, 3, jitter=1.0, seed=7)
    assert a.points == b.points and a.edges == b.edges
    with pytest.raises(ValueError):
        grid_instance(0, 3)
