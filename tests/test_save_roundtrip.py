import json
from pathlib import Path

import pytest

from village.economy import Ledger
from village.exceptions import CorruptSaveData, PersistenceWriteFailure
from village.persistence import SaveManager, SaveRecord, VillagePersistence, decode_save, encode_save
from village.placement import Vector3
from village.world import PlacedObject, WorldState


def _persistence(catalog, save_dir: Path, balance=100):
    ledger = Ledger(starting_balance=balance)
    world = WorldState()
    return VillagePersistence(SaveManager(save_dir), ledger, world, catalog)


def test_document_shape(tmp_path: Path, catalog):
    p = _persistence(catalog, tmp_path)
    p.ledger.set(30)
    p.world.add(PlacedObject(catalog_id="well", position=Vector3(1.5, -2.0, 0.25), original_cost=40, rotation=90.0))
    p.save()

    data = json.loads((tmp_path / "village.json").read_text(encoding="utf-8"))
    assert data == {
        "objects": [
            {
                "catalogId": "well",
                "x": 1.5,
                "y": -2.0,
                "z": 0.25,
                "rotationZ": 90.0,
                "scaleX": 1.0,
                "scaleY": 1.0,
                "originalCost": 40,
            }
        ],
        "balance": 30,
    }


def test_save_then_load_restores_state(tmp_path: Path, catalog):
    first = _persistence(catalog, tmp_path)
    first.ledger.set(30)
    first.world.add(PlacedObject(catalog_id="house", position=Vector3(2.5, 2.0), original_cost=100))
    first.world.add(PlacedObject(catalog_id="tree", position=Vector3(-1.0, 3.5, 1.0), original_cost=10, scale_x=2.0))
    first.save()

    # Simulate restart with fresh objects
    second = _persistence(catalog, tmp_path)
    report = second.load()

    assert report.found and not report.corrupt
    assert second.ledger.balance == 30
    assert report.loaded == 2
    assert sorted(second.world.records(), key=json.dumps) == sorted(first.world.records(), key=json.dumps)


def test_missing_file_is_fresh_start(tmp_path: Path, catalog):
    p = _persistence(catalog, tmp_path, balance=75)
    report = p.load()
    assert not report.found
    assert p.ledger.balance == 75
    assert len(p.world) == 0


@pytest.mark.parametrize(
    "content",
    [
        "{ not valid JSON",
        "[]",
        '{"balance": "lots", "objects": []}',
        '{"objects": [{"catalogId": "house"}], "balance": 5}',
    ],
)
def test_corrupt_file_falls_back_to_defaults(tmp_path: Path, catalog, content):
    (tmp_path / "village.json").write_text(content, encoding="utf-8")
    p = _persistence(catalog, tmp_path, balance=100)
    p.ledger.set(5)
    p.world.add(PlacedObject(catalog_id="tree", position=Vector3(), original_cost=10))

    report = p.load()

    assert report.corrupt
    assert report.error
    assert p.ledger.balance == 100
    assert len(p.world) == 0


def test_unknown_catalog_ids_are_skipped(tmp_path: Path, catalog):
    record = SaveRecord(
        balance=12,
        objects=(
            PlacedObject(catalog_id="house", position=Vector3(), original_cost=100),
            PlacedObject(catalog_id="castle", position=Vector3(), original_cost=999),
        ),
    )
    SaveManager(tmp_path).write(record)

    p = _persistence(catalog, tmp_path)
    report = p.load()
    assert report.loaded == 1
    assert report.skipped == ["castle"]
    assert [o.catalog_id for o in p.world] == ["house"]
    assert p.ledger.balance == 12


def test_negative_saved_balance_is_clamped(tmp_path: Path, catalog):
    (tmp_path / "village.json").write_text('{"objects": [], "balance": -4}', encoding="utf-8")
    p = _persistence(catalog, tmp_path)
    p.load()
    assert p.ledger.balance == 0


def test_failed_write_keeps_previous_file(tmp_path: Path, catalog, monkeypatch):
    p = _persistence(catalog, tmp_path)
    p.ledger.set(42)
    p.save()
    before = (tmp_path / "village.json").read_text(encoding="utf-8")

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("village.persistence.manager.os.replace", broken_replace)
    p.ledger.set(7)
    with pytest.raises(PersistenceWriteFailure):
        p.save()

    assert (tmp_path / "village.json").read_text(encoding="utf-8") == before
    assert [f.name for f in tmp_path.iterdir()] == ["village.json"]
    assert p.ledger.balance == 7


def test_decode_rejects_garbage():
    with pytest.raises(CorruptSaveData):
        decode_save("nope")


def test_encode_decode_preserves_order():
    record = SaveRecord(
        balance=3,
        objects=tuple(
            PlacedObject(catalog_id=cid, position=Vector3(i, i), original_cost=5) for i, cid in enumerate(["a", "b", "c"])
        ),
    )
    decoded = decode_save(encode_save(record))
    assert [o.catalog_id for o in decoded.objects] == ["a", "b", "c"]
    assert decoded.balance == 3


@pytest.mark.parametrize("cost", [0, -100])
def test_non_positive_price_paid_is_skipped(tmp_path: Path, catalog, cost):
    document = {
        "objects": [
            {"catalogId": "house", "x": 0, "y": 0, "z": 0, "rotationZ": 0, "scaleX": 1, "scaleY": 1, "originalCost": cost},
            {"catalogId": "well", "x": 1, "y": 1, "z": 0, "rotationZ": 0, "scaleX": 1, "scaleY": 1, "originalCost": 40},
        ],
        "balance": 5,
    }
    (tmp_path / "village.json").write_text(json.dumps(document), encoding="utf-8")

    p = _persistence(catalog, tmp_path)
    report = p.load()

    assert not report.corrupt
    assert report.loaded == 1
    assert report.skipped == ["house"]
    assert [o.original_cost for o in p.world] == [40]
    assert p.ledger.balance == 5
