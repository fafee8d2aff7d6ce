from models.movement import MovementType
from services.movement_service import MovementService
import config


def test_recent_is_newest_first_and_bounded(db, make_item):
    item = make_item(db)
    for i in range(5):
        MovementService.append(
            db, item.id, MovementType.IN if i % 2 == 0 else MovementType.OUT,
            weight=item.weight, operator="op", reference=item.item_code, notes=f"n{i}",
        )
    db.commit()

    recent = MovementService.recent(db, 3)
    assert [m.notes for m in recent] == ["n4", "n3", "n2"]


def test_recent_uses_default_window(db, make_item, monkeypatch):
    monkeypatch.setattr(config, "RECENT_MOVEMENTS_LIMIT", 2)
    item = make_item(db)
    for _ in range(4):
        MovementService.append(db, item.id, MovementType.IN, 1.0, "op", "ref")
    db.commit()
    assert len(MovementService.recent(db)) == 2
    assert len(MovementService.recent(db, 0)) == 1


def test_ledger_exposes_no_mutation():
    assert not hasattr(MovementService, "update")
    assert not hasattr(MovementService, "delete")
