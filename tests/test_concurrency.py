"""
Corridas entre estações de scan: duas threads, cada uma com sua sessão,
disparando a mesma operação ao mesmo tempo (SQLite em arquivo)
"""
import threading
from concurrent.futures import ThreadPoolExecutor

from models.item import ItemStatus
from models.movement import Movement
from services.exceptions import CapacityExceeded, InvalidTransition, LocationUnavailable, WarehouseError
from services.item_service import ItemService
from services.location_service import LocationService
from services.placement_service import PlacementService


def run_concurrently(session_factory, operations):
    """Executa as operações em paralelo; retorna o resultado ou o erro de cada uma"""
    barrier = threading.Barrier(len(operations))

    def worker(operation):
        db = session_factory()
        try:
            barrier.wait()
            return operation(db)
        except WarehouseError as e:
            return e
        finally:
            db.close()

    with ThreadPoolExecutor(max_workers=len(operations)) as pool:
        return list(pool.map(worker, operations))


def setup(session_factory, weights, level=1):
    db = session_factory()
    try:
        location = LocationService.create_location(db, row="A", bay=1, level=level, position=1)
        items = [
            ItemService.register_item(
                db, item_code="SKU", system_code=f"SYS-{i}", category="coil", weight=w
            )
            for i, w in enumerate(weights)
        ]
        return location.code, [item.id for item in items]
    finally:
        db.close()


def test_concurrent_place_of_same_item_succeeds_once(session_factory):
    code, (item_id,) = setup(session_factory, [300])

    results = run_concurrently(session_factory, [
        lambda db: PlacementService.place(db, item_id, code, operator="station-1"),
        lambda db: PlacementService.place(db, item_id, code, operator="station-2"),
    ])

    errors = [r for r in results if isinstance(r, WarehouseError)]
    assert len(errors) == 1
    assert isinstance(errors[0], InvalidTransition)

    db = session_factory()
    try:
        assert LocationService.get_by_code(db, code).current_weight == 300
        assert db.query(Movement).count() == 1
    finally:
        db.close()


def test_concurrent_pick_of_same_item_succeeds_once(session_factory):
    code, (item_id,) = setup(session_factory, [300])
    db = session_factory()
    PlacementService.place(db, item_id, code)
    db.close()

    results = run_concurrently(session_factory, [
        lambda db: PlacementService.pick(db, item_id, operator="station-1"),
        lambda db: PlacementService.pick(db, item_id, operator="station-2"),
    ])

    errors = [r for r in results if isinstance(r, WarehouseError)]
    assert len(errors) == 1
    assert isinstance(errors[0], InvalidTransition)

    db = session_factory()
    try:
        assert ItemService.get_item(db, item_id).status == ItemStatus.REMOVED
        assert LocationService.get_by_code(db, code).current_weight == 0
        assert db.query(Movement).count() == 2
    finally:
        db.close()


def test_concurrent_placements_into_one_rack_location_admit_one_item(session_factory):
    # cabem no teto de 1500kg, mas a posição de rack recebe um item só
    code, (first, second) = setup(session_factory, [500, 500])

    results = run_concurrently(session_factory, [
        lambda db: PlacementService.place(db, first, code),
        lambda db: PlacementService.place(db, second, code),
    ])

    errors = [r for r in results if isinstance(r, WarehouseError)]
    assert len(errors) == 1
    assert isinstance(errors[0], LocationUnavailable)
    assert errors[0].reason == "está ocupada"

    db = session_factory()
    try:
        location = LocationService.get_by_code(db, code)
        assert location.current_weight == 500
        assert db.query(Movement).count() == 1
        statuses = sorted(ItemService.get_item(db, i).status.value for i in (first, second))
        assert statuses == ["pending", "placed"]
    finally:
        db.close()


def test_concurrent_placements_cannot_exceed_the_ceiling(session_factory):
    # nível 4 standard: 500kg
    code, (first, second) = setup(session_factory, [600, 600], level=4)

    results = run_concurrently(session_factory, [
        lambda db: PlacementService.place(db, first, code),
        lambda db: PlacementService.place(db, second, code),
    ])

    assert all(isinstance(r, CapacityExceeded) for r in results)

    db = session_factory()
    try:
        assert LocationService.get_by_code(db, code).current_weight == 0
        assert db.query(Movement).count() == 0
    finally:
        db.close()
