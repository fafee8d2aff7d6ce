"""
Fluxo HTTP: provisionamento, registro, alocação, scan IN/OUT e movimentos
"""


def register(client, system_code="SYS-1", weight=200.0):
    response = client.post("/items", json={
        "item_code": "COIL-1",
        "system_code": system_code,
        "category": "coil",
        "weight": weight,
    })
    assert response.status_code == 201
    return response.json()


def test_generate_locations(client):
    response = client.post("/locations/generate", json={
        "row": "A", "bay_start": 1, "bay_end": 2, "max_level": 2,
    })
    assert response.status_code == 201
    body = response.json()
    # 2 baias x 3 posições x 3 níveis
    assert len(body["created"]) == 18
    assert "A01-0-1" in body["created"]
    assert "A02-2-3" in body["created"]

    again = client.post("/locations/generate", json={
        "row": "A", "bay_start": 2, "bay_end": 3, "max_level": 2,
    }).json()
    assert len(again["skipped"]) == 9
    assert len(again["created"]) == 9

    ground = client.get("/locations/A01-0-1").json()
    assert ground["max_weight"] is None
    assert ground["height"] == 0.0
    rack = client.get("/locations/A01-2-1").json()
    assert rack["max_weight"] == 1000
    assert rack["height"] == 5.0


def test_generate_with_unknown_rack_type(client):
    response = client.post("/locations/generate", json={
        "row": "A", "bay_start": 1, "bay_end": 1, "rack_type": "mezzanine",
    })
    assert response.status_code == 400
    assert response.json()["detail"]["error_code"] == "CONFIGURATION_ERROR"


def test_scan_in_and_out_flow(client):
    client.post("/locations", json={"row": "A", "bay": 1, "level": 1, "position": 1})
    client.post("/locations", json={"row": "A", "bay": 1, "level": 1, "position": 2})
    item = register(client, weight=200)

    allocation = client.post("/allocate", json={"weight": 200}).json()
    assert allocation["location_code"] == "A01-1-1"

    scan_in = client.post("/scan/in", json={"system_code": "SYS-1", "operator": "maria"}).json()
    assert scan_in["success"] is True
    assert scan_in["location_code"] == "A01-1-1"
    assert scan_in["movement"]["type"] == "IN"

    placed = client.get(f"/items/{item['id']}").json()
    assert placed["status"] == "placed"
    assert client.get("/locations/A01-1-1").json()["current_weight"] == 200

    scan_out = client.post("/scan/out", json={"system_code": "SYS-1", "operator": "joao"}).json()
    assert scan_out["success"] is True
    assert scan_out["movement"]["type"] == "OUT"

    again = client.post("/scan/out", json={"system_code": "SYS-1"}).json()
    assert again["success"] is False
    assert again["error_code"] == "INVALID_TRANSITION"

    movements = client.get("/movements").json()
    assert [m["type"] for m in movements] == ["OUT", "IN"]
    history = client.get(f"/items/{item['id']}/movements").json()
    assert len(history) == 2


def test_allocate_without_candidates(client):
    client.post("/locations", json={"row": "A", "bay": 1, "level": 1})
    response = client.post("/allocate", json={"weight": 2000})
    assert response.status_code == 200
    body = response.json()
    assert body["location_code"] is None
    assert body["error_code"] == "NO_LOCATION_AVAILABLE"


def test_scan_in_unknown_item(client):
    body = client.post("/scan/in", json={"system_code": "NOPE"}).json()
    assert body["success"] is False
    assert body["error_code"] == "ITEM_NOT_FOUND"


def test_scan_in_over_capacity(client):
    client.post("/locations", json={"row": "A", "bay": 1, "level": 4})
    register(client, weight=600)
    body = client.post("/scan/in", json={"system_code": "SYS-1", "location_code": "A01-4-1"}).json()
    assert body["success"] is False
    assert body["error_code"] == "CAPACITY_EXCEEDED"


def test_duplicate_system_code(client):
    register(client)
    response = client.post("/items", json={
        "item_code": "COIL-1", "system_code": "SYS-1", "category": "coil", "weight": 10,
    })
    assert response.status_code == 409


def test_cannot_delete_occupied_location(client):
    client.post("/locations", json={"row": "A", "bay": 1, "level": 0})
    register(client, weight=50)
    client.post("/scan/in", json={
        "system_code": "SYS-1", "location_code": "A01-0-1",
    })

    response = client.delete("/locations/A01-0-1")
    assert response.status_code == 409
    assert response.json()["detail"]["error_code"] == "LOCATION_NOT_EMPTY"

    client.post("/scan/out", json={"system_code": "SYS-1"})
    assert client.delete("/locations/A01-0-1").status_code == 204
    assert client.get("/locations/A01-0-1").status_code == 404


def test_eligible_listing_respects_flags(client):
    client.post("/locations", json={"row": "A", "bay": 1, "level": 1, "position": 1})
    client.post("/locations", json={"row": "A", "bay": 1, "level": 1, "position": 2})
    client.post("/locations", json={"row": "A", "bay": 1, "level": 0, "position": 1})
    client.patch("/locations/A01-1-2", json={"verified": False})

    rack = [loc["code"] for loc in client.get("/locations/eligible").json()]
    ground = [loc["code"] for loc in client.get("/locations/eligible?ground=true").json()]
    assert rack == ["A01-1-1"]
    assert ground == ["A01-0-1"]


def test_ground_full_only_on_ground(client):
    client.post("/locations", json={"row": "A", "bay": 1, "level": 1})
    response = client.patch("/locations/A01-1-1", json={"is_ground_full": True})
    assert response.status_code == 400


def test_dashboard(client):
    client.post("/locations", json={"row": "A", "bay": 1, "level": 1})
    register(client)
    body = client.get("/").json()
    assert body["total_locations"] == 1
    assert body["free_locations"] == 1
    assert body["items"]["pending"] == 1


def test_second_scan_in_to_occupied_rack_location(client):
    client.post("/locations", json={"row": "A", "bay": 1, "level": 1})
    register(client, system_code="SYS-1", weight=100)
    register(client, system_code="SYS-2", weight=100)
    client.post("/scan/in", json={"system_code": "SYS-1", "location_code": "A01-1-1"})

    body = client.post("/scan/in", json={"system_code": "SYS-2", "location_code": "A01-1-1"}).json()
    assert body["success"] is False
    assert body["error_code"] == "LOCATION_UNAVAILABLE"
    assert client.get("/locations/A01-1-1").json()["current_weight"] == 100


def test_action_queue_flow(client):
    client.post("/locations", json={"row": "A", "bay": 1, "level": 1})
    item = register(client, weight=150)

    created = client.post("/actions/goods-in", json={"item_id": item["id"]})
    assert created.status_code == 201
    action = created.json()
    assert action["status"] == "pending"
    assert action["action_type"] == "in"

    started = client.post(f"/actions/{action['id']}/start", json={"operator": "maria"}).json()
    assert started["status"] == "in-progress"

    wrong = client.post(f"/actions/{action['id']}/complete", json={"system_code": "SYS-X"}).json()
    assert wrong["success"] is False
    assert wrong["error_code"] == "VALIDATION_ERROR"

    done = client.post(f"/actions/{action['id']}/complete", json={
        "system_code": "SYS-1", "location_code": "A01-1-1", "operator": "maria",
    }).json()
    assert done["success"] is True
    assert done["location_code"] == "A01-1-1"
    assert client.get("/actions/pending").json() == []

    pick = client.post("/actions/pick", json={"item_id": item["id"], "department": ""})
    assert pick.status_code == 400
    pick = client.post("/actions/pick", json={"item_id": item["id"], "department": "Expedição"}).json()
    assert pick["location_code"] == "A01-1-1"

    out = client.post(f"/actions/{pick['id']}/complete", json={"system_code": "SYS-1"}).json()
    assert out["success"] is True
    assert out["movement"]["type"] == "OUT"

    completed = client.get("/actions?status=completed").json()
    assert len(completed) == 2
    assert client.delete(f"/actions/{pick['id']}").status_code == 409
    assert client.get("/actions/999").status_code == 404


def test_product_catalog_prefills_registration(client):
    saved = client.post("/products", json={
        "sku": "COIL-9", "category": "raw", "description": "Bobina 2mm", "weight": 800,
    })
    assert saved.status_code == 200
    assert saved.json()["usage_count"] == 1

    response = client.post("/items", json={"item_code": "COIL-9", "system_code": "SYS-77"})
    assert response.status_code == 201
    item = response.json()
    assert item["category"] == "raw"
    assert item["description"] == "Bobina 2mm"
    assert item["weight"] == 800

    assert client.get("/products/COIL-9").json()["usage_count"] == 2
    assert client.get("/products/NOPE").status_code == 404
    assert [p["sku"] for p in client.get("/products?search=bobina&category=raw").json()] == ["COIL-9"]


def test_registration_without_catalog_requires_fields(client):
    response = client.post("/items", json={"item_code": "NEW-1", "system_code": "SYS-5"})
    assert response.status_code == 400
    assert response.json()["detail"]["error_code"] == "VALIDATION_ERROR"
