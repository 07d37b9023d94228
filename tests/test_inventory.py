"""
Tests for the trap shed inventory.

Run with: python -m pytest tests/test_inventory.py
"""

from conftest import create_area, create_gear, deploy
from database import TrapInventory, engine


def test_inventory_ordering_and_total(trapper):
    create_gear(trapper, "Duke DP", 6, category="Dog Proof (DP)")
    create_gear(trapper, "Belisle 330", 12)
    create_gear(trapper, "Belisle 220", 24)

    data = trapper.get("/api/inventory").json()
    assert [i["model"] for i in data["items"]] == ["Belisle 220", "Belisle 330", "Duke DP"]
    assert data["total_gear"] == 42
    assert "Foothold / Leg-hold" in data["categories"]


def test_empty_inventory(trapper):
    data = trapper.get("/api/inventory").json()
    assert data["items"] == []
    assert data["total_gear"] == 0


def test_add_gear_requires_model_and_quantity(trapper):
    response = trapper.post("/api/inventory", json={"category": "Foothold / Leg-hold", "model": "", "total_quantity": 4})
    assert response.status_code == 400

    response = trapper.post("/api/inventory", json={"category": "Foothold / Leg-hold", "model": "Bridger #2"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Quantity is required"

    response = trapper.post("/api/inventory", json={"category": "Bear Trap", "model": "Bridger #2", "total_quantity": 4})
    assert response.status_code == 400


def test_quantity_parsing(trapper):
    assert create_gear(trapper, "Bridger #2", "18")["total_quantity"] == 18
    assert create_gear(trapper, "Mystery", "lots")["total_quantity"] == 0

    response = trapper.post(
        "/api/inventory",
        json={"category": "Other Equipment", "model": "Stakes", "total_quantity": -3},
    )
    assert response.status_code == 400


def test_quantity_upper_bound(trapper):
    assert create_gear(trapper, "Stakes", 1_000_000)["total_quantity"] == 1_000_000

    for quantity in (10**20, "1e20", 10**400):
        response = trapper.post(
            "/api/inventory",
            json={"category": "Other Equipment", "model": "Stakes", "total_quantity": quantity},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Quantity too large"

    item = trapper.get("/api/inventory").json()["items"][0]
    response = trapper.put(
        f"/api/inventory/{item['id']}",
        json={"category": "Other Equipment", "model": "Stakes", "total_quantity": 10**20},
    )
    assert response.status_code == 400
    assert trapper.get("/api/inventory").json()["total_gear"] == 1_000_000


def test_database_failure_is_reported_as_json(trapper):
    TrapInventory.__table__.drop(bind=engine)

    response = trapper.get("/api/inventory")
    assert response.status_code == 500
    assert response.json() == {"detail": "Database error"}


def test_edit_gear(trapper):
    item = create_gear(trapper, notes="Dyed and waxed Fall 2025")

    response = trapper.put(
        f"/api/inventory/{item['id']}",
        json={"category": "Body Grip (e.g., 110, 220, 330)", "model": "Belisle 330 Super X", "total_quantity": 10, "notes": ""},
    )
    assert response.status_code == 200
    updated = response.json()["item"]
    assert updated["model"] == "Belisle 330 Super X"
    assert updated["total_quantity"] == 10
    assert updated["notes"] is None
    assert trapper.get("/api/inventory").json()["total_gear"] == 10


def test_delete_gear(trapper):
    item = create_gear(trapper)

    response = trapper.delete(f"/api/inventory/{item['id']}")
    assert response.status_code == 200
    assert trapper.get("/api/inventory").json()["items"] == []


def test_delete_deployed_gear_is_refused(trapper):
    area = create_area(trapper)
    item = create_gear(trapper)
    deployment = deploy(trapper, area["id"], item["id"])

    response = trapper.delete(f"/api/inventory/{item['id']}")
    assert response.status_code == 409
    assert len(trapper.get("/api/inventory").json()["items"]) == 1

    trapper.delete(f"/api/deployments/{deployment['id']}")
    assert trapper.delete(f"/api/inventory/{item['id']}").status_code == 200


def test_inventory_is_private(trapper, other_trapper):
    item = create_gear(trapper)

    assert other_trapper.get("/api/inventory").json()["items"] == []
    assert other_trapper.delete(f"/api/inventory/{item['id']}").status_code == 404
    assert other_trapper.put(
        f"/api/inventory/{item['id']}",
        json={"category": "Other Equipment", "model": "Mine now", "total_quantity": 1},
    ).status_code == 404
