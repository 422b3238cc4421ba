from fastapi.testclient import TestClient

from carmatch.app import app

client = TestClient(app)

_CITY_NOVICE = {
    "budget": 20000,
    "experience": "novice",
    "use_case": "city",
    "brand_preferences": [],
    "fuel_economy_priority": True,
}


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_info():
    body = client.get("/info").json()
    assert body["name"] == "CarMatch"
    assert body["version"] == "1.0.0"


def test_metadata_lists_inventory_values():
    body = client.get("/metadata").json()
    assert "Toyota" in body["brands"]
    assert body["brands"] == sorted(body["brands"])
    assert "electric" in body["fuel_types"]
    assert "AWD" in body["drivetrain_types"]


def test_list_and_read_cars():
    cars = client.get("/cars").json()
    assert len(cars) == 24
    resp = client.get(f"/cars/{cars[0]['id']}")
    assert resp.status_code == 200
    assert resp.json() == cars[0]


def test_unknown_car_is_404():
    assert client.get("/cars/99999").status_code == 404


def test_recommendations_returns_top_five():
    resp = client.post("/recommendations", json=_CITY_NOVICE)
    assert resp.status_code == 200
    body = resp.json()
    assert body["total_candidates"] == 6
    assert len(body["recommendations"]) == 5


def test_recommendations_respect_hard_constraints():
    body = client.post("/recommendations", json=_CITY_NOVICE).json()
    for item in body["recommendations"]:
        assert item["price"] <= 20000
        assert item["horsepower"] <= 150
        assert item["fuel_consumption"] <= 7.0
        assert item["is_compact"] is True
        assert item["reason"]


def test_recommendations_filter_by_brand():
    resp = client.post(
        "/recommendations",
        json={
            "budget": 200000,
            "experience": "expert",
            "use_case": "mixed",
            "brand_preferences": ["Toyota"],
            "fuel_economy_priority": False,
        },
    )
    body = resp.json()
    assert body["total_candidates"] == 3
    for item in body["recommendations"]:
        assert item["brand"] == "Toyota"
        assert item["reason"].endswith("matches your preferred brand")


def test_recommendations_empty_when_nothing_fits():
    resp = client.post(
        "/recommendations",
        json={**_CITY_NOVICE, "budget": 1000},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["total_candidates"] == 0
    assert body["recommendations"] == []


def test_recommendations_validation_rejects_bad_experience():
    resp = client.post("/recommendations", json={**_CITY_NOVICE, "experience": "racer"})
    assert resp.status_code == 422


def test_recommendations_validation_rejects_bad_use_case():
    resp = client.post("/recommendations", json={**_CITY_NOVICE, "use_case": "moon"})
    assert resp.status_code == 422


def test_recommendations_validation_rejects_budget_out_of_range():
    assert client.post("/recommendations", json={**_CITY_NOVICE, "budget": 0}).status_code == 422
    assert client.post("/recommendations", json={**_CITY_NOVICE, "budget": 250000}).status_code == 422


def test_recommendations_score_ordering():
    resp = client.post(
        "/recommendations",
        json={
            "budget": 60000,
            "experience": "intermediate",
            "use_case": "highway",
            "fuel_economy_priority": False,
        },
    )
    body = resp.json()
    scores = [item["score"] for item in body["recommendations"]]
    assert scores == sorted(scores, reverse=True)
    assert all(0 <= s <= 100 for s in scores)
