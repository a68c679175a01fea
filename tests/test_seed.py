from seed import ADMIN, destroy, seed


def test_seed_loads_demo_content(client, database):
    counts = seed(database)

    assert counts["services"] == len(client.get("/api/services").json())
    projects = client.get("/api/projects").json()
    assert {p["category"]["name"] for p in projects} == {"Web Design", "Graphic Design"}
    res = client.post("/api/auth/login", json={"email": ADMIN["email"], "password": ADMIN["password"]})
    assert res.status_code == 200


def test_seed_replaces_existing_content(database):
    seed(database)
    seed(database)
    assert database["user"].count_documents({}) == 1
    assert database["category"].count_documents({}) == 2


def test_destroy_clears_demo_collections(database):
    seed(database)
    database["message"].insert_one({"subject": "keep me"})

    destroy(database)

    assert database["service"].count_documents({}) == 0
    assert database["message"].count_documents({}) == 1
