from helpers import register, list_messages


def test_register_creates_participant_and_join_message(client, clock):
    r = register(client, "Alice")
    assert r.status_code == 201
    assert r.json() == {"name": "Alice", "lastStatus": clock.now}

    roster = client.get("/participants")
    assert roster.status_code == 200
    assert [p["name"] for p in roster.json()] == ["Alice"]

    msgs = list_messages(client, "Alice").json()
    assert len(msgs) == 1
    assert msgs[0]["from"] == "Alice"
    assert msgs[0]["to"] == "Todos"
    assert msgs[0]["type"] == "status"
    assert msgs[0]["text"] == "entra na sala..."


def test_duplicate_name_is_a_conflict(client):
    assert register(client, "Alice").status_code == 201
    assert register(client, "Alice").status_code == 409
    assert len(client.get("/participants").json()) == 1


def test_name_is_trimmed_and_stripped_of_html(client):
    assert register(client, "  <b>Alice</b>  ").status_code == 201
    assert register(client, "Alice").status_code == 409
    assert client.get("/participants").json()[0]["name"] == "Alice"


def test_invalid_names_are_rejected(client):
    assert client.post("/participants", json={}).status_code == 422
    assert register(client, "").status_code == 422
    assert register(client, "   ").status_code == 422
    assert register(client, "<i></i>").status_code == 422
    assert client.post("/participants", json={"name": 42}).status_code == 422
    assert client.get("/participants").json() == []


def test_heartbeat_updates_last_status(client, clock):
    register(client, "Alice")
    clock.advance(5)
    r = client.post("/status", headers={"User": "Alice"})
    assert r.status_code == 200
    assert client.get("/participants").json()[0]["lastStatus"] == clock.now


def test_heartbeat_for_unknown_participant(client):
    assert client.post("/status", headers={"User": "Ghost"}).status_code == 404


def test_heartbeat_without_identity(client):
    assert client.post("/status").status_code == 422
    assert client.post("/status", headers={"User": "  "}).status_code == 422
