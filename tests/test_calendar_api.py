import pytest


def create(client, headers, **fields):
    payload = {"title": "Cena", "event_date": "2025-12-24", "type": "cita"}
    payload.update(fields)
    return client.post("/api/calendar", json=payload, headers=headers)


def test_create_event(client, julia):
    response = create(client, julia)
    assert response.status_code == 201
    event = response.json()
    assert isinstance(event["id"], int)
    assert event["type"] == "appointment"
    assert event["event_time"] is None
    assert client.get("/api/calendar").json() == [event]


@pytest.mark.parametrize("given, stored", [("evento", "event"), ("Event", "event"), ("appointment", "appointment")])
def test_type_aliases(client, julia, given, stored):
    assert create(client, julia, type=given).json()["type"] == stored


def test_invalid_type(client, julia):
    response = create(client, julia, type="fiesta")
    assert response.status_code == 400
    assert client.get("/api/calendar").json() == []


@pytest.mark.parametrize("missing", ["title", "event_date", "type"])
def test_required_fields(client, julia, missing):
    payload = {"title": "Cena", "event_date": "2025-12-24", "type": "cita"}
    del payload[missing]
    response = client.post("/api/calendar", json=payload, headers=julia)
    assert response.status_code == 400
    assert response.json() == {"error": "Faltan campos obligatorios (título, fecha, tipo)"}


def test_create_without_token(client):
    response = create(client, {})
    assert response.status_code == 401
    assert response.json() == {"error": "No autenticado"}
    assert client.get("/api/calendar").json() == []


def test_create_forbidden(client, mallory):
    assert create(client, mallory).status_code == 403


def test_ordering(client, julia):
    create(client, julia, title="Tarde", event_date="2025-12-24", event_time="20:00")
    create(client, julia, title="Todo el día", event_date="2025-12-24", event_time="")
    create(client, julia, title="Mañana", event_date="2025-12-24", event_time="09:30")
    create(client, julia, title="Antes", event_date="2025-12-01", event_time="23:00")

    titles = [event["title"] for event in client.get("/api/calendar").json()]
    assert titles == ["Antes", "Todo el día", "Mañana", "Tarde"]


def test_update_by_path_and_query(client, julia):
    event = create(client, julia).json()

    response = client.put(f"/api/calendar/{event['id']}", json={"event_time": "21:00"}, headers=julia)
    assert response.status_code == 200
    assert response.json()["event_time"] == "21:00:00"
    assert response.json()["title"] == "Cena"

    response = client.put(f"/api/calendar?id={event['id']}", json={"title": "Cena de Nochebuena", "type": "evento"}, headers=julia)
    assert response.json()["title"] == "Cena de Nochebuena"
    assert response.json()["type"] == "event"


def test_update_errors(client, julia, mallory):
    event = create(client, julia).json()
    assert client.put("/api/calendar/999", json={"title": "x"}, headers=julia).status_code == 404
    assert client.put("/api/calendar", json={"title": "x"}, headers=julia).status_code == 400
    assert client.put(f"/api/calendar/{event['id']}", json={"title": " "}, headers=julia).status_code == 400
    assert client.put(f"/api/calendar/{event['id']}", json={"title": "x"}, headers=mallory).status_code == 403


def test_delete(client, julia):
    first = create(client, julia).json()
    second = create(client, julia).json()
    assert client.delete(f"/api/calendar/{first['id']}", headers=julia).status_code == 200
    response = client.delete(f"/api/calendar?id={second['id']}", headers=julia)
    assert response.json() == {"message": "Evento eliminado con éxito"}
    assert client.get("/api/calendar").json() == []
    assert client.delete(f"/api/calendar/{first['id']}", headers=julia).status_code == 404
