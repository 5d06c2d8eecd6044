"""Tests for the /v1/thermostats endpoints."""
from datetime import datetime

import pytest


def parse_time(value):
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def assert_error(response, status, message):
    assert response.status_code == status
    data = response.json()
    assert data["code"] == status
    assert data["message"] == message
    assert "description" in data
    return data


def test_list_thermostats(client):
    response = client.get("/v1/thermostats")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    data = response.json()
    assert sorted(t["id"] for t in data) == [1, 2]
    assert {t["name"] for t in data} == {"Downstairs Thermostat", "Upstairs Thermostat"}


def test_list_empty_home_is_not_found(empty_client):
    response = empty_client.get("/v1/thermostats")
    data = assert_error(response, 404, "Not Found")
    assert data["description"] == "No thermostats were found."


def test_get_thermostat(client):
    response = client.get("/v1/thermostats/1")
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == 1
    assert data["name"] == "Downstairs Thermostat"
    assert data["currentTemp"] == 71
    assert data["previousTemp"] == 0
    assert data["mode"] == "heat"
    assert data["coolSetPoint"] == 68
    assert data["heatSetPoint"] == 72
    assert data["fan"] == "auto"
    assert "lastChanged" in data


def test_get_unknown_thermostat(client):
    data = assert_error(client.get("/v1/thermostats/999"), 404, "Not Found")
    assert data["description"] == "No thermostat found for id: 999"


@pytest.mark.parametrize("bad_id", ["abc", "1.5", "one", "0_1", "%201", "%EF%BC%91"])
def test_get_invalid_identifier(client, bad_id):
    assert_error(client.get(f"/v1/thermostats/{bad_id}"), 400, "Invalid identifier provided")


@pytest.mark.parametrize("field, expected", [
    ("name", "Downstairs Thermostat"),
    ("currentTemp", 71),
    ("mode", "heat"),
    ("coolSetPoint", 68),
    ("heatSetPoint", 72),
    ("fan", "auto"),
])
def test_get_field_thermostat_1(client, field, expected):
    response = client.get(f"/v1/thermostats/1/{field}")
    assert response.status_code == 200
    assert response.json() == expected


@pytest.mark.parametrize("field, expected", [
    ("name", "Upstairs Thermostat"),
    ("currentTemp", 72),
    ("mode", "cool"),
    ("coolSetPoint", 69),
    ("heatSetPoint", 73),
    ("fan", "on"),
])
def test_get_field_thermostat_2(client, field, expected):
    assert client.get(f"/v1/thermostats/2/{field}").json() == expected


def test_get_field_invalid_property(client):
    assert_error(client.get("/v1/thermostats/1/other"), 400, "Invalid Property")


def test_get_field_previous_temp_is_not_a_property(client):
    assert_error(client.get("/v1/thermostats/1/previousTemp"), 400, "Invalid Property")


def test_get_field_unknown_thermostat(client):
    assert_error(client.get("/v1/thermostats/999/name"), 404, "Not Found")


def test_get_field_zero_value_is_not_found(client, store):
    # A thermostat stored with currentTemp 0 reports the field as missing
    t = store.get(1)
    store._thermostats[1] = t.model_copy(update={"current_temp": 0})
    data = assert_error(client.get("/v1/thermostats/1/currentTemp"), 404, "Not Found")
    assert data["description"] == "No field 'currentTemp' exists for requested thermostat."


def test_put_changes_only_given_field(client):
    before = client.get("/v1/thermostats/1").json()
    response = client.put("/v1/thermostats/1", json={"mode": "cool"})
    assert response.status_code == 200
    assert response.content == b""

    after = client.get("/v1/thermostats/1").json()
    assert after["mode"] == "cool"
    for key in ("name", "coolSetPoint", "heatSetPoint", "fan", "currentTemp", "previousTemp"):
        assert after[key] == before[key]
    assert parse_time(after["lastChanged"]) > parse_time(before["lastChanged"])


def test_put_bulk_update(client):
    body = {
        "name": "Other Thermostat",
        "coolSetPoint": 74,
        "heatSetPoint": 71,
        "mode": "cool",
        "fan": "auto",
    }
    assert client.put("/v1/thermostats/1", json=body).status_code == 200

    t = client.get("/v1/thermostats/1").json()
    assert t["name"] == "Other Thermostat"
    assert t["coolSetPoint"] == 74
    assert t["heatSetPoint"] == 71
    assert t["mode"] == "cool"
    assert t["fan"] == "auto"
    assert t["currentTemp"] == 72
    assert t["previousTemp"] == 71


def test_put_empty_fields_change_nothing(client):
    before = client.get("/v1/thermostats/2").json()
    body = {"name": "", "mode": "", "coolSetPoint": 0, "heatSetPoint": 0, "fan": "", "currentTemp": 0}
    assert client.put("/v1/thermostats/2", json=body).status_code == 200

    after = client.get("/v1/thermostats/2").json()
    changed = {k for k in before if before[k] != after[k]}
    assert changed == {"lastChanged"}


def test_put_invalid_operating_mode(client):
    data = assert_error(client.put("/v1/thermostats/1", json={"mode": "on"}), 400, "Invalid Operating Mode")
    assert "'cool', 'heat', or 'off'" in data["description"]
    assert client.get("/v1/thermostats/1/mode").json() == "heat"


@pytest.mark.parametrize("body, message", [
    ({"fan": "off"}, "Invalid Fan Mode"),
    ({"coolSetPoint": 29}, "Invalid Cool Set Point"),
    ({"coolSetPoint": 101}, "Invalid Cool Set Point"),
    ({"heatSetPoint": 29}, "Invalid Heat Set Point"),
    ({"heatSetPoint": 101}, "Invalid Heat Set Point"),
    ({"currentTemp": 75}, "Non-Writable Field"),
])
def test_put_validation_errors(client, body, message):
    assert_error(client.put("/v1/thermostats/1", json=body), 400, message)


@pytest.mark.parametrize("content", [b"", b"{not json", b'{"coolSetPoint": "hot"}', b"[1, 2]"])
def test_put_invalid_json_body(client, content):
    response = client.put(
        "/v1/thermostats/1", content=content, headers={"Content-Type": "application/json"}
    )
    assert_error(response, 400, "Invalid JSON body provided")


def test_put_unknown_thermostat(client):
    assert_error(client.put("/v1/thermostats/999", json={"mode": "cool"}), 404, "Not Found")


def test_put_invalid_identifier(client):
    assert_error(client.put("/v1/thermostats/x", json={"mode": "cool"}), 400, "Invalid identifier provided")


def test_post_creates_thermostat(client):
    body = {"name": "X", "mode": "heat", "coolSetPoint": 72, "heatSetPoint": 68, "fan": "on"}
    response = client.post("/v1/thermostats", json=body)
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == 3
    assert data["name"] == "X"
    assert data["mode"] == "heat"
    assert data["currentTemp"] == 70
    assert data["fan"] == "on"

    assert client.get("/v1/thermostats/3").json() == data
    assert len(client.get("/v1/thermostats").json()) == 3


def test_post_fills_defaults(client):
    data = client.post("/v1/thermostats", json={}).json()
    assert data["id"] == 3
    assert data["name"] == "Thermostat #3"
    assert data["mode"] == "off"
    assert data["coolSetPoint"] == 71
    assert data["heatSetPoint"] == 71
    assert data["fan"] == "auto"
    assert data["currentTemp"] == 71


def test_post_ids_increase(client):
    ids = [client.post("/v1/thermostats", json={}).json()["id"] for _ in range(3)]
    assert ids == [3, 4, 5]


def test_post_into_empty_home(empty_client):
    assert empty_client.post("/v1/thermostats", json={"name": "First"}).json()["id"] == 1


def test_post_validation_error(client):
    assert_error(client.post("/v1/thermostats", json={"fan": "off"}), 400, "Invalid Fan Mode")
    assert len(client.get("/v1/thermostats").json()) == 2


def test_post_invalid_json(client):
    response = client.post("/v1/thermostats", content=b"nope", headers={"Content-Type": "application/json"})
    assert_error(response, 400, "Invalid JSON body provided")


def test_resolved_thermostat_attached_to_request(app, client):
    from fastapi import Depends, Request
    from pythermostat.server.api.dependencies import resolve_thermostat

    @app.get("/probe/{thermostat_id}")
    def probe(request: Request, thermostat=Depends(resolve_thermostat)):
        return {"same": request.state.thermostat is thermostat}

    assert client.get("/probe/2").json() == {"same": True}


def test_unknown_route_uses_error_shape(client):
    assert_error(client.get("/v1/nothing"), 404, "Not Found")


def test_method_not_allowed_uses_error_shape(client):
    assert_error(client.delete("/v1/thermostats/1"), 405, "Method Not Allowed")
