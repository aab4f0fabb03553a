import pytest

from app import create_app


@pytest.fixture
def client():
    app = create_app("TestingConfig")
    return app.test_client()


def _new_session(client) -> str:
    resp = client.post("/api/calculator/sessions")
    assert resp.status_code == 201
    return resp.get_json()["data"]["session_id"]


def test_evaluate_endpoint_balances_parentheses(client):
    resp = client.post("/api/calculator/evaluate", json={"expression": "(1+2"})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["success"] is True
    assert data["data"]["result"] == "3"
    assert data["data"]["normalized"] == "(1+2)"


def test_evaluate_endpoint_reports_error_sentinel(client):
    resp = client.post("/api/calculator/evaluate", json={"expression": "2+*3"})
    assert resp.status_code == 200
    payload = resp.get_json()["data"]
    assert payload["ok"] is False
    assert payload["result"] == "Error"


def test_evaluate_endpoint_angle_unit(client):
    resp = client.post("/api/calculator/evaluate", json={"expression": "sin(90)", "angle_unit": "degree"})
    assert resp.get_json()["data"]["result"] == "1"


def test_blank_expression_rejected(client):
    resp = client.post("/api/calculator/evaluate", json={"expression": "   "})
    assert resp.status_code == 400
    data = resp.get_json()
    assert data["success"] is False
    assert data["error"]["code"] == "calculator.empty_expression"


def test_unknown_fields_rejected(client):
    resp = client.post("/api/calculator/evaluate", json={"expression": "1", "extra": True})
    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "calculator.invalid_request"


def test_session_press_flow_chains_results(client):
    session_id = _new_session(client)
    for token in ["2", "+", "2", "="]:
        resp = client.post(f"/api/calculator/sessions/{session_id}/press", json={"token": token})
        assert resp.status_code == 200
    state = resp.get_json()["data"]
    assert state["result"] == "4"
    assert state["outcome"]["ok"] is True

    client.post(f"/api/calculator/sessions/{session_id}/press", json={"token": "*3"})
    resp = client.post(f"/api/calculator/sessions/{session_id}/press", json={"token": "="})
    state = resp.get_json()["data"]
    assert state["expression"] == "12"
    assert [item["result"] for item in state["history"]] == ["12", "4"]


def test_session_keys_endpoint(client):
    session_id = _new_session(client)
    for key in ["9", "Backspace", "8", "Enter"]:
        resp = client.post(f"/api/calculator/sessions/{session_id}/keys", json={"key": key})
    state = resp.get_json()["data"]
    assert state["ignored"] is False
    assert state["result"] == "8"

    resp = client.post(f"/api/calculator/sessions/{session_id}/keys", json={"key": "Shift"})
    state = resp.get_json()["data"]
    assert state["ignored"] is True
    assert state["expression"] == "8"


def test_history_restore_and_clear(client):
    session_id = _new_session(client)
    for token in ["1", "+", "1", "=", "*5", "="]:
        client.post(f"/api/calculator/sessions/{session_id}/press", json={"token": token})

    resp = client.post(f"/api/calculator/sessions/{session_id}/history/1/restore")
    state = resp.get_json()["data"]
    assert (state["expression"], state["result"]) == ("1+1", "2")
    assert len(state["history"]) == 2

    resp = client.post(f"/api/calculator/sessions/{session_id}/history/7/restore")
    assert resp.status_code == 404

    resp = client.delete(f"/api/calculator/sessions/{session_id}/history")
    assert resp.get_json()["data"]["history"] == []


def test_history_capacity_from_settings():
    app = create_app("TestingConfig")
    app.config["PLUGIN_SETTINGS"]["calculator"] = {"history_capacity": 5}
    client = app.test_client()
    session_id = _new_session(client)
    for _ in range(7):
        client.post(f"/api/calculator/sessions/{session_id}/press", json={"token": "+1"})
        resp = client.post(f"/api/calculator/sessions/{session_id}/press", json={"token": "="})
    state = resp.get_json()["data"]
    assert state["history_capacity"] == 5
    assert len(state["history"]) == 5


def test_unknown_session_returns_404(client):
    resp = client.get("/api/calculator/sessions/missing")
    assert resp.status_code == 404
    assert resp.get_json()["error"]["code"] == "calculator.session_not_found"


def test_delete_session(client):
    session_id = _new_session(client)
    resp = client.delete(f"/api/calculator/sessions/{session_id}")
    assert resp.get_json()["data"]["deleted"] is True
    assert client.get(f"/api/calculator/sessions/{session_id}").status_code == 404


def test_keypad_endpoint(client):
    payload = client.get("/api/calculator/keypad").get_json()["data"]
    assert "sqrt(" in payload["buttons"]
    assert payload["keys"]["Enter"] == "="


def test_session_limit_from_settings():
    app = create_app("TestingConfig")
    app.config["PLUGIN_SETTINGS"]["calculator"] = {"max_sessions": 1}
    client = app.test_client()
    _new_session(client)
    resp = client.post("/api/calculator/sessions")
    assert resp.status_code == 429
    assert resp.get_json()["error"]["code"] == "calculator.session_limit"


def test_session_limits_are_per_app():
    limited = create_app("TestingConfig")
    limited.config["PLUGIN_SETTINGS"]["calculator"] = {"max_sessions": 1}
    roomy = create_app("TestingConfig")
    limited_client = limited.test_client()
    roomy_client = roomy.test_client()

    session_id = _new_session(limited_client)
    _new_session(roomy_client)
    _new_session(roomy_client)

    assert limited_client.post("/api/calculator/sessions").status_code == 429
    assert roomy_client.get(f"/api/calculator/sessions/{session_id}").status_code == 404
