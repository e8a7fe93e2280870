"""
Estimate API tests — session lifecycle over HTTP.

Tests:
1-3.   Health and catalog options
4-9.   Start, edit, parameters, added rows
10-13. Compare and use-price
14-15. Quote generation handoff
"""


def _start(client, family="anti_heeling", **extra):
    response = client.post("/api/estimate/start", json={"family": family, **extra})
    assert response.status_code == 200
    return response.json()


def _line(payload, line_id):
    for item in payload["state"]["line_items"]:
        if item["id"] == line_id:
            return item
    return None


# ============================================================
# Health and catalog
# ============================================================

def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_catalog_options_cargo(client):
    response = client.get("/api/catalog/options", params={"family": "cargo"})
    assert response.status_code == 200
    data = response.json()
    assert "SD100" in data["pumps"]
    assert data["catalog_version"] == "2025-pricelist"


def test_catalog_options_unknown_family(client):
    response = client.get("/api/catalog/options", params={"family": "dredger"})
    assert response.status_code == 422


# ============================================================
# Session lifecycle
# ============================================================

def test_start_returns_state_and_breakdown(client):
    data = _start(client, project_id="P-100")
    assert data["family"] == "anti_heeling"
    assert data["project_id"] == "P-100"
    assert _line(data, "pump")["quantity"] == 1
    assert data["breakdown"]["equipment_cost"] > 0
    assert data["breakdown"]["sales_price"] > data["breakdown"]["total_self_cost"]


def test_get_unknown_session_404(client):
    response = client.get("/api/estimate/does-not-exist")
    assert response.status_code == 404


def test_edit_persists_and_fans_out(client):
    data = _start(client)
    session_id = data["session_id"]

    response = client.post(f"/api/estimate/{session_id}/edit", json={
        "line_id": "pump", "field": "quantity", "value": "2",
    })
    assert response.status_code == 200
    assert _line(response.json(), "motor")["quantity"] == 2

    reloaded = client.get(f"/api/estimate/{session_id}").json()
    assert _line(reloaded, "starter")["quantity"] == 2


def test_cargo_scenario_over_http(client):
    session_id = _start(client, family="cargo")["session_id"]
    for field, value in (("length", 18), ("variant", "CST"), ("quantity", 2)):
        response = client.post(f"/api/estimate/{session_id}/edit", json={
            "line_id": "pump", "field": field, "value": value,
        })
    data = response.json()
    assert _line(data, "pump")["unit_price"] == 235000
    assert data["breakdown"]["line_totals"]["pump"] == 470000


def test_parameters_update_and_validation(client):
    session_id = _start(client)["session_id"]

    response = client.post(f"/api/estimate/{session_id}/parameters", json={
        "admin_percent": 0, "profit_margin_percent": 0, "bottom_markup_percent": 0,
        "agent_commission_percent": 0,
    })
    assert response.status_code == 200
    breakdown = response.json()["breakdown"]
    assert breakdown["sales_price"] == breakdown["equipment_cost"]

    response = client.post(f"/api/estimate/{session_id}/parameters", json={"usd_rate": 0})
    assert response.status_code == 422


def test_add_valve_row(client):
    session_id = _start(client)["session_id"]
    response = client.post(f"/api/estimate/{session_id}/lines", json={"category": "valve_electric"})
    assert response.status_code == 200
    assert _line(response.json(), "valve_electric_2") is not None

    response = client.post(f"/api/estimate/{session_id}/lines", json={"category": "motor"})
    assert response.status_code == 400


# ============================================================
# Compare and use-price
# ============================================================

def test_compare_without_previous_snapshot(client):
    session_id = _start(client)["session_id"]
    response = client.post(f"/api/estimate/{session_id}/compare", json={
        "currency": "NOK", "flow_spec": {"capacity": 300},
    })
    assert response.status_code == 200
    assert response.json()["diff"]["has_previous"] is False


def test_use_price_defaults_to_sales_price(client):
    data = _start(client)
    session_id = data["session_id"]

    response = client.post(f"/api/estimate/{session_id}/use-price", json={"currency": "NOK"})
    assert response.status_code == 200
    result = response.json()
    assert result["resolved_price"] == data["breakdown"]["sales_price"]
    assert result["total_self_cost_in_currency"] == data["breakdown"]["total_self_cost"]
    assert result["diff"]["has_previous"] is False

    status = client.get(f"/api/estimate/{session_id}").json()["status"]
    assert status == "priced"


def test_use_price_in_usd(client):
    data = _start(client)
    session_id = data["session_id"]
    response = client.post(f"/api/estimate/{session_id}/use-price", json={"currency": "USD"})
    result = response.json()
    assert result["currency"] == "USD"
    assert result["resolved_price"] == data["breakdown"]["converted"]["USD"]["sales_price"]


def test_compare_after_use_price(client):
    session_id = _start(client, project_id="P-7")["session_id"]
    client.post(f"/api/estimate/{session_id}/use-price", json={
        "currency": "NOK", "price": 100, "flow_spec": {"capacity": 10},
    })

    response = client.post(f"/api/estimate/{session_id}/compare", json={
        "currency": "NOK", "price": 120, "flow_spec": {"capacity": 12},
    })
    data = response.json()
    assert data["diff"]["has_previous"] is True
    assert data["diff"]["price_delta"] == 20
    assert data["changes"] == ["Capacity (m3/h): 10 → 12"]


# ============================================================
# Quote generation handoff
# ============================================================

def test_generate_returns_full_estimate(client):
    data = _start(client)
    session_id = data["session_id"]
    client.post(f"/api/estimate/{session_id}/edit", json={
        "line_id": "pump", "field": "quantity", "value": 2,
    })

    response = client.post(f"/api/estimate/{session_id}/generate", json={
        "currency": "NOK", "flow_spec": {"capacity": 300},
    })
    assert response.status_code == 200
    result = response.json()
    assert result["session_id"] == session_id
    assert result["family"] == "anti_heeling"
    assert _line(result, "pump")["quantity"] == 2
    assert _line(result, "motor")["quantity"] == 2
    assert result["resolved_price"] == result["breakdown"]["sales_price"]
    assert result["flow_spec"]["capacity"] == 300
    assert result["snapshot"]["price_per_unit"] == result["resolved_price"]
    assert result["diff"]["has_previous"] is False

    status = client.get(f"/api/estimate/{session_id}").json()["status"]
    assert status == "quoted"


def test_generate_after_use_price_reports_changes(client):
    session_id = _start(client)["session_id"]
    client.post(f"/api/estimate/{session_id}/use-price", json={
        "currency": "NOK", "price": 100000, "flow_spec": {"capacity": 300},
    })
    response = client.post(f"/api/estimate/{session_id}/generate", json={
        "currency": "NOK", "price": 120000, "flow_spec": {"capacity": 350},
    })
    diff = response.json()["diff"]
    assert diff["has_previous"] is True
    assert diff["price_delta"] == 20000
    assert [c["label"] for c in diff["changed_fields"]] == ["Capacity (m3/h)"]


def test_generate_unknown_session_404(client):
    response = client.post("/api/estimate/no-such-id/generate", json={"currency": "NOK"})
    assert response.status_code == 404
