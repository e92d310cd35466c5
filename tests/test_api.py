from __future__ import annotations

from datetime import date


def _register(client, **overrides):
    payload = {
        "dateRange": {"from": "2024-06-10", "to": "2024-06-12"},
        "worker": "Alice Smith",
        "area": "Office",
        "startTime": "09:00",
        "endTime": "17:00",
        "location": "On-site",
    }
    payload.update(overrides)
    return client.post("/api/shifts", json=payload)


def _set_view(client, **data):
    return client.post("/api/view", json=data)


def test_roster_endpoints(client):
    roster = client.get("/api/roster").get_json()
    assert roster["areas"] == sorted(roster["areas"])
    assert "Bob Johnson" in roster["workers"]

    factory = client.get("/api/roster/Factory/workers").get_json()
    assert factory == {"workers": ["Bob Johnson", "Grace Wilson"], "worker": ""}
    assert client.get("/api/roster/Nowhere/workers").get_json() == {"workers": [], "worker": ""}


def test_area_change_keeps_worker_only_if_in_new_area(client):
    kept = client.get("/api/roster/Factory/workers", query_string={"worker": "Grace Wilson"})
    assert kept.get_json()["worker"] == "Grace Wilson"

    reset = client.get("/api/roster/Factory/workers", query_string={"worker": "Alice Smith"})
    assert reset.get_json()["worker"] == ""


def test_register_creates_shift_per_day(client):
    res = _register(client)

    assert res.status_code == 201
    created = res.get_json()["shifts"]
    assert [s["date"] for s in created] == ["2024-06-10", "2024-06-11", "2024-06-12"]
    assert len(client.get("/api/shifts").get_json()) == 3


def test_register_validation_error_adds_nothing(client):
    res = _register(client, startTime="18:00", endTime="09:00")

    assert res.status_code == 400
    assert "endTime" in res.get_json()["errors"]
    assert client.get("/api/shifts").get_json() == []


def test_list_shifts_with_filter(client):
    _register(client)
    _register(client, worker="Bob Johnson", area="Factory",
              dateRange={"from": "2024-06-10", "to": "2024-06-10"})

    bob = client.get("/api/shifts", query_string={"filter_type": "worker", "filter_value": "Bob Johnson"}).get_json()
    assert [s["worker"] for s in bob] == ["Bob Johnson"]
    assert client.get("/api/shifts", query_string={"filter_type": "bogus", "filter_value": "x"}).status_code == 400


def test_update_and_delete(client):
    shift = _register(client).get_json()["shifts"][0]

    res = client.put(f"/api/shifts/{shift['id']}", json={
        "worker": "Edward Davis", "area": "Office",
        "startTime": "07:00", "endTime": "15:00", "location": "Remote",
    })
    assert res.status_code == 200
    assert res.get_json()["worker"] == "Edward Davis"
    assert res.get_json()["date"] == "2024-06-10"
    assert len(client.get("/api/shifts").get_json()) == 3

    assert client.delete(f"/api/shifts/{shift['id']}").status_code == 200
    assert client.delete(f"/api/shifts/{shift['id']}").status_code == 404
    assert client.put("/api/shifts/missing", json={}).status_code == 404


def test_calendar_is_loading_until_initialized(client):
    data = client.get("/api/calendar").get_json()

    assert data["loading"] is True
    assert data["cells"] == []
    assert data["title"] == "Loading..."


def test_index_initializes_reference_date(client, session):
    assert client.get("/").status_code == 200
    assert session.reference_date == date.today()
    assert client.get("/api/calendar").get_json()["loading"] is False


def test_index_has_filter_and_detail_controls(client):
    _set_view(client, date="2024-06-10", view="month", filter_type="area", filter_value="Factory")

    html = client.get("/").get_data(as_text=True)

    assert 'id="filter-form"' in html
    assert '<option value="area" selected>' in html
    assert 'id="filter-clear"' in html
    assert 'id="detail-modal"' in html
    assert "/api/detail/edit/" in html
    assert "method: 'DELETE'" in html
    assert ".innerHTML" not in html


def test_index_day_view_renders_shift_table(client):
    _register(client, dateRange={"from": "2024-06-10", "to": "2024-06-10"}, comments="<b>keys</b>")
    _set_view(client, date="2024-06-10", view="day")

    html = client.get("/").get_data(as_text=True)

    assert "<th>スタッフ</th>" in html
    assert "<td>Alice Smith</td>" in html
    assert "&lt;b&gt;keys&lt;/b&gt;" in html
    assert 'data-open-day="2024-06-10"' in html
    assert "<div class=\"col\">Mon</div>" not in html


def test_view_navigation(client):
    data = _set_view(client, date="2024-01-31", view="monthly").get_json()
    assert data["start"] == "2024-01-01"
    assert data["end"] == "2024-02-04"

    data = _set_view(client, action="next").get_json()
    assert data["reference_date"] == "2024-02-29"

    data = _set_view(client, view="week").get_json()
    assert data["reference_date"] == "2024-02-29"
    assert (data["start"], data["end"]) == ("2024-02-26", "2024-03-03")

    data = _set_view(client, action="prev").get_json()
    assert data["reference_date"] == "2024-02-22"

    assert _set_view(client, action="sideways").status_code == 400


def test_calendar_cells_show_filtered_and_total(client):
    _register(client, dateRange={"from": "2024-06-10", "to": "2024-06-10"})
    _register(client, worker="Bob Johnson", area="Factory",
              dateRange={"from": "2024-06-10", "to": "2024-06-10"})
    _set_view(client, date="2024-06-10", view="day",
              filter_type="worker", filter_value="Bob Johnson")

    cells = client.get("/api/calendar").get_json()["cells"]

    assert len(cells) == 1
    assert cells[0]["shift_count"] == 1
    assert cells[0]["total_count"] == 2


def test_detail_flow(client):
    shift = _register(client, dateRange={"from": "2024-06-10", "to": "2024-06-10"}).get_json()["shifts"][0]

    empty = client.post("/api/detail/open", json={"date": "2024-06-11"}).get_json()
    assert empty["state"] == "closed"
    assert empty["notice"]

    opened = client.post("/api/detail/open", json={"date": "2024-06-10"}).get_json()
    assert opened["state"] == "viewing"
    assert opened["shift_count"] == 1

    editing = client.post(f"/api/detail/edit/{shift['id']}").get_json()
    assert editing["state"] == "editing"

    bad = client.post("/api/detail/save", json={"worker": "Alice Smith", "area": "Office",
                                                 "startTime": "10:00", "endTime": "09:00",
                                                 "location": "On-site"})
    assert bad.status_code == 400
    assert client.get("/api/detail").get_json()["state"] == "editing"

    saved = client.post("/api/detail/save", json={"worker": "Alice Smith", "area": "Office",
                                                   "startTime": "10:00", "endTime": "12:00",
                                                   "location": "On-site"}).get_json()
    assert saved["detail"]["state"] == "viewing"
    assert saved["shift"]["startTime"] == "10:00"

    client.delete(f"/api/shifts/{shift['id']}")
    assert client.get("/api/detail").get_json()["state"] == "closed"


def test_detail_edit_requires_open_view(client):
    assert client.post("/api/detail/edit/whatever").status_code == 409
    assert client.post("/api/detail/save", json={}).status_code == 409


def test_export_excel_uses_view_and_filter(client):
    _register(client)
    _register(client, worker="Bob Johnson", area="Factory")
    _set_view(client, date="2024-06-12", view="week", filter_type="area", filter_value="Factory")

    res = client.post("/api/export_excel")

    assert res.status_code == 200
    assert "shiftmaster_schedule_2024-W24_by_area.xlsx" in res.headers["Content-Disposition"]
    assert res.data[:2] == b"PK"


def test_export_pdf(client):
    _register(client)
    _set_view(client, date="2024-06-10", view="day")

    res = client.post("/api/export_pdf")

    assert res.status_code == 200
    assert res.mimetype == "application/pdf"
    assert "shiftmaster_schedule_2024-06-10_by_area.pdf" in res.headers["Content-Disposition"]


def test_export_without_data_is_rejected(client):
    _register(client)
    _set_view(client, date="2025-01-01", view="month")

    assert client.post("/api/export_excel").status_code == 400
    assert client.post("/api/export_pdf").status_code == 400


def test_persisted_shifts_survive_restart(local_storage):
    from app import create_app

    first = create_app({"TESTING": True, "PERSIST_SHIFTS": True}).test_client()
    assert _register(first).status_code == 201
    assert local_storage.exists()

    second = create_app({"TESTING": True, "PERSIST_SHIFTS": True}).test_client()
    assert len(second.get("/api/shifts").get_json()) == 3


def test_corrupt_storage_starts_empty(local_storage):
    from app import create_app

    local_storage.parent.mkdir(parents=True)
    local_storage.write_text('{"shiftmaster_shifts": [{"date": "garbage"}]}', encoding="utf-8")

    client = create_app({"TESTING": True, "PERSIST_SHIFTS": True}).test_client()
    assert client.get("/api/shifts").get_json() == []


def test_mixed_time_types_in_storage_start_empty(local_storage):
    import json

    from app import create_app

    local_storage.parent.mkdir(parents=True)
    local_storage.write_text(json.dumps({"shiftmaster_shifts": [
        {"id": "a1", "date": "2024-06-10", "worker": "Alice Smith", "area": "Office",
         "startTime": "09:00", "endTime": "17:00", "location": "On-site"},
        {"id": "a2", "date": "2024-06-10", "worker": "Nobody", "area": "Office",
         "startTime": 900, "endTime": "bogus", "location": "Mars"},
    ]}), encoding="utf-8")

    client = create_app({"TESTING": True, "PERSIST_SHIFTS": True}).test_client()
    assert client.get("/api/shifts").get_json() == []


def test_non_string_view_mode_is_rejected(client):
    res = _set_view(client, view=5)
    assert res.status_code == 400
    assert "error" in res.get_json()

    assert _set_view(client, filter_type=["worker"], filter_value="Alice Smith").status_code == 400


def test_non_object_body_is_treated_as_empty(client):
    res = client.post("/api/detail/open", json=["2024-06-10"])
    assert res.status_code == 400
    assert res.get_json()["error"] == "日付を指定してください"

    assert client.post("/api/view", json=[1, 2]).status_code == 200
    assert _register(client).status_code == 201
    assert client.post("/api/shifts", json="Alice Smith").status_code == 400
