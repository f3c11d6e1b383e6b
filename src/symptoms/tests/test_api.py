"""End-to-end tests for the symptom and cycle HTTP endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

V1 = "/api/v1"


def log_entry(client: TestClient, **body) -> dict:
    resp = client.post(f"{V1}/symptoms/entries", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestHealth:
    def test_health_reports_entry_count(self, client: TestClient) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "healthy"
        assert body["entries"] == 0


class TestEntryEndpoints:
    def test_create_entry_normalizes(self, client: TestClient) -> None:
        body = log_entry(
            client,
            date="2026-03-05",
            symptoms={"stress": 14, "moonFace": "3", "acne": -2},
            cycleDay="Day 9",
            cyclePhase="Luteal",
            emotionalEvent="exam",
        )
        assert body["date"] == "2026-03-05"
        assert body["symptoms"] == {
            "acne": 0,
            "moonFace": 3,
            "bloating": 0,
            "stress": 10,
            "eczema": 0,
            "fatigue": 0,
        }
        assert body["severityBands"]["stress"] == "Severe"
        assert body["severityBands"]["acne"] == "None"
        assert body["cyclePhase"] == "Ovulation"
        assert body["emotionalEvent"] == "exam"
        assert "photo" not in body

    def test_photo_round_trips_when_present(self, client: TestClient) -> None:
        body = log_entry(client, date="2026-03-05", photo="data:image/png;base64,iVBORw0K")
        assert body["photo"] == "data:image/png;base64,iVBORw0K"

    def test_bad_date_is_422(self, client: TestClient) -> None:
        resp = client.post(f"{V1}/symptoms/entries", json={"date": "not-a-date"})
        assert resp.status_code == 422

    def test_null_symptoms_default_to_zero(self, client: TestClient) -> None:
        body = log_entry(client, date="2026-03-01", symptoms=None)
        assert set(body["symptoms"].values()) == {0}
        assert len(body["symptoms"]) == 6

    def test_malformed_fields_are_normalized_not_rejected(self, client: TestClient) -> None:
        body = log_entry(
            client,
            date="2026-03-01",
            symptoms=[3, 4],
            cycleDay=5,
            notes=42,
            emotionalEvent=None,
        )
        assert set(body["symptoms"].values()) == {0}
        assert body["cycleDay"] == "5"
        assert body["cyclePhase"] == ""
        assert body["notes"] == "42"
        assert body["emotionalEvent"] == ""

    def test_notes_whitespace_preserved(self, client: TestClient) -> None:
        body = log_entry(client, date="2026-03-01", notes="  indented\n")
        assert body["notes"] == "  indented\n"

    def test_date_with_trailing_junk_is_422(self, client: TestClient) -> None:
        resp = client.post(f"{V1}/symptoms/entries", json={"date": "2026-03-05garbage"})
        assert resp.status_code == 422

    def test_list_entries_in_insertion_order(self, client: TestClient) -> None:
        log_entry(client, date="2026-03-10", symptoms={"stress": 1})
        log_entry(client, date="2026-03-02", symptoms={"stress": 2})
        log_entry(client, date="2026-03-04", symptoms={"stress": 3})

        all_entries = client.get(f"{V1}/symptoms/entries").json()
        assert [e["date"] for e in all_entries] == ["2026-03-10", "2026-03-02", "2026-03-04"]

        last_two = client.get(f"{V1}/symptoms/entries", params={"limit": 2}).json()
        assert [e["symptoms"]["stress"] for e in last_two] == [2, 3]

    def test_each_app_has_its_own_store(self, client: TestClient) -> None:
        from src.main import create_app

        log_entry(client, date="2026-03-01")
        with TestClient(create_app()) as other:
            assert other.get(f"{V1}/symptoms/entries").json() == []


class TestAggregateEndpoints:
    def test_averages_empty(self, client: TestClient) -> None:
        body = client.get(f"{V1}/symptoms/averages").json()
        assert body["totalEntries"] == 0
        assert body["averages"]["stress"] == 0

    def test_averages_rounded(self, client: TestClient) -> None:
        for stress in (1, 2, 2):
            log_entry(client, date="2026-03-01", symptoms={"stress": stress})
        body = client.get(f"{V1}/symptoms/averages").json()
        assert body["totalEntries"] == 3
        assert body["averages"]["stress"] == 1.7

    def test_dashboard(self, client: TestClient) -> None:
        for day in range(1, 10):
            log_entry(client, date=f"2026-03-{day:02d}", symptoms={"bloating": 4})
        body = client.get(f"{V1}/symptoms/dashboard").json()
        assert body["totalEntries"] == 9
        assert body["highlights"] == {"stress": 0.0, "bloating": 4.0}
        assert len(body["recentEntries"]) == 7
        assert body["recentEntries"][0]["date"] == "2026-03-03"
        assert body["recentEntries"][0]["severityBands"]["bloating"] == "Moderate"

    def test_phase_profiles(self, client: TestClient) -> None:
        log_entry(client, date="2026-03-01", cycleDay="Break Day 3", symptoms={"fatigue": 8})
        body = client.get(f"{V1}/symptoms/phases").json()
        by_phase = {p["phase"]: p for p in body}
        assert set(by_phase) == {"Follicular", "Ovulation", "Luteal", "Menstrual"}
        assert by_phase["Menstrual"]["sampleCount"] == 1
        assert by_phase["Menstrual"]["averages"]["fatigue"] == 8.0


class TestSeriesEndpoints:
    def test_symptom_series(self, client: TestClient) -> None:
        log_entry(client, date="2026-03-05", cycleDay="Day 16", symptoms={"stress": 6})
        body = client.get(f"{V1}/symptoms/series/stress").json()
        assert body["symptom"] == "stress"
        assert body["window"] == 30
        (point,) = body["points"]
        assert point["date"] == "Mar 5"
        assert point["fullDate"] == "2026-03-05"
        assert point["displayLabel"] == "Mar 5 (Luteal)"
        assert point["values"] == {"stress": 6}
        assert point["symptoms"]["stress"] == 6

    def test_symptom_series_snake_case_name(self, client: TestClient) -> None:
        body = client.get(f"{V1}/symptoms/series/moon_face").json()
        assert body["symptom"] == "moonFace"
        assert body["points"] == []

    def test_unknown_symptom_is_404(self, client: TestClient) -> None:
        resp = client.get(f"{V1}/symptoms/series/headache")
        assert resp.status_code == 404

    def test_overview_window(self, client: TestClient) -> None:
        for day in range(1, 21):
            log_entry(client, date=f"2026-03-{day:02d}")
        body = client.get(f"{V1}/symptoms/series/overview").json()
        assert body["window"] == 14
        assert len(body["points"]) == 14
        assert body["points"][0]["fullDate"] == "2026-03-07"

        narrow = client.get(f"{V1}/symptoms/series/overview", params={"window": 3}).json()
        assert [p["fullDate"] for p in narrow["points"]] == [
            "2026-03-18",
            "2026-03-19",
            "2026-03-20",
        ]


class TestCycleEndpoints:
    def test_cycle_days(self, client: TestClient) -> None:
        labels = client.get(f"{V1}/cycle/days").json()["labels"]
        assert len(labels) == 28
        assert labels[-1] == "Break Day 7"

    def test_phase_preview(self, client: TestClient) -> None:
        body = client.get(f"{V1}/cycle/phase", params={"cycleDay": "Day 8"}).json()
        assert body == {"cycleDay": "Day 8", "cyclePhase": "Ovulation"}

    def test_phase_preview_unrecognised(self, client: TestClient) -> None:
        body = client.get(f"{V1}/cycle/phase", params={"cycleDay": "Day 22"}).json()
        assert body["cyclePhase"] == ""
