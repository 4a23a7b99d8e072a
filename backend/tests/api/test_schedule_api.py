"""
Tests for the schedule routes.

Tests cover:
- Weekly schedule retrieval
- Skip mutator (append + regenerate)
- Skip validation
- Completion from recorded sessions
- Degradation to an empty schedule on fetch errors (503 for skips)
- Session window edges
"""

from datetime import date, datetime, timedelta

import pytest
from sqlalchemy.exc import OperationalError


def _names(days):
    return [d["routine_day"]["name"] if d["routine_day"] else None for d in days]


class TestGetSchedule:
    """Tests for GET /clients/{client_id}/schedule."""

    def test_empty_without_assignments(self, client, next_monday):
        resp = client.get("/clients/1/schedule", params={"week": next_monday.isoformat()})

        assert resp.status_code == 200
        data = resp.json()
        assert data["routines"] == []
        assert data["schedule"] == []
        assert data["week_start"] == next_monday.isoformat()
        assert data["week_end"] == (next_monday + timedelta(days=6)).isoformat()

    def test_flexible_week(self, client, make_routine, make_assignment, next_monday):
        routine = make_routine()
        assignment = make_assignment(routine["id"], start_date=next_monday)

        resp = client.get("/clients/1/schedule", params={"week": (next_monday + timedelta(days=2)).isoformat()})

        assert resp.status_code == 200
        data = resp.json()
        assert len(data["routines"]) == 1
        row = data["routines"][0]
        assert row["assignment_id"] == assignment["id"]
        assert row["routine_name"] == "Full Body"
        assert _names(row["schedule"]) == ["A", "B", "C", "A", "B", "C", "A"]
        assert all(d["can_skip"] for d in row["schedule"])
        assert data["schedule"] == row["schedule"]

    def test_strict_week(self, client, make_routine, make_assignment, next_monday):
        routine = make_routine(days=("Push", "Pull", "Legs"), days_per_week=3)
        make_assignment(routine["id"], plan_type="strict", start_date=next_monday)

        data = client.get("/clients/1/schedule", params={"week": next_monday.isoformat()}).json()

        days = data["routines"][0]["schedule"]
        assert _names(days) == ["Push", "Pull", "Legs", None, None, None, None]
        assert [d["is_rest_day"] for d in days] == [False] * 3 + [True] * 4
        assert not any(d["can_skip"] for d in days)

    def test_only_own_active_assignments(self, client, make_routine, make_assignment, next_monday):
        routine = make_routine(is_public=True)
        make_assignment(routine["id"], client_id=2, start_date=next_monday)
        ended = make_assignment(make_routine(name="Old")["id"], start_date=next_monday)
        client.post(f"/assignments/{ended['id']}/deactivate")

        data = client.get("/clients/1/schedule", params={"week": next_monday.isoformat()}).json()
        assert data["routines"] == []

    def test_defaults_to_current_week(self, client):
        resp = client.get("/clients/1/schedule")
        assert resp.status_code == 200
        monday = date.today() - timedelta(days=date.today().isoweekday() - 1)
        assert resp.json()["week_start"] == monday.isoformat()

    def test_invalid_week(self, client):
        resp = client.get("/clients/1/schedule", params={"week": "2024-13-01"})
        assert resp.status_code == 400

    def test_completed_session_marks_day(self, client, make_routine, make_assignment, next_monday):
        routine = make_routine()
        assignment = make_assignment(routine["id"], start_date=next_monday)
        day_b = routine["routine_days"][1]

        start = datetime.combine(next_monday + timedelta(days=1), datetime.min.time()).replace(hour=18)
        s = client.post(
            "/sessions",
            json={
                "user_id": 1,
                "routine_day_id": day_b["id"],
                "assignment_id": assignment["id"],
                "start_time": start.isoformat(),
            },
        ).json()

        # in-progress sessions do not count
        days = client.get("/clients/1/schedule", params={"week": next_monday.isoformat()}).json()["schedule"]
        assert not days[1]["is_completed"]

        client.post(f"/sessions/{s['id']}/finish", json={"end_time": (start + timedelta(hours=1)).isoformat()})

        days = client.get("/clients/1/schedule", params={"week": next_monday.isoformat()}).json()["schedule"]
        assert days[1]["is_completed"]
        assert days[1]["workout_session"] == {"id": s["id"], "name": "B"}
        assert not days[1]["can_skip"]

    def test_session_window_edges(self, client, make_routine, make_assignment, next_monday):
        make_assignment(make_routine()["id"], start_date=next_monday - timedelta(days=7))
        midnight = datetime.combine(next_monday, datetime.min.time())
        starts = [
            midnight - timedelta(minutes=1),                     # previous Sunday 23:59
            midnight + timedelta(days=7) - timedelta(minutes=1),  # this Sunday 23:59
            midnight + timedelta(days=7),                        # next Monday 00:00
        ]
        for start in starts:
            s = client.post(
                "/sessions", json={"user_id": 1, "name": "Gym", "start_time": start.isoformat()}
            ).json()
            client.post(f"/sessions/{s['id']}/finish", json={"end_time": (start + timedelta(minutes=30)).isoformat()})

        days = client.get("/clients/1/schedule", params={"week": next_monday.isoformat()}).json()["schedule"]

        assert [d["is_completed"] for d in days] == [False] * 6 + [True]

    def test_fetch_failure_yields_empty_schedule(self, client, make_routine, make_assignment, next_monday, monkeypatch):
        make_assignment(make_routine()["id"], start_date=next_monday)

        def boom(*args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("backend unavailable"))

        monkeypatch.setattr("fittrack.services.schedule_data.get_sessions", boom)

        resp = client.get("/clients/1/schedule", params={"week": next_monday.isoformat()})

        assert resp.status_code == 200
        assert resp.json()["routines"] == []
        assert resp.json()["schedule"] == []


class TestSkipDay:
    """Tests for POST /clients/{client_id}/schedule/skips."""

    def test_skip_regenerates_week(self, client, make_routine, make_assignment, next_monday):
        assignment = make_assignment(make_routine()["id"], start_date=next_monday)
        tuesday = next_monday + timedelta(days=1)

        resp = client.post(
            "/clients/1/schedule/skips",
            json={"scheduled_date": tuesday.isoformat(), "assignment_id": assignment["id"]},
        )

        assert resp.status_code == 200
        days = resp.json()["routines"][0]["schedule"]
        assert _names(days) == ["A", None, "B", "C", "A", "B", "C"]
        assert days[1]["was_skipped"] and days[1]["is_rest_day"]

        # persisted: a fresh read sees the same projection
        again = client.get("/clients/1/schedule", params={"week": next_monday.isoformat()}).json()
        assert again["routines"][0]["schedule"] == days

        skips = client.get("/clients/1/schedule/skips").json()
        assert [(s["scheduled_date"], s["assignment_id"]) for s in skips] == [
            (tuesday.isoformat(), assignment["id"])
        ]

    def test_skipping_twice_is_idempotent(self, client, make_routine, make_assignment, next_monday):
        assignment = make_assignment(make_routine()["id"], start_date=next_monday)
        body = {"scheduled_date": next_monday.isoformat(), "assignment_id": assignment["id"]}

        first = client.post("/clients/1/schedule/skips", json=body)
        second = client.post("/clients/1/schedule/skips", json=body)

        assert first.status_code == second.status_code == 200
        assert first.json() == second.json()
        assert len(client.get("/clients/1/schedule/skips").json()) == 1

    def test_consecutive_skips_keep_shifting(self, client, make_routine, make_assignment, next_monday):
        assignment = make_assignment(make_routine()["id"], start_date=next_monday)
        for offset in (1, 2):
            client.post(
                "/clients/1/schedule/skips",
                json={
                    "scheduled_date": (next_monday + timedelta(days=offset)).isoformat(),
                    "assignment_id": assignment["id"],
                },
            )
        days = client.get("/clients/1/schedule", params={"week": next_monday.isoformat()}).json()["schedule"]
        assert _names(days) == ["A", None, None, "B", "C", "A", "B"]

    def test_strict_plan_cannot_skip(self, client, make_routine, make_assignment, next_monday):
        routine = make_routine(days=("Push", "Pull", "Legs"), days_per_week=3)
        assignment = make_assignment(routine["id"], plan_type="strict", start_date=next_monday)

        resp = client.post(
            "/clients/1/schedule/skips",
            json={"scheduled_date": next_monday.isoformat(), "assignment_id": assignment["id"]},
        )
        assert resp.status_code == 400
        assert client.get("/clients/1/schedule/skips").json() == []

    def test_past_day_cannot_skip(self, client, make_routine, make_assignment):
        start = date.today() - timedelta(days=10)
        assignment = make_assignment(make_routine()["id"], start_date=start)

        resp = client.post(
            "/clients/1/schedule/skips",
            json={"scheduled_date": (date.today() - timedelta(days=1)).isoformat(), "assignment_id": assignment["id"]},
        )
        assert resp.status_code == 400

    def test_day_before_start_cannot_skip(self, client, make_routine, make_assignment, next_monday):
        assignment = make_assignment(make_routine()["id"], start_date=next_monday + timedelta(days=3))

        resp = client.post(
            "/clients/1/schedule/skips",
            json={"scheduled_date": next_monday.isoformat(), "assignment_id": assignment["id"]},
        )
        assert resp.status_code == 400

    @pytest.mark.parametrize("client_id", [2, 99])
    def test_other_clients_assignment(self, client, make_routine, make_assignment, next_monday, client_id):
        assignment = make_assignment(make_routine()["id"], client_id=1, start_date=next_monday)

        resp = client.post(
            f"/clients/{client_id}/schedule/skips",
            json={"scheduled_date": next_monday.isoformat(), "assignment_id": assignment["id"]},
        )
        assert resp.status_code == 404

    def test_fetch_failure_is_unavailable(self, client, make_routine, make_assignment, next_monday, monkeypatch):
        assignment = make_assignment(make_routine()["id"], start_date=next_monday)

        def boom(*args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("backend unavailable"))

        monkeypatch.setattr("fittrack.services.schedule_data.get_sessions", boom)

        resp = client.post(
            "/clients/1/schedule/skips",
            json={"scheduled_date": next_monday.isoformat(), "assignment_id": assignment["id"]},
        )

        assert resp.status_code == 503
        assert client.get("/clients/1/schedule/skips").json() == []

    def test_inactive_assignment(self, client, make_routine, make_assignment, next_monday):
        assignment = make_assignment(make_routine()["id"], start_date=next_monday)
        client.post(f"/assignments/{assignment['id']}/deactivate")

        resp = client.post(
            "/clients/1/schedule/skips",
            json={"scheduled_date": next_monday.isoformat(), "assignment_id": assignment["id"]},
        )
        assert resp.status_code == 400
