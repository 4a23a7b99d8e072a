"""Tests for the routine routes."""

from datetime import date


class TestCreateRoutine:

    def test_days_numbered_in_order(self, make_routine):
        routine = make_routine(days=("Push", "Pull", "Legs"), days_per_week=3)

        assert routine["name"] == "Full Body"
        assert routine["days_per_week"] == 3
        assert routine["is_active"] is False
        assert [(d["day_number"], d["name"]) for d in routine["routine_days"]] == [
            (1, "Push"), (2, "Pull"), (3, "Legs"),
        ]

    def test_rejects_days_per_week_out_of_range(self, client):
        resp = client.post("/routines", json={"user_id": 1, "name": "Bad", "days_per_week": 8, "days": []})
        assert resp.status_code == 422

    def test_rejects_blank_name(self, client):
        resp = client.post("/routines", json={"user_id": 1, "name": "   ", "days": []})
        assert resp.status_code == 422


class TestListAndGet:

    def test_list_own_and_public(self, client, make_routine):
        mine = make_routine(user_id=1, name="Mine")
        public = make_routine(user_id=2, name="Shared", is_public=True)
        make_routine(user_id=2, name="Private")

        own = client.get("/routines", params={"user_id": 1}).json()
        assert [r["id"] for r in own] == [mine["id"]]

        both = client.get("/routines", params={"user_id": 1, "include_public": True}).json()
        assert {r["id"] for r in both} == {mine["id"], public["id"]}

    def test_get_missing(self, client):
        assert client.get("/routines/999").status_code == 404


class TestUpdateRoutine:

    def test_replace_days(self, client, make_routine):
        routine = make_routine()

        resp = client.patch(
            f"/routines/{routine['id']}",
            json={"name": "Split", "days": [{"name": "Upper"}, {"name": "Lower"}]},
        )

        assert resp.status_code == 200
        data = resp.json()
        assert data["name"] == "Split"
        assert [(d["day_number"], d["name"]) for d in data["routine_days"]] == [(1, "Upper"), (2, "Lower")]

    def test_partial_update_keeps_days(self, client, make_routine):
        routine = make_routine()
        data = client.patch(f"/routines/{routine['id']}", json={"is_public": True}).json()
        assert data["is_public"] is True
        assert len(data["routine_days"]) == 3


class TestToggleActive:

    def test_activating_deactivates_others(self, client, make_routine):
        first = make_routine(name="First")
        second = make_routine(name="Second")

        assert client.post(f"/routines/{first['id']}/toggle-active").json()["is_active"] is True
        assert client.post(f"/routines/{second['id']}/toggle-active").json()["is_active"] is True

        assert client.get(f"/routines/{first['id']}").json()["is_active"] is False

        # active routines are listed first
        listed = client.get("/routines", params={"user_id": 1}).json()
        assert listed[0]["id"] == second["id"]

    def test_toggle_off(self, client, make_routine):
        routine = make_routine()
        client.post(f"/routines/{routine['id']}/toggle-active")
        assert client.post(f"/routines/{routine['id']}/toggle-active").json()["is_active"] is False


class TestCopyRoutine:

    def test_copy_public(self, client, make_routine):
        src = make_routine(user_id=2, name="Shared", is_public=True, days=("X", "Y"))

        resp = client.post(f"/routines/{src['id']}/copy", json={"user_id": 1})

        assert resp.status_code == 201
        copy = resp.json()
        assert copy["user_id"] == 1
        assert copy["name"] == "Shared (Copy)"
        assert copy["is_public"] is False
        assert [d["name"] for d in copy["routine_days"]] == ["X", "Y"]
        assert {d["id"] for d in copy["routine_days"]}.isdisjoint({d["id"] for d in src["routine_days"]})

    def test_copy_private_of_other_user(self, client, make_routine):
        src = make_routine(user_id=2, name="Private")
        assert client.post(f"/routines/{src['id']}/copy", json={"user_id": 1}).status_code == 403


class TestDeleteRoutine:

    def test_blocked_by_active_assignment(self, client, make_routine, make_assignment):
        routine = make_routine()
        make_assignment(routine["id"], start_date=date(2024, 1, 1))

        assert client.delete(f"/routines/{routine['id']}").status_code == 409
        assert client.get(f"/routines/{routine['id']}").status_code == 200

    def test_delete_unassigned(self, client, make_routine):
        routine = make_routine()

        assert client.delete(f"/routines/{routine['id']}").status_code == 204
        assert client.get(f"/routines/{routine['id']}").status_code == 404

    def test_missing(self, client):
        assert client.delete("/routines/999").status_code == 404


class TestRoutineExercises:

    def test_create_with_exercises(self, client):
        resp = client.post(
            "/routines",
            json={
                "user_id": 1,
                "name": "Strength",
                "days": [
                    {
                        "name": "Lower",
                        "exercises": [
                            {"exercise_name": "Squat", "sets": 5, "reps": "5", "weight_suggestion": "80% 1RM"},
                            {"exercise_name": "Lunge", "sets": 3, "reps": "10-12", "rest_time_seconds": 90},
                        ],
                    },
                    {"name": "Upper"},
                ],
            },
        )

        assert resp.status_code == 201
        lower, upper = resp.json()["routine_days"]
        assert [(e["order_index"], e["exercise_name"], e["sets"], e["reps"]) for e in lower["exercises"]] == [
            (0, "Squat", 5, "5"), (1, "Lunge", 3, "10-12"),
        ]
        assert lower["exercises"][0]["weight_suggestion"] == "80% 1RM"
        assert lower["exercises"][1]["rest_time_seconds"] == 90
        assert upper["exercises"] == []

    def test_rejects_zero_sets(self, client):
        resp = client.post(
            "/routines",
            json={"user_id": 1, "name": "Bad", "days": [{"name": "A", "exercises": [{"exercise_name": "Row", "sets": 0}]}]},
        )
        assert resp.status_code == 422

    def test_copy_carries_exercises(self, client):
        src = client.post(
            "/routines",
            json={
                "user_id": 2,
                "name": "Shared",
                "is_public": True,
                "days": [{"name": "A", "exercises": [{"exercise_name": "Deadlift", "sets": 3, "reps": "5"}]}],
            },
        ).json()

        copy = client.post(f"/routines/{src['id']}/copy", json={"user_id": 1}).json()

        [day] = copy["routine_days"]
        assert [(e["exercise_name"], e["sets"], e["reps"]) for e in day["exercises"]] == [("Deadlift", 3, "5")]
        assert day["exercises"][0]["id"] != src["routine_days"][0]["exercises"][0]["id"]

    def test_patch_replaces_exercises_with_days(self, client):
        routine = client.post(
            "/routines",
            json={"user_id": 1, "name": "R", "days": [{"name": "A", "exercises": [{"exercise_name": "Squat"}]}]},
        ).json()

        data = client.patch(
            f"/routines/{routine['id']}",
            json={"days": [{"name": "A", "exercises": [{"exercise_name": "Press"}, {"exercise_name": "Dip"}]}]},
        ).json()

        assert [e["exercise_name"] for e in data["routine_days"][0]["exercises"]] == ["Press", "Dip"]


class TestClearNullableFields:

    def test_explicit_null_clears(self, client, make_routine):
        routine = make_routine(days_per_week=3)
        client.patch(f"/routines/{routine['id']}", json={"description": "old"})

        data = client.patch(
            f"/routines/{routine['id']}", json={"days_per_week": None, "description": None}
        ).json()

        assert data["days_per_week"] is None
        assert data["description"] is None

    def test_omitted_fields_are_kept(self, client, make_routine):
        routine = make_routine(days_per_week=3)
        client.patch(f"/routines/{routine['id']}", json={"description": "keep me"})

        data = client.patch(f"/routines/{routine['id']}", json={"name": "Renamed"}).json()

        assert data["days_per_week"] == 3
        assert data["description"] == "keep me"
