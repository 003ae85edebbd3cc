"""API tests for working hours and slot configuration."""
import uuid

from conftest import MONDAY


def week(**overrides):
    days = [
        {"day_of_week": dow, "is_closed": False, "open_time": "10:00", "close_time": "14:00"}
        for dow in range(7)
    ]
    for dow, changes in overrides.items():
        days[int(dow[1:])].update(changes)
    return {"working_hours": days}


class TestWorkingHours:

    def test_default_week(self, client, owner_url):
        body = client.get(f"{owner_url}/working-hours").json()
        days = body["working_hours"]
        assert [d["day_of_week"] for d in days] == list(range(7))
        assert days[5]["is_closed"] is True
        assert days[1]["open_time"] == "09:00"
        assert days[6]["close_time"] == "16:00"
        assert body["timezone"] == "Asia/Riyadh"

    def test_default_week_seeded_when_missing(self, client, db):
        from app.models import Salon

        salon = Salon(id=uuid.uuid4(), name="Fresh Salon")
        db.add(salon)
        db.commit()

        days = client.get(f"/api/v1/owner/salons/{salon.id}/working-hours").json()["working_hours"]
        assert len(days) == 7

    def test_replace_week(self, client, owner_url):
        response = client.put(f"{owner_url}/working-hours", json=week(
            d5={"is_closed": True, "open_time": "10:00", "close_time": "14:00"},
            d1={"break_start": "12:00", "break_end": "12:30"},
        ))
        assert response.status_code == 200

        days = {d["day_of_week"]: d for d in response.json()["working_hours"]}
        assert days[1]["break_start"] == "12:00"
        assert days[5]["is_closed"] is True
        assert days[5]["open_time"] is None

    def test_new_hours_drive_availability(self, client, owner_url, public_url):
        client.put(f"{owner_url}/working-hours", json=week())
        slots = client.get(f"{public_url}/availability", params={"date": MONDAY.isoformat()}).json()
        assert slots["available_slots"] == [
            "10:00", "10:30", "11:00", "11:30", "12:00", "12:30", "13:00", "13:30"
        ]

    def test_incomplete_week_rejected(self, client, owner_url):
        payload = week()
        payload["working_hours"] = payload["working_hours"][:6]
        assert client.put(f"{owner_url}/working-hours", json=payload).status_code == 400

    def test_validation_errors_listed(self, client, owner_url):
        response = client.put(f"{owner_url}/working-hours", json=week(
            d2={"open_time": "15:00"},
            d3={"close_time": "9am"},
        ))
        assert response.status_code == 400

        detail = response.json()["detail"]
        assert detail["error"] == "VALIDATION_FAILED"
        assert "Close time must be after open time for day 2" in detail["details"]
        assert "Invalid close_time format for day 3: 9am" in detail["details"]

    def test_break_outside_hours_rejected(self, client, owner_url):
        response = client.put(f"{owner_url}/working-hours", json=week(
            d1={"break_start": "15:00", "break_end": "16:00"},
        ))
        assert response.status_code == 400

    def test_duplicate_day_rejected(self, client, owner_url):
        payload = week()
        payload["working_hours"][6]["day_of_week"] = 0
        details = client.put(f"{owner_url}/working-hours", json=payload).json()["detail"]["details"]
        assert "Duplicate day_of_week: 0" in details
        assert "Missing day_of_week: 6" in details

    def test_reset(self, client, owner_url):
        client.put(f"{owner_url}/working-hours", json=week())
        days = client.post(f"{owner_url}/working-hours/reset").json()["working_hours"]
        assert days[1]["open_time"] == "09:00"
        assert days[5]["is_closed"] is True


class TestSalonTimeSlots:

    def test_replace_and_list(self, client, owner_url):
        response = client.put(f"{owner_url}/time-slots", json={
            "day_of_week": 1,
            "slots": [{"slot_time": "11:00"}, {"slot_time": "09:00:00", "duration_minutes": 45}],
        })
        assert response.status_code == 200
        assert [s["slot_time"] for s in response.json()["slots"]] == ["09:00", "11:00"]

        listed = client.get(f"{owner_url}/time-slots", params={"day": 1}).json()
        assert len(listed["raw"]) == 2
        assert len(listed["slots"]["1"]) == 2

    def test_replace_discards_previous_slots(self, client, owner_url):
        client.put(f"{owner_url}/time-slots", json={"day_of_week": 1, "slots": [{"slot_time": "11:00"}]})
        client.put(f"{owner_url}/time-slots", json={"day_of_week": 1, "slots": [{"slot_time": "15:00"}]})

        raw = client.get(f"{owner_url}/time-slots").json()["raw"]
        assert [s["slot_time"] for s in raw] == ["15:00"]

    def test_manual_slots_drive_availability(self, client, owner_url, public_url):
        client.put(f"{owner_url}/time-slots", json={
            "day_of_week": 1,
            "slots": [{"slot_time": "10:00"}, {"slot_time": "16:00"}, {"slot_time": "20:00"}],
        })
        body = client.get(f"{public_url}/availability", params={"date": MONDAY.isoformat()}).json()
        assert body["source"] == "resource_manual"
        assert body["available_slots"] == ["10:00", "16:00"]

    def test_duplicate_times_rejected(self, client, owner_url):
        response = client.put(f"{owner_url}/time-slots", json={
            "day_of_week": 1,
            "slots": [{"slot_time": "10:00"}, {"slot_time": "10:00:00"}],
        })
        assert response.status_code == 400

    def test_invalid_day_rejected(self, client, owner_url):
        response = client.put(f"{owner_url}/time-slots", json={"day_of_week": 7, "slots": []})
        assert response.status_code == 400

    def test_delete_slot(self, client, owner_url):
        slot = client.put(f"{owner_url}/time-slots", json={
            "day_of_week": 1, "slots": [{"slot_time": "10:00"}],
        }).json()["slots"][0]

        assert client.delete(f"{owner_url}/time-slots/{slot['id']}").status_code == 200
        assert client.delete(f"{owner_url}/time-slots/{slot['id']}").status_code == 404


class TestServiceTimeSlots:

    def test_replace_and_list(self, client, owner_url, service):
        client.put(f"{owner_url}/services/{service.id}/time-slots", json={
            "slots": [{"slot_time": "10:00"}, {"slot_time": "10:30", "is_active": False}],
        })
        slots = client.get(f"{owner_url}/services/{service.id}/time-slots").json()["slots"]
        assert [(s["slot_time"], s["is_active"]) for s in slots] == [("10:00", True), ("10:30", False)]

    def test_invalid_duration(self, client, owner_url, service):
        response = client.put(f"{owner_url}/services/{service.id}/time-slots", json={
            "slots": [{"slot_time": "10:00", "duration_minutes": 0}],
        })
        assert response.status_code == 400

    def test_other_salons_service(self, client, owner_url):
        response = client.get(f"{owner_url}/services/{uuid.uuid4()}/time-slots")
        assert response.status_code == 404

    def test_home_service_slots(self, client, owner_url, public_url, home_service):
        client.put(f"{owner_url}/home-services/{home_service.id}/time-slots", json={
            "slots": [{"slot_time": "15:00"}],
        })
        body = client.get(f"{public_url}/availability", params={
            "date": MONDAY.isoformat(),
            "home_service_id": str(home_service.id),
        }).json()
        assert body["available_slots"] == ["15:00"]
        assert body["source"] == "entity_specific"
