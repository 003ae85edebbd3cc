"""API tests for owner booking management."""
import uuid

from conftest import MONDAY


def create_booking(client, owner_url, service, time="10:00", **extra):
    payload = {
        "service_id": str(service.id),
        "customer_name": "Sara",
        "customer_phone": "+966511111111",
        "booking_date": MONDAY.isoformat(),
        "booking_time": time,
    }
    payload.update(extra)
    return client.post(f"{owner_url}/bookings", json=payload)


class TestCreateBooking:

    def test_defaults_from_service(self, client, owner_url, service):
        response = create_booking(client, owner_url, service)
        assert response.status_code == 201

        booking = response.json()["booking"]
        assert booking["status"] == "confirmed"
        assert booking["source"] == "owner"
        assert booking["duration_minutes"] == 30
        assert booking["total_price"] == 50.0
        assert booking["type"] == "salon"
        assert booking["service"]["name"] == "Haircut"
        assert booking["confirmed_at"] is not None

    def test_overlap_returns_conflict(self, client, owner_url, service):
        first = create_booking(client, owner_url, service, time="10:00", duration_minutes=60)
        assert first.status_code == 201

        response = create_booking(client, owner_url, service, time="10:30")
        assert response.status_code == 409

        detail = response.json()["detail"]
        assert detail["error"] == "BOOKING_CONFLICT"
        assert detail["conflictingBookings"][0]["id"] == first.json()["booking"]["id"]

    def test_adjacent_booking_allowed(self, client, owner_url, service):
        assert create_booking(client, owner_url, service, time="10:00").status_code == 201
        assert create_booking(client, owner_url, service, time="10:30").status_code == 201

    def test_different_employees_do_not_conflict(self, client, owner_url, service, db, salon):
        from app.models import Employee

        e1 = Employee(id=uuid.uuid4(), salon_id=salon.id, name="Noura")
        e2 = Employee(id=uuid.uuid4(), salon_id=salon.id, name="Huda")
        db.add_all([e1, e2])
        db.commit()

        assert create_booking(client, owner_url, service, employee_id=str(e1.id)).status_code == 201
        assert create_booking(client, owner_url, service, employee_id=str(e2.id)).status_code == 201
        assert create_booking(client, owner_url, service).status_code == 409

    def test_home_service_booking(self, client, owner_url, home_service):
        response = client.post(f"{owner_url}/bookings", json={
            "home_service_id": str(home_service.id),
            "customer_name": "Reem",
            "customer_phone": "+966522222222",
            "customer_address": "Olaya St, Riyadh",
            "booking_date": MONDAY.isoformat(),
            "booking_time": "15:00",
        })
        assert response.status_code == 201

        booking = response.json()["booking"]
        assert booking["type"] == "home"
        assert booking["duration_minutes"] == 60
        assert booking["customer_address"] == "Olaya St, Riyadh"

    def test_requires_a_service(self, client, owner_url):
        response = client.post(f"{owner_url}/bookings", json={
            "customer_name": "Sara",
            "customer_phone": "+966511111111",
            "booking_date": MONDAY.isoformat(),
            "booking_time": "10:00",
        })
        assert response.status_code == 422

    def test_invalid_time(self, client, owner_url, service):
        assert create_booking(client, owner_url, service, time="25:00").status_code == 422

    def test_unknown_service(self, client, owner_url):
        response = client.post(f"{owner_url}/bookings", json={
            "service_id": str(uuid.uuid4()),
            "customer_name": "Sara",
            "customer_phone": "+966511111111",
            "booking_date": MONDAY.isoformat(),
            "booking_time": "10:00",
        })
        assert response.status_code == 404


class TestListAndStats:

    def test_list_filters_by_status(self, client, owner_url, service):
        create_booking(client, owner_url, service, time="10:00")
        create_booking(client, owner_url, service, time="11:00", status="pending")

        everything = client.get(f"{owner_url}/bookings").json()
        assert everything["pagination"]["total"] == 2

        pending = client.get(f"{owner_url}/bookings", params={"status": "pending"}).json()
        assert [b["booking_time"] for b in pending["bookings"]] == ["11:00"]

    def test_times_are_padded_and_sorted_by_clock(self, client, owner_url, service):
        created = create_booking(client, owner_url, service, time="9:30")
        assert created.status_code == 201
        assert created.json()["booking"]["booking_time"] == "09:30"
        assert create_booking(client, owner_url, service, time="10:00:00").status_code == 201

        listed = client.get(f"{owner_url}/bookings").json()["bookings"]
        assert [b["booking_time"] for b in listed] == ["10:00", "09:30"]

    def test_search(self, client, owner_url, service):
        create_booking(client, owner_url, service, time="10:00", customer_name="Maha")
        create_booking(client, owner_url, service, time="11:00", customer_name="Dana")

        found = client.get(f"{owner_url}/bookings", params={"search": "mah"}).json()
        assert [b["customer_name"] for b in found["bookings"]] == ["Maha"]

    def test_list_reflects_new_bookings(self, client, owner_url, service):
        assert client.get(f"{owner_url}/bookings").json()["pagination"]["total"] == 0
        create_booking(client, owner_url, service)
        assert client.get(f"{owner_url}/bookings").json()["pagination"]["total"] == 1

    def test_stats(self, client, owner_url, service):
        create_booking(client, owner_url, service, time="10:00")
        create_booking(client, owner_url, service, time="11:00", status="pending")

        stats = client.get(f"{owner_url}/bookings/stats/overview").json()["stats"]
        assert stats["total_bookings"] == 2
        assert stats["by_status"] == {"confirmed": 1, "pending": 1}
        assert stats["total_revenue"] == 50.0
        assert stats["popular_services"] == [{"name": "Haircut", "count": 1, "type": "salon"}]


class TestLifecycle:

    def test_get_unknown_booking(self, client, owner_url):
        assert client.get(f"{owner_url}/bookings/{uuid.uuid4()}").status_code == 404

    def test_cancel_frees_the_slot(self, client, owner_url, service):
        booking_id = create_booking(client, owner_url, service).json()["booking"]["id"]

        response = client.post(f"{owner_url}/bookings/{booking_id}/cancel")
        assert response.status_code == 200
        assert response.json()["booking"]["status"] == "cancelled"
        assert response.json()["booking"]["cancelled_at"] is not None

        assert create_booking(client, owner_url, service).status_code == 201

    def test_cancelled_booking_cannot_be_confirmed(self, client, owner_url, service):
        booking_id = create_booking(client, owner_url, service).json()["booking"]["id"]
        client.post(f"{owner_url}/bookings/{booking_id}/cancel")

        response = client.patch(f"{owner_url}/bookings/{booking_id}", json={"status": "confirmed"})
        assert response.status_code == 400

    def test_reschedule_checks_conflicts(self, client, owner_url, service):
        create_booking(client, owner_url, service, time="10:00")
        second = create_booking(client, owner_url, service, time="11:00").json()["booking"]["id"]

        response = client.patch(f"{owner_url}/bookings/{second}", json={"booking_time": "10:00"})
        assert response.status_code == 409

        response = client.patch(f"{owner_url}/bookings/{second}", json={"booking_time": "11:15"})
        assert response.status_code == 200
        assert response.json()["booking"]["booking_time"] == "11:15"

    def test_reschedule_ignores_itself(self, client, owner_url, service):
        booking_id = create_booking(client, owner_url, service, time="10:00").json()["booking"]["id"]
        response = client.patch(f"{owner_url}/bookings/{booking_id}", json={"duration_minutes": 60})
        assert response.status_code == 200
        assert response.json()["booking"]["duration_minutes"] == 60

    def test_complete_then_unarchive(self, client, owner_url, service):
        booking_id = create_booking(client, owner_url, service).json()["booking"]["id"]

        completed = client.patch(f"{owner_url}/bookings/{booking_id}", json={"status": "completed"})
        assert completed.json()["booking"]["archived"] is True

        assert client.get(f"{owner_url}/bookings").json()["pagination"]["total"] == 0
        archived = client.get(f"{owner_url}/bookings", params={"archived_only": True}).json()
        assert archived["pagination"]["total"] == 1

        assert client.post(f"{owner_url}/bookings/{booking_id}/unarchive").status_code == 200
        assert client.get(f"{owner_url}/bookings").json()["pagination"]["total"] == 1

    def test_archive_requires_completed(self, client, owner_url, service):
        booking_id = create_booking(client, owner_url, service).json()["booking"]["id"]
        assert client.post(f"{owner_url}/bookings/{booking_id}/archive").status_code == 400

    def test_delete(self, client, owner_url, service):
        booking_id = create_booking(client, owner_url, service).json()["booking"]["id"]

        response = client.delete(f"{owner_url}/bookings/{booking_id}")
        assert response.status_code == 200
        assert "Sara" in response.json()["message"]
        assert client.get(f"{owner_url}/bookings/{booking_id}").status_code == 404
