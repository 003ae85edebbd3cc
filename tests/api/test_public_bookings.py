"""API tests for public availability and booking requests."""
import uuid

from conftest import FRIDAY, MONDAY


def request_booking(client, public_url, service, time="10:00", day=MONDAY, **extra):
    payload = {
        "service_id": str(service.id),
        "customer_name": "Amal",
        "customer_phone": "+966533333333",
        "booking_date": day.isoformat(),
        "booking_time": time,
    }
    payload.update(extra)
    return client.post(f"{public_url}/bookings", json=payload)


class TestPublicAvailability:

    def test_generated_slots_skip_the_break(self, client, public_url, service):
        response = client.get(f"{public_url}/availability", params={
            "date": MONDAY.isoformat(),
            "service_id": str(service.id),
        })
        assert response.status_code == 200

        body = response.json()
        assert body["source"] == "working_hours"
        assert body["duration_minutes"] == 30
        assert body["available_slots"][0] == "09:00"
        assert body["available_slots"][-1] == "17:30"
        assert "12:30" in body["available_slots"]
        assert "13:00" not in body["available_slots"]
        assert "13:30" not in body["available_slots"]
        assert body["working_hours"]["break_start"] == "13:00"

    def test_closed_day(self, client, public_url):
        body = client.get(f"{public_url}/availability", params={"date": FRIDAY.isoformat()}).json()
        assert body["available_slots"] == []
        assert body["details"] == "Salon is closed on this day"

    def test_duration_from_home_service(self, client, public_url, home_service):
        body = client.get(f"{public_url}/availability", params={
            "date": MONDAY.isoformat(),
            "home_service_id": str(home_service.id),
        }).json()
        assert body["type"] == "home"
        assert body["duration_minutes"] == 60
        assert "12:00" in body["available_slots"]
        assert "12:30" not in body["available_slots"]

    def test_booked_slot_disappears(self, client, public_url, service):
        params = {"date": MONDAY.isoformat(), "service_id": str(service.id)}
        assert "10:00" in client.get(f"{public_url}/availability", params=params).json()["available_slots"]

        assert request_booking(client, public_url, service, time="10:00").status_code == 201

        assert "10:00" not in client.get(f"{public_url}/availability", params=params).json()["available_slots"]

    def test_service_slots_take_precedence(self, client, owner_url, public_url, service):
        response = client.put(f"{owner_url}/services/{service.id}/time-slots", json={
            "slots": [{"slot_time": "11:00"}, {"slot_time": "09:30"}]
        })
        assert response.status_code == 200

        body = client.get(f"{public_url}/availability", params={
            "date": MONDAY.isoformat(),
            "service_id": str(service.id),
        }).json()
        assert body["source"] == "entity_specific"
        assert body["available_slots"] == ["09:30", "11:00"]

    def test_missing_date(self, client, public_url):
        assert client.get(f"{public_url}/availability").status_code == 422

    def test_unknown_salon(self, client):
        response = client.get(f"/api/v1/public/salons/{uuid.uuid4()}/availability", params={
            "date": MONDAY.isoformat(),
        })
        assert response.status_code == 404

    def test_unknown_service(self, client, public_url):
        response = client.get(f"{public_url}/availability", params={
            "date": MONDAY.isoformat(),
            "service_id": str(uuid.uuid4()),
        })
        assert response.status_code == 404


class TestPublicBooking:

    def test_request_is_pending(self, client, public_url, service):
        response = request_booking(client, public_url, service)
        assert response.status_code == 201

        booking = response.json()["booking"]
        assert booking["status"] == "pending"
        assert booking["source"] == "public"

    def test_pending_request_blocks_the_slot(self, client, public_url, service):
        assert request_booking(client, public_url, service).status_code == 201
        assert request_booking(client, public_url, service).status_code == 409

    def test_closed_day_rejected(self, client, public_url, service):
        response = request_booking(client, public_url, service, day=FRIDAY)
        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "SALON_CLOSED"

    def test_outside_working_hours(self, client, public_url, service):
        response = request_booking(client, public_url, service, time="17:45")
        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "OUTSIDE_WORKING_HOURS"

    def test_during_break(self, client, public_url, service):
        response = request_booking(client, public_url, service, time="12:45")
        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "BOOKING_DURING_BREAK"

    def test_inactive_service(self, client, public_url, service, db):
        service.is_active = False
        db.commit()
        assert request_booking(client, public_url, service).status_code == 404

    def test_blank_customer_name(self, client, public_url, service):
        assert request_booking(client, public_url, service, customer_name="   ").status_code == 422

    def test_home_service_request(self, client, public_url, home_service):
        response = client.post(f"{public_url}/home-service-bookings", json={
            "home_service_id": str(home_service.id),
            "customer_name": "Amal",
            "customer_phone": "+966533333333",
            "customer_address": "King Fahd Rd",
            "booking_date": MONDAY.isoformat(),
            "booking_time": "15:00",
        })
        assert response.status_code == 201
        assert response.json()["booking"]["type"] == "home"
        assert response.json()["booking"]["status"] == "pending"

    def test_home_and_salon_calendars_are_separate(self, client, public_url, service, home_service):
        assert request_booking(client, public_url, service, time="15:00").status_code == 201
        response = client.post(f"{public_url}/home-service-bookings", json={
            "home_service_id": str(home_service.id),
            "customer_name": "Amal",
            "customer_phone": "+966533333333",
            "booking_date": MONDAY.isoformat(),
            "booking_time": "15:00",
        })
        assert response.status_code == 201
