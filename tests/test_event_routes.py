"""
Test the public event endpoints and the registration endpoint.
"""
from datetime import timedelta

from app.extensions import db
from app.models import EventRegistration
from app.models.enums import UserRole, AllowedRegistrants
from app.utils.time import utcnow


def register(client, headers, event_id, **body):
    return client.post(f"/api/events/{event_id}/register", json=body, headers=headers)


class TestEventListing:
    def test_list_events(self, client, make_event):
        event = make_event()
        make_event(start_time=utcnow() - timedelta(hours=3))

        response = client.get("/api/events")

        assert response.status_code == 200
        data = response.get_json()
        assert [e["id"] for e in data] == [event.id]
        assert data[0]["status"] == "open"
        assert data[0]["remaining_seats"] == 5
        assert "registration_deadline" in data[0]

    def test_get_single_event(self, client, make_event):
        event = make_event(name="Soccer Skills Training")
        response = client.get(f"/api/events/{event.id}")
        assert response.status_code == 200
        assert response.get_json()["name"] == "Soccer Skills Training"

    def test_deleted_event_is_not_found(self, client, make_event):
        event = make_event(deleted=True)
        assert client.get(f"/api/events/{event.id}").status_code == 404
        assert client.get("/api/events/nope").status_code == 404


class TestRegisterEndpoint:
    def test_register_child(self, client, make_user, make_child, make_event, auth_headers):
        parent = make_user()
        child = make_child(parent)
        event = make_event(
            extra_services=[{"description": "Food", "price": 10.0}, {"description": "Bus", "price": 5.0}]
        )

        response = register(
            client, auth_headers(parent), event.id, child_id=child.id, selected_services=[0, 1]
        )

        assert response.status_code == 201
        data = response.get_json()
        assert data["child_id"] == child.id
        assert data["credits_cost"] == 3
        assert data["services_cost"] == 1500
        assert data["services_cost_display"] == "15.00"

        db.session.expire_all()
        assert client.get(f"/api/events/{event.id}").get_json()["remaining_seats"] == 4

    def test_requires_authentication(self, client, make_event):
        event = make_event()
        assert client.post(f"/api/events/{event.id}/register", json={}).status_code == 401

    def test_full_event_conflict(self, client, make_user, make_child, make_event, auth_headers):
        parent = make_user()
        child = make_child(parent)
        event = make_event(remaining_seats=0)

        response = register(client, auth_headers(parent), event.id, child_id=child.id)

        assert response.status_code == 409
        assert response.get_json()["reason"] == "event_full"

    def test_registration_closed(self, client, make_user, make_child, make_event, auth_headers):
        parent = make_user()
        child = make_child(parent)
        event = make_event(start_time=utcnow() + timedelta(hours=3))

        response = register(client, auth_headers(parent), event.id, child_id=child.id)

        assert response.status_code == 400
        assert response.get_json()["reason"] == "registration_closed"

    def test_wrong_registrant_type(self, client, make_user, make_event, auth_headers):
        parent = make_user()
        event = make_event(allowed_registrants=AllowedRegistrants.ATTENDEE.value)

        response = register(client, auth_headers(parent), event.id)

        assert response.status_code == 400
        assert response.get_json()["reason"] == "registrant_type_not_allowed"

    def test_already_registered(self, client, make_user, make_child, make_event, auth_headers):
        parent = make_user()
        child = make_child(parent)
        event = make_event()
        headers = auth_headers(parent)

        assert register(client, headers, event.id, child_id=child.id).status_code == 201
        response = register(client, headers, event.id, child_id=child.id)

        assert response.status_code == 400
        assert response.get_json()["reason"] == "already_registered"

    def test_unknown_event(self, client, make_user, auth_headers):
        parent = make_user()
        response = register(client, auth_headers(parent), "missing")
        assert response.status_code == 404
        assert response.get_json()["reason"] == "not_found"

    def test_someone_elses_child(self, client, make_user, make_child, make_event, auth_headers):
        parent = make_user()
        other_child = make_child(make_user())
        event = make_event()

        response = register(client, auth_headers(parent), event.id, child_id=other_child.id)

        assert response.status_code == 404
        db.session.expire_all()
        assert EventRegistration.query.count() == 0

    def test_selected_services_must_be_a_list(self, client, make_user, make_child, make_event, auth_headers):
        parent = make_user()
        child = make_child(parent)
        event = make_event()

        response = register(
            client, auth_headers(parent), event.id, child_id=child.id, selected_services="0"
        )
        assert response.status_code == 400

    def test_staff_self_registration_keeps_seats(self, client, make_user, make_event, auth_headers):
        staff = make_user(role=UserRole.STAFF.value)
        event = make_event(remaining_seats=3, allowed_registrants=AllowedRegistrants.BOTH.value)

        assert register(client, auth_headers(staff), event.id).status_code == 201

        db.session.expire_all()
        assert client.get(f"/api/events/{event.id}").get_json()["remaining_seats"] == 3


class TestMyEvents:
    def test_registrations_and_my_events(self, client, make_user, make_child, make_event, auth_headers):
        parent = make_user()
        child = make_child(parent, first_name="Mia")
        event = make_event(name="Creative Arts Workshop")
        headers = auth_headers(parent)
        register(client, headers, event.id, child_id=child.id)

        registrations = client.get("/api/registrations", headers=headers).get_json()
        assert [r["event_id"] for r in registrations] == [event.id]

        my_events = client.get("/api/my-events", headers=headers).get_json()
        assert len(my_events) == 1
        assert my_events[0]["event"]["name"] == "Creative Arts Workshop"
        assert my_events[0]["child"]["first_name"] == "Mia"

    def test_other_parents_registrations_are_not_listed(self, client, make_user, make_child, make_event, auth_headers):
        parent = make_user()
        child = make_child(parent)
        event = make_event()
        register(client, auth_headers(parent), event.id, child_id=child.id)

        stranger = make_user()
        assert client.get("/api/registrations", headers=auth_headers(stranger)).get_json() == []

    def test_supervised_events_forbidden_for_parents(self, client, make_user, auth_headers):
        parent = make_user()
        assert client.get("/api/supervised-events", headers=auth_headers(parent)).status_code == 403
