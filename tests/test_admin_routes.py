"""
Test the administrator endpoints.
"""
from datetime import timedelta

import pytest

from app.extensions import db
from app.models import Event
from app.models.enums import UserRole
from app.utils.time import utcnow


@pytest.fixture
def admin_headers(make_user, auth_headers):
    return auth_headers(make_user(role=UserRole.ADMIN.value))


def new_event_body(**overrides):
    body = {
        "name": "Soccer Skills Training",
        "start_time": (utcnow() + timedelta(days=2)).isoformat(),
        "location": "Field A",
        "max_seats": 8,
        "credits_required": 2,
        "cutoff_hours": 12,
        "allowed_registrants": "attendee",
        "extra_services": [{"description": "Snacks", "price": 5.0}],
    }
    body.update(overrides)
    return body


class TestAccessControl:
    def test_parents_are_forbidden(self, client, make_user, auth_headers):
        headers = auth_headers(make_user())
        assert client.get("/api/admin/events", headers=headers).status_code == 403
        assert client.post("/api/admin/events", json=new_event_body(), headers=headers).status_code == 403

    def test_staff_are_forbidden(self, client, make_user, auth_headers):
        headers = auth_headers(make_user(role=UserRole.STAFF.value))
        assert client.get("/api/admin/users", headers=headers).status_code == 403

    def test_anonymous_is_unauthorized(self, client):
        assert client.get("/api/admin/events").status_code == 401


class TestEventAdministration:
    def test_create_event(self, client, admin_headers):
        response = client.post("/api/admin/events", json=new_event_body(), headers=admin_headers)

        assert response.status_code == 201
        data = response.get_json()
        assert data["remaining_seats"] == 8
        assert data["status"] == "open"
        assert data["extra_services"] == [{"description": "Snacks", "price": 5.0}]

    def test_create_event_missing_fields(self, client, admin_headers):
        response = client.post(
            "/api/admin/events", json={"name": "Half an event"}, headers=admin_headers
        )
        assert response.status_code == 400
        assert "location" in response.get_json()["missing_fields"]

    def test_create_event_invalid_capacity(self, client, admin_headers):
        response = client.post(
            "/api/admin/events", json=new_event_body(max_seats=0), headers=admin_headers
        )
        assert response.status_code == 400

    def test_admin_listing_includes_deleted(self, client, admin_headers, make_event):
        event = make_event(deleted=True)
        ids = [e["id"] for e in client.get("/api/admin/events", headers=admin_headers).get_json()]
        assert event.id in ids

    def test_save_then_publish(self, client, admin_headers, make_event):
        event = make_event()

        response = client.put(
            f"/api/admin/events/{event.id}",
            json={"action": "save", "name": "Renamed"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.get_json()["status"] == "editing"
        assert event.id not in [e["id"] for e in client.get("/api/events").get_json()]

        response = client.put(
            f"/api/admin/events/{event.id}", json={"action": "publish"}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.get_json()["status"] == "open"
        assert response.get_json()["name"] == "Renamed"

    def test_publish_is_the_default_action(self, client, admin_headers, make_event):
        event = make_event(is_editing=True)
        response = client.put(
            f"/api/admin/events/{event.id}", json={"location": "Gym"}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.get_json()["status"] == "open"

    def test_unknown_action(self, client, admin_headers, make_event):
        event = make_event()
        response = client.put(
            f"/api/admin/events/{event.id}", json={"action": "archive"}, headers=admin_headers
        )
        assert response.status_code == 400

    def test_non_object_bodies_are_bad_requests(self, client, admin_headers, make_event):
        event = make_event()

        response = client.put(
            f"/api/admin/events/{event.id}", json=["action", "save"], headers=admin_headers
        )
        assert response.status_code == 400
        assert client.post("/api/admin/events", json=[new_event_body()], headers=admin_headers).status_code == 400
        assert client.put(
            f"/api/admin/events/{event.id}/status", json=["status"], headers=admin_headers
        ).status_code == 400

    def test_fractional_capacity_is_a_bad_request(self, client, admin_headers, make_event):
        event = make_event()
        response = client.put(
            f"/api/admin/events/{event.id}", json={"max_seats": 7.5}, headers=admin_headers
        )
        assert response.status_code == 400

    def test_edit_missing_event(self, client, admin_headers):
        response = client.put(
            "/api/admin/events/missing", json={"action": "publish"}, headers=admin_headers
        )
        assert response.status_code == 404

    def test_capacity_below_taken_seats(self, client, admin_headers, make_event):
        event = make_event(max_seats=5, remaining_seats=1)
        response = client.put(
            f"/api/admin/events/{event.id}", json={"max_seats": 3}, headers=admin_headers
        )
        assert response.status_code == 400

    def test_begin_editing(self, client, admin_headers, make_event):
        event = make_event()
        response = client.post(f"/api/admin/events/{event.id}/edit", headers=admin_headers)
        assert response.status_code == 200
        assert response.get_json()["status"] == "editing"

    def test_update_status(self, client, admin_headers, make_event):
        event = make_event()
        response = client.put(
            f"/api/admin/events/{event.id}/status", json={"status": "editing"}, headers=admin_headers
        )
        assert response.status_code == 200

        response = client.put(
            f"/api/admin/events/{event.id}/status", json={"status": "cancelled"}, headers=admin_headers
        )
        assert response.status_code == 400

        response = client.put(f"/api/admin/events/{event.id}/status", json={}, headers=admin_headers)
        assert response.status_code == 400

    def test_delete_and_restore(self, client, admin_headers, make_event):
        event = make_event()

        assert client.delete(f"/api/admin/events/{event.id}", headers=admin_headers).status_code == 200
        assert client.get(f"/api/events/{event.id}").status_code == 404
        db.session.expire_all()
        assert db.session.get(Event, event.id).deleted is True

        assert client.put(f"/api/admin/events/{event.id}/restore", headers=admin_headers).status_code == 200
        assert client.get(f"/api/events/{event.id}").status_code == 200

    def test_delete_missing_event(self, client, admin_headers):
        assert client.delete("/api/admin/events/missing", headers=admin_headers).status_code == 404
        assert client.put("/api/admin/events/missing/restore", headers=admin_headers).status_code == 404


class TestUserAdministration:
    def test_list_users(self, client, admin_headers, make_user):
        make_user(email="parent@example.com")
        emails = [u["email"] for u in client.get("/api/admin/users", headers=admin_headers).get_json()]
        assert "parent@example.com" in emails

    def test_users_by_roles(self, client, admin_headers, make_user):
        staff = make_user(role=UserRole.STAFF.value)
        make_user()

        response = client.get("/api/admin/users/by-roles?roles=staff", headers=admin_headers)
        assert [u["id"] for u in response.get_json()] == [staff.id]
        assert client.get("/api/admin/users/by-roles", headers=admin_headers).status_code == 400

    def test_change_role(self, client, admin_headers, make_user):
        parent = make_user()

        response = client.patch(
            f"/api/admin/users/{parent.id}/role", json={"role": "staff"}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.get_json()["role"] == "staff"

    def test_cannot_grant_admin(self, client, admin_headers, make_user):
        parent = make_user()
        response = client.patch(
            f"/api/admin/users/{parent.id}/role", json={"role": "admin"}, headers=admin_headers
        )
        assert response.status_code == 403

    def test_invalid_role(self, client, admin_headers, make_user):
        parent = make_user()
        response = client.patch(
            f"/api/admin/users/{parent.id}/role", json={"role": "wizard"}, headers=admin_headers
        )
        assert response.status_code == 400

    def test_role_change_for_missing_user(self, client, admin_headers):
        response = client.patch(
            "/api/admin/users/missing/role", json={"role": "staff"}, headers=admin_headers
        )
        assert response.status_code == 404
