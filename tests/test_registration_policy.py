"""
Tests for the pure status and admission rules.
"""
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from app.models.enums import EventStatus, UserRole, AllowedRegistrants
from app.services import registration_policy as policy

NOW = datetime(2026, 3, 2, 15, 0, tzinfo=timezone.utc)


def event_at(hours_until_start, remaining_seats=5, cutoff_hours=12, is_editing=False):
    return SimpleNamespace(
        start_time=NOW + timedelta(hours=hours_until_start),
        cutoff_hours=cutoff_hours,
        remaining_seats=remaining_seats,
        is_editing=is_editing,
    )


class TestDeriveStatus:
    def test_open_well_before_cutoff(self):
        assert policy.derive_status(event_at(48), NOW) == EventStatus.OPEN

    def test_editing_wins_over_everything(self):
        event = event_at(-1, remaining_seats=0, is_editing=True)
        assert policy.derive_status(event, NOW) == EventStatus.EDITING

    def test_past_at_exact_start(self):
        assert policy.derive_status(event_at(0), NOW) == EventStatus.PAST

    def test_past_beats_full(self):
        assert policy.derive_status(event_at(-2, remaining_seats=0), NOW) == EventStatus.PAST

    def test_full_beats_open_before_cutoff(self):
        assert policy.derive_status(event_at(48, remaining_seats=0), NOW) == EventStatus.FULL

    def test_full_beats_registration_closed(self):
        assert policy.derive_status(event_at(6, remaining_seats=0), NOW) == EventStatus.FULL

    def test_registration_closed_inside_cutoff(self):
        assert policy.derive_status(event_at(6), NOW) == EventStatus.REGISTRATION_CLOSED

    def test_exactly_at_cutoff_is_still_open(self):
        assert policy.derive_status(event_at(12), NOW) == EventStatus.OPEN

    def test_zero_cutoff_open_until_start(self):
        event = SimpleNamespace(
            start_time=NOW + timedelta(seconds=1),
            cutoff_hours=0,
            remaining_seats=1,
            is_editing=False,
        )
        assert policy.derive_status(event, NOW) == EventStatus.OPEN

    def test_naive_start_time_is_treated_as_utc(self):
        event = event_at(48)
        event.start_time = event.start_time.replace(tzinfo=None)
        assert policy.derive_status(event, NOW) == EventStatus.OPEN

    def test_same_inputs_same_output(self):
        event = event_at(10, remaining_seats=2)
        assert policy.derive_status(event, NOW) == policy.derive_status(event, NOW)


class TestRegistrantAllowed:
    @pytest.mark.parametrize(
        "mode,is_child,expected",
        [
            (AllowedRegistrants.ATTENDEE.value, True, True),
            (AllowedRegistrants.ATTENDEE.value, False, False),
            (AllowedRegistrants.USER.value, True, False),
            (AllowedRegistrants.USER.value, False, True),
            (AllowedRegistrants.BOTH.value, True, True),
            (AllowedRegistrants.BOTH.value, False, True),
        ],
    )
    def test_modes(self, mode, is_child, expected):
        assert policy.registrant_allowed(mode, is_child) is expected

    def test_unknown_mode_allows_nobody(self):
        assert policy.registrant_allowed("everyone", True) is False


class TestConsumesSeat:
    @pytest.mark.parametrize("role", [r.value for r in UserRole])
    def test_child_registration_always_takes_a_seat(self, role):
        assert policy.consumes_seat(True, role) is True

    @pytest.mark.parametrize("role", [UserRole.ADMIN.value, UserRole.STAFF.value])
    def test_supervisors_do_not_take_a_seat(self, role):
        assert policy.consumes_seat(False, role) is False

    def test_parent_self_registration_takes_a_seat(self):
        assert policy.consumes_seat(False, UserRole.USER.value) is True

    def test_every_combination_is_in_the_table(self):
        for kind in (policy.CHILD, policy.PARENT_SELF):
            for role in UserRole:
                assert (kind, role) in policy.SEAT_CONSUMPTION


class TestServicesCost:
    SERVICES = [
        {"description": "Food", "price": 10.0, "currency": "USD"},
        {"description": "Transport", "price": 5.0, "currency": "USD"},
    ]

    def test_sum_of_selected_services_in_cents(self):
        assert policy.services_cost_cents(self.SERVICES, [0, 1]) == 1500
        assert policy.format_cents(1500) == "15.00"

    def test_out_of_range_indices_contribute_nothing(self):
        assert policy.services_cost_cents(self.SERVICES, [0, 7]) == 1000

    def test_negative_index_is_not_wrapped_around(self):
        assert policy.services_cost_cents(self.SERVICES, [-1]) == 0

    def test_non_integer_indices_are_ignored(self):
        assert policy.services_cost_cents(self.SERVICES, ["1", True, 1.0]) == 0

    def test_fractional_prices_round_half_up(self):
        assert policy.services_cost_cents([{"description": "Juice", "price": 2.345}], [0]) == 235

    @pytest.mark.parametrize("price", ["NaN", "Infinity", "-Infinity", float("inf"), "abc", None])
    def test_unusable_prices_count_as_zero(self, price):
        assert policy.to_cents(price) == 0
        assert policy.services_cost_cents([{"description": "Odd", "price": price}], [0]) == 0

    def test_nothing_selected(self):
        assert policy.services_cost_cents(self.SERVICES, None) == 0
        assert policy.services_cost_cents(None, [0]) == 0
