import pytest
from datetime import date, datetime

from models.import_record import ImportRecord


def _record(email="jane@x.com", activation_date=date(2024, 1, 17), roles=("editor", "viewer")):
    return ImportRecord(
        first_name="Jane",
        last_name="Doe",
        email=email,
        activation_date=activation_date,
        roles=roles,
    )


class TestWaitlistService:
    """Tests for WaitlistService."""

    def test_insert_returns_id(self, services):
        entry_id = services.waitlist.insert(_record())

        assert entry_id is not None
        assert entry_id > 0

    def test_insert_and_find(self, services):
        entry_id = services.waitlist.insert(_record())

        entry = services.waitlist.find(entry_id)

        assert entry.id == entry_id
        assert entry.first_name == "Jane"
        assert entry.last_name == "Doe"
        assert entry.email == "jane@x.com"
        assert entry.activation_date == date(2024, 1, 17)
        assert isinstance(entry.created_at, datetime)

    def test_roles_round_trip_in_order(self, services):
        """Test that roles read back in the order they were stored."""
        services.waitlist.insert(_record(roles=("editor", "viewer")))
        services.waitlist.insert(_record(email="b@x.com", roles=("viewer", "editor")))

        entries = services.waitlist.entries_for_date(date(2024, 1, 17))

        assert [e.roles for e in entries] == [("editor", "viewer"), ("viewer", "editor")]

    def test_roles_with_commas_survive(self, services):
        entry_id = services.waitlist.insert(_record(roles=("team, north", "viewer")))

        assert services.waitlist.find(entry_id).roles == ("team, north", "viewer")

    def test_insert_duplicate_email_allowed(self, services):
        first = services.waitlist.insert(_record())
        second = services.waitlist.insert(_record())

        assert first != second
        assert len(services.waitlist.find_all()) == 2

    def test_insert_without_date_raises(self, services):
        with pytest.raises(ValueError, match="without an activation date"):
            services.waitlist.insert(_record(activation_date=None))

    def test_entries_for_date_exact_match(self, services):
        """Test that only entries on exactly that date are returned."""
        services.waitlist.insert(_record(email="a@x.com", activation_date=date(2024, 1, 16)))
        services.waitlist.insert(_record(email="b@x.com", activation_date=date(2024, 1, 17)))
        services.waitlist.insert(_record(email="c@x.com", activation_date=date(2024, 1, 18)))

        entries = services.waitlist.entries_for_date(date(2024, 1, 17))

        assert [e.email for e in entries] == ["b@x.com"]

    def test_entries_for_date_insertion_order(self, services):
        for email in ["c@x.com", "a@x.com", "b@x.com"]:
            services.waitlist.insert(_record(email=email))

        entries = services.waitlist.entries_for_date(date(2024, 1, 17))

        assert [e.email for e in entries] == ["c@x.com", "a@x.com", "b@x.com"]

    def test_entries_for_date_empty(self, services):
        assert services.waitlist.entries_for_date(date(2024, 1, 17)) == []

    def test_delete_by_email(self, services):
        services.waitlist.insert(_record(email="a@x.com"))
        services.waitlist.insert(_record(email="b@x.com"))

        deleted = services.waitlist.delete_by_email("a@x.com")

        assert deleted == 1
        assert [e.email for e in services.waitlist.find_all()] == ["b@x.com"]

    def test_delete_by_email_removes_all_matches(self, services):
        """Test that every entry sharing the email is removed."""
        services.waitlist.insert(_record(activation_date=date(2024, 1, 17)))
        services.waitlist.insert(_record(activation_date=date(2024, 2, 1)))

        deleted = services.waitlist.delete_by_email("jane@x.com")

        assert deleted == 2
        assert services.waitlist.find_all() == []

    def test_delete_by_email_not_found(self, services):
        assert services.waitlist.delete_by_email("nobody@x.com") == 0

    def test_delete_by_id(self, services):
        entry_id = services.waitlist.insert(_record())

        assert services.waitlist.delete(entry_id) is True
        assert services.waitlist.delete(entry_id) is False
        assert services.waitlist.find(entry_id) is None

    def test_find_all_ordered_by_date(self, services):
        services.waitlist.insert(_record(email="late@x.com", activation_date=date(2024, 3, 1)))
        services.waitlist.insert(_record(email="soon@x.com", activation_date=date(2024, 1, 11)))

        entries = services.waitlist.find_all()

        assert [e.email for e in entries] == ["soon@x.com", "late@x.com"]

    def test_to_record_round_trip(self, services):
        record = _record()
        entry_id = services.waitlist.insert(record)

        assert services.waitlist.find(entry_id).to_record() == record
