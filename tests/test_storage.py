"""
Tests for CredentialStore, the in-memory credential collection.

Covers:
- Insert order and returned positions
- Replace / remove by position, including out-of-range positions
- Case-insensitive search over site and username
- Stable ids, duplicate detection and change notification
"""

import logging

import pytest

from passkeeper.storage import (
    Credential, CredentialStore, IndexOutOfRangeError,
    EVENT_INSERTED, EVENT_REPLACED, EVENT_REMOVED, EVENT_CLEARED,
)


class TestCredential:
    def test_repr_hides_password(self):
        credential = Credential("site.com", "bob", "hunter2")
        assert "hunter2" not in repr(credential)
        assert "site.com" in repr(credential)

    def test_dict_round_trip(self):
        credential = Credential("site.com", "bob", "pw1")
        assert credential.to_dict() == {"site": "site.com", "username": "bob", "password": "pw1"}
        assert Credential.from_dict(credential.to_dict()) == credential

    def test_blank_fields_are_accepted(self):
        credential = Credential("", "", "")
        store = CredentialStore()
        assert store.insert(credential) == 0


class TestInsert:
    def test_insert_returns_positions(self, store):
        assert store.insert(Credential("a.com", "u1", "p1")) == 0
        assert store.insert(Credential("b.com", "u2", "p2")) == 1
        assert len(store) == 2

    def test_n_inserts_search_empty_returns_all_in_order(self, store):
        records = [Credential(f"site{i}.com", f"user{i}", f"pw{i}") for i in range(25)]
        for record in records:
            store.insert(record)

        assert len(store) == 25
        assert list(store.search("")) == list(enumerate(records))

    def test_no_deduplication(self, store):
        record = Credential("a.com", "bob", "pw")
        store.insert(record)
        store.insert(record)
        assert len(store) == 2


class TestReplace:
    def test_replace_keeps_position_and_length(self, sample_store):
        new = Credential("new.com", "carol", "z")
        sample_store.replace(0, new)

        assert len(sample_store) == 2
        assert sample_store[0] == new
        assert sample_store[1].site == "test.org"

    @pytest.mark.parametrize("index", [-1, 2, 100])
    def test_replace_out_of_range(self, sample_store, index):
        before = sample_store.entries()
        with pytest.raises(IndexOutOfRangeError) as exc_info:
            sample_store.replace(index, Credential("x", "y", "z"))

        assert exc_info.value.index == index
        assert exc_info.value.length == 2
        assert sample_store.entries() == before

    def test_replace_on_empty_store(self, store):
        with pytest.raises(IndexOutOfRangeError):
            store.replace(0, Credential("x", "y", "z"))
        assert len(store) == 0

    def test_index_error_is_an_index_error(self, store):
        with pytest.raises(IndexError):
            store.replace(0, Credential("x", "y", "z"))


class TestRemove:
    def test_remove_shifts_later_records(self, store):
        records = [Credential(f"s{i}", f"u{i}", f"p{i}") for i in range(4)]
        for record in records:
            store.insert(record)

        removed = store.remove(1)

        assert removed == records[1]
        assert len(store) == 3
        assert store[1] == records[2]
        assert store.entries() == [records[0], records[2], records[3]]

    @pytest.mark.parametrize("index", [-1, 2, 5])
    def test_remove_out_of_range(self, sample_store, index):
        before = sample_store.entries()
        with pytest.raises(IndexOutOfRangeError):
            sample_store.remove(index)
        assert sample_store.entries() == before

    def test_getitem_rejects_negative_index(self, sample_store):
        with pytest.raises(IndexOutOfRangeError):
            sample_store[-1]


class TestSearch:
    def test_search_is_case_insensitive_on_site(self, sample_store):
        results = list(sample_store.search("EXAMPLE"))
        assert results == [(0, Credential("Example.com", "alice", "x"))]

    def test_search_matches_site_or_username(self, sample_store):
        # "o" is in "Example.com" and in "Bob"/"test.org"
        assert [i for i, _ in sample_store.search("o")] == [0, 1]

    def test_search_matches_username_only(self, sample_store):
        assert [i for i, _ in sample_store.search("bob")] == [1]

    def test_search_does_not_match_password(self, store):
        store.insert(Credential("site.com", "bob", "zzzsecret"))
        assert list(store.search("zzz")) == []

    def test_search_empty_store(self, store):
        assert list(store.search("")) == []

    def test_search_no_match(self, sample_store):
        assert list(sample_store.search("nothing")) == []

    def test_search_is_restartable(self, sample_store):
        view = sample_store.search("o")
        assert list(view) == list(view)

    def test_search_view_reflects_later_changes(self, sample_store):
        view = sample_store.search("")
        sample_store.insert(Credential("third.net", "dan", "z"))
        assert len(list(view)) == 3

    def test_search_does_not_mutate(self, sample_store):
        before = sample_store.entries()
        first = list(sample_store.search("e"))
        _ = sample_store[0]
        second = list(sample_store.search("e"))
        assert first == second
        assert sample_store.entries() == before


class TestScenario:
    def test_insert_replace_search_remove(self, store):
        assert store.insert(Credential("site.com", "bob", "pw1")) == 0
        assert store.insert(Credential("other.com", "ann", "pw2")) == 1

        store.replace(0, Credential("site.com", "bob", "newpw"))
        assert list(store.search("site")) == [(0, Credential("site.com", "bob", "newpw"))]

        store.remove(0)
        assert store.entries() == [Credential("other.com", "ann", "pw2")]
        assert store[0] == Credential("other.com", "ann", "pw2")


class TestStableIds:
    def test_id_survives_replace(self, sample_store):
        entry_id = sample_store.id_at(1)
        sample_store.replace(1, Credential("changed.org", "Bob", "q"))
        assert sample_store.id_at(1) == entry_id

    def test_id_follows_record_after_earlier_remove(self, sample_store):
        entry_id = sample_store.id_at(1)
        sample_store.remove(0)
        assert sample_store.index_of(entry_id) == 0
        assert sample_store.get(entry_id).site == "test.org"

    def test_ids_are_unique(self, store):
        for _ in range(10):
            store.insert(Credential("same", "same", "same"))
        ids = {store.id_at(i) for i in range(10)}
        assert len(ids) == 10

    def test_replace_by_id(self, sample_store):
        entry_id = sample_store.id_at(0)
        assert sample_store.replace_by_id(entry_id, Credential("new.com", "alice", "n")) is True
        assert sample_store[0].site == "new.com"

    def test_remove_by_id(self, sample_store):
        entry_id = sample_store.id_at(0)
        assert sample_store.remove_by_id(entry_id) is True
        assert sample_store.index_of(entry_id) is None
        assert sample_store.remove_by_id(entry_id) is False

    def test_unknown_id(self, sample_store):
        assert sample_store.get("missing") is None
        assert sample_store.replace_by_id("missing", Credential("a", "b", "c")) is False
        assert len(sample_store) == 2


class TestDuplicates:
    def test_find_duplicates_ignores_case(self, store):
        store.insert(Credential("Site.com", "Bob", "1"))
        store.insert(Credential("other.com", "ann", "2"))
        store.insert(Credential("site.COM", "bob", "3"))
        assert store.find_duplicates() == [[0, 2]]

    def test_no_duplicates(self, sample_store):
        assert sample_store.find_duplicates() == []


class TestListeners:
    def test_events_for_each_mutation(self, store):
        events = []
        store.subscribe(lambda event, index: events.append((event, index)))

        store.insert(Credential("a", "b", "c"))
        store.insert(Credential("d", "e", "f"))
        store.replace(1, Credential("g", "h", "i"))
        store.remove(0)
        store.clear()

        assert events == [
            (EVENT_INSERTED, 0),
            (EVENT_INSERTED, 1),
            (EVENT_REPLACED, 1),
            (EVENT_REMOVED, 0),
            (EVENT_CLEARED, -1),
        ]
        assert len(store) == 0

    def test_failed_operation_does_not_notify(self, store):
        events = []
        store.subscribe(lambda event, index: events.append(event))
        with pytest.raises(IndexOutOfRangeError):
            store.remove(0)
        assert events == []

    def test_search_does_not_notify(self, sample_store):
        events = []
        sample_store.subscribe(lambda event, index: events.append(event))
        list(sample_store.search(""))
        assert events == []

    def test_unsubscribe(self, store):
        events = []

        def listener(event, index):
            events.append(event)

        store.subscribe(listener)
        store.subscribe(listener)
        store.insert(Credential("a", "b", "c"))
        store.unsubscribe(listener)
        store.insert(Credential("d", "e", "f"))
        assert events == [EVENT_INSERTED]

    def test_failing_listener_is_logged_and_others_still_run(self, store, caplog):
        events = []

        def broken(event, index):
            raise RuntimeError("boom")

        store.subscribe(broken)
        store.subscribe(lambda event, index: events.append(event))

        with caplog.at_level(logging.ERROR, logger="passkeeper.storage"):
            assert store.insert(Credential("a", "b", "c")) == 0

        assert events == [EVENT_INSERTED]
        assert len(store) == 1
        assert "boom" in caplog.text


class TestLogging:
    def test_passwords_never_logged(self, store, caplog):
        with caplog.at_level(logging.DEBUG, logger="passkeeper.storage"):
            store.insert(Credential("site.com", "bob", "s3cr3t-value"))
            store.replace(0, Credential("site.com", "bob", "an0ther-secret"))
            store.remove(0)

        assert "site.com" in caplog.text
        assert "s3cr3t-value" not in caplog.text
        assert "an0ther-secret" not in caplog.text
