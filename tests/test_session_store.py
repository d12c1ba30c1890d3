"""Tests for SessionStore: insertion, range sums and snapshot round-trips."""

from __future__ import annotations

import logging

import pytest

from study_log import (
    DateKey,
    MalformedSnapshotError,
    Session,
    SessionStore,
    ValidationError,
)

d = DateKey.parse


# ── add_session ───────────────────────────────────────────────────────────


class TestAddSession:
    def test_creates_day_lazily(self, store):
        assert len(store) == 0
        store.add_session(d("2024-03-10"), Session(1.5))
        assert len(store) == 1
        assert store.dates() == [d("2024-03-10")]

    def test_keeps_insertion_order(self, store):
        day = d("2024-03-10")
        store.add_session(day, Session(1.5, "algebra"))
        store.add_session(day, Session(0.5, "reading"))
        assert [s.note for s in store.sessions_on(day)] == ["algebra", "reading"]

    def test_saves_snapshot_after_each_add(self, store, fake_port):
        store.add_session(d("2024-03-10"), Session(1.0))
        store.add_session(d("2024-03-11"), Session(2.0, "physics"))
        assert len(fake_port.saved) == 2
        assert fake_port.saved[-1] == {
            "2024-03-10": [{"time": 1.0}],
            "2024-03-11": [{"time": 2.0, "description": "physics"}],
        }

    @pytest.mark.parametrize("hours", [0, -1.0, float("nan"), float("inf")])
    def test_rejects_invalid_duration(self, store, fake_port, hours):
        with pytest.raises(ValidationError):
            store.add_session(d("2024-03-10"), Session(hours))
        assert len(store) == 0
        assert fake_port.saved == []

    def test_works_without_persistence(self):
        store = SessionStore()
        store.add_session(d("2024-03-10"), Session(1.0))
        assert store.session_count() == 1

    def test_sessions_on_returns_copy(self, store):
        day = d("2024-03-10")
        store.add_session(day, Session(1.0))
        store.sessions_on(day).append(Session(5.0))
        assert store.sum_range(day, day) == 1.0

    def test_sessions_on_empty_day(self, store):
        assert store.sessions_on(d("2024-03-10")) == []
        assert len(store) == 0


# ── sum_range ─────────────────────────────────────────────────────────────


class TestSumRange:
    def test_two_sessions_same_day(self, store):
        store.add_session(d("2024-03-10"), Session(1.5))
        store.add_session(d("2024-03-10"), Session(0.5))
        assert store.sum_range(d("2024-03-10"), d("2024-03-10")) == 2.0

    def test_inclusive_bounds(self, store):
        store.add_session(d("2024-03-01"), Session(1.0))
        store.add_session(d("2024-03-05"), Session(2.0))
        store.add_session(d("2024-03-06"), Session(4.0))
        assert store.sum_range(d("2024-03-01"), d("2024-03-05")) == 3.0
        assert store.sum_range(d("2024-03-02"), d("2024-03-04")) == 0.0

    def test_inverted_range_is_empty(self, store):
        store.add_session(d("2024-03-10"), Session(3.0))
        assert store.sum_range(d("2024-03-11"), d("2024-03-09")) == 0.0

    def test_empty_store(self, store):
        assert store.sum_range(d("2000-01-01"), d("2100-12-31")) == 0.0

    def test_crosses_year_boundary(self, store):
        store.add_session(d("2023-12-31"), Session(1.25))
        store.add_session(d("2024-01-01"), Session(0.75))
        assert store.sum_range(d("2023-12-30"), d("2024-01-02")) == 2.0

    @pytest.mark.parametrize("mid", ["2024-02-27", "2024-02-28", "2024-02-29", "2024-03-01"])
    def test_additive_over_adjacent_ranges(self, store, mid):
        for day, hours in [
            ("2024-02-26", 0.3),
            ("2024-02-28", 1.1),
            ("2024-02-29", 2.7),
            ("2024-03-01", 0.9),
            ("2024-03-02", 4.4),
        ]:
            store.add_session(d(day), Session(hours))
        start, end, mid_key = d("2024-02-26"), d("2024-03-02"), d(mid)
        whole = store.sum_range(start, end)
        parts = store.sum_range(start, mid_key) + store.sum_range(mid_key.add_days(1), end)
        assert whole == pytest.approx(parts)
        assert whole == pytest.approx(9.4)

    def test_daily_totals_match_single_day_sums(self, store):
        store.add_session(d("2024-03-10"), Session(1.5))
        store.add_session(d("2024-03-10"), Session(0.5))
        store.add_session(d("2024-03-12"), Session(3.0))
        totals = store.daily_totals()
        assert totals == {d("2024-03-10"): 2.0, d("2024-03-12"): 3.0}
        for day, total in totals.items():
            assert store.sum_range(day, day) == total


# ── snapshot / load ───────────────────────────────────────────────────────


class TestSnapshot:
    def test_load_of_snapshot_restores_store(self, store):
        store.add_session(d("2024-03-10"), Session(1.5, "algebra"))
        store.add_session(d("2024-03-10"), Session(0.5))
        store.add_session(d("2023-12-31"), Session(2.0, ""))

        restored = SessionStore()
        restored.load(store.snapshot())
        assert restored.dates() == store.dates()
        for day in store.dates():
            assert restored.sessions_on(day) == store.sessions_on(day)
        assert restored.snapshot() == store.snapshot()

    def test_snapshot_keys_sorted(self, store):
        store.add_session(d("2024-03-10"), Session(1.0))
        store.add_session(d("2023-01-02"), Session(1.0))
        assert list(store.snapshot()) == ["2023-01-02", "2024-03-10"]

    def test_load_accepts_saved_shape(self):
        store = SessionStore()
        store.load({
            "2024-03-10": [
                {"time": 1, "description": "algebra"},
                {"time": 0.25},
            ],
        })
        assert store.sessions_on(d("2024-03-10")) == [
            Session(1.0, "algebra"),
            Session(0.25, None),
        ]

    def test_load_replaces_prior_state(self, store):
        store.add_session(d("2024-03-10"), Session(1.0))
        store.load({"2024-04-01": [{"time": 2.0}]})
        assert store.dates() == [d("2024-04-01")]

    def test_load_none_is_empty(self, store):
        store.add_session(d("2024-03-10"), Session(1.0))
        store.load(None)
        assert len(store) == 0

    def test_load_drops_empty_days(self):
        store = SessionStore()
        store.load({"2024-03-10": [], "2024-03-11": [{"time": 1.0}]})
        assert store.dates() == [d("2024-03-11")]

    @pytest.mark.parametrize(
        "snapshot",
        [
            {"2024-03-10": "not-an-array"},
            ["2024-03-10"],
            "garbage",
            {"03/10/2024": [{"time": 1.0}]},
            {"2024-02-30": [{"time": 1.0}]},
            {"2024-03-10": ["one hour"]},
            {"2024-03-10": [{"description": "no time"}]},
            {"2024-03-10": [{"time": "1.5"}]},
            {"2024-03-10": [{"time": True}]},
            {"2024-03-10": [{"time": 0}]},
            {"2024-03-10": [{"time": -2.0}]},
            {"2024-03-10": [{"time": 1.0, "description": 7}]},
            {"2024-03-10": [{"time": 10**400}]},
        ],
    )
    def test_malformed_snapshot_keeps_prior_state(self, store, snapshot):
        store.add_session(d("2024-01-01"), Session(3.0))
        before = store.snapshot()
        with pytest.raises(MalformedSnapshotError):
            store.load(snapshot)
        assert store.snapshot() == before

    def test_malformed_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            SessionStore().load({"2024-03-10": "not-an-array"})


# ── open ──────────────────────────────────────────────────────────────────


class TestOpen:
    def test_loads_port_snapshot(self, make_port):
        port = make_port({"2024-03-10": [{"time": 1.5}]})
        store = SessionStore.open(port)
        assert store.sum_range(d("2024-03-10"), d("2024-03-10")) == 1.5
        assert port.saved == []

    def test_absent_snapshot_gives_empty_store(self, make_port):
        store = SessionStore.open(make_port(None))
        assert len(store) == 0

    def test_malformed_snapshot_falls_back_to_empty(self, make_port, caplog):
        port = make_port({"2024-03-10": "not-an-array"})
        with caplog.at_level(logging.WARNING, logger="study_log"):
            store = SessionStore.open(port)
        assert len(store) == 0
        assert "malformed" in caplog.text

    def test_port_load_error_falls_back_to_empty(self, make_port):
        port = make_port()

        def broken_load():
            raise MalformedSnapshotError("unreadable")

        port.load = broken_load
        store = SessionStore.open(port)
        assert len(store) == 0

    def test_store_still_saves_after_fallback(self, make_port):
        port = make_port("garbage")
        store = SessionStore.open(port)
        store.add_session(d("2024-03-10"), Session(1.0))
        assert port.saved == [{"2024-03-10": [{"time": 1.0}]}]

    def test_oversized_integer_time_falls_back_to_empty(self, make_port):
        store = SessionStore.open(make_port({"2024-03-10": [{"time": 10**400}]}))
        assert len(store) == 0
