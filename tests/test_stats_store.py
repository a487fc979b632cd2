"""Unit tests for stats_store.py — stats and leaderboard persistence."""
import json

from holdem.managers.stats_store import (
    LEADERBOARD_KEY,
    STATS_KEY,
    InMemoryStore,
    JsonFileStore,
    StatsStore,
)
from holdem.models.records import LeaderboardEntry, SessionStats


class TestStats:
    def test_missing_record_is_zeroed(self, store):
        stats = store.load_stats()
        assert stats == SessionStats()
        assert stats.win_rate == 0.0

    def test_round_trip(self, store):
        store.save_stats(SessionStats(hands_played=5, hands_won=2, total_profit=-14))
        stats = store.load_stats()
        assert stats.hands_played == 5
        assert stats.hands_won == 2
        assert stats.total_profit == -14

    def test_corrupt_record_falls_back(self):
        kv = InMemoryStore()
        kv.set(STATS_KEY, "{not json")
        assert StatsStore(kv).load_stats() == SessionStats()

    def test_invalid_fields_fall_back(self):
        kv = InMemoryStore()
        kv.set(STATS_KEY, json.dumps({"hands_played": -3}))
        assert StatsStore(kv).load_stats() == SessionStats()


class TestLeaderboard:
    def test_empty(self, store):
        assert store.load_leaderboard() == []

    def test_sorted_by_profit(self, store):
        for profit in (5, -2, 40, 0):
            store.add_to_leaderboard(LeaderboardEntry(date="2026-01-01", profit=profit))
        assert [e.profit for e in store.load_leaderboard()] == [40, 5, 0, -2]

    def test_keeps_best_twenty(self, store):
        entries = [LeaderboardEntry(date="2026-01-01", profit=p) for p in range(30)]
        kept = store.save_leaderboard(entries)
        assert len(kept) == 20
        assert kept[0].profit == 29
        assert kept[-1].profit == 10
        assert len(store.load_leaderboard()) == 20

    def test_custom_size(self):
        store = StatsStore(InMemoryStore(), leaderboard_size=3)
        for p in range(5):
            store.add_to_leaderboard(LeaderboardEntry(date="2026-01-01", profit=p))
        assert [e.profit for e in store.load_leaderboard()] == [4, 3, 2]

    def test_corrupt_leaderboard_falls_back(self):
        kv = InMemoryStore()
        kv.set(LEADERBOARD_KEY, json.dumps({"profit": 1}))
        assert StatsStore(kv).load_leaderboard() == []


class TestJsonFileStore:
    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "stats.json"
        StatsStore(JsonFileStore(path)).save_stats(SessionStats(hands_played=3))
        assert StatsStore(JsonFileStore(path)).load_stats().hands_played == 3

    def test_keys_share_one_file(self, tmp_path):
        path = tmp_path / "stats.json"
        store = StatsStore(JsonFileStore(path))
        store.save_stats(SessionStats(hands_played=1))
        store.add_to_leaderboard(LeaderboardEntry(date="2026-01-01", profit=7))
        data = json.loads(path.read_text())
        assert set(data) == {STATS_KEY, LEADERBOARD_KEY}

    def test_missing_file(self, tmp_path):
        assert JsonFileStore(tmp_path / "nope.json").get(STATS_KEY) is None

    def test_unreadable_file(self, tmp_path):
        path = tmp_path / "stats.json"
        path.write_text("garbage")
        store = StatsStore(JsonFileStore(path))
        assert store.load_stats() == SessionStats()
        store.save_stats(SessionStats(hands_played=1))
        assert store.load_stats().hands_played == 1

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "stats.json"
        JsonFileStore(path).set("k", "v")
        assert JsonFileStore(path).get("k") == "v"
