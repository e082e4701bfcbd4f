# Area: Runner Tests
"""Tests for the replay file reader and ReplayRunner."""

import asyncio
import json

import pytest

from majsoul_coyote.errors import ConfigFileError
from majsoul_coyote.runner import ReplayRunner, read_replay

FAST = {"settle_delay": 0.01, "outcome_delay": 0.01, "tick_interval": 0.01}

GAME_CONFIG = [
    {"nickname": "Alice", "host": "http://coyote.test", "targetClientId": "alice",
     "biejializhi": {"addBase": 2}, "sima": {"no4": {"subBase": 1}}},
    {"isMe": True, "host": "http://coyote.test", "targetClientId": "me",
     "dianpao": {"addRandom": 5}},
]


def _write_lines(path, entries):
    path.write_text("\n".join(json.dumps(e) for e in entries) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path):
    game_config = tmp_path / "coyote.json"
    game_config.write_text(json.dumps(GAME_CONFIG), encoding="utf-8")
    return {
        "game_config": str(game_config),
        "log_file": str(tmp_path / "logs" / "coyote.log"),
        "log_level": "DEBUG",
        "linger_seconds": 0.5,
        "nickname": "Me",
    }


class TestReadReplay:

    def test_sorts_events_and_reads_players(self, tmp_path):
        path = _write_lines(tmp_path / "match.jsonl", [
            {"event": "start", "players": [{"nickname": "A", "seat": 0}]},
            {"at": 2, "event": "zumo", "args": [1]},
            {"at": 1, "event": "riichi", "args": [3]},
        ])

        players, events = read_replay(path)

        assert players == [{"nickname": "A", "seat": 0}]
        assert events == [(1.0, "riichi", [3]), (2.0, "zumo", [1])]

    def test_skips_comments_and_blank_lines(self, tmp_path):
        path = tmp_path / "match.jsonl"
        path.write_text('# recorded\n\n{"event": "liuju", "args": [[0]]}\n', encoding="utf-8")

        _, events = read_replay(path)
        assert events == [(0.0, "liuju", [[0]])]

    def test_unknown_event(self, tmp_path):
        path = _write_lines(tmp_path / "match.jsonl", [{"event": "kan", "args": []}])
        with pytest.raises(ValueError, match="unknown event 'kan'"):
            read_replay(path)

    def test_line_must_be_object(self, tmp_path):
        path = tmp_path / "match.jsonl"
        path.write_text("[1, 2]\n", encoding="utf-8")
        with pytest.raises(ValueError, match=":1: expected a JSON object"):
            read_replay(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "match.jsonl"
        path.write_text("{not json\n", encoding="utf-8")
        with pytest.raises(ValueError, match=":1: invalid JSON"):
            read_replay(path)


class TestReplayRunner:

    def test_missing_game_config_setting(self, tmp_path):
        with pytest.raises(ValueError):
            ReplayRunner({"log_file": str(tmp_path / "x.log")})

    def test_bad_game_config_file(self, tmp_path, settings):
        bad = tmp_path / "bad.json"
        bad.write_text("[{\"nickname\": \"A\"}]", encoding="utf-8")
        settings["game_config"] = str(bad)
        with pytest.raises(ConfigFileError):
            ReplayRunner(settings)

    def test_build_players_marks_local_account(self, settings, api_factory):
        runner = ReplayRunner(settings, api_factory=api_factory)
        players = runner.build_players([
            {"nickname": "Alice", "seat": 0},
            {"nickname": "Me", "seat": 1},
        ])
        assert [p.is_me for p in players] == [False, True]

    def test_http_timeout_taken_from_settings(self, settings):
        settings["http_timeout"] = 2.0
        runner = ReplayRunner(settings)
        assert runner.controller_options["http_timeout"] == 2.0

    def test_replay_drives_controllers(self, tmp_path, settings, api_factory):
        events = _write_lines(tmp_path / "match.jsonl", [
            {"event": "start", "players": [
                {"nickname": "Alice", "seat": 0},
                {"nickname": "Bob", "seat": 1},
                {"nickname": "Me", "seat": 2},
                {"nickname": "Dan", "seat": 3},
            ]},
            {"at": 0.0, "event": "riichi", "args": [3]},
            {"at": 0.02, "event": "ron", "args": [1, 2]},
            {"at": 0.05, "event": "zhongju", "args": [[
                {"seat": 0, "rank": 4, "point": 1000},
                {"seat": 1, "rank": 1, "point": 40000},
                {"seat": 2, "rank": 3, "point": 20000},
                {"seat": 3, "rank": 2, "point": 30000},
            ]]},
        ])
        runner = ReplayRunner(settings, api_factory=api_factory, **FAST)

        session = asyncio.run(runner.replay(events))

        alice, me = api_factory.created
        assert alice.posts == [{"strength": {"add": 2}}, {"strength": {"sub": 1}}]
        assert me.posts == [{"randomStrength": {"add": 5}}]
        assert session.finished is True
        assert runner.source.listener_count() == 0

    def test_linger_closes_leftover_controllers(self, tmp_path, settings, api_factory):
        events = _write_lines(tmp_path / "match.jsonl", [
            {"event": "start", "players": [{"nickname": "Alice", "seat": 0}]},
        ])
        settings["linger_seconds"] = 0.05
        runner = ReplayRunner(settings, api_factory=api_factory, **FAST)

        session = asyncio.run(runner.replay(events))

        assert session.finished is True
        assert runner.source.listener_count() == 0

    def test_nobody_configured_returns_early(self, tmp_path, settings, api_factory):
        events = _write_lines(tmp_path / "match.jsonl", [
            {"event": "start", "players": [{"nickname": "Zed", "seat": 0}]},
        ])
        settings.pop("nickname")
        runner = ReplayRunner(settings, api_factory=api_factory)

        session = asyncio.run(runner.replay(events))

        assert session.controllers == []
        assert api_factory.created == []
