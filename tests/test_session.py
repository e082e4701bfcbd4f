# Area: Core Tests
"""Tests for MatchSession."""

import asyncio

from majsoul_coyote._core.events import GameEventSource
from majsoul_coyote.config import GamePlayerInfo, parse_game_config
from majsoul_coyote.session import MatchSession

TABLE = parse_game_config([
    {"nickname": "Alice", "host": "http://coyote.test", "targetClientId": "a"},
    {"isMe": True, "host": "http://coyote.test", "targetClientId": "me"},
])

PLAYERS = [
    GamePlayerInfo(account_id=1, nickname="Alice", seat=0),
    GamePlayerInfo(account_id=2, nickname="Bob", seat=1),
    GamePlayerInfo(account_id=3, nickname="Me", seat=2, is_me=True),
]


class TestMatchSession:

    def test_start_skips_unconfigured(self, api_factory):
        session = MatchSession(GameEventSource(), TABLE, api_factory=api_factory)
        created = session.start(PLAYERS)

        assert [c.player.nickname for c in created] == ["Alice", "Me"]
        assert [api.client_id for api in api_factory.created] == ["a", "me"]
        assert session.finished is False

    def test_nobody_configured(self, api_factory):
        session = MatchSession(GameEventSource(), parse_game_config([]),
                               api_factory=api_factory)
        assert session.start(PLAYERS) == []
        assert session.finished is True

    def test_close_destroys_all(self, api_factory):
        source = GameEventSource()
        session = MatchSession(source, TABLE, api_factory=api_factory)
        controllers = session.start(PLAYERS)

        session.close()

        assert all(c.destroyed for c in controllers)
        assert source.listener_count() == 0
        assert session.finished is True

    def test_set_config_drops_controllers_without_record(self, api_factory):
        source = GameEventSource()
        session = MatchSession(source, TABLE, api_factory=api_factory)
        session.start(PLAYERS)

        session.set_config(parse_game_config([
            {"isMe": True, "host": "http://coyote.test", "targetClientId": "me"},
        ]))

        assert [c.player.nickname for c in session.active_controllers] == ["Me"]
        assert source.listener_count() == 6

    def test_finished_after_conclusion(self, api_factory):
        results = [{"seat": s, "rank": s + 1, "point": 100} for s in range(3)]

        async def scenario():
            source = GameEventSource()
            session = MatchSession(source, TABLE, api_factory=api_factory,
                                   outcome_delay=0.01)
            session.start(PLAYERS)
            source.emit("zhongju", results)
            await asyncio.sleep(0.05)
            return session

        session = asyncio.run(scenario())
        assert session.finished is True
