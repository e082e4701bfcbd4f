# Area: Config Tests
"""Tests for the game configuration models."""

import json

import pytest

from majsoul_coyote.config import (
    CoyoteAction,
    CoyoteGameConfigItem,
    GamePlayerInfo,
    load_game_config,
    parse_game_config,
)
from majsoul_coyote.errors import ConfigFileError


def _record(**extra):
    record = {"nickname": "Alice", "host": "http://h", "targetClientId": "c1"}
    record.update(extra)
    return record


class TestCoyoteAction:
    """Tests for CoyoteAction."""

    def test_camel_case_aliases(self):
        action = CoyoteAction.model_validate({"addBase": 3, "subRandom": 2})
        assert action.add_base == 3
        assert action.sub_random == 2
        assert action.fire is None

    def test_snake_case_names_accepted(self):
        action = CoyoteAction.model_validate({"add_random": 4})
        assert action.add_random == 4

    def test_fire_time_defaults_to_five_seconds(self):
        assert CoyoteAction(fire=10).fire_time == 5

    def test_fire_time_from_config(self):
        assert CoyoteAction.model_validate({"fire": 10, "time": 12}).fire_time == 12


class TestCoyoteGameConfigItem:
    """Tests for CoyoteGameConfigItem."""

    def test_minimal_record(self):
        item = CoyoteGameConfigItem.model_validate(_record())
        assert item.target_client_id == "c1"
        assert item.is_me is False
        assert item.mingpai is None
        assert item.sima.no4 is None

    def test_rank_action_four_player(self):
        item = CoyoteGameConfigItem.model_validate(
            _record(sima={"no3": {"addBase": 7}})
        )
        assert item.rank_action(4, 3).add_base == 7
        assert item.rank_action(4, 1) is None

    def test_rank_action_three_player(self):
        item = CoyoteGameConfigItem.model_validate(
            _record(sanma={"no1": {"subBase": 2}}, sima={"no1": {"addBase": 9}})
        )
        assert item.rank_action(3, 1).sub_base == 2

    def test_rank_action_unknown_player_count(self):
        item = CoyoteGameConfigItem.model_validate(_record(sima={"no1": {"addBase": 1}}))
        assert item.rank_action(2, 1) is None

    def test_rank_action_out_of_range_rank(self):
        item = CoyoteGameConfigItem.model_validate(_record())
        assert item.rank_action(3, 4) is None

    def test_missing_host_rejected(self):
        with pytest.raises(ConfigFileError):
            parse_game_config([{"nickname": "Alice", "targetClientId": "c1"}])


class TestGamePlayerInfo:

    def test_label_prefers_nickname(self):
        assert GamePlayerInfo(nickname="Bob", account_id=5, seat=1).label == "Bob"

    def test_label_falls_back_to_account_id(self):
        assert GamePlayerInfo(account_id=5, seat=1).label == "#5"


class TestLoadGameConfig:
    """Tests for parse_game_config() and load_game_config()."""

    def test_parses_list(self):
        table = parse_game_config([_record(), _record(nickname="Bob")])
        assert [item.nickname for item in table] == ["Alice", "Bob"]

    def test_parses_players_wrapper(self):
        table = parse_game_config({"players": [_record()]})
        assert len(table) == 1

    def test_rejects_non_list(self):
        with pytest.raises(ConfigFileError):
            parse_game_config({"something": 1})

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "coyote.json"
        path.write_text(json.dumps([_record(dianpao={"fire": 20, "time": 10})]),
                        encoding="utf-8")
        table = load_game_config(path)
        assert table[0].dianpao.fire == 20

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigFileError):
            load_game_config(tmp_path / "missing.json")

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(ConfigFileError) as exc_info:
            load_game_config(path)
        assert str(path) in str(exc_info.value)
