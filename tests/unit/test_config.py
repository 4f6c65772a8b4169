"""配置测试"""
import pytest

from lesnura.config import STRATEGIES, GameConfig, SimConfig


class TestGameConfig:
    """GameConfig 测试"""

    def test_defaults(self):
        config = GameConfig()
        assert config.start_tokens == 15
        assert config.start_progress == -10
        assert config.hand_size == 5
        assert config.num_decks == 2
        assert config.low_rank_limit == 6
        assert config.die_sides == 6

    def test_zero_tokens_rejected(self):
        with pytest.raises(ValueError):
            GameConfig(start_tokens=0)

    def test_negative_tokens_allowed(self):
        assert GameConfig(start_tokens=-3).start_tokens == -3

    @pytest.mark.parametrize("kwargs", [
        {"hand_size": -1},
        {"hand_size": 0},
        {"num_decks": 0},
        {"die_sides": 0},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            GameConfig(**kwargs)

    def test_from_dict_ignores_unknown_keys(self):
        config = GameConfig.from_dict({"hand_size": 7, "unknown": 1})
        assert config.hand_size == 7
        assert config.start_tokens == 15


class TestSimConfig:
    """SimConfig 测试"""

    def test_defaults(self):
        config = SimConfig()
        assert config.strategy in STRATEGIES
        assert config.draw_chance == 0.5
        assert isinstance(config.game, GameConfig)

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            SimConfig(strategy="greedy")

    @pytest.mark.parametrize("chance", [-0.1, 1.5])
    def test_draw_chance_out_of_range(self, chance):
        with pytest.raises(ValueError):
            SimConfig(draw_chance=chance)

    @pytest.mark.parametrize("chance", [0.0, 1.0])
    def test_draw_chance_bounds(self, chance):
        assert SimConfig(draw_chance=chance).draw_chance == chance

    def test_negative_games(self):
        with pytest.raises(ValueError):
            SimConfig(num_games=-1)

    def test_from_dict_nested_game(self):
        config = SimConfig.from_dict({
            "num_players": 3,
            "strategy": "random",
            "game": {"start_tokens": 5},
        })
        assert config.num_players == 3
        assert config.strategy == "random"
        assert config.game.start_tokens == 5
        assert config.game.hand_size == 5

    def test_game_configs_not_shared(self):
        a, b = SimConfig(), SimConfig()
        a.game.hand_size = 9
        assert b.game.hand_size == 5
