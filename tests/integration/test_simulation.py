"""完整对局模拟测试"""
import json

import pytest

from lesnura import (
    DECK_TOTAL,
    Game,
    GameConfig,
    GameStalledError,
    Outcome,
    Phase,
    SimConfig,
    make_strategy,
)
from lesnura.cards import Suit


def run_checked_game(num_players, kind, draw_chance, seed):
    """逐步运行一局，每个动作后检查不变量"""
    game = Game(seed=seed)
    for _ in range(num_players):
        game.add_player()
    strategies = [make_strategy(kind, draw_chance) for _ in range(num_players)]

    for _ in range(100000):
        view = game.view()
        action = strategies[game.current_player].act(view)
        if action.is_draw:
            assert view.phase == Phase.MOMENTUM
        outcome = game.take_action(action)
        assert game.card_count() == DECK_TOTAL
        assert game.tokens != 0
        if outcome is not None:
            return game, outcome
    raise AssertionError("game did not finish")


class TestFullGames:
    """完整对局测试"""

    @pytest.mark.parametrize("num_players", range(1, 10))
    @pytest.mark.parametrize("kind", ["random", "momentum"])
    def test_players_and_strategies(self, num_players, kind):
        game, outcome = run_checked_game(num_players, kind, 0.5, seed=num_players)
        assert outcome in (Outcome.WIN, Outcome.LOSS)
        assert game.is_finished
        assert game.rounds >= 1

    @pytest.mark.parametrize("draw_chance", [0.0, 0.5, 1.0])
    @pytest.mark.parametrize("seed", range(5))
    def test_draw_chances(self, draw_chance, seed):
        game, outcome = run_checked_game(3, "momentum", draw_chance, seed)
        assert outcome in (Outcome.WIN, Outcome.LOSS)

    @pytest.mark.parametrize("seed", range(20))
    def test_outcome_matches_progress(self, seed):
        game, outcome = run_checked_game(2, "random", 0.5, seed)
        made = [game.progress[s] >= game.path_lengths[s].value for s in Suit]
        assert (outcome == Outcome.WIN) == any(made)

    @pytest.mark.parametrize("seed", range(10))
    def test_true_length_never_revealed(self, seed):
        game, _ = run_checked_game(4, "momentum", 0.5, seed)
        for suit in Suit:
            assert not game.path_info[suit].is_showing(game.path_lengths[suit].rank)

    def test_same_seed_same_game(self):
        a, outcome_a = run_checked_game(3, "momentum", 0.5, seed=99)
        b, outcome_b = run_checked_game(3, "momentum", 0.5, seed=99)
        assert outcome_a == outcome_b
        assert a.rounds == b.rounds
        assert a.progress == b.progress
        assert a.tokens == b.tokens


class TestArenaSimulation:
    """批量模拟测试"""

    def test_many_games(self):
        from evaluation import Arena, MetricsCollector

        config = SimConfig(num_players=4, num_games=50, strategy="momentum", seed=0)
        result = Arena(config).run()

        assert result.total_games == 50
        assert result.wins + result.losses == 50
        for match in result.matches:
            made = any(p >= t for p, t in zip(match.progress, match.path_lengths))
            assert match.won == made

        collector = MetricsCollector()
        collector.add_matches(result.matches)
        metrics = collector.compute_metrics()
        assert metrics["total_games"] == 50
        assert 0.0 <= metrics["win_rate"] <= 1.0
        assert metrics["avg_rounds"] >= 1.0

    def test_stalled_game(self):
        from evaluation import Arena

        config = SimConfig(
            num_players=2,
            num_games=1,
            seed=0,
            max_actions=10,
            game=GameConfig(start_tokens=500),
        )
        with pytest.raises(GameStalledError):
            Arena(config).run()


class TestSimulateCli:
    """命令行测试"""

    def test_sim(self, capsys):
        from scripts.simulate import main

        code = main(["sim", "-n", "3", "-s", "momentum", "-g", "4", "--seed", "1"])
        assert code == 0

        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 4
        assert all(line in ("Result: Win", "Result: Loss") for line in lines)

    def test_quiet(self, capsys):
        from scripts.simulate import main

        assert main(["sim", "-n", "2", "-s", "random", "-g", "2", "--quiet"]) == 0
        assert capsys.readouterr().out == ""

    def test_output_file(self, tmp_path):
        from scripts.simulate import main

        output = tmp_path / "results.json"
        code = main([
            "sim", "-n", "2", "-s", "random", "-d", "0.25", "-g", "3",
            "--seed", "5", "--quiet", "--output", str(output),
        ])
        assert code == 0

        data = json.loads(output.read_text())
        assert data["config"]["draw_chance"] == 0.25
        assert data["wins"] + data["losses"] == 3
        assert len(data["matches"]) == 3
        assert data["matches"][0]["seed"] == 5

    def test_invalid_draw_chance(self):
        from scripts.simulate import main

        assert main(["sim", "-n", "2", "-s", "random", "-d", "2.0"]) == 1

    def test_stalled_reports_failure(self):
        from scripts.simulate import main

        code = main([
            "sim", "-n", "1", "-s", "random", "--tokens", "500",
            "--max-actions", "5", "--quiet",
        ])
        assert code == 1

    @pytest.mark.parametrize("hand_size", ["0", "-2"])
    def test_empty_starting_hand_rejected(self, hand_size, capsys):
        from scripts.simulate import main

        code = main(["sim", "-n", "2", "-s", "random", "--hand-size", hand_size])
        assert code == 1
        assert capsys.readouterr().out == ""

    def test_missing_strategy(self):
        from scripts.simulate import parse_args

        with pytest.raises(SystemExit):
            parse_args(["sim", "-n", "2"])

    def test_parse_defaults(self):
        from scripts.simulate import build_config, parse_args

        args = parse_args(["sim", "-n", "5", "-s", "momentum"])
        config = build_config(args)
        assert config.num_players == 5
        assert config.num_games == 1
        assert config.draw_chance == 0.5
        assert config.game.hand_size == 5
        assert config.game.start_tokens == 15
