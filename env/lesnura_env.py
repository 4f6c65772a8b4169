"""
Pluta Lesnura Gymnasium 环境

遵循标准 Gymnasium API。合作游戏，所有玩家共享同一奖励，
每一步由当前玩家行动。
"""
from dataclasses import dataclass
from typing import Dict, Any, Tuple, Optional, List, Union
import logging
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from lesnura.actions import Action
from lesnura.cards import NUM_RANKS, NUM_SUITS, cards_to_str
from lesnura.config import GameConfig
from lesnura.errors import IllegalActionError
from lesnura.state import Game, Outcome

from .observation import ObservationBuilder, ActionEncoder, CARD_KINDS, NUM_ACTIONS

logger = logging.getLogger(__name__)


@dataclass
class RewardConfig:
    """奖励配置"""
    win_reward: float = 1.0
    loss_reward: float = 0.0
    invalid_penalty: float = -1.0


class LesnuraEnv(gym.Env):
    """
    Pluta Lesnura Gymnasium 环境

    API:
    - reset() -> observation, info
    - step(action) -> observation, reward, terminated, truncated, info
    """

    metadata = {
        "render_modes": ["human", "ansi"],
        "name": "Lesnura-v1",
    }

    def __init__(
        self,
        num_players: int = 3,
        render_mode: Optional[str] = None,
        game_config: Optional[GameConfig] = None,
        reward_config: Optional[RewardConfig] = None,
        seed: Optional[int] = None,
    ):
        """
        Args:
            num_players: 玩家数
            render_mode: 渲染模式 ("human", "ansi", None)
            game_config: 规则配置
            reward_config: 奖励配置
            seed: 随机种子
        """
        super().__init__()

        self.num_players = num_players
        self.render_mode = render_mode
        self.game_config = game_config or GameConfig()
        self.reward_config = reward_config or RewardConfig()
        self._seed = seed

        self._obs_builder = ObservationBuilder(num_players)
        self._action_encoder = ActionEncoder()

        self._game: Optional[Game] = None

        self._define_spaces()

    def _define_spaces(self):
        """定义观测和动作空间"""
        self.action_space = spaces.Discrete(NUM_ACTIONS)

        max_count = float(self.game_config.num_decks)
        self.observation_space = spaces.Dict({
            "hand": spaces.Box(0, max_count, shape=(NUM_SUITS, NUM_RANKS), dtype=np.float32),
            "discard_top": spaces.Box(0, 1, shape=(CARD_KINDS + 1,), dtype=np.float32),
            "progress": spaces.Box(-np.inf, np.inf, shape=(NUM_SUITS,), dtype=np.float32),
            "tokens": spaces.Box(-np.inf, np.inf, shape=(1,), dtype=np.float32),
            "revealed": spaces.Box(0, 1, shape=(NUM_SUITS, NUM_RANKS), dtype=np.float32),
            "phase": spaces.Box(0, 1, shape=(2,), dtype=np.float32),
            "position": spaces.Box(0, 1, shape=(self.num_players,), dtype=np.float32),
            "piles": spaces.Box(0, np.inf, shape=(2,), dtype=np.float32),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        重置环境

        Args:
            seed: 随机种子
            options: 额外选项

        Returns:
            (observation, info) 元组
        """
        super().reset(seed=seed)

        game_seed = seed if seed is not None else self._seed
        self._game = Game(self.game_config, seed=game_seed)
        for _ in range(self.num_players):
            self._game.add_player()

        obs = self._build_observation()
        info = self._build_info()

        if self.render_mode == "human":
            self.render()

        return obs, info

    def step(
        self,
        action: Union[int, Action],
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        执行当前玩家的动作

        Args:
            action: 动作索引或 Action 对象

        Returns:
            (observation, reward, terminated, truncated, info) 元组
        """
        if self._game is None:
            raise RuntimeError("Environment not reset. Call reset() first.")
        if self._game.is_finished:
            raise RuntimeError("Episode is over. Call reset() first.")

        concrete_action = self._decode_action(action)

        try:
            if concrete_action is None:
                raise IllegalActionError(f"action {action} is not playable")
            outcome = self._game.take_action(concrete_action)
        except IllegalActionError as e:
            # 非法动作：给予惩罚并保持状态
            logger.debug("Rejected action %s: %s", action, e)
            obs = self._build_observation()
            info = self._build_info()
            info["error"] = e.message
            return obs, self.reward_config.invalid_penalty, False, False, info

        terminated = outcome is not None
        reward = self._compute_reward(outcome)

        obs = self._build_observation()
        info = self._build_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, False, info

    def _decode_action(self, action: Union[int, Action]) -> Optional[Action]:
        """解码动作"""
        if isinstance(action, Action):
            return action
        if isinstance(action, (int, np.integer)):
            return self._action_encoder.decode(int(action), self._game.view())
        raise ValueError(f"Invalid action type: {type(action)}")

    def _build_observation(self) -> Dict[str, np.ndarray]:
        return self._obs_builder.build(self._game.view()).to_dict()

    def _build_info(self) -> Dict[str, Any]:
        """构建 info 字典"""
        game = self._game
        info = {
            "current_player": game.current_player,
            "phase": game.phase.value,
            "rounds": game.rounds,
            "actions": game.actions,
            "tokens": game.tokens,
        }

        if game.is_finished:
            info["outcome"] = game.outcome.value
            info["path_lengths"] = [p.value for p in game.path_lengths]
        else:
            view = game.view()
            info["legal_action_mask"] = self._action_encoder.build_legal_mask(view)
            info["legal_action_indices"] = self._action_encoder.get_legal_action_indices(view)

        return info

    def _compute_reward(self, outcome: Optional[Outcome]) -> float:
        if outcome == Outcome.WIN:
            return self.reward_config.win_reward
        if outcome == Outcome.LOSS:
            return self.reward_config.loss_reward
        return 0.0

    def render(self) -> Optional[str]:
        """渲染环境"""
        if self.render_mode == "ansi" or self.render_mode == "human":
            return self._render_text()
        return None

    def _render_text(self) -> str:
        """文本渲染"""
        game = self._game
        lines = []
        lines.append("=" * 50)
        lines.append(f"Round: {game.rounds}  Phase: {game.phase.value}  Tokens: {game.tokens}")
        lines.append(f"Progress: {game.progress}")

        for player, hand in enumerate(game.hands):
            marker = "*" if player == game.current_player else " "
            lines.append(f"{marker}Player {player}: {cards_to_str(hand)} ({len(hand)})")

        top = game.discard.top()
        lines.append(f"Discard top: {top if top is not None else '-'} ({len(game.discard)})")
        lines.append(f"Library: {len(game.library)}")

        if game.is_finished:
            lines.append(f"Outcome: {game.outcome.value}")
            lines.append(f"Path lengths: {[p.value for p in game.path_lengths]}")

        lines.append("=" * 50)

        output = "\n".join(lines)
        if self.render_mode == "human":
            print(output)
        return output

    def close(self):
        pass

    @property
    def game(self) -> Optional[Game]:
        """获取当前对局 (用于调试)"""
        return self._game

    def get_legal_actions(self) -> List[int]:
        """获取当前合法动作索引"""
        if self._game is None or self._game.is_finished:
            return []
        return self._action_encoder.get_legal_action_indices(self._game.view())

    def sample_action(self) -> int:
        """随机采样一个合法动作"""
        legal_actions = self.get_legal_actions()
        if not legal_actions:
            return 0
        idx = self.np_random.integers(len(legal_actions))
        return legal_actions[idx]


def make_env(env_id: str = "Lesnura-v1", **kwargs) -> LesnuraEnv:
    """
    工厂函数：创建环境

    Args:
        env_id: 环境 ID
        **kwargs: 环境参数

    Returns:
        LesnuraEnv 实例
    """
    return LesnuraEnv(**kwargs)
