"""
Environment Layer - Gymnasium 兼容环境

Modules:
    lesnura_env: 主环境类
    observation: 观测空间构建与动作编码
"""
from .lesnura_env import (
    LesnuraEnv,
    RewardConfig,
    make_env,
)

from .observation import (
    Observation,
    ObservationBuilder,
    ActionEncoder,
    cards_to_array,
    NUM_ACTIONS,
    DRAW_INDEX,
)

__all__ = [
    # env
    "LesnuraEnv",
    "RewardConfig",
    "make_env",
    # observation
    "Observation",
    "ObservationBuilder",
    "ActionEncoder",
    "cards_to_array",
    "NUM_ACTIONS",
    "DRAW_INDEX",
]
