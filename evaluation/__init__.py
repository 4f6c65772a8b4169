"""
Evaluation Layer - 模拟与统计

Modules:
    arena: 对局驱动循环与批量模拟
    metrics: 评估指标
"""
from .arena import (
    play_game,
    MatchResult,
    SimulationResult,
    Arena,
)
from .metrics import (
    MetricsCollector,
    RunningStats,
)

__all__ = [
    # arena
    "play_game",
    "MatchResult",
    "SimulationResult",
    "Arena",
    # metrics
    "MetricsCollector",
    "RunningStats",
]
