"""
策略

策略是从只读快照到动作的映射，由驱动循环在每次需要行动时调用一次
"""
from .actions import Action
from .config import STRATEGIES
from .state import GameView, Phase


class Strategy:
    """策略基类"""

    def __init__(self, name: str = "strategy"):
        self.name = name

    def act(self, view: GameView) -> Action:
        """选择动作"""
        raise NotImplementedError

    def reset(self):
        """重置状态"""
        pass


class RandomStrategy(Strategy):
    """
    随机策略

    出牌阶段随机打出一张手牌；势头阶段以 draw_chance 的概率摸牌，
    否则随机出牌 (手牌为空时摸牌)
    """

    def __init__(self, draw_chance: float = 0.5, name: str = "random"):
        super().__init__(name)
        self.draw_chance = draw_chance

    def act(self, view: GameView) -> Action:
        rng = view.rng
        if view.phase == Phase.MOMENTUM and rng.random() < self.draw_chance:
            return Action.draw()

        card = view.hand.choice(rng)
        if card is None:
            # 出牌阶段手牌不会为空 (回合开始时刚摸过牌)
            return Action.draw()
        return Action.play(card)


class MomentumStrategy(Strategy):
    """
    追势头策略

    出牌阶段若手中有与弃牌堆顶同花色的牌，随机打出其中一张；
    其余情况 (包括势头阶段) 完全交给后备策略
    """

    def __init__(self, fallback: Strategy, name: str = "momentum"):
        super().__init__(name)
        self.fallback = fallback

    def act(self, view: GameView) -> Action:
        if view.phase == Phase.PLAY:
            suit = view.discard_top_suit
            if suit is not None:
                card = view.hand.filter_by_suit(suit).choice(view.rng)
                if card is not None:
                    return Action.play(card)
        return self.fallback.act(view)

    def reset(self):
        self.fallback.reset()


def make_strategy(kind: str, draw_chance: float = 0.5) -> Strategy:
    """
    工厂函数：创建策略

    Args:
        kind: "random" 或 "momentum"
        draw_chance: 势头阶段摸牌概率

    Returns:
        策略实例
    """
    if kind == "random":
        return RandomStrategy(draw_chance)
    if kind == "momentum":
        return MomentumStrategy(RandomStrategy(draw_chance))
    raise ValueError(f"Unknown strategy: {kind}. Must be one of {STRATEGIES}")
