"""
异常定义

引擎内部的错误都可由调用方恢复，只有牌数不变量被破坏属于程序错误
"""
from typing import Optional


# 错误码
ILLEGAL_ACTION = "ILLEGAL_ACTION"
NO_MOMENTUM = "NO_MOMENTUM"
CARD_NOT_HELD = "CARD_NOT_HELD"
PILES_EXHAUSTED = "PILES_EXHAUSTED"
GAME_STALLED = "GAME_STALLED"


class LesnuraError(Exception):
    """游戏错误基类"""

    code = "LESNURA_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        if code is not None:
            self.code = code
        self.message = message
        super().__init__(f"[{self.code}] {message}")


class IllegalActionError(LesnuraError):
    """非法动作 (状态保持不变，可重试)"""

    code = ILLEGAL_ACTION


class NoMomentumError(IllegalActionError):
    """非势头阶段不能摸牌"""

    code = NO_MOMENTUM


class CardNotHeldError(IllegalActionError):
    """手牌中没有这张牌"""

    code = CARD_NOT_HELD

    def __init__(self, card):
        self.card = card
        super().__init__(f"card not held: {card}")


class PilesExhaustedError(LesnuraError):
    """牌库和弃牌堆同时为空"""

    code = PILES_EXHAUSTED


class GameStalledError(LesnuraError):
    """对局超过动作上限"""

    code = GAME_STALLED


class CardCountError(AssertionError):
    """
    牌数不变量被破坏

    属于引擎自身的 bug，不继承 LesnuraError，避免被对局层的错误处理吞掉
    """

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"card count invariant violated: expected {expected}, found {actual}")
