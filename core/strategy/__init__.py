"""Computer opponent policies."""

from core.strategy.opponent import (
    EasyPolicy,
    HardPolicy,
    MediumPolicy,
    Move,
    MoveKind,
    OpponentPolicy,
    choose_move,
    choose_wild_suit,
    policy_for,
)

__all__ = [
    "EasyPolicy",
    "HardPolicy",
    "MediumPolicy",
    "Move",
    "MoveKind",
    "OpponentPolicy",
    "choose_move",
    "choose_wild_suit",
    "policy_for",
]
