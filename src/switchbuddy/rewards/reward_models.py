# src/switchbuddy/rewards/reward_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class RewardStatus(StrEnum):
    UNCLAIMED = "unclaimed"
    CLAIMED = "claimed"

    @classmethod
    def from_db(cls, raw: str | None) -> RewardStatus:
        if not raw:
            return cls.UNCLAIMED
        try:
            return cls(raw)
        except ValueError:
            return cls.UNCLAIMED


@dataclass(slots=True, frozen=True)
class Reward:
    """Catalog entry that can be bought with Focus Coins."""

    id: int
    name: str
    description: str
    cost: float
    icon: str


@dataclass(slots=True, frozen=True)
class RewardCategory:
    title: str
    description: str
    color: str
    rewards: tuple[Reward, ...]


@dataclass(slots=True, frozen=True)
class UserReward:
    """A reward redeemed by a user."""

    id: str
    user_id: str
    reward_id: int
    name: str
    description: str
    icon: str
    cost: float
    status: RewardStatus
    redeemed_at: float
    claimed_at: float | None = None
