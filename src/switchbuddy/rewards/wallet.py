# src/switchbuddy/rewards/wallet.py

"""
Focus Coin wallet.

The balance is the all-time ledger sum of the user's tasks minus what has
been spent on redeemed rewards. It is always recomputed, never stored.
"""

from __future__ import annotations

import logging
from datetime import date, datetime

from ..core.errors import AuthenticationRequiredError, InsufficientFundsError, RecordNotFoundError
from ..core.state import AppState
from ..tracker.ledger import total_net_change
from .catalog import find_reward
from .reward_models import RewardStatus, UserReward

logger = logging.getLogger(__name__)


def focus_coin_balance(state: AppState, reference_now: date | datetime) -> float:
    if not state.user_id:
        return 0.0
    tasks = state.task_store.list_tasks(state.user_id)
    rewards = state.reward_store.list_rewards(state.user_id)
    spent = sum(r.cost for r in rewards)
    return total_net_change(tasks, reference_now) - spent


def redeem_reward(state: AppState, reward_id: int, reference_now: date | datetime) -> str:
    """Buy a catalog reward. Returns the id of the redeemed record."""
    if not state.user_id:
        raise AuthenticationRequiredError()

    reward = find_reward(reward_id)
    if reward is None:
        raise RecordNotFoundError("reward", str(reward_id))

    balance = focus_coin_balance(state, reference_now)
    if balance < reward.cost:
        raise InsufficientFundsError(balance, reward.cost)

    rid = state.reward_store.add_reward(
        state.user_id,
        reward_id=reward.id,
        name=reward.name,
        description=reward.description,
        icon=reward.icon,
        cost=reward.cost,
    )
    logger.info("Reward redeemed user=%s reward=%s cost=%s", state.user_id, reward.id, reward.cost)
    return rid


def claim_reward(state: AppState, user_reward_id: str) -> None:
    rewards = {r.id: r for r in state.reward_store.list_rewards(state.user_id)}
    current = rewards.get(user_reward_id)
    if current is not None and current.status == RewardStatus.CLAIMED:
        raise ValueError(f"Reward {user_reward_id} is already claimed.")
    # Ownership and existence are enforced by the store.
    state.reward_store.mark_claimed(state.user_id, user_reward_id)


def unclaimed_rewards(state: AppState) -> list[UserReward]:
    return [r for r in state.reward_store.list_rewards(state.user_id) if r.status == RewardStatus.UNCLAIMED]
