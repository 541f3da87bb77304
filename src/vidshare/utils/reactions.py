"""Like/dislike toggle semantics shared by every video store."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple


class ReactionAction(str, Enum):
    """Reactions a user can apply to a video."""

    LIKE = "like"
    DISLIKE = "dislike"


def _unique(values: Iterable[str]) -> Tuple[str, ...]:
    seen = set()
    ordered = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        ordered.append(value)
    return tuple(ordered)


@dataclass(frozen=True, slots=True)
class ReactionState:
    """Users who currently like and dislike a video, in insertion order."""

    likes: Tuple[str, ...] = ()
    dislikes: Tuple[str, ...] = ()

    @classmethod
    def of(cls, likes: Iterable[str] = (), dislikes: Iterable[str] = ()) -> "ReactionState":
        """Build a state from arbitrary iterables, dropping duplicates."""

        return cls(likes=_unique(likes), dislikes=_unique(dislikes))

    def reaction_of(self, user_id: str) -> ReactionAction | None:
        """Return the reaction the user currently holds, if any."""

        if user_id in self.likes:
            return ReactionAction.LIKE
        if user_id in self.dislikes:
            return ReactionAction.DISLIKE
        return None


def toggle_reaction(state: ReactionState, user_id: str, action: ReactionAction) -> ReactionState:
    """Apply a like or dislike toggle for ``user_id`` and return the new state.

    The opposite reaction is always cleared first. The requested reaction is
    then removed if the user already holds it, otherwise it is added, so a
    user never appears in both collections.
    """

    action = ReactionAction(action)
    if action is ReactionAction.LIKE:
        target, opposite = state.likes, state.dislikes
    else:
        target, opposite = state.dislikes, state.likes

    opposite = tuple(value for value in opposite if value != user_id)
    if user_id in target:
        target = tuple(value for value in target if value != user_id)
    else:
        target = target + (user_id,)

    if action is ReactionAction.LIKE:
        return ReactionState(likes=target, dislikes=opposite)
    return ReactionState(likes=opposite, dislikes=target)


__all__ = ["ReactionAction", "ReactionState", "toggle_reaction"]
