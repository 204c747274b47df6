"""Terrain costs derived from an agent's body."""
from __future__ import annotations

import logging
import math
from functools import reduce

from tick_nav.types import AgentBody, PartType, TerrainCosts

logger = logging.getLogger(__name__)

# Capacity of one unboosted CARRY part.
CARRY_CAPACITY = 50


def gcd(*values: int) -> int:
    """Greatest common divisor of all *values*."""
    if not values:
        raise ValueError("gcd requires at least one value")
    return reduce(math.gcd, values)


def fatigue_ratio(body: AgentBody) -> float | None:
    """Fatigue generated per point of recovery for *body*.

    Loaded CARRY parts and non-movement parts generate fatigue, MOVE parts
    recover it. Returns None when the body has no working MOVE parts.
    """
    remaining = body.used_capacity
    move_power = 0.0
    used_carry_parts = 0
    other_parts = 0

    # Right to left: carry parts are filled in that order.
    for part in reversed(body.parts):
        if part.hits <= 0:
            continue
        boost = 1.0 if part.boost is None else part.boost
        if part.type is PartType.OTHER:
            other_parts += 1
        elif part.type is PartType.MOVE:
            move_power += 1 * boost
        elif remaining > 0:
            # Empty carry parts generate no fatigue.
            remaining -= CARRY_CAPACITY * boost
            used_carry_parts += 1

    if move_power == 0:
        return None
    return (used_carry_parts + other_parts) / (move_power * 2)


def terrain_costs(body: AgentBody, defaults: TerrainCosts) -> TerrainCosts:
    """Per-terrain move costs for *body*.

    The road/plain/swamp triple keeps the 1:2:10 terrain ratio of the engine
    and is reduced to its smallest integer form. Returns *defaults* when the
    body has no working MOVE parts.
    """
    ratio = fatigue_ratio(body)
    if ratio is None:
        logger.debug("body has no move power, using default terrain costs")
        return defaults

    # The 0.1 floor keeps a move-only body at road cost 1.
    cost = max(ratio, 0.1)

    road = math.ceil(cost)
    plain = math.ceil(cost * 2)
    swamp = math.ceil(cost * 10)
    norm = gcd(road, plain, swamp)

    # Worst case is 1 MOVE + 49 others: 25 / 49 / 245, still under 255.
    result = TerrainCosts(road=road // norm, plain=plain // norm, swamp=swamp // norm)
    logger.debug("derived terrain costs %s (fatigue ratio %s)", result, ratio)
    return result
