"""Durability system"""

import logging

from .models import Item

logger = logging.getLogger(__name__)

WEAR_PER_EXCHANGE = 1


def wear(item: Item, amount: int = WEAR_PER_EXCHANGE) -> bool:
    """Lower durability after an exchange.

    Returns True only when this call took the item to zero.
    Durability never drops below 0; an inert item is left untouched.
    """
    if not item.usable:
        return False

    item.durability = max(0, item.durability - amount)

    if item.durability == 0:
        logger.info("Item %s (%s) worn out", item.id, item.name)
        return True
    return False