"""Event type constants published on the EventBus during an encounter."""


class EventTypes:
    """Event type string constants"""

    # combat exchange
    ATTACK_RESOLVED = "attack_resolved"
    ACTION_REJECTED = "action_rejected"
    CHARACTER_DEFEATED = "character_defeated"
    CHARACTER_HEALED = "character_healed"

    # abilities
    ABILITY_ACTIVATED = "ability_activated"

    # items / equipment
    ITEM_USED = "item_used"
    ITEMS_WORN_OUT = "items_worn_out"
    ITEM_DROPPED = "item_dropped"
    EQUIPMENT_CHANGED = "equipment_changed"
