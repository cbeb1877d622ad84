"""
Royal Court Game Constants
"""
from enum import Enum


# ============================================================
# Resources
# ============================================================
class Resource(str, Enum):
    MONEY = "money"
    LOVE = "love"
    RESPECT = "respect"


# Older content files call money "gold"
FIELD_ALIASES = {
    "gold": Resource.MONEY,
}


def resource_for_field(field):
    """Map a consequence field identifier to a Resource, or None if unknown."""
    key = field.strip().lower()
    if key in FIELD_ALIASES:
        return FIELD_ALIASES[key]
    try:
        return Resource(key)
    except ValueError:
        return None


# ============================================================
# Court
# ============================================================
COURT_SUMMARY = "There are {count} people waiting in your court."

# Lines kept per session in the in-game event log
EVENT_LOG_LIMIT = 200
RECENT_EVENTS_SHOWN = 20

# ============================================================
# Ignored petitions
# ============================================================
# Applied once for every petitioner who gives up waiting
IGNORED_PETITION_CONSEQUENCES = (
    {"field": "love", "minChange": -5, "maxChange": -5},
    {"field": "respect", "minChange": -3, "maxChange": -3},
)

# ============================================================
# Game over causes
# ============================================================
CAUSE_LOVE_LOST = "The people's love has turned to hatred. You have been overthrown."
CAUSE_RESPECT_LOST = "No one respects the crown any longer. The nobles have deposed you."
CAUSE_MONEY_LOST = "The treasury is empty. Your creditors have seized the throne."
CAUSE_LOVE_WON = "Your people adore you. Your reign will be remembered forever."
CAUSE_RESPECT_WON = "The realm bows before you. Your rule is unquestioned."
CAUSE_NO_SUBJECTS = "No subjects remain to petition the crown. You rule over an empty kingdom."
