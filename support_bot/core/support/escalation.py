"""
Escalation policy: decides which messages need a human operator.
"""

from support_bot.core.support.classifier import CANCELLATION_CATEGORY
from support_bot.core.support.models import Context


ESCALATION_KEYWORDS = [
    "クレーム",
    "苦情",
    "怒",
    "最悪",
    "ひどい",
    "詐欺",
    "訴え",
    "弁護士",
    "消費者センター",
    "責任者",
    "不良品",
    "壊れ",
    "破損",
    "届かない",
]

# Categories that always go to a human
ALWAYS_ESCALATE_CATEGORIES = frozenset({CANCELLATION_CATEGORY})


def should_escalate(message: str, context: Context) -> bool:
    """Check if the message requires human review."""
    if context.category in ALWAYS_ESCALATE_CATEGORIES:
        return True
    return any(keyword in message for keyword in ESCALATION_KEYWORDS)
