# core/badges.py

"""
Каталог бейджей за серии и выдача новых бейджей.

Каталог упорядочен по возрастанию milestone. Выдача не меняет привычку:
она только возвращает бейджи, которые нужно добавить.
"""

import logging
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Tuple

from habitflow.core.models import Badge, BadgeDefinition
from habitflow.utils.datetime_utils import now_in

logger = logging.getLogger(__name__)

BADGE_CATALOG: Tuple[BadgeDefinition, ...] = (
    BadgeDefinition(name="First Steps", description="Complete your first day", emoji="🌱", milestone=1),
    BadgeDefinition(name="Week Warrior", description="7 day streak", emoji="🔥", milestone=7),
    BadgeDefinition(name="Monthly Master", description="30 day streak", emoji="💎", milestone=30),
    BadgeDefinition(name="Century Club", description="100 day streak", emoji="👑", milestone=100),
    BadgeDefinition(name="Legendary", description="365 day streak", emoji="🌟", milestone=365),
)


def get_badge_definition(milestone: int) -> Optional[BadgeDefinition]:
    for definition in BADGE_CATALOG:
        if definition.milestone == milestone:
            return definition
    return None


def award_badges(unlocked: Iterable[Badge], current_streak: int,
                 now: Optional[Callable[[], datetime]] = None,
                 catalog: Iterable[BadgeDefinition] = BADGE_CATALOG) -> List[Badge]:
    """
    Новые бейджи для серии current_streak.

    Возвращает каждую запись каталога с milestone <= current_streak, которой
    еще нет среди unlocked (сравнение по milestone), по возрастанию milestone.
    """
    owned = {badge.milestone for badge in unlocked}
    eligible = sorted(
        (d for d in catalog if d.milestone <= current_streak and d.milestone not in owned),
        key=lambda d: d.milestone
    )
    if not eligible:
        return []

    unlocked_at = (now or now_in)().isoformat()
    new_badges = [definition.unlock(unlocked_at) for definition in eligible]

    logger.debug(f"🏆 Серия {current_streak}: новые бейджи {[b.milestone for b in new_badges]}")
    return new_badges
