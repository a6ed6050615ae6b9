"""Profile achievement badges earned through training and role."""

import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)

SAFETY_VERIFIED = "safety_verified"
BUSINESS_READY = "business_ready"
VERIFIED_IDENTITY = "verified_identity"

SAFETY_MIN_MODULES = 2
BUSINESS_MIN_MODULES = 3


def award_profile_badges(
    completed_modules: int,
    role: str,
    held: Iterable[str] = (),
) -> list[str]:
    """Return the badge types newly earned by a user.

    Args:
        completed_modules: Number of completed training modules.
        role: The user's role; workers get verified_identity.
        held: Badge types the user already has (never re-awarded).

    Returns:
        Badge types in award order: safety_verified, business_ready,
        verified_identity.
    """
    held_set = set(held)
    earned = []
    if completed_modules >= SAFETY_MIN_MODULES:
        earned.append(SAFETY_VERIFIED)
    if completed_modules >= BUSINESS_MIN_MODULES:
        earned.append(BUSINESS_READY)
    if role == "worker":
        earned.append(VERIFIED_IDENTITY)

    awarded = [badge for badge in earned if badge not in held_set]
    if awarded:
        logger.debug("Awarding badges: %s", ", ".join(awarded))
    return awarded
