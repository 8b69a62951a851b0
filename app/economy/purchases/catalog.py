from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

SEASON_KEYS = ("season_1", "season_2", "season_3", "season_4")
FULL_ACCESS_KEY = "full_access"
ENTITLEMENT_KEYS = (*SEASON_KEYS, FULL_ACCESS_KEY)

DEFAULT_TIER = "season_1"
DEFAULT_AMOUNT_MINOR = 2900
DEFAULT_CURRENCY = "chf"

SUBSCRIPTION_FREE = "free"
SUBSCRIPTION_FULL_BUNDLE = "full_bundle"


@dataclass(frozen=True, slots=True)
class TierSpec:
    tier: str
    entitlement_keys: tuple[str, ...]
    is_bundle: bool = False

    @property
    def primary_key(self) -> str:
        return self.entitlement_keys[0]


TIERS: dict[str, TierSpec] = {
    "season_1": TierSpec(tier="season_1", entitlement_keys=("season_1",)),
    "season_2": TierSpec(tier="season_2", entitlement_keys=("season_2",)),
    "season_3": TierSpec(tier="season_3", entitlement_keys=("season_3",)),
    "season_4": TierSpec(tier="season_4", entitlement_keys=("season_4",)),
    # Legacy single-season checkout.
    "agent": TierSpec(tier="agent", entitlement_keys=("season_1",)),
    "director": TierSpec(
        tier="director",
        entitlement_keys=(FULL_ACCESS_KEY, "season_1"),
        is_bundle=True,
    ),
    "full_bundle": TierSpec(
        tier="full_bundle",
        entitlement_keys=(FULL_ACCESS_KEY, "season_1"),
        is_bundle=True,
    ),
}


def get_tier(tier: str) -> TierSpec | None:
    return TIERS.get(tier)


def tiers_by_entitlement_key() -> dict[str, tuple[str, ...]]:
    grouped: dict[str, list[str]] = {key: [] for key in ENTITLEMENT_KEYS}
    for tier_spec in TIERS.values():
        for key in tier_spec.entitlement_keys:
            grouped[key].append(tier_spec.tier)
    return {key: tuple(tiers) for key, tiers in grouped.items() if tiers}


def compute_subscription_type(active_keys: Iterable[str]) -> str:
    keys = set(active_keys)
    season_keys = keys.intersection(SEASON_KEYS)
    if FULL_ACCESS_KEY in keys or "season_4" in keys or len(season_keys) >= len(SEASON_KEYS):
        return SUBSCRIPTION_FULL_BUNDLE
    for key in ("season_3", "season_2", "season_1"):
        if key in keys:
            return key
    return SUBSCRIPTION_FREE


def is_season_1_unlocked(active_keys: Iterable[str]) -> bool:
    keys = set(active_keys)
    return "season_1" in keys or FULL_ACCESS_KEY in keys
