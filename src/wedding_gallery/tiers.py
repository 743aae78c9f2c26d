"""
Subscription tier policy for gallery layouts.

The policy only evaluates entitlement; enforcing it (billing, upsell
flows) belongs to the caller, which receives an upgrade request instead
of the locked layout.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from wedding_gallery.logging_utils import logger
from wedding_gallery.type_defs import LayoutKind, Tier

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Iterable

__all__ = [
    "DEFAULT_LAYOUTS",
    "TIER_INFO",
    "TierInfo",
    "TierPolicy",
    "format_price",
]


@dataclass(frozen=True, slots=True)
class TierInfo:
    """Display metadata for a subscription tier."""

    name: str
    price: int
    currency: str
    max_styles: int


TIER_INFO: dict[Tier, TierInfo] = {
    Tier.FREE: TierInfo("Free", 0, "INR", 1),
    Tier.SILVER: TierInfo("Silver", 499, "INR", 3),
    Tier.GOLD: TierInfo("Gold", 999, "INR", 5),
    Tier.PLATINUM: TierInfo("Platinum", 1999, "INR", 8),
}

DEFAULT_LAYOUTS: dict[Tier, LayoutKind] = {
    Tier.FREE: LayoutKind.GRID,
    Tier.SILVER: LayoutKind.SINGLE_CAROUSEL,
    Tier.GOLD: LayoutKind.MASONRY,
    Tier.PLATINUM: LayoutKind.TIMELINE,
}

_UPGRADE_MESSAGES: dict[Tier, str] = {
    Tier.FREE: "Start with our free basic gallery",
    Tier.SILVER: "Upgrade to Silver for {price} to unlock carousel galleries",
    Tier.GOLD: (
        "Upgrade to Gold for {price} to unlock creative layouts with captions"
    ),
    Tier.PLATINUM: (
        "Upgrade to Platinum for {price} to unlock premium artistic galleries"
    ),
}

_CURRENCY_SYMBOLS = {"INR": "₹", "USD": "$", "EUR": "€"}


def format_price(price: int, currency: str = "INR") -> str:
    """Render a whole-unit price, or ``Free`` for zero."""
    if price == 0:
        return "Free"
    symbol = _CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    return f"{symbol}{price:,}"


class TierPolicy:
    """
    Pure lookup from account tier to permitted layout kinds.

    A layout is available iff its required tier is at or below the
    account tier. ``available`` and ``locked`` partition ``layouts`` in
    its declared order.
    """

    def __init__(self, layouts: Iterable[LayoutKind] | None = None) -> None:
        self._layouts: tuple[LayoutKind, ...] = tuple(
            layouts if layouts is not None else LayoutKind,
        )

    @property
    def layouts(self) -> tuple[LayoutKind, ...]:
        """All layouts known to this policy."""
        return self._layouts

    @staticmethod
    def required_tier(kind: LayoutKind | str) -> Tier:
        """Return the lowest tier that may use ``kind``."""
        return LayoutKind.parse(kind).required_tier

    def is_available(self, tier: Tier | str, kind: LayoutKind | str) -> bool:
        """Whether ``tier`` may select ``kind``."""
        return self.required_tier(kind) <= Tier.parse(tier)

    def available(self, tier: Tier | str) -> list[LayoutKind]:
        """Layouts usable at ``tier``."""
        return [k for k in self._layouts if self.is_available(tier, k)]

    def locked(self, tier: Tier | str) -> list[LayoutKind]:
        """Layouts requiring an upgrade from ``tier``."""
        return [k for k in self._layouts if not self.is_available(tier, k)]

    def by_tier(self, tier: Tier | str) -> list[LayoutKind]:
        """Layouts introduced at exactly ``tier``."""
        target = Tier.parse(tier)
        return [k for k in self._layouts if k.required_tier == target]

    def select(
        self,
        tier: Tier | str,
        kind: LayoutKind | str,
        request_upgrade: Callable[[Tier], None],
    ) -> LayoutKind | None:
        """
        Resolve a layout selection.

        Returns the layout when permitted. Otherwise calls
        ``request_upgrade`` with the layout's required tier and returns
        None; the caller must keep its current layout.
        """
        layout = LayoutKind.parse(kind)
        if self.is_available(tier, layout):
            return layout
        target = layout.required_tier
        logger.info(
            "Layout %s locked for tier %s; requesting upgrade to %s",
            layout.value, Tier.parse(tier).label, target.label,
        )
        request_upgrade(target)
        return None

    @staticmethod
    def default_layout(tier: Tier | str) -> LayoutKind:
        """Showcase layout for an account at ``tier``."""
        return DEFAULT_LAYOUTS[Tier.parse(tier)]

    @staticmethod
    def upgrade_message(target: Tier | str) -> str:
        """Upsell copy for ``target``."""
        tier = Tier.parse(target)
        info = TIER_INFO[tier]
        return _UPGRADE_MESSAGES[tier].format(
            price=format_price(info.price, info.currency),
        )

    def next_locked_tier(self, tier: Tier | str) -> Tier | None:
        """Cheapest tier that unlocks at least one more layout."""
        locked = self.locked(tier)
        if not locked:
            return None
        return min(k.required_tier for k in locked)
