"""
Review Generator - Transition Allocator

Hands out connective phrases for successive development points.

The phrase pool is static configuration shared by every call. What has
already been used belongs to one generation call and lives in a
TransitionLedger, so concurrent calls never see each other's choices.

Usage:
    allocator = TransitionAllocator()
    ledger = allocator.start(rng)
    for i, point in enumerate(points):
        transition = ledger.allocate(i, len(points))
"""
import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)


# All phrases end in a comma so a lowercase clause can follow directly
TRANSITIONS: Dict[str, List[str]] = {
    "additive": [
        "Moreover,",
        "Furthermore,",
        "Additionally,",
        "What's more,",
        "Beyond that,",
        "On top of this,",
        "Also worth noting,",
    ],
    "contrastive": [
        "However,",
        "On the other hand,",
        "That said,",
        "Conversely,",
        "In contrast,",
        "Despite this,",
        "Nevertheless,",
    ],
    "temporal": [
        "Initially,",
        "Right away,",
        "Early on,",
        "During our stay,",
        "Throughout the visit,",
        "On arrival,",
    ],
    "causal": [
        "As a result,",
        "Consequently,",
        "Because of this,",
        "For that reason,",
    ],
    "exemplification": [
        "For instance,",
        "For example,",
        "To illustrate,",
        "Specifically,",
        "In particular,",
        "Notably,",
    ],
    "emphasis": [
        "Most importantly,",
        "Above all,",
        "Crucially,",
        "Worth emphasizing,",
    ],
}

OPENERS: List[str] = ["From the start,", "First of all,"]
CLOSERS: List[str] = ["Finally,", "To cap it off,", "Last but not least,"]
# Closers that praise; only offered to positive reviews
POSITIVE_CLOSERS: List[str] = ["Best of all,"]


@dataclass
class TransitionLedger:
    """
    Call-scoped record of transitions already handed out.

    Created by TransitionAllocator.start() at the beginning of every
    generation call; never shared between calls.
    """
    allocator: "TransitionAllocator"
    rng: random.Random
    used: List[str] = field(default_factory=list)
    positive: bool = True

    def allocate(self, index: int, total: int) -> str:
        """Select a transition for point `index` of `total` and record it."""
        phrase = self.allocator.select_unique(index, total, self.used, self.rng, self.positive)
        self.used.append(phrase)
        return phrase

    def reset(self) -> None:
        self.used.clear()


class TransitionAllocator:
    """
    Positional transition selection with no repeats within one review.

    - index 0 draws from the opening pool (temporal + openers)
    - the last point of a multi-point run draws from the closing pool
      (emphasis + closers, plus praising closers for positive reviews)
    - middle points draw from additive + exemplification
    """

    def __init__(self, transitions: Optional[Dict[str, List[str]]] = None):
        self.transitions = transitions or TRANSITIONS

    def start(self, rng: Optional[random.Random] = None, positive: bool = True) -> TransitionLedger:
        """Begin a new generation call with an empty ledger."""
        return TransitionLedger(allocator=self, rng=rng or random.Random(), positive=positive)

    def positional_pool(self, index: int, total: int, positive: bool = True) -> List[str]:
        if index == 0:
            return self.transitions.get("temporal", []) + OPENERS
        if index == total - 1:
            closing = self.transitions.get("emphasis", []) + CLOSERS
            return closing + POSITIVE_CLOSERS if positive else closing
        return self.transitions.get("additive", []) + self.transitions.get("exemplification", [])

    def all_phrases(self, positive: bool = True) -> List[str]:
        """Every phrase in the pool, in stable order, without duplicates."""
        seen: List[str] = []
        for phrases in self.transitions.values():
            for phrase in phrases:
                if phrase not in seen:
                    seen.append(phrase)
        for phrase in OPENERS + CLOSERS + (POSITIVE_CLOSERS if positive else []):
            if phrase not in seen:
                seen.append(phrase)
        return seen

    def select_unique(
        self,
        index: int,
        total: int,
        already_used: Sequence[str],
        rng: Optional[random.Random] = None,
        positive: bool = True,
    ) -> str:
        """
        Select a transition not present in `already_used`.

        Falls back to any unused phrase in the whole pool when the positional
        pool is exhausted, and only repeats once the whole pool is exhausted.
        Praising closers are never offered when `positive` is False.
        """
        rng = rng or random.Random()
        used = set(already_used)
        positional = self.positional_pool(index, max(total, 1), positive)

        unused = [t for t in positional if t not in used]
        if unused:
            return rng.choice(unused)

        unused = [t for t in self.all_phrases(positive) if t not in used]
        if unused:
            return rng.choice(unused)

        logger.debug(f"Transition pool exhausted after {len(used)} phrases, repeating")
        return rng.choice(positional or OPENERS)

    def get_stats(self, ledger: Optional[TransitionLedger] = None) -> Dict[str, int]:
        total = len(self.all_phrases())
        used = len(set(ledger.used)) if ledger else 0
        return {
            "total_types": len(self.transitions),
            "total_transitions": total,
            "used_transitions": used,
            "available_transitions": total - used,
        }
