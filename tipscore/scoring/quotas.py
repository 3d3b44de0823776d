"""Rarity quotas for the three outcomes of a match.

An outcome that most models agree on is cheap, an outcome nobody backed is
expensive. The quota of each outcome depends only on its own share of the
picks, so the three values need not sum to anything in particular.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from tipscore.domain.value_objects.enums import Tendency
from tipscore.domain.value_objects.quotas import Quotas
from tipscore.domain.value_objects.score_pick import ScorePick, tendency_of
from tipscore.domain.value_objects.scoring_rules import DEFAULT_RULES, ScoringRules


def quota_for_share(count: int, total: int, rules: ScoringRules = DEFAULT_RULES) -> int:
    """Map ``count`` of ``total`` picks to a quota.

    >>> quota_for_share(21, 42)
    2
    >>> quota_for_share(0, 42)
    6
    """
    if count <= 0 or total <= 0:
        return rules.rare_quota
    ratio = count / total
    if ratio >= rules.common_share:
        return rules.common_quota
    if ratio >= rules.uncommon_share:
        return rules.uncommon_quota
    return rules.rare_quota


def tendency_counts(picks: Iterable[ScorePick]) -> Counter[Tendency]:
    return Counter(tendency_of(p.predicted_home, p.predicted_away) for p in picks)


def calculate_quotas(
    picks: Iterable[ScorePick], rules: ScoringRules = DEFAULT_RULES
) -> Quotas:
    """Compute the quotas of one match from all of its predictions.

    An empty prediction set carries no rarity information, so every outcome
    gets ``rules.empty_quota`` (2 by default).
    """
    counts = tendency_counts(picks)
    total = sum(counts.values())
    if total == 0:
        q = rules.empty_quota
        return Quotas(home=q, draw=q, away=q)
    return Quotas(
        home=quota_for_share(counts[Tendency.HOME], total, rules),
        draw=quota_for_share(counts[Tendency.DRAW], total, rules),
        away=quota_for_share(counts[Tendency.AWAY], total, rules),
    )
