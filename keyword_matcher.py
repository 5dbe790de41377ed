"""Table-driven keyword matching shared by extraction and scoring.

A rule table is an ordered sequence of :class:`PatternRule` entries. Each rule
carries a label, one or more regex trigger fragments and an optional weight.
Triggers are matched case-insensitively on word boundaries, so ``vert`` does
not fire inside ``convertible``. Rules built with ``whole_word=False`` match
anywhere in the text instead (``blanc`` inside ``blanche``).
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class PatternRule:
    label: str
    triggers: Tuple[str, ...]
    weight: int = 0
    whole_word: bool = True


def rule(label: str, *triggers: str, weight: int = 0, whole_word: bool = True) -> PatternRule:
    """Shorthand used by the pattern tables; defaults the trigger to the label."""

    return PatternRule(
        label=label,
        triggers=triggers or (re.escape(label),),
        weight=weight,
        whole_word=whole_word,
    )


@lru_cache(maxsize=None)
def compile_rule(pattern_rule: PatternRule) -> re.Pattern[str]:
    alternatives = "|".join(pattern_rule.triggers)
    if not pattern_rule.whole_word:
        return re.compile(alternatives, re.IGNORECASE)
    return re.compile(rf"\b(?:{alternatives})\b", re.IGNORECASE)


def rule_matches(pattern_rule: PatternRule, text: str) -> bool:
    if not text:
        return False
    return compile_rule(pattern_rule).search(text) is not None


def matching_labels(rules: Iterable[PatternRule], text: str) -> List[str]:
    """Return every label whose rule matches, in table order, without duplicates."""

    labels: List[str] = []
    for pattern_rule in rules:
        if pattern_rule.label not in labels and rule_matches(pattern_rule, text):
            labels.append(pattern_rule.label)
    return labels


def first_label(rules: Sequence[PatternRule], text: str) -> Optional[str]:
    for pattern_rule in rules:
        if rule_matches(pattern_rule, text):
            return pattern_rule.label
    return None


def weighted_score(rules: Iterable[PatternRule], text: str) -> int:
    return sum(pattern_rule.weight for pattern_rule in rules if rule_matches(pattern_rule, text))


def contains_any(text: str, *triggers: str) -> bool:
    """Ad-hoc check for a single family of triggers."""

    return rule_matches(PatternRule(label="", triggers=tuple(triggers)), text)
