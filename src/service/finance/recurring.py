"""
Recurring Transaction Detection.

Finds merchants that charge on a regular schedule by grouping expenses
on a normalized merchant name and checking whether the gaps between
charges cluster around a known frequency.

Confidence (0-1) blends three signals:
- Occurrences: ramps from 0 at 2 charges to 1 at 6 or more (30%)
- Interval consistency: how tightly gaps sit around the ideal (40%)
- Amount stability: 0% variance scores 1, 50% or more scores 0 (30%)
"""

import math
import re
from collections import Counter
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from src.domain.entities import Transaction


SUBSCRIPTION_CATEGORIES = frozenset({
    "Entertainment",
    "Utilities",
    "Insurance",
    "Subscription",
    "Education",
    "Fitness",
    "Healthcare",
})

MIN_OCCURRENCES = 3
MIN_CONFIDENCE = 0.3


@dataclass(frozen=True)
class Frequency:
    label: str
    ideal_days: int
    tolerance: int


FREQUENCIES: Tuple[Frequency, ...] = (
    Frequency("weekly", 7, 1),
    Frequency("biweekly", 14, 2),
    Frequency("monthly", 30, 3),
    Frequency("quarterly", 90, 7),
    Frequency("annual", 365, 15),
)


@dataclass
class RecurringPattern:
    merchant: str
    category: str
    average_amount: float
    frequency: str
    confidence: float
    last_date: date
    next_expected_date: date
    occurrences: int
    total_spent: float
    is_subscription: bool
    amount_variance: float

    def to_dict(self) -> dict:
        return {
            "merchant": self.merchant,
            "category": self.category,
            "average_amount": self.average_amount,
            "frequency": self.frequency,
            "confidence": self.confidence,
            "last_date": self.last_date.isoformat(),
            "next_expected_date": self.next_expected_date.isoformat(),
            "occurrences": self.occurrences,
            "total_spent": self.total_spent,
            "is_subscription": self.is_subscription,
            "amount_variance": self.amount_variance,
        }


_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_SPACES = re.compile(r"\s+")


def normalize_merchant(text: str) -> str:
    """Lowercase, drop punctuation and collapse whitespace."""
    cleaned = _NON_ALNUM.sub("", text.lower().strip())
    return _SPACES.sub(" ", cleaned)


def classify_frequency(
    intervals: List[float],
) -> Optional[Tuple[Frequency, float]]:
    """
    Match gaps between charges to the closest frequency.

    A frequency matches when the average gap is within twice its tolerance of
    the ideal. Consistency is `max(0, 1 - avg_dev / (2 * tolerance))`
    where avg_dev is the mean distance of each gap from the ideal.

    Returns:
        (frequency, consistency), or None when nothing matches
    """
    if not intervals:
        return None

    avg_interval = sum(intervals) / len(intervals)

    best: Optional[Frequency] = None
    best_distance = math.inf
    for freq in FREQUENCIES:
        distance = abs(avg_interval - freq.ideal_days)
        if distance <= freq.tolerance * 2 and distance < best_distance:
            best = freq
            best_distance = distance

    if best is None:
        return None

    avg_deviation = sum(abs(i - best.ideal_days) for i in intervals) / len(intervals)
    consistency = max(0.0, 1 - avg_deviation / (best.tolerance * 2))
    return best, consistency


def calculate_confidence(
    occurrences: int,
    interval_consistency: float,
    amount_variance: float,
) -> float:
    occurrence_score = min(1.0, (occurrences - 2) / 4)
    amount_score = max(0.0, 1 - amount_variance / 50)
    confidence = (
        occurrence_score * 0.3 + interval_consistency * 0.4 + amount_score * 0.3
    )
    return round(confidence, 2)


def detect_recurring_transactions(
    transactions: List[Transaction],
) -> List[RecurringPattern]:
    """
    Detect recurring expense patterns.

    Args:
        transactions: Transaction history (any order, any type)

    Returns:
        Patterns with confidence >= 0.3, sorted by next expected date
    """
    groups: Dict[str, Tuple[str, List[Transaction]]] = {}
    for txn in transactions:
        if not txn.is_expense:
            continue
        raw = txn.merchant or txn.description
        if not raw:
            continue
        key = normalize_merchant(raw)
        if len(key) < 2:
            continue
        if key not in groups:
            groups[key] = (raw, [])
        groups[key][1].append(txn)

    patterns: List[RecurringPattern] = []
    for merchant, items in groups.values():
        if len(items) < MIN_OCCURRENCES:
            continue

        ordered = sorted(items, key=lambda t: t.date)
        intervals = [
            float((ordered[i].date - ordered[i - 1].date).days)
            for i in range(1, len(ordered))
        ]

        classified = classify_frequency(intervals)
        if classified is None:
            continue
        freq, consistency = classified

        amounts = [t.amount for t in ordered]
        total = sum(amounts)
        average = total / len(amounts)
        if average == 0:
            continue
        stdev = math.sqrt(sum((a - average) ** 2 for a in amounts) / len(amounts))
        variance_pct = stdev / average * 100

        confidence = calculate_confidence(len(ordered), consistency, variance_pct)
        if confidence < MIN_CONFIDENCE:
            continue

        category = Counter(t.category.value for t in ordered).most_common(1)[0][0]
        last_date = ordered[-1].date

        patterns.append(
            RecurringPattern(
                merchant=merchant,
                category=category,
                average_amount=round(average, 2),
                frequency=freq.label,
                confidence=confidence,
                last_date=last_date,
                next_expected_date=last_date + timedelta(days=freq.ideal_days),
                occurrences=len(ordered),
                total_spent=round(total, 2),
                is_subscription=category in SUBSCRIPTION_CATEGORIES or variance_pct < 5,
                amount_variance=round(variance_pct, 2),
            )
        )

    patterns.sort(key=lambda p: p.next_expected_date)
    return patterns


def upcoming_patterns(
    patterns: List[RecurringPattern],
    today: date,
    days: int,
) -> List[RecurringPattern]:
    """Patterns whose next charge falls within `days` of `today`."""
    horizon = today + timedelta(days=days)
    return [p for p in patterns if today <= p.next_expected_date <= horizon]
