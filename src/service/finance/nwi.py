"""
NWI (Needs / Wants / Investments) Classification.

The NWI framework splits outgoing money into three (optionally four)
buckets and compares the actual split against target percentages of
income. The default targets are the classic 50/30/20 rule.

Classification is a table lookup from transaction category to bucket,
with two exceptions handled first:
- An explicit per-transaction override always wins.
- Money that is not an expense or an investment (income, transfers,
  refunds) never counts toward needs or investments and falls back to
  the wants bucket, which keeps it out of the "good" buckets.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from src.domain.entities import (
    NWIBucket,
    NWIBucketConfig,
    NWIConfig,
    Transaction,
    TransactionCategory,
    TransactionType,
)


DEFAULT_NEEDS_CATEGORIES = [
    TransactionCategory.RENT.value,
    TransactionCategory.UTILITIES.value,
    TransactionCategory.GROCERIES.value,
    TransactionCategory.HEALTHCARE.value,
    TransactionCategory.INSURANCE.value,
    TransactionCategory.TRANSPORT.value,
    TransactionCategory.FUEL.value,
    TransactionCategory.EDUCATION.value,
]

DEFAULT_WANTS_CATEGORIES = [
    TransactionCategory.DINING.value,
    TransactionCategory.ENTERTAINMENT.value,
    TransactionCategory.SHOPPING.value,
    TransactionCategory.TRAVEL.value,
    TransactionCategory.FITNESS.value,
    TransactionCategory.PERSONAL_CARE.value,
    TransactionCategory.SUBSCRIPTION.value,
    TransactionCategory.GIFTS.value,
]

DEFAULT_INVESTMENT_CATEGORIES = [
    TransactionCategory.SAVINGS.value,
    TransactionCategory.INVESTMENT.value,
    TransactionCategory.LOAN_PAYMENT.value,
    TransactionCategory.TAX.value,
]


@dataclass
class NWIBucketResult:
    """Actual vs. target figures for one bucket."""

    bucket: NWIBucket
    target_percentage: float
    actual_percentage: float
    target_amount: float
    actual_amount: float
    difference: float
    category_breakdown: List[Dict[str, float]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "bucket": self.bucket.value,
            "target_percentage": self.target_percentage,
            "actual_percentage": round(self.actual_percentage, 2),
            "target_amount": round(self.target_amount, 2),
            "actual_amount": round(self.actual_amount, 2),
            "difference": round(self.difference, 2),
            "category_breakdown": self.category_breakdown,
        }


@dataclass
class NWISplit:
    total_income: float
    buckets: Dict[NWIBucket, NWIBucketResult]

    def to_dict(self) -> dict:
        return {
            "total_income": round(self.total_income, 2),
            "buckets": {b.value: r.to_dict() for b, r in self.buckets.items()},
        }


def get_default_nwi_config(user_id: str) -> NWIConfig:
    """Build the default 50/30/20 configuration for a user."""
    return NWIConfig(
        user_id=user_id,
        needs=NWIBucketConfig(percentage=50, categories=list(DEFAULT_NEEDS_CATEGORIES)),
        wants=NWIBucketConfig(percentage=30, categories=list(DEFAULT_WANTS_CATEGORIES)),
        investments=NWIBucketConfig(
            percentage=20, categories=list(DEFAULT_INVESTMENT_CATEGORIES)
        ),
    )


def classify_transaction(transaction: Transaction, config: NWIConfig) -> NWIBucket:
    """
    Assign a transaction to an NWI bucket.

    Order of precedence:
        1. `nwi_override` on the transaction
        2. Non expense/investment types go to wants
        3. Needs categories
        4. Investments categories
        5. Savings categories (only when a savings bucket is configured)
        6. Wants categories
        7. Anything else defaults to wants

    Args:
        transaction: The transaction to classify
        config: The user's NWI configuration

    Returns:
        The bucket the transaction belongs to
    """
    if transaction.nwi_override is not None:
        return transaction.nwi_override

    if transaction.type not in (TransactionType.EXPENSE, TransactionType.INVESTMENT):
        return NWIBucket.WANTS

    category = transaction.category.value

    if category in config.needs.categories:
        return NWIBucket.NEEDS
    if category in config.investments.categories:
        return NWIBucket.INVESTMENTS
    if config.savings is not None and category in config.savings.categories:
        return NWIBucket.SAVINGS
    if category in config.wants.categories:
        return NWIBucket.WANTS

    return NWIBucket.WANTS


def calculate_nwi_split(
    transactions: List[Transaction],
    config: NWIConfig,
) -> NWISplit:
    """
    Calculate the actual NWI split against targets.

    Targets are percentages of total completed income. Only completed
    expense and investment transactions contribute to the buckets.
    Each bucket reports `difference = target_amount - actual_amount`
    (positive means room left) and a per-category breakdown sorted by
    amount, largest first.
    """
    completed = [t for t in transactions if t.is_completed]
    total_income = sum(t.amount for t in completed if t.is_income)

    bucket_configs = config.buckets()
    totals: Dict[NWIBucket, float] = {b: 0.0 for b in bucket_configs}
    per_category: Dict[NWIBucket, Dict[str, float]] = {b: {} for b in bucket_configs}

    for txn in completed:
        if txn.type not in (TransactionType.EXPENSE, TransactionType.INVESTMENT):
            continue
        bucket = classify_transaction(txn, config)
        if bucket not in totals:
            # Override pointing at an unconfigured savings bucket
            bucket = NWIBucket.WANTS
        amount = abs(txn.amount)
        totals[bucket] += amount
        per_category[bucket][txn.category.value] = (
            per_category[bucket].get(txn.category.value, 0.0) + amount
        )

    results: Dict[NWIBucket, NWIBucketResult] = {}
    for bucket, bucket_config in bucket_configs.items():
        actual = totals[bucket]
        target = total_income * bucket_config.percentage / 100
        breakdown = sorted(
            (
                {"category": cat, "amount": round(amt, 2)}
                for cat, amt in per_category[bucket].items()
            ),
            key=lambda item: item["amount"],
            reverse=True,
        )
        results[bucket] = NWIBucketResult(
            bucket=bucket,
            target_percentage=bucket_config.percentage,
            actual_percentage=(actual / total_income * 100) if total_income > 0 else 0.0,
            target_amount=target,
            actual_amount=actual,
            difference=target - actual,
            category_breakdown=breakdown,
        )

    return NWISplit(total_income=total_income, buckets=results)


def validate_nwi_config(
    needs: Optional[NWIBucketConfig],
    wants: Optional[NWIBucketConfig],
    investments: Optional[NWIBucketConfig],
    savings: Optional[NWIBucketConfig] = None,
) -> List[str]:
    """
    Validate an NWI configuration update.

    Percentages must sum to 100 when every main bucket is supplied, and
    a category may belong to at most one bucket.

    Returns:
        List of validation error messages (empty when valid)
    """
    errors: List[str] = []
    supplied = [b for b in (needs, wants, investments, savings) if b is not None]

    if needs is not None and wants is not None and investments is not None:
        total = needs.percentage + wants.percentage + investments.percentage
        if savings is not None:
            total += savings.percentage
        if abs(total - 100) > 1e-9:
            errors.append(f"Percentages must sum to 100 (got {total:g})")

    for bucket in supplied:
        if bucket.percentage < 0:
            errors.append("Percentages cannot be negative")
            break

    seen: set[str] = set()
    for bucket in supplied:
        for category in bucket.categories:
            if category in seen:
                errors.append(f"Duplicate category across buckets: {category}")
            seen.add(category)

    return errors


def calculate_nwi_adherence(
    transactions: List[Transaction],
    config: Optional[NWIConfig],
) -> float:
    """
    Score how closely spending follows the NWI targets (0-100).

    Actual percentages are measured against total bucketed spend (not
    income). The mean absolute deviation across needs, wants and
    investments is inverted: no deviation scores 100, a deviation of
    33.3 points or more scores 0. Returns 50 when there is nothing to
    compare.
    """
    if config is None:
        return 50.0

    completed = [t for t in transactions if t.is_completed]
    if not any(t.is_income for t in completed):
        return 50.0

    actual = {NWIBucket.NEEDS: 0.0, NWIBucket.WANTS: 0.0, NWIBucket.INVESTMENTS: 0.0}
    for txn in completed:
        if txn.type not in (TransactionType.EXPENSE, TransactionType.INVESTMENT):
            continue
        category = txn.category.value
        if category in config.needs.categories:
            actual[NWIBucket.NEEDS] += txn.amount
        elif category in config.wants.categories:
            actual[NWIBucket.WANTS] += txn.amount
        elif category in config.investments.categories:
            actual[NWIBucket.INVESTMENTS] += txn.amount
        else:
            actual[NWIBucket.WANTS] += txn.amount

    total = sum(actual.values())
    if total <= 0:
        return 50.0

    targets = {
        NWIBucket.NEEDS: config.needs.percentage,
        NWIBucket.WANTS: config.wants.percentage,
        NWIBucket.INVESTMENTS: config.investments.percentage,
    }
    avg_deviation = sum(
        abs(targets[b] - actual[b] / total * 100) for b in targets
    ) / len(targets)

    return max(0.0, min(100.0, 100 - avg_deviation * 3))
