"""
Unit Tests for NWI (Needs / Wants / Investments) Classification.

These tests verify:
1. Category to bucket classification and its precedence
2. The actual vs. target split
3. Configuration validation
4. Adherence scoring used by the health score
"""

import pytest
from datetime import date

from src.domain.entities import (
    NWIBucket,
    NWIBucketConfig,
    Transaction,
    TransactionCategory,
    TransactionStatus,
    TransactionType,
)
from src.service.finance.nwi import (
    DEFAULT_INVESTMENT_CATEGORIES,
    DEFAULT_NEEDS_CATEGORIES,
    DEFAULT_WANTS_CATEGORIES,
    calculate_nwi_adherence,
    calculate_nwi_split,
    classify_transaction,
    get_default_nwi_config,
    validate_nwi_config,
)


# =============================================================================
# Test Fixtures
# =============================================================================

def make_txn(
    amount: float,
    category: TransactionCategory,
    txn_type: TransactionType = TransactionType.EXPENSE,
    status: TransactionStatus = TransactionStatus.COMPLETED,
    nwi_override: NWIBucket | None = None,
) -> Transaction:
    return Transaction(
        date=date(2026, 1, 15),
        amount=amount,
        type=txn_type,
        category=category,
        status=status,
        nwi_override=nwi_override,
    )


@pytest.fixture
def config():
    return get_default_nwi_config("default")


# =============================================================================
# Classification Tests
# =============================================================================

class TestClassifyTransaction:
    """Tests for classify_transaction()."""

    @pytest.mark.parametrize("category", DEFAULT_NEEDS_CATEGORIES)
    def test_needs_categories(self, config, category):
        txn = make_txn(100, TransactionCategory(category))
        assert classify_transaction(txn, config) == NWIBucket.NEEDS

    @pytest.mark.parametrize("category", DEFAULT_WANTS_CATEGORIES)
    def test_wants_categories(self, config, category):
        txn = make_txn(100, TransactionCategory(category))
        assert classify_transaction(txn, config) == NWIBucket.WANTS

    @pytest.mark.parametrize("category", DEFAULT_INVESTMENT_CATEGORIES)
    def test_investment_categories(self, config, category):
        txn = make_txn(100, TransactionCategory(category), TransactionType.INVESTMENT)
        assert classify_transaction(txn, config) == NWIBucket.INVESTMENTS

    def test_override_wins_over_category(self, config):
        txn = make_txn(100, TransactionCategory.DINING, nwi_override=NWIBucket.NEEDS)
        assert classify_transaction(txn, config) == NWIBucket.NEEDS

    def test_income_goes_to_wants(self, config):
        """Non expense/investment types never land in needs."""
        txn = make_txn(100, TransactionCategory.RENT, TransactionType.INCOME)
        assert classify_transaction(txn, config) == NWIBucket.WANTS

    def test_transfer_goes_to_wants(self, config):
        txn = make_txn(100, TransactionCategory.SAVINGS, TransactionType.TRANSFER)
        assert classify_transaction(txn, config) == NWIBucket.WANTS

    def test_unmapped_category_defaults_to_wants(self, config):
        txn = make_txn(100, TransactionCategory.MISCELLANEOUS)
        assert classify_transaction(txn, config) == NWIBucket.WANTS

    def test_savings_bucket_when_configured(self, config):
        config.investments.categories.remove("Savings")
        config.savings = NWIBucketConfig(percentage=10, categories=["Savings"])
        txn = make_txn(100, TransactionCategory.SAVINGS)
        assert classify_transaction(txn, config) == NWIBucket.SAVINGS

    def test_needs_checked_before_investments(self, config):
        """A category listed in both buckets resolves to needs."""
        config.investments.categories.append("Rent")
        txn = make_txn(100, TransactionCategory.RENT)
        assert classify_transaction(txn, config) == NWIBucket.NEEDS


# =============================================================================
# Split Tests
# =============================================================================

class TestNWISplit:
    """Tests for calculate_nwi_split()."""

    def test_split_against_income(self, config):
        transactions = [
            make_txn(100000, TransactionCategory.SALARY, TransactionType.INCOME),
            make_txn(30000, TransactionCategory.RENT),
            make_txn(10000, TransactionCategory.GROCERIES),
            make_txn(20000, TransactionCategory.DINING),
            make_txn(15000, TransactionCategory.INVESTMENT, TransactionType.INVESTMENT),
        ]
        split = calculate_nwi_split(transactions, config)

        assert split.total_income == 100000
        needs = split.buckets[NWIBucket.NEEDS]
        assert needs.actual_amount == 40000
        assert needs.target_amount == 50000
        assert needs.actual_percentage == pytest.approx(40)
        assert needs.difference == 10000

        wants = split.buckets[NWIBucket.WANTS]
        assert wants.actual_amount == 20000
        assert wants.difference == 10000

        investments = split.buckets[NWIBucket.INVESTMENTS]
        assert investments.actual_amount == 15000
        assert investments.difference == 5000

    def test_category_breakdown_sorted_descending(self, config):
        transactions = [
            make_txn(50000, TransactionCategory.SALARY, TransactionType.INCOME),
            make_txn(1000, TransactionCategory.GROCERIES),
            make_txn(9000, TransactionCategory.RENT),
            make_txn(500, TransactionCategory.FUEL),
        ]
        split = calculate_nwi_split(transactions, config)
        breakdown = split.buckets[NWIBucket.NEEDS].category_breakdown
        assert [b["category"] for b in breakdown] == ["Rent", "Groceries", "Fuel"]

    def test_pending_transactions_ignored(self, config):
        transactions = [
            make_txn(50000, TransactionCategory.SALARY, TransactionType.INCOME),
            make_txn(9000, TransactionCategory.RENT, status=TransactionStatus.PENDING),
        ]
        split = calculate_nwi_split(transactions, config)
        assert split.buckets[NWIBucket.NEEDS].actual_amount == 0

    def test_no_income_zero_percentages(self, config):
        split = calculate_nwi_split([make_txn(500, TransactionCategory.RENT)], config)
        assert split.total_income == 0
        assert split.buckets[NWIBucket.NEEDS].actual_percentage == 0
        assert split.buckets[NWIBucket.NEEDS].actual_amount == 500

    def test_savings_bucket_absent_by_default(self, config):
        split = calculate_nwi_split([], config)
        assert NWIBucket.SAVINGS not in split.buckets


# =============================================================================
# Validation Tests
# =============================================================================

class TestValidateNWIConfig:
    """Tests for validate_nwi_config()."""

    def test_default_config_valid(self, config):
        assert validate_nwi_config(config.needs, config.wants, config.investments) == []

    def test_percentages_must_sum_to_100(self):
        errors = validate_nwi_config(
            NWIBucketConfig(50, ["Rent"]),
            NWIBucketConfig(30, ["Dining"]),
            NWIBucketConfig(30, ["Investment"]),
        )
        assert len(errors) == 1
        assert "sum to 100" in errors[0]

    def test_savings_counts_toward_total(self):
        errors = validate_nwi_config(
            NWIBucketConfig(50, ["Rent"]),
            NWIBucketConfig(20, ["Dining"]),
            NWIBucketConfig(20, ["Investment"]),
            NWIBucketConfig(10, ["Savings"]),
        )
        assert errors == []

    def test_duplicate_category_rejected(self):
        errors = validate_nwi_config(
            NWIBucketConfig(50, ["Rent", "Dining"]),
            NWIBucketConfig(30, ["Dining"]),
            NWIBucketConfig(20, ["Investment"]),
        )
        assert any("Dining" in e for e in errors)


# =============================================================================
# Adherence Tests
# =============================================================================

class TestNWIAdherence:
    """Tests for calculate_nwi_adherence()."""

    def test_no_config_neutral(self):
        assert calculate_nwi_adherence([], None) == 50

    def test_no_income_neutral(self, config):
        assert calculate_nwi_adherence([make_txn(100, TransactionCategory.RENT)], config) == 50

    def test_perfect_split_scores_100(self, config):
        transactions = [
            make_txn(100000, TransactionCategory.SALARY, TransactionType.INCOME),
            make_txn(50000, TransactionCategory.RENT),
            make_txn(30000, TransactionCategory.DINING),
            make_txn(20000, TransactionCategory.INVESTMENT, TransactionType.INVESTMENT),
        ]
        assert calculate_nwi_adherence(transactions, config) == 100

    def test_deviation_penalized(self, config):
        """Spend split 70/30/0 deviates 20, 0 and 20 points: avg 13.33."""
        transactions = [
            make_txn(100000, TransactionCategory.SALARY, TransactionType.INCOME),
            make_txn(70000, TransactionCategory.RENT),
            make_txn(30000, TransactionCategory.DINING),
        ]
        score = calculate_nwi_adherence(transactions, config)
        assert score == pytest.approx(100 - (40 / 3) * 3)

    def test_clamped_at_zero(self, config):
        transactions = [
            make_txn(100000, TransactionCategory.SALARY, TransactionType.INCOME),
            make_txn(100000, TransactionCategory.DINING),
        ]
        # Deviations 50, 70, 20 -> avg 46.67 -> 100 - 140 -> 0
        assert calculate_nwi_adherence(transactions, config) == 0
