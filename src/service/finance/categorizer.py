"""
Transaction Categorization.

Two layers assign categories to transactions:

1. User rules: substring patterns the user created. Enabled rules are
   tried newest first and the first match wins.
2. Keyword categorizer: a fixed keyword table per category. Banks often
   mangle merchant names ("ZEPTONO W", "HungerBo x"), so both the text
   and the keyword have whitespace stripped and are lowercased before
   the substring test.

A transaction whose category was set by hand (`category_override`)
is never recategorized.
"""

import re
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from src.domain.entities import (
    CategorizationRule,
    MatchField,
    Transaction,
    TransactionCategory,
)


CATEGORY_PATTERNS: Dict[TransactionCategory, List[str]] = {
    # Income
    TransactionCategory.SALARY: ["salary", "payroll", "wage", "compensation"],
    TransactionCategory.FREELANCE: ["freelance", "upwork", "fiverr", "consulting"],
    TransactionCategory.BUSINESS: ["business income", "revenue", "client payment"],
    TransactionCategory.INVESTMENT_INCOME: ["dividend", "interest credit", "capital gains"],
    TransactionCategory.OTHER_INCOME: ["bonus", "cashback", "gift received"],
    # Essentials
    TransactionCategory.RENT: ["rent", "lease", "landlord", "housing society"],
    TransactionCategory.UTILITIES: [
        "electricity", "water bill", "broadband", "internet", "airtel",
        "jio", "vodafone", "bsnl", "recharge",
    ],
    TransactionCategory.GROCERIES: [
        "grocery", "supermarket", "bigbazaar", "dmart", "reliance fresh",
        "zepto", "blinkit", "instamart", "kirana",
    ],
    TransactionCategory.HEALTHCARE: [
        "hospital", "doctor", "pharmacy", "medical", "clinic", "apollo",
        "medicine", "pharmeasy", "1mg",
    ],
    TransactionCategory.INSURANCE: ["insurance", "premium", "policybazaar", "hdfc life"],
    TransactionCategory.TRANSPORT: ["uber", "ola", "rapido", "metro", "irctc", "parking"],
    TransactionCategory.FUEL: ["petrol", "diesel", "fuel", "bharat petroleum", "indian oil", "hpcl"],
    # Lifestyle
    TransactionCategory.DINING: [
        "swiggy", "zomato", "restaurant", "cafe", "starbucks", "domino",
        "pizza", "mcdonald", "hungerbox", "eatsure",
    ],
    TransactionCategory.ENTERTAINMENT: ["bookmyshow", "pvr", "inox", "cinema", "concert", "steam"],
    TransactionCategory.SHOPPING: ["amazon", "flipkart", "myntra", "ajio", "nykaa", "meesho", "decathlon"],
    TransactionCategory.TRAVEL: ["makemytrip", "goibibo", "cleartrip", "airbnb", "oyo", "indigo", "hotel"],
    TransactionCategory.EDUCATION: ["udemy", "coursera", "school", "college", "tuition", "books"],
    TransactionCategory.FITNESS: ["gym", "cult.fit", "cultfit", "yoga", "fitness"],
    TransactionCategory.PERSONAL_CARE: ["salon", "spa", "barber", "urban company"],
    # Financial
    TransactionCategory.SAVINGS: ["fixed deposit", "recurring deposit", "savings transfer"],
    TransactionCategory.INVESTMENT: [
        "zerodha", "groww", "kuvera", "coin", "sip", "mutual fund", "nps", "ppf",
    ],
    TransactionCategory.LOAN_PAYMENT: ["emi", "loan", "bajaj finserv"],
    TransactionCategory.CREDIT_CARD: ["credit card payment", "cc payment", "card bill"],
    TransactionCategory.TAX: ["income tax", "gst", "tds", "advance tax"],
    # Other
    TransactionCategory.SUBSCRIPTION: [
        "netflix", "spotify", "prime video", "hotstar", "youtube premium",
        "apple.com", "google play", "subscription",
    ],
    TransactionCategory.GIFTS: ["gift", "ferns n petals", "fnp"],
    TransactionCategory.CHARITY: ["donation", "charity", "ngo", "temple"],
}

_WHITESPACE = re.compile(r"\s+")


def _normalize(text: str) -> str:
    return _WHITESPACE.sub("", text.lower())


def _fuzzy_contains(text: str, pattern: str) -> bool:
    return _normalize(pattern) in _normalize(text)


def _search_text(merchant: str, description: str) -> str:
    return f"{merchant} {description}"


def categorize(merchant: str, description: str = "") -> TransactionCategory:
    """
    Categorize a transaction from its merchant and description.

    Categories are tried in table order and the first one with any
    matching keyword wins.

    Returns:
        The matched category, or UNCATEGORIZED
    """
    text = _search_text(merchant, description)
    for category, patterns in CATEGORY_PATTERNS.items():
        if any(_fuzzy_contains(text, p) for p in patterns):
            return category
    return TransactionCategory.UNCATEGORIZED


def suggest_categories(
    merchant: str,
    description: str = "",
    limit: int = 3,
) -> List[Dict[str, object]]:
    """
    Rank candidate categories by how many of their keywords match.

    Confidence is `matches / len(patterns) * 100` for each category.
    """
    text = _search_text(merchant, description)
    scored: List[Tuple[TransactionCategory, float]] = []
    for category, patterns in CATEGORY_PATTERNS.items():
        matches = sum(1 for p in patterns if _fuzzy_contains(text, p))
        if matches:
            scored.append((category, matches / len(patterns) * 100))

    scored.sort(key=lambda item: item[1], reverse=True)
    return [
        {"category": category.value, "confidence": round(confidence, 2)}
        for category, confidence in scored[:limit]
    ]


def rule_matches(rule: CategorizationRule, merchant: str, description: str) -> bool:
    """Test one user rule against a transaction's text."""
    if rule.match_field == MatchField.MERCHANT:
        haystack = merchant
    elif rule.match_field == MatchField.DESCRIPTION:
        haystack = description
    else:
        haystack = _search_text(merchant, description)

    if rule.case_sensitive:
        return rule.pattern in haystack
    return rule.pattern.lower() in haystack.lower()


def match_rule(
    rules: List[CategorizationRule],
    merchant: str,
    description: str,
) -> Optional[CategorizationRule]:
    """
    Find the rule that applies to a transaction.

    Only enabled rules are considered, newest first. The first matching
    rule wins.
    """
    active = sorted(
        (r for r in rules if r.enabled),
        key=lambda r: r.created_at,
        reverse=True,
    )
    for rule in active:
        if rule_matches(rule, merchant, description):
            return rule
    return None


def _to_category(value: str) -> TransactionCategory:
    try:
        return TransactionCategory(value)
    except ValueError:
        return TransactionCategory.UNCATEGORIZED


def resolve_category(
    rules: List[CategorizationRule],
    merchant: str,
    description: str,
) -> TransactionCategory:
    """User rules first, then the keyword categorizer."""
    rule = match_rule(rules, merchant, description)
    if rule is not None:
        return _to_category(rule.category)
    return categorize(merchant, description)


def apply_rules(
    transactions: List[Transaction],
    rules: List[CategorizationRule],
) -> List[Transaction]:
    """
    Categorize a batch of transactions.

    Transactions with `category_override` set keep their category.
    Everything else gets the category of the first matching rule, or the
    keyword categorizer's result when no rule matches.

    Returns:
        New Transaction objects; the inputs are not modified
    """
    result: List[Transaction] = []
    for txn in transactions:
        if txn.category_override:
            result.append(txn)
            continue
        category = resolve_category(rules, txn.merchant, txn.description)
        result.append(replace(txn, category=category))
    return result
