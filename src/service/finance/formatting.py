"""Indian currency formatting helpers."""

RUPEE = "₹"

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000


def group_indian(integer_part: int) -> str:
    """
    Group digits the Indian way: the last three digits, then pairs.

    >>> group_indian(4181655)
    '41,81,655'
    """
    digits = str(abs(integer_part))
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_inr(amount: float, decimals: int = 2) -> str:
    """Format an amount like `₹41,816.55` (negative as `-₹500.00`)."""
    sign = "-" if amount < 0 else ""
    rounded = round(abs(amount), decimals)
    integer_part = int(rounded)
    text = f"{RUPEE}{group_indian(integer_part)}"
    if decimals > 0:
        fraction = f"{rounded:.{decimals}f}".split(".")[1]
        text = f"{text}.{fraction}"
    return f"{sign}{text}"


def format_compact_inr(amount: float) -> str:
    """Compact form with Cr/L/K suffixes, e.g. `₹1.5Cr`, `₹2.3L`, `₹4.5K`."""
    sign = "-" if amount < 0 else ""
    value = abs(amount)
    if value >= CRORE:
        return f"{sign}{RUPEE}{value / CRORE:.1f}Cr"
    if value >= LAKH:
        return f"{sign}{RUPEE}{value / LAKH:.1f}L"
    if value >= THOUSAND:
        return f"{sign}{RUPEE}{value / THOUSAND:.1f}K"
    return f"{sign}{RUPEE}{value:.0f}"


def format_short(amount: float) -> str:
    """Suffix-only form used in notification text: `1.2L`, `4.5K`, `300`."""
    if amount >= LAKH:
        return f"{amount / LAKH:.1f}L"
    if amount >= THOUSAND:
        return f"{amount / THOUSAND:.1f}K"
    return f"{amount:.0f}"
