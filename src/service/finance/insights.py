"""
AI Insight Prompts and Response Parsing.

Insights are generated by a chat-completions model from a compact
context computed here (analytics, budgets, NWI split). The model is
asked for a JSON object `{"sections": [...]}`; when the response is not
valid JSON of that shape, the raw text is kept as the insight content.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from src.domain.entities import InsightType, Transaction

from .analytics import calculate_analytics
from .formatting import format_inr


SYSTEM_PROMPT = (
    "You are a personal finance advisor for an Indian user. "
    "Amounts are in INR. Be specific and use the exact figures given. "
    'Return ONLY a JSON object of the form {"sections": [{"title": str, '
    '"type": "summary"|"list"|"alert"|"tip", "content": str, "items": [str]}]}. '
    "No markdown and no code fences."
)

TASKS: Dict[InsightType, str] = {
    InsightType.SPENDING_ANALYSIS: (
        "Analyze the spending below. Identify the largest categories, unusual "
        "patterns and 3-5 concrete ways to save with rupee amounts."
    ),
    InsightType.MONTHLY_BUDGET: (
        "Recommend a monthly budget using the 50/30/20 needs/wants/investments "
        "split, comparing it with actual spending per category."
    ),
    InsightType.WEEKLY_BUDGET: (
        "Recommend a weekly spending plan for the coming week based on recent "
        "daily spending and the monthly budgets."
    ),
    InsightType.INVESTMENT_INSIGHTS: (
        "Review the investment activity and suggest improvements to asset "
        "allocation and SIP discipline."
    ),
    InsightType.TAX_OPTIMIZATION: (
        "Suggest legal ways to reduce income tax under Indian rules "
        "(80C, 80D, NPS, regime choice) given the income below."
    ),
    InsightType.PLANNER_RECOMMENDATION: (
        "Give a 12-month financial plan: emergency fund, investments and "
        "spending targets, based on the figures below."
    ),
}

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.MULTILINE)


@dataclass
class InsightPrompt:
    system: str
    user: str
    data_points: int

    def messages(self) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": self.system},
            {"role": "user", "content": self.user},
        ]


def build_insight_prompt(
    insight_type: InsightType,
    transactions: List[Transaction],
    extra: Optional[Dict[str, Any]] = None,
) -> InsightPrompt:
    """
    Build the prompt for one insight type.

    Args:
        insight_type: Which analysis to request
        transactions: The user's transactions (may be empty for types
            that do not require them)
        extra: Additional context (budgets, holdings) keyed by name
    """
    analytics = calculate_analytics(transactions)
    lines = [
        TASKS[insight_type],
        "",
        f"Total income: {format_inr(analytics.total_income)}",
        f"Total expenses: {format_inr(analytics.total_expenses)}",
        f"Savings rate: {analytics.savings_rate:.1f}%",
        f"Average monthly expense: {format_inr(analytics.average_monthly_expense)}",
        f"Daily average spend: {format_inr(analytics.daily_average_spend)}",
    ]

    if analytics.top_expense_categories:
        lines.append("Top expense categories:")
        for item in analytics.top_expense_categories:
            lines.append(
                f"- {item['category']}: {format_inr(item['total_amount'])} "
                f"({item['percentage_of_total']:.1f}%)"
            )

    if analytics.monthly_trends:
        lines.append("Recent months:")
        for trend in analytics.monthly_trends[-6:]:
            lines.append(
                f"- {trend.label}: income {format_inr(trend.income)}, "
                f"expenses {format_inr(trend.expenses)}"
            )

    for key, value in (extra or {}).items():
        lines.append(f"{key}: {json.dumps(value, default=str)}")

    return InsightPrompt(
        system=SYSTEM_PROMPT,
        user="\n".join(lines),
        data_points=len(transactions),
    )


def parse_insight_response(text: str) -> tuple[str, Optional[List[Dict[str, Any]]]]:
    """
    Split a model response into (content, sections).

    Code fences around the JSON are tolerated. When sections are found,
    the content is a plain-text rendering of them.
    """
    stripped = _CODE_FENCE.sub("", text.strip()).strip()
    try:
        payload = json.loads(stripped)
    except json.JSONDecodeError:
        return text, None

    if not isinstance(payload, dict) or not isinstance(payload.get("sections"), list):
        return text, None

    sections = [s for s in payload["sections"] if isinstance(s, dict)]
    return sections_to_text(sections), sections


def sections_to_text(sections: List[Dict[str, Any]]) -> str:
    parts = []
    for section in sections:
        title = section.get("title")
        if title:
            parts.append(f"## {title}")
        if section.get("content"):
            parts.append(str(section["content"]))
        for item in section.get("items") or []:
            parts.append(f"- {item}")
        parts.append("")
    return "\n".join(parts).strip()
