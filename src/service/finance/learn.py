"""
Learn Module: Topics, Quizzes and Scoring.

Topics are static content grouped into sections. A user's progress on a
topic moves through `unread -> read -> quizzed -> mastered`; passing a
quiz (score >= `quiz_pass_percent`) masters the topic.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from src.domain.entities import Difficulty, LearnStatus, LearnTopic, QuizQuestion

from .settings import FinanceSettings, finance_settings


UNANSWERED = -1

SECTIONS: Dict[str, str] = {
    "getting-started": "Getting Started",
    "market-instruments": "Market Instruments",
    "financial-planning": "Financial Planning",
    "tax-advanced": "Tax & Advanced Topics",
}

TOPICS: List[LearnTopic] = [
    LearnTopic(
        id="what-is-investing",
        title="What is Investing?",
        description="Putting money to work so it grows faster than inflation, and how compounding helps.",
        section="getting-started",
        difficulty=Difficulty.BEGINNER,
        read_time="4 min",
        tags=["investing", "compounding", "basics"],
    ),
    LearnTopic(
        id="risk-vs-return",
        title="Risk vs Return",
        description="Why higher expected returns come with larger swings, and how to pick a comfortable mix.",
        section="getting-started",
        difficulty=Difficulty.BEGINNER,
        read_time="4 min",
        tags=["risk", "return", "diversification"],
    ),
    LearnTopic(
        id="emergency-fund",
        title="Emergency Fund",
        description="A cash buffer of several months of expenses, built before taking investment risk.",
        section="getting-started",
        difficulty=Difficulty.BEGINNER,
        read_time="3 min",
        tags=["emergency", "safety", "savings"],
    ),
    LearnTopic(
        id="stocks",
        title="Stocks (Equities)",
        description="Owning a share of a company: exchanges, prices and the terms every investor meets.",
        section="market-instruments",
        difficulty=Difficulty.INTERMEDIATE,
        read_time="5 min",
        tags=["stocks", "equities", "NSE", "BSE"],
    ),
    LearnTopic(
        id="mutual-funds",
        title="Mutual Funds",
        description="Pooled money managed by professionals, priced daily by its NAV.",
        section="market-instruments",
        difficulty=Difficulty.BEGINNER,
        read_time="5 min",
        tags=["mutual funds", "NAV", "expense ratio"],
    ),
    LearnTopic(
        id="index-funds",
        title="Index Funds",
        description="Low-cost funds that track a market index such as the Nifty 50.",
        section="market-instruments",
        difficulty=Difficulty.BEGINNER,
        read_time="4 min",
        tags=["index funds", "Nifty 50", "passive investing"],
    ),
    LearnTopic(
        id="sip",
        title="SIP (Systematic Investment Plan)",
        description="Investing a fixed amount every month and the effect of rupee cost averaging.",
        section="market-instruments",
        difficulty=Difficulty.BEGINNER,
        read_time="4 min",
        tags=["SIP", "rupee cost averaging", "discipline"],
    ),
    LearnTopic(
        id="budgeting-methods",
        title="Budgeting Methods",
        description="The 50/30/20 split of needs, wants and investments, and other ways to plan spending.",
        section="financial-planning",
        difficulty=Difficulty.BEGINNER,
        read_time="4 min",
        tags=["budget", "50/30/20", "NWI"],
    ),
    LearnTopic(
        id="savings-rate",
        title="Savings Rate",
        description="The share of income you keep, and why it matters more than returns early on.",
        section="financial-planning",
        difficulty=Difficulty.BEGINNER,
        read_time="3 min",
        tags=["savings", "income", "habits"],
    ),
    LearnTopic(
        id="net-worth",
        title="Net Worth",
        description="Assets minus liabilities: the single number that tracks financial progress.",
        section="financial-planning",
        difficulty=Difficulty.BEGINNER,
        read_time="3 min",
        tags=["net worth", "assets", "liabilities"],
    ),
    LearnTopic(
        id="fire",
        title="FIRE",
        description="Financial independence via the 4% rule and how long it takes to get there.",
        section="financial-planning",
        difficulty=Difficulty.INTERMEDIATE,
        read_time="5 min",
        tags=["FIRE", "4% rule", "retirement"],
    ),
    LearnTopic(
        id="tax-saving",
        title="Tax Saving",
        description="Deductions under Section 80C and choosing between the old and new tax regimes.",
        section="tax-advanced",
        difficulty=Difficulty.INTERMEDIATE,
        read_time="5 min",
        tags=["tax", "80C", "ELSS"],
    ),
    LearnTopic(
        id="xirr-cagr",
        title="XIRR and CAGR",
        description="Measuring returns correctly when money goes in at different times.",
        section="tax-advanced",
        difficulty=Difficulty.ADVANCED,
        read_time="5 min",
        tags=["XIRR", "CAGR", "returns"],
    ),
    LearnTopic(
        id="asset-allocation",
        title="Asset Allocation",
        description="Splitting money across equity, debt and cash to match goals and risk.",
        section="tax-advanced",
        difficulty=Difficulty.ADVANCED,
        read_time="5 min",
        tags=["allocation", "rebalancing", "diversification"],
    ),
]

QUIZZES: Dict[str, List[QuizQuestion]] = {
    "what-is-investing": [
        QuizQuestion(
            question="What makes compounding powerful?",
            options=[
                "Returns are earned on previous returns",
                "Interest rates never change",
                "Prices only go up",
                "Taxes are waived",
            ],
            correct_index=0,
            explanation="Each period's returns are added to the base that earns the next period's returns.",
        ),
        QuizQuestion(
            question="Why is keeping all savings in a savings account risky over decades?",
            options=[
                "Banks may refuse withdrawals",
                "Inflation can outpace the interest earned",
                "Savings accounts are taxed at 50%",
                "Interest is paid only once",
            ],
            correct_index=1,
            explanation="Money that grows slower than inflation loses purchasing power.",
        ),
        QuizQuestion(
            question="Which matters most for compounding?",
            options=["Luck", "Time in the market", "Daily trading", "Picking one stock"],
            correct_index=1,
            explanation="The longer money compounds, the larger the effect.",
        ),
    ],
    "emergency-fund": [
        QuizQuestion(
            question="How large should a typical emergency fund be?",
            options=["One week of expenses", "3 to 6 months of expenses", "10 years of income", "Nothing"],
            correct_index=1,
            explanation="Three to six months of expenses covers most job loss or medical surprises.",
        ),
        QuizQuestion(
            question="Where should an emergency fund be kept?",
            options=["Small-cap stocks", "Cryptocurrency", "A liquid, low-risk account", "Real estate"],
            correct_index=2,
            explanation="It must be available quickly without risk of loss.",
        ),
        QuizQuestion(
            question="When should you build it?",
            options=["After retiring", "Before taking investment risk", "Never", "Only after a crisis"],
            correct_index=1,
            explanation="A buffer stops you from selling investments at a bad time.",
        ),
    ],
    "mutual-funds": [
        QuizQuestion(
            question="What does NAV stand for?",
            options=["Net Asset Value", "New Account Value", "Nominal Annual Variance", "Net Annual Volume"],
            correct_index=0,
            explanation="NAV is the per-unit value of the fund's holdings.",
        ),
        QuizQuestion(
            question="What is the expense ratio?",
            options=[
                "The fund's annual fee as a share of assets",
                "The tax on redemptions",
                "The fund's past return",
                "The entry price",
            ],
            correct_index=0,
            explanation="It is deducted from the fund's assets every year.",
        ),
        QuizQuestion(
            question="Which plan usually has a lower expense ratio?",
            options=["Regular plan", "Direct plan", "Both are equal", "Dividend plan"],
            correct_index=1,
            explanation="Direct plans pay no distributor commission.",
        ),
    ],
    "sip": [
        QuizQuestion(
            question="What does rupee cost averaging mean?",
            options=[
                "Buying more units when prices are low and fewer when high",
                "Always buying at the lowest price",
                "Paying a fixed price per unit",
                "Converting rupees to dollars",
            ],
            correct_index=0,
            explanation="A fixed amount buys more units when NAV falls.",
        ),
        QuizQuestion(
            question="What is the main benefit of a SIP?",
            options=["Guaranteed returns", "Disciplined regular investing", "No market risk", "Tax-free income"],
            correct_index=1,
            explanation="Automating contributions builds the habit and removes timing decisions.",
        ),
        QuizQuestion(
            question="A ₹5,000 monthly SIP for 12 months invests how much?",
            options=["₹5,000", "₹50,000", "₹60,000", "₹65,000"],
            correct_index=2,
            explanation="12 x ₹5,000 = ₹60,000.",
        ),
    ],
    "budgeting-methods": [
        QuizQuestion(
            question="In the 50/30/20 rule, what does the 20% cover?",
            options=["Wants", "Needs", "Investments and savings", "Taxes"],
            correct_index=2,
            explanation="20% of income goes to investments and savings.",
        ),
        QuizQuestion(
            question="Which is a need rather than a want?",
            options=["Streaming subscription", "Rent", "Dining out", "Holiday travel"],
            correct_index=1,
            explanation="Housing is essential; the others are discretionary.",
        ),
        QuizQuestion(
            question="What share does the 50/30/20 rule give to wants?",
            options=["50%", "30%", "20%", "10%"],
            correct_index=1,
            explanation="Wants get 30% of income.",
        ),
    ],
    "fire": [
        QuizQuestion(
            question="Under the 4% rule, the FIRE number is how many times annual expenses?",
            options=["4", "10", "25", "100"],
            correct_index=2,
            explanation="Withdrawing 4% a year means a corpus of 1 / 0.04 = 25x expenses.",
        ),
        QuizQuestion(
            question="Which change shortens the time to FIRE the most?",
            options=["Raising the savings rate", "Checking prices daily", "Buying lottery tickets", "Holding only cash"],
            correct_index=0,
            explanation="A higher savings rate both grows the corpus and lowers the target.",
        ),
        QuizQuestion(
            question="Annual expenses of ₹6,00,000 give what FIRE number?",
            options=["₹24,00,000", "₹60,00,000", "₹1,50,00,000", "₹6,00,00,000"],
            correct_index=2,
            explanation="25 x ₹6,00,000 = ₹1,50,00,000.",
        ),
    ],
    "xirr-cagr": [
        QuizQuestion(
            question="When is XIRR preferred over CAGR?",
            options=[
                "For a single lump-sum investment",
                "For multiple investments made at different dates",
                "For savings accounts only",
                "Never",
            ],
            correct_index=1,
            explanation="XIRR accounts for the timing of every cash flow.",
        ),
        QuizQuestion(
            question="₹1,00,000 growing to ₹2,00,000 in about 6 years is roughly what CAGR?",
            options=["6%", "12%", "18%", "100%"],
            correct_index=1,
            explanation="Doubling in 6 years is about 12% a year (rule of 72).",
        ),
        QuizQuestion(
            question="In an XIRR calculation, how are investments entered?",
            options=["As positive flows", "As negative flows", "They are ignored", "As percentages"],
            correct_index=1,
            explanation="Money going out is negative; current value or redemptions are positive.",
        ),
    ],
}


@dataclass
class QuizResult:
    topic_id: str
    score: int
    total: int
    percentage: float
    passed: bool
    results: List[dict]

    @property
    def status(self) -> LearnStatus:
        return LearnStatus.MASTERED if self.passed else LearnStatus.QUIZZED

    def to_dict(self) -> dict:
        return {
            "topic_id": self.topic_id,
            "score": self.score,
            "total": self.total,
            "percentage": self.percentage,
            "passed": self.passed,
            "status": self.status.value,
            "results": self.results,
        }


def get_topic(topic_id: str) -> Optional[LearnTopic]:
    return next((t for t in TOPICS if t.id == topic_id), None)


def get_quiz(topic_id: str) -> Optional[List[QuizQuestion]]:
    return QUIZZES.get(topic_id)


def score_quiz(
    topic_id: str,
    questions: List[QuizQuestion],
    answers: List[int],
    settings: FinanceSettings = finance_settings,
) -> QuizResult:
    """
    Score a quiz submission.

    Answers are matched to questions by position. Missing answers count
    as unanswered (-1) and are wrong.

    Args:
        topic_id: Topic the quiz belongs to
        questions: The topic's questions
        answers: Selected option index per question
        settings: Finance settings (pass percentage)
    """
    padded = list(answers) + [UNANSWERED] * (len(questions) - len(answers))

    results = []
    score = 0
    for question, answer in zip(questions, padded):
        correct = answer == question.correct_index
        if correct:
            score += 1
        results.append({
            "question": question.question,
            "selected_index": answer,
            "correct_index": question.correct_index,
            "correct": correct,
            "explanation": question.explanation,
        })

    total = len(questions)
    percentage = round(score / total * 100, 2) if total else 0.0
    return QuizResult(
        topic_id=topic_id,
        score=score,
        total=total,
        percentage=percentage,
        passed=percentage >= settings.quiz_pass_percent,
        results=results,
    )
