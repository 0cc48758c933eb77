"""
Fixtures for integration tests.

Provides:
- Test client for FastAPI app
- Mock market data, LLM and transaction feed clients
- In-memory database for testing
"""

from datetime import date, timedelta
from typing import AsyncGenerator, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.main import app
from src.core.dependencies import (
    get_budget_repository,
    get_feed_client,
    get_holding_repository,
    get_income_goal_repository,
    get_insight_client,
    get_insight_repository,
    get_job_run_repository,
    get_learn_repository,
    get_mutual_fund_client,
    get_notification_repository,
    get_nwi_repository,
    get_rule_repository,
    get_savings_goal_repository,
    get_stock_client,
    get_subscription_repository,
    get_transaction_repository,
)
from src.domain.entities import (
    NAVPoint,
    NAVResult,
    SchemeHistory,
    SchemeSearchResult,
    StockQuote,
    Transaction,
    TransactionCategory,
    TransactionType,
)
from src.domain.exceptions import (
    InsightGenerationException,
    MarketDataException,
    SchemeNotFoundException,
    TransactionFeedException,
)
from src.domain.interfaces import (
    InsightGeneratorClient,
    MutualFundClient,
    StockQuoteClient,
    TransactionFeedClient,
)
from src.infrastructure.database import Base
from src.infrastructure.repositories import (
    PostgresBudgetRepository,
    PostgresHoldingRepository,
    PostgresIncomeGoalRepository,
    PostgresInsightRepository,
    PostgresJobRunRepository,
    PostgresLearnProgressRepository,
    PostgresNotificationRepository,
    PostgresNWIConfigRepository,
    PostgresRuleRepository,
    PostgresSavingsGoalRepository,
    PostgresSubscriptionRepository,
    PostgresTransactionRepository,
)


# =============================================================================
# Mock Clients
# =============================================================================

class MockMutualFundClient(MutualFundClient):
    """Mock NAV provider backed by an in-memory scheme table."""

    def __init__(self, fail_mode: bool = False):
        self.fail_mode = fail_mode
        self.call_count = 0
        self.schemes: Dict[int, SchemeHistory] = {
            120503: _history(120503, "Axis Bluechip Fund - Direct Plan - Growth", 58.42),
            119551: _history(119551, "HDFC Index Fund - Nifty 50 Plan - Direct Growth", 210.15),
        }

    async def search(self, query: str) -> List[SchemeSearchResult]:
        self.call_count += 1
        if self.fail_mode:
            raise MarketDataException("NAV provider unavailable", provider="mfapi", status_code=500)

        needle = query.lower()
        return [
            SchemeSearchResult(scheme_code=code, scheme_name=h.scheme_name)
            for code, h in self.schemes.items()
            if needle in h.scheme_name.lower()
        ]

    async def get_latest_nav(self, scheme_code: int) -> NAVResult:
        history = await self.get_history(scheme_code)
        latest = history.points[0]
        return NAVResult(
            scheme_code=scheme_code,
            scheme_name=history.scheme_name,
            nav=latest.nav,
            date=latest.date,
        )

    async def get_history(self, scheme_code: int) -> SchemeHistory:
        self.call_count += 1
        if self.fail_mode:
            raise MarketDataException("NAV provider unavailable", provider="mfapi", status_code=500)
        if scheme_code not in self.schemes:
            raise SchemeNotFoundException(str(scheme_code))
        return self.schemes[scheme_code]

    async def get_latest_navs(self, scheme_codes: List[int]) -> Dict[int, NAVResult]:
        results = {}
        for code in dict.fromkeys(scheme_codes):
            try:
                results[code] = await self.get_latest_nav(code)
            except (MarketDataException, SchemeNotFoundException):
                continue
        return results


class MockStockQuoteClient(StockQuoteClient):
    """Mock quote provider with fixed prices."""

    def __init__(self, prices: Optional[Dict[str, float]] = None, fail_mode: bool = False):
        self.prices = prices if prices is not None else {"INFY": 1500.0, "TCS": 3900.0}
        self.fail_mode = fail_mode
        self.requested: List[tuple] = []

    async def get_quote(self, symbol: str, exchange: str = "NSE") -> StockQuote:
        self.requested.append((symbol, exchange))
        if self.fail_mode or symbol not in self.prices:
            raise MarketDataException(f"No quote for {symbol}", provider="quotes")

        price = self.prices[symbol]
        return StockQuote(
            symbol=symbol,
            price=price,
            change=price * 0.01,
            change_percent=1.0,
            source="yahoo",
        )

    async def get_quotes(self, symbols: List[str], exchange: str = "NSE") -> Dict[str, StockQuote]:
        quotes = {}
        for symbol in symbols:
            try:
                quotes[symbol] = await self.get_quote(symbol, exchange)
            except MarketDataException:
                continue
        return quotes


class MockInsightGeneratorClient(InsightGeneratorClient):
    """Mock LLM that returns a canned response or fails."""

    def __init__(self, response: str = "", fail_mode: bool = False):
        self.response = response or (
            '{"sections": [{"title": "Spending", "content": "Dining is your top category."}]}'
        )
        self.fail_mode = fail_mode
        self.call_count = 0
        self.messages: List[List[Dict[str, str]]] = []

    async def complete(self, messages: List[Dict[str, str]]) -> str:
        self.call_count += 1
        self.messages.append(messages)
        if self.fail_mode:
            raise InsightGenerationException("LLM provider unavailable", status_code=503)
        return self.response


class MockTransactionFeedClient(TransactionFeedClient):
    """Mock transaction feed serving a fixed list."""

    def __init__(self, transactions: Optional[List[Transaction]] = None, fail_mode: bool = False):
        self.transactions = transactions or []
        self.fail_mode = fail_mode
        self.call_count = 0

    async def fetch_transactions(self, user_id: str) -> List[Transaction]:
        self.call_count += 1
        if self.fail_mode:
            raise TransactionFeedException("Transaction feed unavailable", status_code=500)
        return [t for t in self.transactions]


# =============================================================================
# Test Data Helpers
# =============================================================================

def _history(code: int, name: str, latest_nav: float) -> SchemeHistory:
    """Six years of monthly NAVs growing ~1% per month, newest first."""
    today = date.today()
    points = []
    nav = latest_nav
    for months_back in range(0, 73):
        points.append(NAVPoint(date=today - timedelta(days=30 * months_back), nav=round(nav, 4)))
        nav = nav / 1.01
    return SchemeHistory(
        scheme_code=code,
        scheme_name=name,
        meta={"fund_house": name.split()[0], "scheme_category": "Equity"},
        points=points,
    )


def make_transaction(
    amount: float,
    txn_type: TransactionType = TransactionType.EXPENSE,
    category: TransactionCategory = TransactionCategory.DINING,
    txn_date: Optional[date] = None,
    user_id: str = "default",
    **kwargs,
) -> Transaction:
    """Create a transaction with sensible defaults."""
    return Transaction(
        date=txn_date or date.today(),
        amount=amount,
        type=txn_type,
        category=category,
        user_id=user_id,
        **kwargs,
    )


def sample_history(user_id: str = "default") -> List[Transaction]:
    """Three months of salary, rent, groceries and dining."""
    month_start = date.today().replace(day=1)
    transactions = []
    for months_back in range(3):
        if months_back:
            month_start = (month_start - timedelta(days=1)).replace(day=1)
        transactions.extend([
            make_transaction(
                100000, TransactionType.INCOME, TransactionCategory.SALARY,
                month_start, user_id, description="Salary credit", merchant="ACME Corp",
            ),
            make_transaction(
                30000, TransactionType.EXPENSE, TransactionCategory.RENT,
                month_start, user_id, description="Monthly rent", merchant="Landlord",
            ),
            make_transaction(
                8000, TransactionType.EXPENSE, TransactionCategory.GROCERIES,
                month_start, user_id, description="Groceries", merchant="BigBasket",
            ),
            make_transaction(
                4000, TransactionType.EXPENSE, TransactionCategory.DINING,
                month_start, user_id, description="Dinner", merchant="Swiggy",
            ),
        ])
    return transactions


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def transaction_repo(test_session: AsyncSession) -> PostgresTransactionRepository:
    return PostgresTransactionRepository(test_session)


@pytest.fixture
def insight_repo(test_session: AsyncSession) -> PostgresInsightRepository:
    return PostgresInsightRepository(test_session)


@pytest.fixture
def subscription_repo(test_session: AsyncSession) -> PostgresSubscriptionRepository:
    return PostgresSubscriptionRepository(test_session)


@pytest.fixture
def holding_repo(test_session: AsyncSession) -> PostgresHoldingRepository:
    return PostgresHoldingRepository(test_session)


# =============================================================================
# Mock Client Fixtures
# =============================================================================

@pytest.fixture
def mock_mf_client() -> MockMutualFundClient:
    return MockMutualFundClient()


@pytest.fixture
def mock_stock_client() -> MockStockQuoteClient:
    return MockStockQuoteClient()


@pytest.fixture
def mock_insight_client() -> MockInsightGeneratorClient:
    return MockInsightGeneratorClient()


@pytest.fixture
def mock_feed_client() -> MockTransactionFeedClient:
    return MockTransactionFeedClient()


# =============================================================================
# App Client Fixtures
# =============================================================================

def install_overrides(
    session: AsyncSession,
    mf_client: MutualFundClient,
    stock_client: StockQuoteClient,
    insight_client: InsightGeneratorClient,
    feed_client: TransactionFeedClient,
) -> None:
    """Point every repository at the test session and every client at a mock."""
    repositories = {
        get_transaction_repository: PostgresTransactionRepository,
        get_budget_repository: PostgresBudgetRepository,
        get_nwi_repository: PostgresNWIConfigRepository,
        get_subscription_repository: PostgresSubscriptionRepository,
        get_rule_repository: PostgresRuleRepository,
        get_learn_repository: PostgresLearnProgressRepository,
        get_notification_repository: PostgresNotificationRepository,
        get_insight_repository: PostgresInsightRepository,
        get_holding_repository: PostgresHoldingRepository,
        get_job_run_repository: PostgresJobRunRepository,
        get_savings_goal_repository: PostgresSavingsGoalRepository,
        get_income_goal_repository: PostgresIncomeGoalRepository,
    }
    for dependency, repository_class in repositories.items():
        app.dependency_overrides[dependency] = lambda cls=repository_class: cls(session)

    app.dependency_overrides[get_mutual_fund_client] = lambda: mf_client
    app.dependency_overrides[get_stock_client] = lambda: stock_client
    app.dependency_overrides[get_insight_client] = lambda: insight_client
    app.dependency_overrides[get_feed_client] = lambda: feed_client


@pytest_asyncio.fixture
async def client(
    test_session: AsyncSession,
    mock_mf_client: MockMutualFundClient,
    mock_stock_client: MockStockQuoteClient,
    mock_insight_client: MockInsightGeneratorClient,
    mock_feed_client: MockTransactionFeedClient,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with mocked dependencies.

    This client:
    - Uses an in-memory SQLite database
    - Mocks the NAV, quote, LLM and transaction feed clients
    """
    install_overrides(
        test_session,
        mock_mf_client,
        mock_stock_client,
        mock_insight_client,
        mock_feed_client,
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client_with_failing_providers(
    test_session: AsyncSession,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client where every external provider fails."""
    install_overrides(
        test_session,
        MockMutualFundClient(fail_mode=True),
        MockStockQuoteClient(fail_mode=True),
        MockInsightGeneratorClient(fail_mode=True),
        MockTransactionFeedClient(fail_mode=True),
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
