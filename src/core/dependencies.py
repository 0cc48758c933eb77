"""Dependency injection for FastAPI."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database import get_db_session
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
from src.infrastructure.clients import (
    HttpInsightGeneratorClient,
    HttpMutualFundClient,
    HttpStockQuoteClient,
    HttpTransactionFeedClient,
)
from src.application.jobs import JobContext, JobRunner
from src.application.services import (
    AnalyticsService,
    BudgetService,
    GoalService,
    InsightService,
    InvestmentService,
    LearnService,
    NotificationService,
    RuleService,
    SubscriptionService,
    TransactionService,
)


# Repository dependencies
async def get_transaction_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresTransactionRepository:
    """Get a TransactionRepository instance."""
    return PostgresTransactionRepository(session)


async def get_budget_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresBudgetRepository:
    return PostgresBudgetRepository(session)


async def get_nwi_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresNWIConfigRepository:
    return PostgresNWIConfigRepository(session)


async def get_subscription_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresSubscriptionRepository:
    return PostgresSubscriptionRepository(session)


async def get_rule_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresRuleRepository:
    return PostgresRuleRepository(session)


async def get_savings_goal_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresSavingsGoalRepository:
    return PostgresSavingsGoalRepository(session)


async def get_income_goal_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresIncomeGoalRepository:
    return PostgresIncomeGoalRepository(session)


async def get_learn_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresLearnProgressRepository:
    return PostgresLearnProgressRepository(session)


async def get_notification_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresNotificationRepository:
    return PostgresNotificationRepository(session)


async def get_insight_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresInsightRepository:
    return PostgresInsightRepository(session)


async def get_holding_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresHoldingRepository:
    return PostgresHoldingRepository(session)


async def get_job_run_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresJobRunRepository:
    return PostgresJobRunRepository(session)


# External client dependencies
def get_mutual_fund_client() -> HttpMutualFundClient:
    """Get a MutualFundClient instance."""
    return HttpMutualFundClient()


def get_stock_client() -> HttpStockQuoteClient:
    """Get a StockQuoteClient instance."""
    return HttpStockQuoteClient()


def get_insight_client() -> HttpInsightGeneratorClient:
    """Get an InsightGeneratorClient instance."""
    return HttpInsightGeneratorClient()


def get_feed_client() -> HttpTransactionFeedClient:
    """Get a TransactionFeedClient instance."""
    return HttpTransactionFeedClient()


# Service dependencies
async def get_transaction_service(
    txn_repo: Annotated[PostgresTransactionRepository, Depends(get_transaction_repository)],
    rule_repo: Annotated[PostgresRuleRepository, Depends(get_rule_repository)],
) -> TransactionService:
    """Get a TransactionService instance."""
    return TransactionService(transaction_repository=txn_repo, rule_repository=rule_repo)


async def get_budget_service(
    budget_repo: Annotated[PostgresBudgetRepository, Depends(get_budget_repository)],
    nwi_repo: Annotated[PostgresNWIConfigRepository, Depends(get_nwi_repository)],
    txn_repo: Annotated[PostgresTransactionRepository, Depends(get_transaction_repository)],
) -> BudgetService:
    return BudgetService(
        budget_repository=budget_repo,
        nwi_repository=nwi_repo,
        transaction_repository=txn_repo,
    )


async def get_analytics_service(
    txn_repo: Annotated[PostgresTransactionRepository, Depends(get_transaction_repository)],
    nwi_repo: Annotated[PostgresNWIConfigRepository, Depends(get_nwi_repository)],
    holding_repo: Annotated[PostgresHoldingRepository, Depends(get_holding_repository)],
) -> AnalyticsService:
    return AnalyticsService(
        transaction_repository=txn_repo,
        nwi_repository=nwi_repo,
        holding_repository=holding_repo,
    )


async def get_subscription_service(
    sub_repo: Annotated[PostgresSubscriptionRepository, Depends(get_subscription_repository)],
) -> SubscriptionService:
    return SubscriptionService(subscription_repository=sub_repo)


async def get_rule_service(
    rule_repo: Annotated[PostgresRuleRepository, Depends(get_rule_repository)],
) -> RuleService:
    return RuleService(rule_repository=rule_repo)


async def get_goal_service(
    savings_repo: Annotated[PostgresSavingsGoalRepository, Depends(get_savings_goal_repository)],
    income_repo: Annotated[PostgresIncomeGoalRepository, Depends(get_income_goal_repository)],
    txn_repo: Annotated[PostgresTransactionRepository, Depends(get_transaction_repository)],
) -> GoalService:
    return GoalService(
        savings_goal_repository=savings_repo,
        income_goal_repository=income_repo,
        transaction_repository=txn_repo,
    )


async def get_investment_service(
    holding_repo: Annotated[PostgresHoldingRepository, Depends(get_holding_repository)],
    mf_client: Annotated[HttpMutualFundClient, Depends(get_mutual_fund_client)],
    stock_client: Annotated[HttpStockQuoteClient, Depends(get_stock_client)],
) -> InvestmentService:
    """Get an InvestmentService instance with all dependencies."""
    return InvestmentService(
        holding_repository=holding_repo,
        mutual_fund_client=mf_client,
        stock_client=stock_client,
    )


async def get_insight_service(
    insight_repo: Annotated[PostgresInsightRepository, Depends(get_insight_repository)],
    txn_repo: Annotated[PostgresTransactionRepository, Depends(get_transaction_repository)],
    budget_repo: Annotated[PostgresBudgetRepository, Depends(get_budget_repository)],
    holding_repo: Annotated[PostgresHoldingRepository, Depends(get_holding_repository)],
    generator: Annotated[HttpInsightGeneratorClient, Depends(get_insight_client)],
) -> InsightService:
    """Get an InsightService instance with all dependencies."""
    return InsightService(
        insight_repository=insight_repo,
        transaction_repository=txn_repo,
        budget_repository=budget_repo,
        holding_repository=holding_repo,
        generator=generator,
    )


async def get_learn_service(
    progress_repo: Annotated[PostgresLearnProgressRepository, Depends(get_learn_repository)],
) -> LearnService:
    return LearnService(progress_repository=progress_repo)


async def get_notification_service(
    notification_repo: Annotated[PostgresNotificationRepository, Depends(get_notification_repository)],
    txn_repo: Annotated[PostgresTransactionRepository, Depends(get_transaction_repository)],
    budget_repo: Annotated[PostgresBudgetRepository, Depends(get_budget_repository)],
    sub_repo: Annotated[PostgresSubscriptionRepository, Depends(get_subscription_repository)],
    holding_repo: Annotated[PostgresHoldingRepository, Depends(get_holding_repository)],
) -> NotificationService:
    return NotificationService(
        notification_repository=notification_repo,
        transaction_repository=txn_repo,
        budget_repository=budget_repo,
        subscription_repository=sub_repo,
        holding_repository=holding_repo,
    )


async def get_job_runner(
    job_run_repo: Annotated[PostgresJobRunRepository, Depends(get_job_run_repository)],
    txn_repo: Annotated[PostgresTransactionRepository, Depends(get_transaction_repository)],
    rule_repo: Annotated[PostgresRuleRepository, Depends(get_rule_repository)],
    feed_client: Annotated[HttpTransactionFeedClient, Depends(get_feed_client)],
    investment_service: Annotated[InvestmentService, Depends(get_investment_service)],
    insight_service: Annotated[InsightService, Depends(get_insight_service)],
    notification_service: Annotated[NotificationService, Depends(get_notification_service)],
) -> JobRunner:
    """Get a JobRunner wired with every service a job body needs."""
    return JobRunner(
        job_run_repository=job_run_repo,
        context=JobContext(
            transaction_repository=txn_repo,
            rule_repository=rule_repo,
            feed_client=feed_client,
            investment_service=investment_service,
            insight_service=insight_service,
            notification_service=notification_service,
        ),
    )
