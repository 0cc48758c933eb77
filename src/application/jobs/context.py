"""Dependencies handed to job bodies."""

from dataclasses import dataclass

from src.application.services import InsightService, InvestmentService, NotificationService
from src.domain.interfaces import RuleRepository, TransactionFeedClient, TransactionRepository


@dataclass
class JobContext:
    transaction_repository: TransactionRepository
    rule_repository: RuleRepository
    feed_client: TransactionFeedClient
    investment_service: InvestmentService
    insight_service: InsightService
    notification_service: NotificationService
