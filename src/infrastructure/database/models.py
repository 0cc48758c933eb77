"""SQLAlchemy ORM models for finance tracker entities."""

from datetime import datetime, date
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.domain.entities import utcnow


class Base(DeclarativeBase):
    pass


def _uuid_pk() -> Mapped[str]:
    return mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )


class TransactionModel(Base):
    """Persisted transaction record."""

    __tablename__ = "transactions"
    __table_args__ = (
        UniqueConstraint("user_id", "external_id", name="uq_transactions_user_external"),
    )

    id: Mapped[str] = _uuid_pk()
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    txn_date: Mapped[date] = mapped_column("date", Date, nullable=False, index=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    merchant: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    payment_method: Mapped[str] = mapped_column(String(50), nullable=False)
    account: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="completed")
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    recurring: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    balance: Mapped[float | None] = mapped_column(Float, nullable=True)
    nwi_override: Mapped[str | None] = mapped_column(String(20), nullable=True)
    category_override: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    external_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class BudgetCategoryModel(Base):
    """Persisted monthly budget for one budget category."""

    __tablename__ = "budget_categories"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_budget_categories_user_name"),
    )

    id: Mapped[str] = _uuid_pk()
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    budget_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    transaction_categories: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class NWIConfigModel(Base):
    """Persisted NWI configuration, one row per user."""

    __tablename__ = "nwi_configs"

    user_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    needs: Mapped[dict] = mapped_column(JSON, nullable=False)
    wants: Mapped[dict] = mapped_column(JSON, nullable=False)
    investments: Mapped[dict] = mapped_column(JSON, nullable=False)
    savings: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class SubscriptionModel(Base):
    """Persisted subscription record."""

    __tablename__ = "subscriptions"

    id: Mapped[str] = _uuid_pk()
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    frequency: Mapped[str] = mapped_column(String(20), nullable=False)
    next_expected: Mapped[date] = mapped_column(Date, nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class SavingsGoalModel(Base):
    """Persisted savings goal."""

    __tablename__ = "savings_goals"

    id: Mapped[str] = _uuid_pk()
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    target_amount: Mapped[float] = mapped_column(Float, nullable=False)
    current_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    target_date: Mapped[date] = mapped_column(Date, nullable=False)
    monthly_contribution: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    auto_track: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    category: Mapped[str | None] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class IncomeGoalModel(Base):
    """Persisted income goal; one per user."""

    __tablename__ = "income_goals"

    id: Mapped[str] = _uuid_pk()
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    target_amount: Mapped[float] = mapped_column(Float, nullable=False)
    target_date: Mapped[date] = mapped_column(Date, nullable=False)
    sources: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class CategorizationRuleModel(Base):
    """Persisted user categorization rule."""

    __tablename__ = "categorization_rules"

    id: Mapped[str] = _uuid_pk()
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    pattern: Mapped[str] = mapped_column(String(255), nullable=False)
    match_field: Mapped[str] = mapped_column(String(20), nullable=False, default="any")
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    case_sensitive: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class LearnProgressModel(Base):
    """Persisted learn module progress per topic."""

    __tablename__ = "learn_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "topic_id", name="uq_learn_progress_user_topic"),
    )

    id: Mapped[str] = _uuid_pk()
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    topic_id: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="unread")
    quiz_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    read_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    quizzed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class NotificationModel(Base):
    """Persisted in-app notification."""

    __tablename__ = "notifications"

    id: Mapped[str] = _uuid_pk()
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    severity: Mapped[str] = mapped_column(String(20), nullable=False)
    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    action_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    dedup_key: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class AIInsightModel(Base):
    """Persisted AI insight cache entry."""

    __tablename__ = "ai_insights"

    id: Mapped[str] = _uuid_pk()
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    insight_type: Mapped[str] = mapped_column(String(50), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    sections: Mapped[list | None] = mapped_column(JSON, nullable=True)
    data_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    generated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class StockHoldingModel(Base):
    """Persisted stock position."""

    __tablename__ = "stock_holdings"

    id: Mapped[str] = _uuid_pk()
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    symbol: Mapped[str] = mapped_column(String(50), nullable=False)
    exchange: Mapped[str] = mapped_column(String(10), nullable=False, default="NSE")
    shares: Mapped[float] = mapped_column(Float, nullable=False)
    average_cost: Mapped[float] = mapped_column(Float, nullable=False)
    current_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    day_change: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    day_change_percentage: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class MutualFundHoldingModel(Base):
    """Persisted mutual fund position."""

    __tablename__ = "mutual_fund_holdings"

    id: Mapped[str] = _uuid_pk()
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    scheme_name: Mapped[str] = mapped_column(String(255), nullable=False)
    scheme_code: Mapped[int | None] = mapped_column(Integer, nullable=True)
    units: Mapped[float] = mapped_column(Float, nullable=False)
    invested_value: Mapped[float] = mapped_column(Float, nullable=False)
    current_nav: Mapped[float | None] = mapped_column(Float, nullable=True)
    current_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class JobRunModel(Base):
    """Persisted record of one background job execution."""

    __tablename__ = "job_runs"

    id: Mapped[str] = _uuid_pk()
    job: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    trigger: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    result: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    error: Mapped[str | None] = mapped_column(Text, nullable=True)
    started_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    finished_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
