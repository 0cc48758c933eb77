from fastapi import APIRouter

from .analytics import analytics_router
from .budgets import budget_router
from .goals import income_goal_router, savings_goal_router
from .health import health_router
from .insights import insight_router
from .investments import investment_router
from .jobs import job_router
from .learn import learn_router
from .notifications import notification_router
from .subscriptions import rule_router, subscription_router
from .transactions import report_router, transaction_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(transaction_router, tags=["Transactions"])
router.include_router(report_router, tags=["Reports"])
router.include_router(budget_router, tags=["Budgets"])
router.include_router(analytics_router, tags=["Analytics"])
router.include_router(subscription_router, tags=["Subscriptions"])
router.include_router(rule_router, tags=["Categorization Rules"])
router.include_router(savings_goal_router, tags=["Savings Goals"])
router.include_router(income_goal_router, tags=["Income Goals"])
router.include_router(investment_router, tags=["Investments"])
router.include_router(insight_router, tags=["AI Insights"])
router.include_router(learn_router, tags=["Learn"])
router.include_router(notification_router, tags=["Notifications"])
router.include_router(job_router, tags=["Jobs"])
