"""
Finance Tracker - Personal Finance Service

A FastAPI-based service for transactions, budgets, NWI splits,
investments, AI insights and the background jobs that keep them fresh.
"""

__version__ = "0.1.0"
