"""Dependency injection for FastAPI endpoints"""

from fastapi import Request

from fincore.infrastructure.clients.data_source import DataSourceClient
from fincore.infrastructure.clients.settlement import SettlementClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_data_source_client() -> DataSourceClient:
    """Provide data source API client instance"""
    return DataSourceClient()


def get_settlement_client() -> SettlementClient:
    """Provide settlement webhook client instance"""
    return SettlementClient()
