"""Dashboard client — keeps a live, classified view of the shared file drop."""

from phonedrop.dashboard.classifier import Category, classify
from phonedrop.dashboard.gateway import HttpGateway
from phonedrop.dashboard.session import DashboardSession
from phonedrop.dashboard.state import DashboardState

__all__ = [
    "Category",
    "DashboardSession",
    "DashboardState",
    "HttpGateway",
    "classify",
]
