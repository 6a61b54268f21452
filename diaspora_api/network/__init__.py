"""
Network layer – HTTP session factory and the single-request executor.
"""

from diaspora_api.network.client import build_session
from diaspora_api.network.executor import RequestExecutor

__all__ = ["build_session", "RequestExecutor"]
