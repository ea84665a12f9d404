"""
Usage Analytics Module

Append-only usage events recorded as a best-effort side channel of
user-facing requests, and replayed by the admin analytics endpoint.
"""

from .context import RequestContext, get_request_context
from .recorder import UsageEventRecorder, get_usage_recorder

__all__ = [
    "RequestContext",
    "get_request_context",
    "UsageEventRecorder",
    "get_usage_recorder"
]
