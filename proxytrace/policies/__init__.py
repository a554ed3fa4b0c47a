"""
ProxyTrace Policies

Interchangeable behaviors for intercepted containers.
"""

from proxytrace.policies.base import InterceptionPolicy
from proxytrace.policies.call_logging import CallLoggingPolicy
from proxytrace.policies.chaining import ChainingPolicy
from proxytrace.policies.negative_index import NegativeIndexPolicy
from proxytrace.policies.observable import ObservablePolicy
from proxytrace.policies.validation import ValidationPolicy

__all__ = [
    "InterceptionPolicy",
    "CallLoggingPolicy",
    "ChainingPolicy",
    "NegativeIndexPolicy",
    "ObservablePolicy",
    "ValidationPolicy",
]
