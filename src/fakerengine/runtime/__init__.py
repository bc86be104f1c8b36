"""Fake data runtime package.

Provides the random source, value selection, template evaluation, the
provider bridge and the FakerSession API.
Depends on syntax, patterns and localedata packages.

Python 3.13+.
"""

from .random_source import RandomSource  # isort: skip
from .builtins import create_default_registry
from .config import SessionConfig
from .evaluator import EvaluationResult, ExpressionEvaluator
from .expansion_context import ExpansionContext, GlobalDepthGuard
from .provider_bridge import ProviderRegistry, ProviderSignature, ProviderValue
from .selector import select
from .session import FakerSession

__all__ = [
    "EvaluationResult",
    "ExpansionContext",
    "ExpressionEvaluator",
    "FakerSession",
    "GlobalDepthGuard",
    "ProviderRegistry",
    "ProviderSignature",
    "ProviderValue",
    "RandomSource",
    "SessionConfig",
    "create_default_registry",
    "select",
]
