"""
Command mapping knowledge base.
"""

from wdio2playwright.semantics.registry import CommandRegistry, get_registry, register_custom_mapping
from wdio2playwright.semantics.schema import CommandComparison, CommandMapping

__all__ = ["CommandComparison", "CommandMapping", "CommandRegistry", "get_registry", "register_custom_mapping"]
