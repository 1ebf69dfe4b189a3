"""Filter operations available to the finder agent."""

from .operations import OPERATION_REGISTRY, Effect, Operation, get_operation, tool_schemas

__all__ = ["OPERATION_REGISTRY", "Effect", "Operation", "get_operation", "tool_schemas"]
