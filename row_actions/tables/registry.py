"""Registry of listing bindings by object type."""

from typing import Callable, Dict, Type

import structlog

from ..exceptions import ActionValidationError
from .base import RowActionsTable


logger = structlog.get_logger(__name__)

_tables: Dict[str, Type[RowActionsTable]] = {}


def register_table(object_type: str) -> Callable[[Type[RowActionsTable]], Type[RowActionsTable]]:
    """Decorator to register a listing binding class for an object type.

    Args:
        object_type: Object type the binding serves

    Returns:
        Decorator function
    """
    def decorator(cls: Type[RowActionsTable]) -> Type[RowActionsTable]:
        if object_type in _tables:
            logger.warning("Overriding existing table binding", object_type=object_type)

        cls.OBJECT_TYPE = object_type
        _tables[object_type] = cls
        return cls

    return decorator


def get_table(object_type: str) -> Type[RowActionsTable]:
    """Get the binding class for an object type.

    Raises:
        ActionValidationError: If no binding serves the object type
    """
    try:
        return _tables[object_type]
    except KeyError:
        raise ActionValidationError(
            f"No table binding for object type '{object_type}'"
        ) from None


def list_tables() -> Dict[str, Type[RowActionsTable]]:
    return dict(_tables)
