"""
Registry of list screens.

Each app declares its screens in a ``screens`` module; ListingConfig.ready()
imports them so they register themselves here.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple, Dict, Any

from core.constants import Pagination


@dataclass(frozen=True)
class ScreenDefinition:
    """
    Everything that varies between list screens.

    filter_keys: FilterSet keys the screen exposes
    client_side_keys: keys applied by post_filters instead of being sent to the server
    scope_slice: AppContext slice the reconciled list is published to, if shared
    """
    name: str
    title: str
    endpoint: str
    filter_keys: Tuple[str, ...]
    choices: Dict[str, Any] = field(default_factory=dict)
    client_side_keys: Tuple[str, ...] = ()
    post_filters: Tuple[Any, ...] = ()
    key_field: str = 's_no'
    page_size: int = Pagination.DEFAULT_PAGE_SIZE
    scope_slice: Optional[str] = None
    columns: Tuple[str, ...] = ()


_registry: Dict[str, ScreenDefinition] = {}


def register_screen(screen: ScreenDefinition) -> ScreenDefinition:
    _registry[screen.name] = screen
    return screen


def get_screen(name: str) -> ScreenDefinition:
    try:
        return _registry[name]
    except KeyError:
        raise KeyError(f"Unknown screen '{name}'. Available: {', '.join(sorted(_registry))}") from None


def all_screens():
    return [_registry[name] for name in sorted(_registry)]
