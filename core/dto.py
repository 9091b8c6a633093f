"""
Data Transfer Objects (DTOs).
Used for passing data between the fetch adapter, the controller and callers.
"""
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any


@dataclass(frozen=True)
class ScopeContext:
    """Request-scoping identifiers forwarded as headers"""
    organization_id: Optional[int] = None
    pg_location_id: Optional[int] = None
    user_id: Optional[int] = None
    access_token: Optional[str] = None


@dataclass(frozen=True)
class PaginationMeta:
    """Pagination block of a list response"""
    total: int = 0
    page: int = 1
    limit: int = 0
    total_pages: int = 0

    def has_more(self) -> bool:
        return self.page < self.total_pages


@dataclass
class ResultPage:
    """One page of entities as returned by the fetch adapter"""
    items: List[Dict[str, Any]] = field(default_factory=list)
    pagination: Optional[PaginationMeta] = None

    @property
    def has_more(self) -> bool:
        if self.pagination is None:
            return False
        return self.pagination.has_more()


@dataclass
class PageCursor:
    """Current page, has-more flag and loading flag of a list"""
    current_page: int = 1
    has_more: bool = True
    is_loading: bool = False
    has_fetched: bool = False

    def reset(self):
        self.current_page = 1
        self.has_more = True
        self.has_fetched = False


@dataclass(frozen=True)
class FetchTicket:
    """Issued when a fetch starts; the controller only applies results whose epoch is current"""
    id: int
    page: int
    reset: bool
    epoch: int
    params: Dict[str, Any] = field(default_factory=dict, compare=False)
