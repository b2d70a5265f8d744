"""Specification pattern for reusable query logic.

Each specification renders itself as a MongoDB filter document, so route
handlers compose search parameters without touching query syntax.
"""
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pymongo import DESCENDING

Query = Dict[str, Any]

NAME_SEARCH_FIELDS = ("name",)
MODEL_SEARCH_FIELDS = ("name", "framework", "dataset")

RECENT_SORT = [("createdAt", DESCENDING)]
DASHBOARD_PROJECTION = {"name": 1, "framework": 1, "createdAt": 1, "purchasedBy": 1}


class Specification(ABC):
    """Abstract base for specifications (query filters)."""

    @abstractmethod
    def to_query(self) -> Query:
        """Render as a MongoDB filter document."""
        pass

    def and_(self, other: Specification) -> Specification:
        """Combine with AND logic."""
        return AndSpecification(self, other)

    def or_(self, other: Specification) -> Specification:
        """Combine with OR logic."""
        return OrSpecification(self, other)


class MatchAll(Specification):
    """Matches every document."""

    def to_query(self) -> Query:
        return {}

    def and_(self, other: Specification) -> Specification:
        return other


class AndSpecification(Specification):
    """AND composite specification."""

    def __init__(self, left: Specification, right: Specification):
        self.left = left
        self.right = right

    def to_query(self) -> Query:
        parts = [q for q in (self.left.to_query(), self.right.to_query()) if q]
        if not parts:
            return {}
        if len(parts) == 1:
            return parts[0]
        return {"$and": parts}


class OrSpecification(Specification):
    """OR composite specification."""

    def __init__(self, left: Specification, right: Specification):
        self.left = left
        self.right = right

    def to_query(self) -> Query:
        left, right = self.left.to_query(), self.right.to_query()
        # An empty side matches everything, so the disjunction does too
        if not left or not right:
            return {}
        return {"$or": [left, right]}


class TextSearch(Specification):
    """Case-insensitive substring match on one or more fields."""

    def __init__(self, term: str, fields: Sequence[str] = NAME_SEARCH_FIELDS):
        if not fields:
            raise ValueError("TextSearch needs at least one field")
        self.term = term
        self.fields = tuple(fields)

    def to_query(self) -> Query:
        condition = {"$regex": re.escape(self.term), "$options": "i"}
        clauses = [{field: dict(condition)} for field in self.fields]
        if len(clauses) == 1:
            return clauses[0]
        return {"$or": clauses}


class FrameworkIn(Specification):
    """Case-insensitive exact match of ``framework`` against any listed value."""

    def __init__(self, frameworks: Iterable[str]):
        self.frameworks = [f for f in frameworks if f]

    def to_query(self) -> Query:
        if not self.frameworks:
            return {}
        alternatives = "|".join(re.escape(f) for f in self.frameworks)
        return {"framework": {"$regex": f"^(?:{alternatives})$", "$options": "i"}}


class OwnedBy(Specification):
    """Models created by a given identity."""

    def __init__(self, email: str):
        self.email = email

    def to_query(self) -> Query:
        return {"createdBy": self.email}


class PurchasedBy(Specification):
    """Models whose purchaser list contains a given identity."""

    def __init__(self, email: str):
        self.email = email

    def to_query(self) -> Query:
        return {"purchasedBy": self.email}


def parse_csv(value: Optional[str]) -> List[str]:
    """Split a comma-separated query value into trimmed, non-empty items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def build_model_query(
    search: Optional[str] = None,
    framework: Optional[str] = None,
    search_fields: Sequence[str] = MODEL_SEARCH_FIELDS,
) -> Query:
    """Build the model filter for optional search and framework parameters.

    Both parameters combine with AND; when neither is given every model matches.
    """
    spec: Specification = MatchAll()
    if search and search.strip():
        spec = spec.and_(TextSearch(search.strip(), search_fields))
    frameworks = parse_csv(framework)
    if frameworks:
        spec = spec.and_(FrameworkIn(frameworks))
    return spec.to_query()
