"""Pydantic v2 models for filter trees, sort keys, and search requests/results."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Models accept both the snake_case names and the dashboard's camelCase keys.
_FROZEN = ConfigDict(frozen=True, populate_by_name=True)
_MUTABLE = ConfigDict(populate_by_name=True)


# -- Filter tree --


class FilterOperator(str, Enum):
    eq = "eq"
    ne = "ne"
    gt = "gt"
    gte = "gte"
    lt = "lt"
    lte = "lte"
    contains = "contains"
    starts_with = "startsWith"
    ends_with = "endsWith"
    regex = "regex"
    in_ = "in"
    not_in = "notIn"
    exists = "exists"
    not_exists = "notExists"
    between = "between"
    range = "range"
    is_empty = "isEmpty"
    is_not_empty = "isNotEmpty"


ConditionValue = Union[bool, int, float, str, list[Union[int, float, str]], None]


class FilterCondition(BaseModel):
    model_config = _FROZEN

    field: str = Field(min_length=1)
    operator: FilterOperator
    value: ConditionValue = None
    case_sensitive: bool = Field(default=False, alias="caseSensitive")
    negate: bool = False


class FilterGroup(BaseModel):
    """A node of the filter tree: conditions and child groups joined by and/or."""

    model_config = _FROZEN

    operator: Literal["and", "or"] = "and"
    conditions: list[FilterCondition] = Field(default_factory=list)
    groups: Optional[list[FilterGroup]] = None


class SortKey(BaseModel):
    model_config = _FROZEN

    field: str = Field(min_length=1)
    direction: Literal["asc", "desc"] = "asc"
    nulls_first: bool = Field(default=False, alias="nullsFirst")
    case_sensitive: bool = Field(default=True, alias="caseSensitive")


# -- Issue search --


class DateRange(BaseModel):
    model_config = _FROZEN

    start: datetime
    end: datetime


class LabelCategories(BaseModel):
    """Label filters grouped by category; any label within a category matches."""

    model_config = _FROZEN

    priority: list[str] = Field(default_factory=list)
    type: list[str] = Field(default_factory=list)
    other: list[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.priority or self.type or self.other)


class SearchFilters(BaseModel):
    model_config = _FROZEN

    state: Optional[Literal["open", "closed", "all"]] = None
    labels: list[str] = Field(default_factory=list)
    author: Optional[str] = None
    assignee: Optional[str] = None
    date_range: Optional[DateRange] = Field(default=None, alias="dateRange")
    label_categories: Optional[LabelCategories] = Field(
        default=None, alias="labelCategories"
    )


class Priority(str, Enum):
    critical = "critical"
    high = "high"
    medium = "medium"
    low = "low"
    backlog = "backlog"


class ClassificationOverride(BaseModel):
    model_config = _FROZEN

    priority: Priority


SortBy = Literal["created", "updated", "priority", "number"]
SortOrder = Literal["asc", "desc"]


class SearchRequest(BaseModel):
    model_config = _FROZEN

    query: str = ""
    filters: SearchFilters = Field(default_factory=SearchFilters)
    sort_by: Optional[SortBy] = Field(default=None, alias="sortBy")
    sort_order: SortOrder = Field(default="asc", alias="sortOrder")
    classification_overrides: Optional[dict[int, ClassificationOverride]] = Field(
        default=None, alias="classificationOverrides"
    )
    filter_groups: list[FilterGroup] = Field(default_factory=list, alias="filterGroups")


class SearchResult(BaseModel):
    model_config = _MUTABLE

    records: list[Any]
    total_count: int = Field(alias="totalCount")
    matching_count: int = Field(alias="matchingCount")
    search_time_ms: float = Field(alias="searchTimeMs")
    highlight_terms: list[str] = Field(default_factory=list, alias="highlightTerms")


class FilterOptions(BaseModel):
    model_config = _MUTABLE

    authors: list[str] = Field(default_factory=list)
    assignees: list[str] = Field(default_factory=list)
    labels: list[str] = Field(default_factory=list)
