"""
Helpers for building parameterized SQL fragments.

Both builders return SQL text with positional ``$n`` placeholders plus the
list of values to bind, in placeholder order. Values are never interpolated
into the SQL text; column names come from a caller-controlled name map or
from keys that have already passed schema validation.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from app.core.exceptions import BadRequestError


@dataclass(frozen=True)
class SetClause:
    """SET columns for an UPDATE plus the values to bind."""
    set_cols: str
    values: List[Any]


@dataclass(frozen=True)
class WhereClause:
    """WHERE clause (or "") plus the values to bind."""
    where_sql: str
    values: List[Any]


def is_truthy(value: Any) -> bool:
    return bool(value)


def is_true(value: Any) -> bool:
    """Active only for the boolean True ("true", 1 and friends do not count)."""
    return value is True


@dataclass(frozen=True)
class FilterClause:
    """
    Declarative description of one search filter.

    Attributes:
        name: Filter key as it appears in the filter mapping
        template: SQL predicate; "{param}" marks where the placeholder goes.
            Templates without "{param}" add a clause but bind no value.
        is_active: Decides whether a given value switches the filter on
        transform: Applied to the value before it is bound
    """
    name: str
    template: str
    is_active: Callable[[Any], bool] = is_truthy
    transform: Optional[Callable[[Any], Any]] = field(default=None)

    @property
    def takes_param(self) -> bool:
        return "{param}" in self.template


def contains(value: Any) -> str:
    """Wrap a value in wildcards for a partial match."""
    return f"%{value}%"


def sql_for_partial_update(data: Mapping[str, Any], js_to_sql: Mapping[str, str]) -> SetClause:
    """
    Build the SET part of a partial UPDATE.

    Args:
        data: Fields to update, keyed by their API (camelCase) names.
            Values may be None.
        js_to_sql: API name -> column name. Names missing from the map are
            used as column names verbatim.

    Returns:
        SetClause, e.g. for {"firstName": "Aliya", "age": 32} with
        {"firstName": "first_name"}:
        set_cols='"first_name"=$1, "age"=$2', values=["Aliya", 32]

    Raises:
        BadRequestError: If data is empty
    """
    keys = list(data.keys())
    if not keys:
        raise BadRequestError("No data")

    cols = [f'"{js_to_sql.get(key, key)}"=${idx}' for idx, key in enumerate(keys, start=1)]

    return SetClause(
        set_cols=", ".join(cols),
        values=[data[key] for key in keys],
    )


def sql_for_filters(
    filters: Mapping[str, Any],
    clauses: Sequence[FilterClause],
    start: int = 1,
) -> WhereClause:
    """
    Build a WHERE clause from the active filters.

    Clauses are emitted in the order of ``clauses``, not the order of
    ``filters``, so the same set of active filters always produces the same
    SQL and parameter positions.

    Args:
        filters: Filter name -> value; missing names are inactive
        clauses: Filter specs in the order they should appear
        start: Number of the first placeholder

    Returns:
        WhereClause with where_sql "" when no filter is active
    """
    statements: List[str] = []
    values: List[Any] = []

    for clause in clauses:
        value = filters.get(clause.name)
        if not clause.is_active(value):
            continue

        if clause.takes_param:
            statements.append(clause.template.format(param=f"${start + len(values)}"))
            values.append(clause.transform(value) if clause.transform else value)
        else:
            statements.append(clause.template)

    where_sql = "WHERE " + " AND ".join(statements) if statements else ""
    return WhereClause(where_sql=where_sql, values=values)


def select_columns(columns: Dict[str, str]) -> str:
    """
    Render a SELECT/RETURNING column list aliasing columns to API names.

    {"id": "id", "company_handle": "companyHandle"} -> 'id, company_handle AS "companyHandle"'
    """
    parts = []
    for column, alias in columns.items():
        parts.append(column if column == alias else f'{column} AS "{alias}"')
    return ", ".join(parts)
