"""
Query Builder

Fluent assembler for textual queries executed through a SQLAlchemy Session.

The builder keeps one ordered list of fragments per clause and glues them
together on demand. It never parses or validates fragments: whatever text
is passed in ends up in the query, and mistakes surface when the database
executes it.

Render Order:
=============
    select <s1>, <s2>          ← omitted when no select fragments
    from <f1> <f2>             ← always present, joins are from fragments
    where <w1> and <w2>        ← omitted when empty
    group by <g1>, <g2>        ← omitted when empty
    having <h1>, <h2>          ← omitted when empty
    order by <o1>, <o2>        ← omitted when empty

Usage:
======
    from surisql.criteria import QueryBuilder

    items = (
        QueryBuilder(session)
        .select("i.*")
        .from_("items i")
        .inner_join("categories c on c.id = i.category_id")
        .where("c.name = :category")
        .or_("i.price < :cheap", "i.featured = 1")
        .with_param("category", "tools")
        .with_param("cheap", 10)
        .order_by("i.name")
        .max_results(20)
        .get_result_list(Item)
    )

    # str(builder):
    # select i.* from items i inner join categories c on c.id = i.category_id
    #   where c.name = :category and (i.price < :cheap OR i.featured = 1)
    #   order by i.name

Execution Lifecycle:
====================
The first get_* call freezes the builder. It can be executed again and
rendered again, always producing the same text, but any further
configuration call raises QueryBuilderFrozenError.
"""

from collections.abc import Iterable
from typing import Any, Optional, Union

from sqlalchemy import inspect as sa_inspect
from sqlalchemy import literal_column, select, text
from sqlalchemy.orm import Session, aliased

from surisql.config.settings import settings
from surisql.core.exceptions import QueryBuilderFrozenError
from surisql.core.logging import get_logger
from surisql.utils.entity import is_mapped


logger = get_logger(__name__)

Fragments = Union[str, Iterable[str]]


def _fragments(values: tuple) -> list[str]:
    """Accept fragments as varargs or as a single iterable of strings."""
    if len(values) == 1 and not isinstance(values[0], str) and isinstance(values[0], Iterable):
        return list(values[0])
    return list(values)


class QueryBuilder:
    """
    Accumulates clause fragments and named parameters for one query.

    Attributes:
        session: Session the query is executed with
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self._select: list[str] = []
        self._from: list[str] = []
        self._where: list[str] = []
        self._group: list[str] = []
        self._having: list[str] = []
        self._order: list[str] = []
        self._params: dict[str, Any] = {}
        self._first_result: Optional[int] = None
        self._max_results: Optional[int] = None
        self._frozen = False

    # ═══════════════════════════════════════════════════════════════════════════
    # CLAUSES
    # ═══════════════════════════════════════════════════════════════════════════

    def select(self, *fragments: Fragments) -> "QueryBuilder":
        return self._append(self._select, fragments)

    def from_(self, *fragments: Fragments) -> "QueryBuilder":
        return self._append(self._from, fragments)

    def join(self, *fragments: Fragments) -> "QueryBuilder":
        """Append caller-written join text to the from list."""
        return self.from_(*fragments)

    def inner_join(self, *targets: Fragments, fetch: bool = False) -> "QueryBuilder":
        return self._join("inner", fetch, _fragments(targets))

    def inner_join_fetch(self, *targets: Fragments) -> "QueryBuilder":
        return self._join("inner", True, _fragments(targets))

    def left_join(self, *targets: Fragments, fetch: bool = False) -> "QueryBuilder":
        return self._join("left", fetch, _fragments(targets))

    def left_join_fetch(self, *targets: Fragments) -> "QueryBuilder":
        return self._join("left", True, _fragments(targets))

    def where(self, *conditions: Fragments) -> "QueryBuilder":
        return self.and_(*conditions)

    def and_(self, *conditions: Fragments) -> "QueryBuilder":
        return self._append(self._where, conditions)

    def or_(self, *conditions: Fragments) -> "QueryBuilder":
        """
        Append the conditions as one parenthesised OR group.

        The group is AND-ed with every other where entry, so two or_()
        calls give "(a OR b) and (c OR d)".
        """
        return self.and_("(%s)" % " OR ".join(_fragments(conditions)))

    def with_param(self, name: str, value: Any) -> "QueryBuilder":
        """Bind :name in the query text. Binding a name again replaces the value."""
        self._check_mutable()
        self._params[name] = value
        return self

    def group_by(self, *fragments: Fragments) -> "QueryBuilder":
        return self._append(self._group, fragments)

    def having(self, *fragments: Fragments) -> "QueryBuilder":
        return self._append(self._having, fragments)

    def order_by(self, *fragments: Fragments) -> "QueryBuilder":
        return self._append(self._order, fragments)

    def first_result(self, first_result: Optional[int]) -> "QueryBuilder":
        """Set the row offset. None leaves the query without an offset."""
        self._check_mutable()
        self._first_result = first_result
        return self

    def max_results(self, max_results: Optional[int]) -> "QueryBuilder":
        """Set the row limit. None leaves the query without a limit."""
        self._check_mutable()
        self._max_results = max_results
        return self

    @property
    def parameters(self) -> dict[str, Any]:
        """Copy of the bound parameters."""
        return dict(self._params)

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ═══════════════════════════════════════════════════════════════════════════
    # EXECUTION
    # ═══════════════════════════════════════════════════════════════════════════

    def get_result_list(self, result_type: Optional[type] = None) -> list[Any]:
        """
        Execute the query and return every row.

        Args:
            result_type: None for Row objects, a mapped class to load
                entities, or any other type to take the first column of
                each row. The clauses must actually produce that type.

        Returns:
            List of rows, entities or scalar values
        """
        return list(self._execute(result_type).all())

    def get_single_result(self, result_type: Optional[type] = None) -> Any:
        """
        Execute the query and return its only row.

        Raises:
            sqlalchemy.exc.NoResultFound: If the query returned no rows
            sqlalchemy.exc.MultipleResultsFound: If it returned more than one
        """
        return self._execute(result_type).one()

    def get_any_result(self, result_type: Optional[type] = None) -> Any:
        """Execute the query and return its first row, or None if there are none."""
        result = self.get_result_list(result_type)
        if result:
            return result[0]
        return None

    # ═══════════════════════════════════════════════════════════════════════════
    # RENDERING
    # ═══════════════════════════════════════════════════════════════════════════

    def __str__(self) -> str:
        parts = []
        if self._select:
            parts.append("select " + ", ".join(self._select))
        parts.append("from " + " ".join(self._from))
        if self._where:
            parts.append("where " + " and ".join(self._where))
        if self._group:
            parts.append("group by " + ", ".join(self._group))
        if self._having:
            parts.append("having " + ", ".join(self._having))
        if self._order:
            parts.append("order by " + ", ".join(self._order))
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"<QueryBuilder({str(self)!r})>"

    # ═══════════════════════════════════════════════════════════════════════════
    # INTERNALS
    # ═══════════════════════════════════════════════════════════════════════════

    def _append(self, clause: list[str], fragments: tuple) -> "QueryBuilder":
        self._check_mutable()
        clause.extend(_fragments(fragments))
        return self

    def _join(self, kind: str, fetch: bool, targets: list[str]) -> "QueryBuilder":
        keyword = f"{kind} join fetch" if fetch else f"{kind} join"
        return self.from_([f"{keyword} {target}" for target in targets])

    def _check_mutable(self) -> None:
        if self._frozen:
            raise QueryBuilderFrozenError(str(self))

    def _statement(self, result_type: Optional[type]) -> Any:
        """
        Turn the rendered text into an executable statement.

        Unpaginated text runs as is; mapped result types are loaded through
        from_statement(), matching result columns by name.

        Pagination wraps the text in a subquery named "page" so SQLAlchemy
        compiles OFFSET/LIMIT for the bound dialect:

            select * from (<text>) as page limit :max offset :first    ← rows
            select page.id, page.name, ... from (<text>) as page ...   ← entities

        For a mapped type the subquery is typed with the table's columns
        and the entity is selected through an alias over it.

        Any order by stays inside the subquery. SQLite, PostgreSQL and
        MySQL return those rows in that order, but SQL Server rejects
        order by in a derived table without TOP/OFFSET.
        """
        statement: Any = text(str(self))
        paginated = self._first_result is not None or self._max_results is not None

        if not paginated:
            if is_mapped(result_type):
                return select(result_type).from_statement(statement)
            return statement

        if is_mapped(result_type):
            page = statement.columns(*sa_inspect(result_type).local_table.c).subquery("page")
            outer = select(aliased(result_type, page, adapt_on_names=True))
        else:
            outer = select(literal_column("*")).select_from(statement.columns().subquery("page"))
        return outer.offset(self._first_result).limit(self._max_results)

    def _execute(self, result_type: Optional[type]) -> Any:
        self._frozen = True
        statement = self._statement(result_type)

        log_fields: dict[str, Any] = {
            "query": str(self),
            "first_result": self._first_result,
            "max_results": self._max_results,
        }
        if settings.QUERY_LOG_PARAMS:
            log_fields["params"] = self._params
        logger.debug("Executing query", **log_fields)

        result = self.session.execute(statement, self._params)
        if result_type is None:
            return result
        return result.scalars()
