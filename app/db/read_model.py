# ============================================================================
# FILE: app/db/read_model.py
# Composable read queries built from named stages:
# search -> filter -> join -> derive -> project -> sort -> paginate
# ============================================================================
from dataclasses import dataclass
from math import ceil
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple
from sqlalchemy import exists, false, func, or_, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import ColumnElement, Select
import logging

logger = logging.getLogger(__name__)

# Output keys use this separator to describe nesting: "owner__username" -> {"owner": {"username": ...}}
NESTING_SEPARATOR = "__"

# loader(db, root_keys) -> {root_key: [row, ...]}
Loader = Callable[[Session, List[Any]], Dict[Any, List[Dict[str, Any]]]]


@dataclass
class PageResult:
    """One page of a read model plus the metadata needed to walk the rest"""
    items: List[Dict[str, Any]]
    total_items: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total_items / self.limit) if self.total_items else 0

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.page > 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": self.items,
            "total_items": self.total_items,
            "total_pages": self.total_pages,
            "page": self.page,
            "limit": self.limit,
            "has_next_page": self.has_next_page,
            "has_prev_page": self.has_prev_page,
        }


def nest(flat: Dict[str, Any]) -> Dict[str, Any]:
    """Expand separator-joined keys into nested dictionaries"""
    result: Dict[str, Any] = {}
    for key, value in flat.items():
        parts = key.split(NESTING_SEPARATOR)
        target = result
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = value
    return result


def count_related(model, *criteria) -> ColumnElement:
    """Correlated COUNT(*) over rows of model matching criteria"""
    return select(func.count()).select_from(model).where(*criteria).scalar_subquery()


def sum_related(column, *criteria, select_from=None) -> ColumnElement:
    """Correlated SUM(column), zero when nothing matches"""
    stmt = select(func.coalesce(func.sum(column), 0))
    if select_from is not None:
        stmt = stmt.select_from(select_from)
    return stmt.where(*criteria).scalar_subquery()


def viewer_in(actor_column, viewer_id: Optional[str], *criteria) -> ColumnElement:
    """
    True when a related row pointing at the viewer exists

    Anonymous requests have no viewer, so the answer is a constant false
    rather than a comparison against NULL.
    """
    if viewer_id is None:
        return false()
    return exists().where(actor_column == viewer_id, *criteria)


def group_rows(rows: Iterable[Dict[str, Any]], key: str) -> Dict[Any, List[Dict[str, Any]]]:
    """Bucket rows by one of their fields, dropping that field from each row"""
    grouped: Dict[Any, List[Dict[str, Any]]] = {}
    for row in rows:
        row = dict(row)
        grouped.setdefault(row.pop(key), []).append(row)
    return grouped


class ReadModel:
    """
    Builder for one read query

    Stages are recorded in the order they are declared and rendered into a
    single SELECT when a terminal method (first/all/paginate) runs. Joins
    are inner joins: a root row whose one-to-one relation is missing drops
    out, which is what unwinding a singleton collection does.
    """

    def __init__(self, root, key=None):
        self.root = root
        self.key = key if key is not None else root.id
        self._criteria: List[ColumnElement] = []
        self._joins: List[Tuple[Any, ColumnElement]] = []
        self._fields: Dict[str, ColumnElement] = {"id": self.key}
        self._lookups: List[Tuple[str, Loader]] = []
        self._order_by: List[ColumnElement] = []
        self._descending = True

    # -- stages ---------------------------------------------------------------

    def search(self, text: Optional[str], *columns) -> "ReadModel":
        """Every term must appear in at least one column; blank text is a no-op"""
        terms = (text or "").split()
        for term in terms:
            # "%" and "_" in the term match themselves
            needle = term.lower()
            self._criteria.append(
                or_(*[func.lower(column).contains(needle, autoescape=True) for column in columns])
            )
        return self

    def match(self, *criteria) -> "ReadModel":
        self._criteria.extend(criterion for criterion in criteria if criterion is not None)
        return self

    def join(self, name: Optional[str], target, onclause, *fields: str) -> "ReadModel":
        """Inner-join a one-to-one relation and nest the chosen fields under name"""
        self._joins.append((target, onclause))
        for field in fields:
            self._fields[f"{name}{NESTING_SEPARATOR}{field}"] = getattr(target, field)
        return self

    def derive(self, name: str, expression) -> "ReadModel":
        self._fields[name] = expression
        return self

    def project(self, *fields: str) -> "ReadModel":
        for field in fields:
            self._fields[field] = getattr(self.root, field)
        return self

    def lookup(self, name: str, loader: Loader) -> "ReadModel":
        """Attach a one-to-many collection, loaded once for all keys of the result"""
        self._lookups.append((name, loader))
        return self

    def sort(self, column, descending: bool = True) -> "ReadModel":
        self._order_by.append(column.desc() if descending else column.asc())
        self._descending = descending
        return self

    # -- rendering ------------------------------------------------------------

    def _select(self, *columns) -> Select:
        stmt = select(*columns).select_from(self.root)
        for target, onclause in self._joins:
            stmt = stmt.join(target, onclause)
        if self._criteria:
            stmt = stmt.where(*self._criteria)
        return stmt

    def statement(self) -> Select:
        stmt = self._select(*[column.label(name) for name, column in self._fields.items()])
        if self._order_by:
            tie_break = self.key.desc() if self._descending else self.key.asc()
            stmt = stmt.order_by(*self._order_by, tie_break)
        return stmt

    def count_statement(self) -> Select:
        """Count over search, filter and join stages only; derived fields and sorting don't change it"""
        return self._select(func.count(self.key))

    # -- terminals ------------------------------------------------------------

    def _run(self, db: Session, stmt: Select) -> List[Dict[str, Any]]:
        rows = [nest(dict(row)) for row in db.execute(stmt).mappings().all()]
        if rows and self._lookups:
            keys = [row["id"] for row in rows]
            for name, loader in self._lookups:
                collections = loader(db, keys)
                for row in rows:
                    row[name] = collections.get(row["id"], [])
        return rows

    def all(self, db: Session) -> List[Dict[str, Any]]:
        return self._run(db, self.statement())

    def first(self, db: Session) -> Optional[Dict[str, Any]]:
        rows = self._run(db, self.statement().limit(1))
        return rows[0] if rows else None

    def count(self, db: Session) -> int:
        return db.scalar(self.count_statement()) or 0

    def paginate(self, db: Session, page: int, limit: int) -> PageResult:
        total = self.count(db)
        offset = (page - 1) * limit
        items: Sequence[Dict[str, Any]] = []
        if offset < total:
            items = self._run(db, self.statement().offset(offset).limit(limit))
        return PageResult(items=list(items), total_items=total, page=page, limit=limit)
