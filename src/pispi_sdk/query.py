"""Query builder for filter, pagination and sorting parameters.

    >>> QueryBuilder().gte("montant", 10000).sort_desc("dateCreation").size(50).build()
    {'size': 50, 'montant[gte]': '10000', 'sort': '-dateCreation'}
"""

from urllib.parse import quote

from pispi_sdk.constants import MAX_PAGE_SIZE

FILTER_OPERATORS = (
    "eq",
    "ne",
    "gt",
    "gte",
    "lt",
    "lte",
    "in",
    "contains",
    "notContains",
    "beginsWith",
    "endsWith",
    "exists",
)

SORT_ORDERS = ("asc", "desc")

# Characters encodeURIComponent leaves as-is on top of quote()'s defaults
_URI_COMPONENT_SAFE = "!*'()"

_UNSET = object()


def _stringify(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(_stringify(v) for v in value)
    return str(value)


class QueryBuilder:
    """Chainable builder for list-endpoint query parameters."""

    def __init__(self):
        self.reset()

    def filter(self, field: str, operator_or_value, value=_UNSET) -> "QueryBuilder":
        """Add a filter condition on ``field``.

        ``filter("statut", "IRREVOCABLE")`` is an equality filter;
        ``filter("montant", "gte", 10000)`` uses an explicit operator.
        """
        if value is _UNSET:
            if isinstance(operator_or_value, str) and operator_or_value in FILTER_OPERATORS:
                raise ValueError("Filter operator requires a value")
            operator, value = "eq", operator_or_value
        else:
            operator = operator_or_value
            if operator not in FILTER_OPERATORS:
                raise ValueError(f"Unknown filter operator: {operator!r}")

        self._filters[field] = (operator, value)
        return self

    def eq(self, field: str, value) -> "QueryBuilder":
        return self.filter(field, "eq", value)

    def ne(self, field: str, value) -> "QueryBuilder":
        return self.filter(field, "ne", value)

    def gt(self, field: str, value) -> "QueryBuilder":
        return self.filter(field, "gt", value)

    def gte(self, field: str, value) -> "QueryBuilder":
        return self.filter(field, "gte", value)

    def lt(self, field: str, value) -> "QueryBuilder":
        return self.filter(field, "lt", value)

    def lte(self, field: str, value) -> "QueryBuilder":
        return self.filter(field, "lte", value)

    def in_(self, field: str, values: list[str]) -> "QueryBuilder":
        return self.filter(field, "in", values)

    def contains(self, field: str, value: str) -> "QueryBuilder":
        return self.filter(field, "contains", value)

    def sort(self, field: str, order: str = "asc") -> "QueryBuilder":
        if order not in SORT_ORDERS:
            raise ValueError(f"Sort order must be 'asc' or 'desc', got {order!r}")
        self._sort_field = field
        self._sort_order = order
        return self

    def sort_desc(self, field: str) -> "QueryBuilder":
        return self.sort(field, "desc")

    def page(self, page: int | str) -> "QueryBuilder":
        self._params["page"] = str(page)
        return self

    def size(self, size: int) -> "QueryBuilder":
        if size < 1:
            raise ValueError("Page size must be at least 1")
        if size > MAX_PAGE_SIZE:
            raise ValueError(f"Page size cannot exceed {MAX_PAGE_SIZE}")
        self._params["size"] = size
        return self

    def param(self, key: str, value: str | int) -> "QueryBuilder":
        """Add a custom parameter, passed through as-is."""
        self._params[key] = value
        return self

    def build(self) -> dict[str, str | int]:
        """Render the accumulated state into a query parameter mapping."""
        result = dict(self._params)

        for field, (operator, value) in self._filters.items():
            if operator == "eq":
                result[field] = _stringify(value)
            else:
                result[f"{field}[{operator}]"] = _stringify(value)

        if self._sort_field:
            result["sort"] = f"-{self._sort_field}" if self._sort_order == "desc" else self._sort_field

        return result

    def build_query_string(self) -> str:
        """Render as ``?k=v&...``, or an empty string when there is nothing to send."""
        pairs = [
            f"{quote(key, safe=_URI_COMPONENT_SAFE)}={quote(_stringify(value), safe=_URI_COMPONENT_SAFE)}"
            for key, value in self.build().items()
            if value is not None
        ]
        return f"?{'&'.join(pairs)}" if pairs else ""

    def reset(self) -> "QueryBuilder":
        self._params: dict[str, str | int] = {}
        self._filters: dict[str, tuple[str, object]] = {}
        self._sort_field: str | None = None
        self._sort_order = "asc"
        return self
