from .search import Query, parse_query, search_todos
from .ordering import due_bucket, sort_by_due_date

__all__ = [
    "Query",
    "parse_query",
    "search_todos",
    "due_bucket",
    "sort_by_due_date",
]
