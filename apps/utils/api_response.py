from __future__ import annotations

import math
from typing import Iterable, Tuple

from rest_framework import response, status

DEFAULT_PAGE_KEYS = ("page",)
DEFAULT_PAGE_SIZE_KEYS = ("limit",)

# MongoDB encodes skip/limit as signed 64-bit integers.
MAX_QUERY_INT = 2**63 - 1

def _first_query_value(query_params, keys: Iterable[str]) -> str | None:
    for key in keys:
        value = query_params.get(key)
        if value is not None:
            return value
    return None

def _coerce_positive_int(value: str | None, default: int) -> int:
    try:
        coerced = int(value) if value is not None else default
    except (TypeError, ValueError):
        coerced = default
    return min(max(coerced, 1), MAX_QUERY_INT)

def get_pagination_params(
    query_params,
    page_keys: Iterable[str] = DEFAULT_PAGE_KEYS,
    page_size_keys: Iterable[str] = DEFAULT_PAGE_SIZE_KEYS,
    default_page: int = 1,
    default_page_size: int = 12,
) -> Tuple[int, int]:
    page_raw = _first_query_value(query_params, page_keys)
    page_size_raw = _first_query_value(query_params, page_size_keys)

    page = _coerce_positive_int(page_raw, default_page)
    page_size = _coerce_positive_int(page_size_raw, default_page_size)

    return page, page_size

def paginate_queryset(queryset, page: int, page_size: int):
    """Slice one page out of ``queryset``.

    The requested page is returned as-is; a page past the end yields no items
    rather than being clamped to the last page.
    """
    total_count = queryset.count()
    total_pages = math.ceil(total_count / page_size)

    start = (page - 1) * page_size
    if start > MAX_QUERY_INT:
        items = []
    else:
        items = list(queryset.skip(start).limit(page_size))

    return items, total_count, total_pages, page, page_size

def api_success(data, status_code: int = status.HTTP_200_OK):
    return response.Response(data, status=status_code)

def api_error(
    message: str,
    errors=None,
    *,
    status_code: int = status.HTTP_400_BAD_REQUEST,
):
    body = {"message": message}
    if errors is not None:
        body["errors"] = errors
    return response.Response(body, status=status_code)
