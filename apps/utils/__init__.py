from .api_response import api_error, api_success, get_pagination_params, paginate_queryset
from .exceptions import DuplicateEntity

__all__ = [
    "api_error",
    "api_success",
    "get_pagination_params",
    "paginate_queryset",
    "DuplicateEntity",
]
