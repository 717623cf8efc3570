from rest_framework.pagination import PageNumberPagination


class StandardResultsSetPagination(PageNumberPagination):
    """``?page=N&page_size=M`` pagination, capped at ``max_page_size``."""

    page_size_query_param = "page_size"
    max_page_size = 100
