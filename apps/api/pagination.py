from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardResultsSetPagination(PageNumberPagination):
    """Standard pagination for API endpoints compatible with react-admin."""
    page_size = 25
    page_size_query_param = 'page_size'
    max_page_size = 100

    def get_paginated_response(self, data):
        """
        Return paginated response with headers for react-admin.
        react-admin expects Content-Range header for pagination.
        """
        response = super().get_paginated_response(data)
        response['Content-Range'] = f'{self.page.start_index()}-{self.page.end_index()}/{self.page.paginator.count}'
        response['Access-Control-Expose-Headers'] = 'Content-Range'
        return response


class PageCountPagination(PageNumberPagination):
    """
    Pagination used by the catalog endpoints.

    Responds with the page items under `results_key` alongside
    count (items on this page), total_count, current_page, pages and
    per_page. The page size is read from the `per_page` parameter.
    """
    page_size = 25
    page_size_query_param = 'per_page'
    max_page_size = 500
    results_key = 'results'

    def get_paginated_response(self, data):
        return Response({
            'count': len(data),
            'total_count': self.page.paginator.count,
            'current_page': self.page.number,
            'pages': self.page.paginator.num_pages,
            'per_page': self.page.paginator.per_page,
            self.results_key: data,
        })

    def get_paginated_response_schema(self, schema):
        return {
            'type': 'object',
            'required': ['count', 'total_count', 'current_page', 'pages', self.results_key],
            'properties': {
                'count': {'type': 'integer', 'example': 25},
                'total_count': {'type': 'integer', 'example': 120},
                'current_page': {'type': 'integer', 'example': 1},
                'pages': {'type': 'integer', 'example': 5},
                'per_page': {'type': 'integer', 'example': 25},
                self.results_key: schema,
            },
        }


class VariantPagination(PageCountPagination):
    results_key = 'variants'


class ProductPagination(PageCountPagination):
    results_key = 'products'
