# projects/pagination.py
from django.conf import settings
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class ProjectPagination(PageNumberPagination):
    page_query_param = "page"
    page_size_query_param = "per_page"
    page_size = getattr(settings, "PROJECTS_PAGE_SIZE", 6)
    max_page_size = 100

    def get_paginated_response(self, data):
        return Response({
            "count": self.page.paginator.count,
            "current_page": self.page.number,
            "total_pages": self.page.paginator.num_pages,
            "per_page": self.get_page_size(self.request),
            "next": self.get_next_link(),
            "previous": self.get_previous_link(),
            "results": data,
        })
