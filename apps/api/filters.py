"""
Ransack-style query parameters on top of django-filter.

Clients filter with parameters such as ``q[sku_cont]=FOO`` or
``q[price_gteq]=2.5`` and sort with ``q[s]=price desc``. Views declare a
``filterset_class`` whose filter names are the part inside ``q[...]``, and
``ordering_fields`` (plus optional ``ordering_aliases``) for sorting.
Unknown conditions are ignored; values that do not parse answer 400.
"""
import re

from django.http import QueryDict
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.filters import OrderingFilter

CONDITION_PARAM = re.compile(r'^q\[(?P<name>\w+)\](?P<many>\[\])?$')
SORT_PARAM = 'q[s]'


def query_conditions(query_params):
    """Turn ``q[name]`` keys into the plain filter names a FilterSet reads."""
    data = QueryDict(mutable=True)
    for key in query_params:
        match = CONDITION_PARAM.match(key)
        if not match or key == SORT_PARAM:
            continue
        values = query_params.getlist(key)
        if match.group('many'):
            # q[id_in][]=1&q[id_in][]=2 reaches BaseInFilter as "1,2"
            data[match.group('name')] = ','.join(values)
        else:
            data.setlist(match.group('name'), values)
    return data


class QueryFilterBackend(DjangoFilterBackend):
    """DjangoFilterBackend fed from the ``q[...]`` parameters."""

    def get_filterset_kwargs(self, request, queryset, view):
        kwargs = super().get_filterset_kwargs(request, queryset, view)
        kwargs['data'] = query_conditions(request.query_params)
        return kwargs

    def get_schema_operation_parameters(self, view):
        parameters = super().get_schema_operation_parameters(view)
        for parameter in parameters:
            parameter['name'] = f"q[{parameter['name']}]"
        return parameters


class QuerySortFilter(OrderingFilter):
    """
    OrderingFilter reading ``q[s]=attr desc, other asc``.

    Public names are mapped through the view's ``ordering_aliases`` before
    being checked against ``ordering_fields``; ``pk`` breaks ties.
    """
    ordering_param = SORT_PARAM

    def get_ordering(self, request, queryset, view):
        params = request.query_params.get(self.ordering_param)
        if params:
            aliases = getattr(view, 'ordering_aliases', {})
            fields = []
            for clause in params.split(','):
                parts = clause.strip().split()
                if not parts:
                    continue
                path = aliases.get(parts[0], parts[0])
                descending = len(parts) > 1 and parts[1].lower() == 'desc'
                fields.append(f'-{path}' if descending else path)
            ordering = self.remove_invalid_fields(queryset, fields, view, request)
            if ordering:
                return [*ordering, 'pk']
        return self.get_default_ordering(view)
