"""Reports API endpoints."""

from collections.abc import Mapping
from typing import Any

from timing_api.api.base import Resource
from timing_api.models import GenerateReportQuery
from timing_api.utils import to_payload


class Reports(Resource):
    """Reports over time entries and app usage."""

    collection = '/report'

    async def generate(
        self, query: GenerateReportQuery | Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """
        Generate a report.

        Each row carries the total duration (in seconds) of the configured
        columns. Array parameters such as `projects` or `sort` are sent as
        given.

        :param query: Optional report parameters, e.g.
            {'startDateMin': '2024-01-01', 'columns': ['project'], 'sort': ['-duration']}.
        """
        return (await self._client.get(self.collection, params=to_payload(query))).data
