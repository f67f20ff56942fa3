"""Projects API endpoints."""

from collections.abc import Mapping
from typing import Any

import logfire

from timing_api.api.base import Resource
from timing_api.models import CreateProjectOptions, ListProjectsQuery
from timing_api.utils import (
    to_payload,
    validate_custom_fields,
    validate_project_reference,
    validate_required_fields,
)


def _validate_project_payload(payload: Mapping[str, Any]) -> None:
    if payload.get('parent') is not None:
        validate_project_reference(payload['parent'])
    validate_custom_fields(payload.get('custom_fields'))


class Projects(Resource):
    """Operations on projects."""

    collection = '/projects'

    async def list(
        self, query: ListProjectsQuery | Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """
        Get projects.

        :param query: Optional filters, e.g. {'title': 'Work', 'hideArchived': True}.
        """
        return (await self._client.get(self.collection, params=to_payload(query))).data

    async def get(self, project_id: str | int) -> dict[str, Any]:
        """
        Get a specific project.

        :param project_id: Project id or reference ('/projects/1').
        """
        return (await self._client.get(self._path(project_id))).data

    async def create(self, options: CreateProjectOptions | Mapping[str, Any]) -> dict[str, Any]:
        """
        Create a new project.

        :param options: Project fields; `title` is required.
        """
        payload = to_payload(options)
        validate_required_fields(payload, ['title'])
        _validate_project_payload(payload)
        return (await self._client.post(self.collection, json=payload)).data

    async def update(
        self, project_id: str | int, data: CreateProjectOptions | Mapping[str, Any]
    ) -> dict[str, Any]:
        """
        Update a project with partial data.

        :param project_id: Project id or reference.
        :param data: Fields to change.
        """
        payload = to_payload(data)
        _validate_project_payload(payload)
        return (await self._client.put(self._path(project_id), json=payload)).data

    async def delete(self, project_id: str | int) -> None:
        """
        Delete a project.

        :param project_id: Project id or reference.
        """
        await self._client.delete(self._path(project_id))
        logfire.info('Deleted project {project_id}', project_id=project_id)
