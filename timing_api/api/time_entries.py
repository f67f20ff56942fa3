"""Time entries API endpoints."""

from collections.abc import Mapping
from typing import Any

import logfire

from timing_api.api.base import Resource
from timing_api.models import CreateTimeEntryOptions, ListTimeEntriesQuery, StartTimerOptions
from timing_api.utils import (
    to_payload,
    validate_custom_fields,
    validate_iso_date_string,
    validate_project_reference,
    validate_required_fields,
)


def _validate_entry_payload(payload: Mapping[str, Any]) -> None:
    if payload.get('project') is not None:
        validate_project_reference(payload['project'])
    for field in ('start_date', 'end_date'):
        if payload.get(field) is not None:
            validate_iso_date_string(payload[field], field)
    validate_custom_fields(payload.get('custom_fields'))


class TimeEntries(Resource):
    """Operations on time entries and the running timer."""

    collection = '/time-entries'

    async def start(self, options: StartTimerOptions | Mapping[str, Any]) -> dict[str, Any]:
        """
        Start a timer.

        Whether an already running timer is replaced is up to the service;
        `replaceExisting` is forwarded as given.

        :param options: Timer options; `project` is required.
        """
        payload = to_payload(options)
        validate_required_fields(payload, ['project'])
        _validate_entry_payload(payload)
        entry = (await self._client.post(f'{self.collection}/start', json=payload)).data
        logfire.info('Started timer for {project}', project=payload['project'])
        return entry

    async def stop(self) -> dict[str, Any]:
        """Stop the currently running timer."""
        return (await self._client.put(f'{self.collection}/stop', json={})).data

    async def create(self, options: CreateTimeEntryOptions | Mapping[str, Any]) -> dict[str, Any]:
        """
        Create a time entry.

        :param options: Entry fields; `project`, `startDate` and `endDate` are required.
        """
        payload = to_payload(options)
        validate_required_fields(payload, ['project', 'start_date', 'end_date'])
        _validate_entry_payload(payload)
        return (await self._client.post(self.collection, json=payload)).data

    async def list(
        self, query: ListTimeEntriesQuery | Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """
        Get time entries.

        `limit` and `offset` are passed through to the service as-is.

        :param query: Optional filters, e.g. {'startDateMin': '2024-01-01', 'isRunning': False}.
        """
        return (await self._client.get(self.collection, params=to_payload(query))).data

    async def get(self, entry_id: str | int) -> dict[str, Any]:
        """
        Get a specific time entry.

        :param entry_id: Time entry id or reference ('/time-entries/1').
        """
        return (await self._client.get(self._path(entry_id))).data

    async def update(self, entry_id: str | int, data: Mapping[str, Any]) -> dict[str, Any]:
        """
        Update a time entry with partial data.

        :param entry_id: Time entry id or reference.
        :param data: Fields to change.
        """
        payload = to_payload(data)
        _validate_entry_payload(payload)
        return (await self._client.put(self._path(entry_id), json=payload)).data

    async def delete(self, entry_id: str | int) -> None:
        """
        Delete a time entry.

        :param entry_id: Time entry id or reference.
        """
        await self._client.delete(self._path(entry_id))
        logfire.info('Deleted time entry {entry_id}', entry_id=entry_id)
