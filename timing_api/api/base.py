"""Base class for resource clients."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from timing_api.client import TimingClient


class Resource:
    """
    A collection on the Timing API.

    Resource clients hold a reference to the root TimingClient and send
    every request through it, so they share its configuration and error
    normalization.
    """

    collection: str = ''
    """Collection path, e.g. '/projects'."""

    def __init__(self, client: 'TimingClient'):
        self._client = client

    def _path(self, resource_id: str | int) -> str:
        """
        Path of a single resource.

        Accepts a bare id ('123') or a reference ('/projects/123'); references
        are used as-is.
        """
        resource_id = str(resource_id)
        if resource_id.startswith('/'):
            return resource_id
        return f'{self.collection}/{resource_id}'
