"""
Resource clients for the Timing API.

Each resource client exposes the operations of one collection on the service.
"""

from timing_api.api.base import Resource
from timing_api.api.projects import Projects
from timing_api.api.reports import Reports
from timing_api.api.time_entries import TimeEntries

__all__ = ['Projects', 'Reports', 'Resource', 'TimeEntries']
