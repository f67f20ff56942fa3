"""
Timing API client.

Async client for the Timing time-tracking API:
- client: TimingClient, configuration, envelope unwrapping and error normalization
- api: resource clients (projects, time entries, reports)
- models: request options and typed resource views
"""

from timing_api.client import (
    APIResponse,
    TimingAPIError,
    TimingClient,
    TimingClientConfig,
    is_api_error,
    normalize_error,
)
from timing_api.models import (
    CreateProjectOptions,
    CreateTimeEntryOptions,
    GenerateReportQuery,
    ListProjectsQuery,
    ListTimeEntriesQuery,
    Project,
    ReportRow,
    ReportUser,
    StartTimerOptions,
    TimeEntry,
)
from timing_api.utils import to_snake_case

__version__ = "0.1.0"
__all__ = [
    "APIResponse",
    "CreateProjectOptions",
    "CreateTimeEntryOptions",
    "GenerateReportQuery",
    "ListProjectsQuery",
    "ListTimeEntriesQuery",
    "Project",
    "ReportRow",
    "ReportUser",
    "StartTimerOptions",
    "TimeEntry",
    "TimingAPIError",
    "TimingClient",
    "TimingClientConfig",
    "is_api_error",
    "normalize_error",
    "to_snake_case",
]
