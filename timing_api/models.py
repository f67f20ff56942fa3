"""
Models for the Timing API.

Provides the APIModel base class with camelCase alias support, the option
models callers pass to resource methods, and typed views over the snake_case
resources the API returns.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class APIModel(BaseModel):
    """
    Base model for all API models.

    Features:
    - populate_by_name=True: Allows both camelCase and snake_case field access
    - Use Field(alias='camelCase') for option fields the caller writes in camelCase

    Example:
        class StartTimerOptions(APIModel):
            project: str
            replace_existing: bool | None = Field(default=None, alias='replaceExisting')

        # Both work:
        options = StartTimerOptions(project='/projects/1', replaceExisting=True)
        options = StartTimerOptions(project='/projects/1', replace_existing=True)
    """
    model_config = ConfigDict(populate_by_name=True)


# =============================================================================
# Request options
# =============================================================================

class CreateProjectOptions(APIModel):
    """Options for creating or updating a project."""
    title: str | None = None
    color: str | None = None
    """Hex color, e.g. '#FF0000'."""
    parent: str | None = None
    """Parent project reference, e.g. '/projects/1'."""
    notes: str | None = None
    productivity_score: float | None = Field(default=None, alias='productivityScore')
    custom_fields: dict[str, str | None] | None = Field(default=None, alias='customFields')


class ListProjectsQuery(APIModel):
    """Query for listing projects."""
    title: str | None = None
    hide_archived: bool | None = Field(default=None, alias='hideArchived')


class StartTimerOptions(APIModel):
    """Options for starting a timer."""
    project: str
    title: str | None = None
    notes: str | None = None
    start_date: str | None = Field(default=None, alias='startDate')
    """Defaults to "now" on the service side."""
    replace_existing: bool | None = Field(default=None, alias='replaceExisting')
    custom_fields: dict[str, str | None] | None = Field(default=None, alias='customFields')


class CreateTimeEntryOptions(APIModel):
    """Options for creating a time entry."""
    project: str
    start_date: str = Field(alias='startDate')
    end_date: str = Field(alias='endDate')
    title: str | None = None
    notes: str | None = None
    replace_existing: bool | None = Field(default=None, alias='replaceExisting')
    custom_fields: dict[str, str | None] | None = Field(default=None, alias='customFields')


class ListTimeEntriesQuery(APIModel):
    """Query for listing time entries."""
    start_date_min: str | None = Field(default=None, alias='startDateMin')
    start_date_max: str | None = Field(default=None, alias='startDateMax')
    projects: list[str] | None = None
    include_child_projects: bool | None = Field(default=None, alias='includeChildProjects')
    search_query: str | None = Field(default=None, alias='searchQuery')
    is_running: bool | None = Field(default=None, alias='isRunning')
    include_project_data: bool | None = Field(default=None, alias='includeProjectData')
    limit: int | None = None
    offset: int | None = None


class GenerateReportQuery(APIModel):
    """
    Query for generating a report.

    All parameters are optional. `projects` may contain an empty string to
    include time entries without a project; `sort` entries are column names,
    prefixed with '-' for descending order.
    """
    include_app_usage: bool | None = Field(default=None, alias='includeAppUsage')
    include_team_members: bool | None = Field(default=None, alias='includeTeamMembers')
    team_members: list[str] | None = Field(default=None, alias='teamMembers')
    start_date_min: str | None = Field(default=None, alias='startDateMin')
    start_date_max: str | None = Field(default=None, alias='startDateMax')
    projects: list[str] | None = None
    include_child_projects: bool | None = Field(default=None, alias='includeChildProjects')
    search_query: str | None = Field(default=None, alias='searchQuery')
    columns: list[Literal['project', 'title', 'notes', 'timespan', 'user']] | None = None
    project_grouping_level: int | None = Field(default=None, alias='projectGroupingLevel')
    include_project_data: bool | None = Field(default=None, alias='includeProjectData')
    timespan_grouping_mode: Literal['exact', 'day', 'week', 'month', 'year'] | None = Field(
        default=None, alias='timespanGroupingMode'
    )
    sort: list[str] | None = None


# =============================================================================
# Resources (as returned by the API, snake_case)
# =============================================================================

class ResourceModel(APIModel):
    """Base for resources returned by the API. Unknown fields are kept."""
    model_config = ConfigDict(populate_by_name=True, extra='allow')

    ref: str = Field(alias='self')
    """Self reference, e.g. '/projects/1'."""


class Project(ResourceModel):
    """Project model."""
    title: str
    color: str | None = None
    parent: str | None = None
    notes: str | None = None
    rate: float | None = None
    total_duration: float | None = None
    is_aggregating: bool | None = None
    created_at: str | None = None
    updated_at: str | None = None
    custom_fields: dict[str, str | None] | None = None
    children: list[str] | None = None


class TimeEntry(ResourceModel):
    """Time entry model. `end_date` is None while the timer runs."""
    start_date: str
    end_date: str | None = None
    title: str | None = None
    notes: str | None = None
    project: str | dict[str, Any] | None = None
    is_running: bool | None = None
    duration: float | None = None
    created_at: str | None = None
    updated_at: str | None = None
    custom_fields: dict[str, str | None] | None = None


class ReportUser(ResourceModel):
    """User attached to a report row."""
    email: str | None = None
    name: str | None = None


class ReportRow(APIModel):
    """A report row. Which fields are present depends on the requested columns."""
    model_config = ConfigDict(populate_by_name=True, extra='allow')

    duration: float
    """Total duration in seconds."""
    project: Project | str | None = None
    title: str | None = None
    notes: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    user: ReportUser | str | None = None
