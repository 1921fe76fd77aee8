"""Boundary protocols for the remote services the widget consumes."""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Protocol

from related_list.schemas.object_schema import ObjectPermissions, ObjectSchema
from related_list.schemas.records import FetchRecordsRequest, RecordPage
from related_list.schemas.widget import FlowInputVariable, FlowStatusEvent


class RecordService(Protocol):
    """Paged record queries and deletes for the child object."""

    async def fetch_records(self, request: FetchRecordsRequest) -> RecordPage:
        """Return one page of records matching the request."""

    async def delete_record(self, record_id: str, object_api_name: str) -> None:
        """Delete one record; raise with a permission message when access is denied."""


class SchemaService(Protocol):
    """Object metadata lookups."""

    async def fetch_schema(self, object_api_name: str) -> ObjectSchema:
        """Return the object's label, icon and field descriptors."""


class PermissionService(Protocol):
    """Object-level access checks."""

    async def fetch_permissions(self, object_api_name: str) -> ObjectPermissions:
        """Return create/update/delete flags for the current user."""


class FlowSession(Protocol):
    """Handle on one running guided process."""

    def events(self) -> AsyncIterator[FlowStatusEvent]:
        """Yield status events until the process ends."""

    async def pause(self) -> None:
        """Pause the process."""

    async def stop(self) -> None:
        """Stop the process."""


class FlowLauncher(Protocol):
    """Guided process engine entry point."""

    async def launch(self, flow_name: str, input_variables: list[FlowInputVariable]) -> FlowSession:
        """Start the named process with the given inputs."""


class ViewportMetrics(Protocol):
    """Live container geometry supplied by the host."""

    def container_width_px(self) -> int | None:
        """Current grid container width, or ``None`` before layout."""


@dataclass(slots=True)
class StaticViewport:
    """Viewport whose width is pushed in by the host."""

    width_px: int | None = None

    def container_width_px(self) -> int | None:
        return self.width_px

    def update(self, width_px: int | None) -> None:
        self.width_px = width_px
