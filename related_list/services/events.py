"""Dispatch of presentation-layer events onto an interaction controller."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from related_list.schemas.events import (
    ColumnResizeEvent,
    CommandEvent,
    ContainerResizeEvent,
    EditErrorEvent,
    FilterChangeEvent,
    FilterRemoveEvent,
    FilterUpdateEvent,
    FlowStatusChangeEvent,
    RowActionEvent,
    RowSelectionChangeEvent,
    SearchInputEvent,
    SortChangeEvent,
)
from related_list.schemas.widget import FlowStatusEvent, NavigationRequest
from related_list.services.controller import InteractionController
from related_list.services.projection import ID_FIELD

logger = logging.getLogger(__name__)

EventHandler = Callable[[InteractionController, Any], Awaitable[NavigationRequest | None]]


async def _sort_change(controller: InteractionController, event: SortChangeEvent) -> None:
    controller.on_sort_change(event.field_name, event.sort_direction)


async def _row_action(controller: InteractionController, event: RowActionEvent) -> NavigationRequest | None:
    row = dict(event.row)
    if event.record_id and not row:
        row = next(
            (dict(candidate) for candidate in controller.rows if str(candidate.get(ID_FIELD)) == event.record_id),
            {ID_FIELD: event.record_id},
        )
    return controller.on_row_action(event.action, row)


async def _row_selection_change(controller: InteractionController, event: RowSelectionChangeEvent) -> None:
    if event.selected_ids is not None:
        controller.select_ids(event.selected_ids)
    else:
        controller.on_selection_changed(event.selected_rows)


async def _column_resize(controller: InteractionController, event: ColumnResizeEvent) -> None:
    controller.on_column_resize(event.field_name, event.width)


async def _search_input(controller: InteractionController, event: SearchInputEvent) -> None:
    controller.on_search_input(event.value)


async def _container_resize(controller: InteractionController, event: ContainerResizeEvent) -> None:
    controller.on_container_resize(event.width)


async def _flow_status(controller: InteractionController, event: FlowStatusChangeEvent) -> None:
    await controller.on_flow_status(FlowStatusEvent(status=event.status, message=event.message))


async def _edit_error(controller: InteractionController, event: EditErrorEvent) -> None:
    controller.edit_failed(event.detail)


async def _filter_change(controller: InteractionController, event: FilterChangeEvent) -> None:
    await controller.on_filter_change(event.filters)


async def _filter_update(controller: InteractionController, event: FilterUpdateEvent) -> None:
    changes = event.model_dump(include={"field", "operator", "value", "logic_operator"}, exclude_none=True)
    await controller.update_filter(event.filter_id, **changes)


async def _filter_remove(controller: InteractionController, event: FilterRemoveEvent) -> None:
    await controller.remove_filter(event.filter_id)


async def _new_record(controller: InteractionController, _: CommandEvent) -> NavigationRequest:
    return controller.new_record()


def _command(method_name: str) -> EventHandler:
    async def handle(controller: InteractionController, _: CommandEvent) -> None:
        result = getattr(controller, method_name)()
        if inspect.isawaitable(result):
            await result

    return handle


EVENT_HANDLERS: dict[str, EventHandler] = {
    "sort-change": _sort_change,
    "row-action": _row_action,
    "row-selection-change": _row_selection_change,
    "column-resize": _column_resize,
    "search-input": _search_input,
    "container-resize": _container_resize,
    "flow-status": _flow_status,
    "edit-error": _edit_error,
    "filter-change": _filter_change,
    "filter-update": _filter_update,
    "filter-remove": _filter_remove,
    "filter-add": _command("add_filter"),
    "new-record": _new_record,
    "page-prev": _command("page_previous"),
    "page-next": _command("page_next"),
    "launch-process": _command("launch_process"),
    "close-process": _command("close_process"),
    "confirm-delete": _command("confirm_delete"),
    "cancel-delete": _command("cancel_delete"),
    "open-bulk-delete": _command("open_bulk_delete"),
    "confirm-bulk-delete": _command("confirm_bulk_delete"),
    "cancel-bulk-delete": _command("cancel_bulk_delete"),
    "edit-submit": _command("submit_edit"),
    "edit-success": _command("edit_succeeded"),
    "close-edit": _command("close_edit"),
    "reset-column-widths": _command("reset_column_widths"),
    "toggle-settings": _command("toggle_settings_menu"),
    "close-settings": _command("close_settings_menu"),
    "dismiss-permission-error": _command("dismiss_permission_error"),
    "refresh": _command("refresh"),
}


async def apply_event(controller: InteractionController, event: Any) -> NavigationRequest | None:
    """Run one event against the controller; returns navigation the host should perform."""

    handler = EVENT_HANDLERS[event.type]
    logger.debug("related_list.widget_event widget_id=%s type=%s", controller.widget_id, event.type)
    return await handler(controller, event)
