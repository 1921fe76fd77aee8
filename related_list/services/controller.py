"""Interaction controller for one related-list widget instance."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Collection, Mapping, Sequence
from time import perf_counter
from typing import Any
from urllib.parse import quote

from related_list.config import Settings, get_settings
from related_list.schema.cache import SchemaCache
from related_list.schema.field_kinds import is_email_field, is_phone_field
from related_list.schemas.columns import ColumnLayout
from related_list.schemas.filters import FilterCondition
from related_list.schemas.object_schema import ObjectPermissions
from related_list.schemas.records import FetchRecordsRequest, RecordPage
from related_list.schemas.widget import (
    FlowInputVariable,
    FlowStatusEvent,
    ModalStates,
    NavigationRequest,
    Notification,
    NotificationVariant,
    SelectionSnapshot,
    WidgetConfig,
    WidgetSnapshot,
)
from related_list.services.columns import ColumnMetrics, ColumnPlanner
from related_list.services.debounce import CancelableTimer, SearchDebouncer
from related_list.services.errors import (
    BulkDeleteError,
    DeleteError,
    FormValidationError,
    ProcessError,
    RecordFetchError,
    SchemaFetchError,
    error_message,
    form_error_message,
    is_permission_denied,
)
from related_list.services.filters import FILTER_OPERATORS, LOGIC_OPERATORS, FilterPanel, filter_field_options
from related_list.services.gateways import (
    FlowLauncher,
    FlowSession,
    PermissionService,
    RecordService,
    SchemaService,
    StaticViewport,
    ViewportMetrics,
)
from related_list.services.modals import ModalStateMachine
from related_list.services.pagination import PaginationState
from related_list.services.projection import ID_FIELD, ProjectedRow, phone_digits, project_records
from related_list.services.selection import SelectionTracker
from related_list.services.sorting import SortDirection, sort_rows

logger = logging.getLogger(__name__)

DEFAULT_ICON_NAME = "standard:custom"
DEFAULT_ICON_BACKGROUND = "#f4b400"


def encode_default_field_values(values: Mapping[str, Any]) -> str:
    """Encode prefill values as ``Field=value`` pairs joined by commas."""

    return ",".join(f"{field}={quote(str(value), safe='')}" for field, value in values.items())


def grant_row_actions(configured: Sequence[str], allowed: Collection[str]) -> list[str]:
    """View is always granted; other configured actions need matching access."""

    return ["view", *(action for action in configured if action != "view" and action in allowed)]


class InteractionController:
    """Owns pagination, search, sort, rows, selection and modal state for one widget.

    Remote failures are caught where each call is made and turned into notifications,
    the error banner or log lines; the loading flag is always reset afterwards.
    """

    def __init__(
        self,
        config: WidgetConfig,
        *,
        records: RecordService,
        schema_service: SchemaService,
        permission_service: PermissionService | None = None,
        flows: FlowLauncher | None = None,
        viewport: ViewportMetrics | None = None,
        settings: Settings | None = None,
        widget_id: str | None = None,
    ) -> None:
        self.config = config
        self.settings = settings or get_settings()
        self.widget_id = widget_id
        self.viewport = viewport or StaticViewport()
        self._records = records
        self._schema_service = schema_service
        self._permission_service = permission_service
        self._flows = flows

        self.schema = SchemaCache()
        self.permissions: ObjectPermissions | None = None
        self.granted_actions: list[str] = grant_row_actions(config.row_actions, config.row_actions)
        self.column_planner = ColumnPlanner(ColumnMetrics.from_settings(self.settings))
        self.layout = self._plan_layout()

        self.pagination = PaginationState(page_size=config.page_size)
        self.search = SearchDebouncer(self._on_search_commit, delay_ms=self.settings.search_debounce_ms)
        self.selection = SelectionTracker()
        self.sorted_by: str | None = None
        self.sorted_direction: SortDirection = "asc"
        self.filter_panel = FilterPanel()

        self.rows: list[ProjectedRow] = []
        self._raw_page: RecordPage | None = None
        self._projected_page_number = 1
        self.is_loading = False
        self.error: str | None = None
        self.permission_error: str | None = None
        self.notifications: list[Notification] = []
        self.settings_menu_open = False

        self.selected_record_id: str | None = None
        self.edit_modal = ModalStateMachine("edit")
        self.delete_modal = ModalStateMachine("delete")
        self.bulk_delete_modal = ModalStateMachine("bulk_delete")
        self.flow_modal = ModalStateMachine("flow")

        self.flow_input_variables: list[FlowInputVariable] = []
        self.flow_key: int | None = None
        self._flow_session: FlowSession | None = None
        self._flow_watcher: asyncio.Task | None = None
        self._flow_grace_timer = CancelableTimer("flow_close_grace")
        self._resize_timer = CancelableTimer("container_resize")

        self._tasks: set[asyncio.Task] = set()
        self._fetch_sequence = 0
        self._closed = False

    # Lifecycle

    @property
    def is_closed(self) -> bool:
        return self._closed

    async def start(self) -> None:
        """Load metadata, access flags and the first page."""

        await self.load_schema()
        await self.load_permissions()
        await self.refresh()

    async def teardown(self) -> None:
        """Cancel timers and ignore results of calls still in flight."""

        if self._closed:
            return
        self._closed = True
        self.search.close()
        self._resize_timer.cancel()
        await self._stop_flow_session()
        logger.info("related_list.widget_teardown widget_id=%s pending_tasks=%d", self.widget_id, len(self._tasks))

    async def wait_idle(self) -> None:
        """Wait for background work spawned by timers; the flow watcher is not awaited."""

        while True:
            pending = [task for task in self._tasks if not task.done() and task is not self._flow_watcher]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    def _spawn(self, coroutine: Awaitable[Any]) -> asyncio.Task:
        task = asyncio.ensure_future(coroutine)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        failure = task.exception()
        if failure is not None:
            logger.error(
                "related_list.background_task_failed widget_id=%s error=%s",
                self.widget_id,
                failure,
                exc_info=failure,
            )

    # Metadata

    async def load_schema(self) -> bool:
        object_api_name = self.config.child_object_api_name
        started = perf_counter()
        try:
            schema = await self._schema_service.fetch_schema(object_api_name)
        except Exception as exc:
            failure = SchemaFetchError(error_message(exc, "Failed to load object metadata"))
            logger.error(
                "related_list.schema_fetch_failed object=%s error=%s elapsed_ms=%.2f",
                object_api_name,
                failure,
                (perf_counter() - started) * 1000.0,
                exc_info=exc,
            )
            return False
        if self._closed:
            return False
        self.schema.update(schema)
        self._recompute_columns()
        if self._raw_page is not None:
            self._reproject()
        logger.info(
            "related_list.schema_loaded object=%s fields=%d elapsed_ms=%.2f",
            object_api_name,
            len(schema.fields),
            (perf_counter() - started) * 1000.0,
        )
        return True

    async def load_permissions(self) -> bool:
        if self._permission_service is None:
            return False
        object_api_name = self.config.child_object_api_name
        try:
            permissions = await self._permission_service.fetch_permissions(object_api_name)
        except Exception as exc:
            logger.error(
                "related_list.permission_fetch_failed object=%s error=%s",
                object_api_name,
                error_message(exc),
                exc_info=exc,
            )
            return False
        if self._closed:
            return False
        self.permissions = permissions
        allowed = set()
        if permissions.is_updateable:
            allowed.add("edit")
        if permissions.is_deletable:
            allowed.add("delete")
        self.granted_actions = grant_row_actions(self.config.row_actions, allowed)
        self._recompute_columns()
        return True

    # Records

    def _build_request(self) -> FetchRecordsRequest:
        return FetchRecordsRequest(
            child_object=self.config.child_object_api_name,
            parent_lookup_field=self.config.parent_lookup_field,
            parent_id=self.config.record_id,
            fields=list(self.config.display_fields),
            page_size=self.pagination.page_size,
            page_number=self.pagination.page_number,
            search_term=self.search.state.committed_term,
            searchable_fields=list(self.config.searchable_fields),
            filters=[condition for condition in self.filters if condition.field],
        )

    def _is_stale(self, sequence: int) -> bool:
        return self.settings.discard_stale_fetches and sequence != self._fetch_sequence

    async def refresh(self) -> None:
        """Fetch the current page; the last fetch to resolve wins unless stale fetches are discarded."""

        if self._closed:
            return
        self._fetch_sequence += 1
        sequence = self._fetch_sequence
        request = self._build_request()
        self.is_loading = True
        started = perf_counter()
        try:
            page = await self._records.fetch_records(request)
        except Exception as exc:
            if self._closed or self._is_stale(sequence):
                return
            self._apply_fetch_failure(exc, request)
        else:
            if self._closed or self._is_stale(sequence):
                logger.info("related_list.fetch_discarded widget_id=%s sequence=%d", self.widget_id, sequence)
                return
            self._apply_page(page, request)
            logger.info(
                "related_list.fetch_timing widget_id=%s page=%d rows=%d total=%d elapsed_ms=%.2f",
                self.widget_id,
                request.page_number,
                len(page.records),
                page.total_records,
                (perf_counter() - started) * 1000.0,
            )
        finally:
            # A superseded fetch leaves the flag to the newest one still in flight.
            if not self._closed and sequence == self._fetch_sequence:
                self.is_loading = False

    def _apply_page(self, page: RecordPage, request: FetchRecordsRequest) -> None:
        self._raw_page = page
        self._projected_page_number = request.page_number
        self.pagination.total_records = page.total_records
        self.error = None
        self._reproject()

    def _reproject(self) -> None:
        raw_records = self._raw_page.records if self._raw_page is not None else []
        rows = project_records(
            raw_records,
            self.config.display_fields,
            self.schema,
            page_number=self._projected_page_number,
            page_size=self.pagination.page_size,
            default_currency_code=self.settings.default_currency_code,
        )
        if self.sorted_by:
            rows = sort_rows(
                rows,
                self.sorted_by,
                self.sorted_direction,
                page_number=self._projected_page_number,
                page_size=self.pagination.page_size,
            )
        self.rows = rows
        self.selection.reconcile(rows)

    def _apply_fetch_failure(self, exc: Exception, request: FetchRecordsRequest) -> None:
        failure = RecordFetchError(error_message(exc, "Unknown error"))
        message = str(failure)
        logger.error(
            "related_list.fetch_failed widget_id=%s object=%s page=%d error=%s",
            self.widget_id,
            request.child_object,
            request.page_number,
            message,
            exc_info=exc,
        )
        self._raw_page = None
        self.rows = []
        self.selection.clear()
        self.error = message
        if is_permission_denied(message, exc):
            self.permission_error = message
        else:
            self._notify("Error loading records", message, "error")

    # Sort, search, paging, filters

    def on_sort_change(self, field_name: str, direction: SortDirection) -> None:
        self.sorted_by = field_name
        self.sorted_direction = direction
        self.rows = sort_rows(
            self.rows,
            field_name,
            direction,
            page_number=self._projected_page_number,
            page_size=self.pagination.page_size,
        )

    def on_search_input(self, raw_value: str) -> None:
        self.search.on_keystroke(raw_value)

    def _on_search_commit(self, term: str) -> None:
        self.pagination.reset()
        logger.debug("related_list.search_committed widget_id=%s term=%r", self.widget_id, term)
        self._spawn(self.refresh())

    async def page_previous(self) -> bool:
        if not self.pagination.can_go_previous:
            return False
        self.pagination.page_number -= 1
        await self.refresh()
        return True

    async def page_next(self) -> bool:
        if not self.pagination.can_go_next:
            return False
        self.pagination.page_number += 1
        await self.refresh()
        return True

    @property
    def filters(self) -> list[FilterCondition]:
        return self.filter_panel.conditions()

    async def on_filter_change(self, conditions: Sequence[FilterCondition]) -> None:
        """Replace every filter row at once."""

        self.filter_panel.replace(conditions)
        await self._apply_filters()

    def add_filter(self) -> FilterCondition:
        """Append a blank row; blank rows do not constrain the fetch, so nothing is re-fetched."""

        return self.filter_panel.add_filter()

    async def update_filter(self, filter_id: str, **changes: str) -> bool:
        if self.filter_panel.update_filter(filter_id, **changes) is None:
            logger.warning("related_list.unknown_filter widget_id=%s filter_id=%s", self.widget_id, filter_id)
            return False
        await self._apply_filters()
        return True

    async def remove_filter(self, filter_id: str) -> bool:
        if not self.filter_panel.remove_filter(filter_id):
            logger.warning("related_list.unknown_filter widget_id=%s filter_id=%s", self.widget_id, filter_id)
            return False
        await self._apply_filters()
        return True

    async def _apply_filters(self) -> None:
        self.pagination.reset()
        await self.refresh()

    # Selection and columns

    def on_selection_changed(self, selected_rows: Sequence[Mapping[str, Any]]) -> None:
        limit = self.settings.max_row_selection
        if len(selected_rows) > limit:
            logger.warning(
                "related_list.selection_truncated widget_id=%s requested=%d limit=%d",
                self.widget_id,
                len(selected_rows),
                limit,
            )
            selected_rows = selected_rows[:limit]
        self.selection.on_selection_changed(selected_rows)

    def select_ids(self, record_ids: Sequence[str]) -> None:
        """Select rows by identifier, in the given order."""

        by_id = {str(row.get(ID_FIELD)): row for row in self.rows}
        self.on_selection_changed([by_id.get(record_id, {ID_FIELD: record_id}) for record_id in record_ids])

    def _plan_layout(self) -> ColumnLayout:
        return self.column_planner.plan(
            self.config.display_fields,
            self.schema,
            label_overrides=self.config.column_labels,
            sortable_fields=self.config.sortable_fields,
            container_width_px=self.viewport.container_width_px(),
            granted_actions=self.granted_actions,
        )

    def _recompute_columns(self) -> None:
        self.layout = self._plan_layout()

    def on_column_resize(self, column_name: str, width: int) -> None:
        self.column_planner.resize(column_name, width)
        self._recompute_columns()

    def reset_column_widths(self) -> None:
        self.column_planner.reset()
        self._recompute_columns()
        self.settings_menu_open = False
        self._notify("Success", "Column widths have been reset", "success")

    def on_container_resize(self, width_px: int | None = None) -> None:
        if width_px is not None and isinstance(self.viewport, StaticViewport):
            self.viewport.update(width_px)
        self._resize_timer.start(self.settings.resize_debounce_ms / 1000.0, self._recompute_columns)

    def toggle_settings_menu(self) -> None:
        self.settings_menu_open = not self.settings_menu_open

    def close_settings_menu(self) -> None:
        self.settings_menu_open = False

    # Row actions and navigation

    def on_row_action(self, action: str, row: Mapping[str, Any]) -> NavigationRequest | None:
        record_id = row.get(ID_FIELD)
        record_id = str(record_id) if record_id is not None else None

        if action in ("view", "edit", "delete"):
            if action not in self.granted_actions:
                logger.warning("related_list.row_action_not_granted widget_id=%s action=%s", self.widget_id, action)
                return None
            if action == "view":
                return NavigationRequest(
                    kind="record_page",
                    record_id=record_id,
                    object_api_name=self.config.child_object_api_name,
                    action="view",
                )
            self.selected_record_id = record_id
            if action == "edit":
                self.edit_modal.open()
            else:
                self.delete_modal.open()
            return None

        if is_email_field(action):
            email = row.get(action)
            if email:
                return NavigationRequest(kind="web_page", url=f"mailto:{email}")
            return None
        if is_phone_field(action):
            phone = row.get(action)
            if phone:
                return NavigationRequest(kind="web_page", url=f"tel:{phone_digits(str(phone))}")
            return None

        logger.warning("related_list.unknown_row_action widget_id=%s action=%s", self.widget_id, action)
        return None

    def new_record(self) -> NavigationRequest:
        return NavigationRequest(
            kind="object_page",
            object_api_name=self.config.child_object_api_name,
            action="new",
            default_field_values=encode_default_field_values(
                {self.config.parent_lookup_field: self.config.record_id}
            ),
        )

    # Edit

    def close_edit(self) -> None:
        self.edit_modal.close()

    def submit_edit(self) -> None:
        self.edit_modal.submit()
        self.is_loading = True

    async def edit_succeeded(self) -> None:
        if self.edit_modal.is_submitting:
            self.edit_modal.resolve(close=True)
        else:
            self.edit_modal.close()
        self.is_loading = False
        self.selected_record_id = None
        self._notify("Success", "Record updated successfully", "success")
        await self.refresh()

    def edit_failed(self, detail: Mapping[str, Any] | None) -> str:
        failure = FormValidationError(form_error_message(detail))
        logger.warning(
            "related_list.edit_failed widget_id=%s record_id=%s error=%s",
            self.widget_id,
            self.selected_record_id,
            failure,
        )
        self.is_loading = False
        if self.edit_modal.is_submitting:
            self.edit_modal.resolve(close=False)
        self._notify("Error", str(failure), "error")
        return str(failure)

    # Delete

    def cancel_delete(self) -> None:
        self.delete_modal.close()
        self.selected_record_id = None

    async def confirm_delete(self) -> bool:
        record_id = self.selected_record_id
        self.delete_modal.submit()
        if not record_id:
            self.delete_modal.resolve(close=True)
            return False

        self.is_loading = True
        try:
            await self._records.delete_record(record_id, self.config.child_object_api_name)
        except Exception as exc:
            failure = DeleteError(error_message(exc, "Failed to delete record"))
            logger.error(
                "related_list.delete_failed widget_id=%s record_id=%s error=%s",
                self.widget_id,
                record_id,
                failure,
                exc_info=exc,
            )
            if self._closed:
                return False
            self.delete_modal.resolve(close=True)
            self.selected_record_id = None
            message = str(failure)
            if is_permission_denied(message, exc):
                self.permission_error = message
            else:
                self._notify("Error deleting record", message, "error")
            return False
        finally:
            if not self._closed:
                self.is_loading = False

        if self._closed:
            return True
        self.delete_modal.resolve(close=True)
        self.selection.discard(record_id)
        self.selected_record_id = None
        self._notify("Success", "Record deleted successfully", "success")
        await self.refresh()
        return True

    # Bulk delete

    def open_bulk_delete(self) -> bool:
        if not self.selection.has_selection:
            return False
        self.bulk_delete_modal.open()
        return True

    def cancel_bulk_delete(self) -> None:
        self.bulk_delete_modal.close()

    async def confirm_bulk_delete(self) -> bool:
        record_ids = self.selection.selected_ids
        self.bulk_delete_modal.submit()
        if not record_ids:
            self.bulk_delete_modal.resolve(close=True)
            return False

        object_api_name = self.config.child_object_api_name
        self.is_loading = True
        started = perf_counter()
        try:
            outcomes = await asyncio.gather(
                *(self._records.delete_record(record_id, object_api_name) for record_id in record_ids),
                return_exceptions=True,
            )
        finally:
            if not self._closed:
                self.is_loading = False

        failures = [outcome for outcome in outcomes if isinstance(outcome, Exception)]
        logger.info(
            "related_list.bulk_delete_timing widget_id=%s requested=%d failed=%d elapsed_ms=%.2f",
            self.widget_id,
            len(record_ids),
            len(failures),
            (perf_counter() - started) * 1000.0,
        )
        if self._closed:
            return not failures
        if failures:
            failure = BulkDeleteError(error_message(failures[0], "Failed to delete records"))
            logger.error(
                "related_list.bulk_delete_failed widget_id=%s error=%s",
                self.widget_id,
                failure,
                exc_info=failures[0],
            )
            self.bulk_delete_modal.resolve(close=False)
            self._notify("Error deleting records", str(failure), "error")
            return False

        self.bulk_delete_modal.resolve(close=True)
        self.selection.clear()
        self._notify("Success", f"{len(record_ids)} records deleted successfully", "success")
        await self.refresh()
        return True

    # Guided process

    async def launch_process(self) -> bool:
        if not self.config.has_flow:
            self._notify("Error", "No flow specified", "error")
            return False
        if self._flows is None:
            failure = ProcessError("Guided process engine is not available")
            logger.error("related_list.flow_unavailable widget_id=%s", self.widget_id)
            self._notify("Error", str(failure), "error")
            return False

        if self._flow_session is not None or self.flow_modal.is_open:
            await self.close_process(refresh=False)

        flow_name = self.config.flow_name.strip()
        self.flow_input_variables = [FlowInputVariable(name="recordId", type="String", value=self.config.record_id)]
        self.flow_key = time.time_ns() // 1_000_000
        self.flow_modal.open()
        try:
            session = await self._flows.launch(flow_name, list(self.flow_input_variables))
        except Exception as exc:
            failure = ProcessError(error_message(exc, "An error occurred while running the flow"))
            logger.error(
                "related_list.flow_launch_failed widget_id=%s flow=%s error=%s",
                self.widget_id,
                flow_name,
                failure,
                exc_info=exc,
            )
            self._reset_flow_state()
            self._notify("Error", str(failure), "error")
            return False
        if self._closed:
            return False
        self._flow_session = session
        self._flow_watcher = self._spawn(self._watch_flow(session))
        logger.info("related_list.flow_launched widget_id=%s flow=%s", self.widget_id, flow_name)
        return True

    async def _watch_flow(self, session: FlowSession) -> None:
        try:
            async for event in session.events():
                if self._closed or self._flow_session is not session:
                    return
                await self.on_flow_status(event)
                if event.status in ("FINISHED", "ERROR"):
                    return
        except Exception as exc:
            if self._closed or self._flow_session is not session:
                return
            await self.on_flow_status(FlowStatusEvent(status="ERROR", message=error_message(exc)))

    async def on_flow_status(self, event: FlowStatusEvent) -> None:
        if not self.flow_modal.is_open:
            logger.info("related_list.flow_status_ignored widget_id=%s status=%s", self.widget_id, event.status)
            return
        if event.status == "FINISHED":
            self._flow_grace_timer.start(
                self.settings.flow_close_grace_ms / 1000.0,
                lambda: self._spawn(self._finish_flow()),
            )
        elif event.status == "ERROR":
            failure = ProcessError(event.message or "An error occurred while running the flow")
            logger.error("related_list.flow_failed widget_id=%s error=%s", self.widget_id, failure)
            self._notify("Error", str(failure), "error")
            await self.close_process(refresh=False)

    async def _finish_flow(self) -> None:
        await self.close_process()
        self._notify("Success", "Flow completed successfully", "success")

    async def close_process(self, *, refresh: bool = True) -> None:
        await self._stop_flow_session()
        self._reset_flow_state()
        if refresh:
            await self.refresh()

    async def _stop_flow_session(self) -> None:
        """Pause then stop the running session; failures are logged and dropped."""

        session, watcher = self._flow_session, self._flow_watcher
        self._flow_session = None
        self._flow_watcher = None
        self._flow_grace_timer.cancel()
        if watcher is not None and watcher is not asyncio.current_task():
            watcher.cancel()
        if session is None:
            return
        try:
            await session.pause()
            await session.stop()
        except Exception:
            logger.warning("related_list.flow_stop_failed widget_id=%s", self.widget_id, exc_info=True)

    def _reset_flow_state(self) -> None:
        self.flow_modal.close()
        self.flow_key = None
        self.flow_input_variables = []

    # Notifications and display

    def dismiss_permission_error(self) -> None:
        self.permission_error = None

    def _notify(self, title: str, message: str, variant: NotificationVariant) -> None:
        self.notifications.append(Notification(title=title, message=message, variant=variant))

    def drain_notifications(self) -> list[Notification]:
        drained, self.notifications = self.notifications, []
        return drained

    @property
    def title(self) -> str:
        base = self.config.list_title or f"Related {self.schema.object_label or self.config.child_object_api_name}"
        return f"{base} ({self.pagination.total_records})"

    @property
    def icon_name(self) -> str:
        return self.config.custom_icon_name or self.schema.icon_url or DEFAULT_ICON_NAME

    @property
    def icon_style(self) -> str:
        return f"background-color: {self.config.icon_background_color or DEFAULT_ICON_BACKGROUND};"

    def snapshot(self, *, drain_notifications: bool = False) -> WidgetSnapshot:
        notifications = self.drain_notifications() if drain_notifications else list(self.notifications)
        return WidgetSnapshot(
            widget_id=self.widget_id,
            title=self.title,
            icon_name=self.icon_name,
            icon_style=self.icon_style,
            columns=list(self.layout.columns),
            layout_mode=self.layout.mode,
            rows=[dict(row) for row in self.rows],
            page_number=self.pagination.page_number,
            page_size=self.pagination.page_size,
            total_records=self.pagination.total_records,
            total_pages=self.pagination.total_pages,
            is_first_page=self.pagination.is_first_page,
            is_last_page=self.pagination.is_last_page,
            is_loading=self.is_loading,
            error=self.error,
            permission_error=self.permission_error,
            selection=SelectionSnapshot(
                ids=self.selection.selected_ids,
                count=self.selection.count,
                show_bulk_delete=self.selection.has_selection and "delete" in self.granted_actions,
            ),
            modal_states=ModalStates(
                edit=self.edit_modal.phase,
                delete=self.delete_modal.phase,
                bulk_delete=self.bulk_delete_modal.phase,
                flow=self.flow_modal.phase,
            ),
            search_term=self.search.state.raw_term,
            committed_search_term=self.search.state.committed_term,
            sorted_by=self.sorted_by,
            sorted_direction=self.sorted_direction,
            filters=list(self.filters),
            filter_field_options=filter_field_options(self.schema, self.config.display_fields),
            filter_operator_options=list(FILTER_OPERATORS),
            filter_logic_options=list(LOGIC_OPERATORS),
            notifications=notifications,
            selected_record_id=self.selected_record_id,
            editable_fields=self.schema.editable_fields(),
            permissions=self.permissions,
            has_flow=self.config.has_flow,
            flow_title=self.config.flow_title,
            flow_input_variables=list(self.flow_input_variables),
            settings_menu_open=self.settings_menu_open,
            max_row_selection=self.settings.max_row_selection,
        )
