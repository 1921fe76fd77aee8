"""Async tests for the widget interaction controller with stub services."""

from __future__ import annotations

import asyncio
import unittest

from related_list.config import Settings
from related_list.schemas.object_schema import FieldDescriptor, ObjectPermissions, ObjectSchema
from related_list.schemas.records import FetchRecordsRequest, RecordPage
from related_list.schemas.widget import FlowInputVariable, FlowStatusEvent, WidgetConfig
from related_list.services.controller import InteractionController, encode_default_field_values
from related_list.services.errors import InvalidModalTransition, RecordServiceError
from related_list.services.flows import HostFlowLauncher
from related_list.services.gateways import StaticViewport

NAMES = ["Ada", "Grace", "Alan", "Katherine", "Edsger", "Barbara", "Donald", "Margaret", "John", "Frances", "Ken", "Radia"]


def _contacts() -> list[dict]:
    return [
        {
            "Id": f"003{index:02d}",
            "Name": name,
            "Email": f"{name.lower()}@example.com",
            "Phone": "5551234567",
        }
        for index, name in enumerate(NAMES)
    ]


def _contact_schema() -> ObjectSchema:
    return ObjectSchema(
        api_name="Contact",
        label="Contact",
        theme_icon_url="standard:contact",
        fields={
            "Name": FieldDescriptor(api_name="Name", label="Full Name", computed=True),
            "Email": FieldDescriptor(api_name="Email", label="Email", updateable=True),
            "Phone": FieldDescriptor(api_name="Phone", label="Business Phone", updateable=True),
        },
    )


class _StubRecordService:
    def __init__(self, records: list[dict]) -> None:
        self.records = records
        self.requests: list[FetchRecordsRequest] = []
        self.deleted: list[str] = []
        self.fetch_error: Exception | None = None
        self.delete_errors: dict[str, Exception] = {}

    async def fetch_records(self, request: FetchRecordsRequest) -> RecordPage:
        self.requests.append(request)
        if self.fetch_error is not None:
            raise self.fetch_error
        matching = self.records
        term = (request.search_term or "").lower()
        if term:
            matching = [record for record in matching if term in record["Name"].lower()]
        start = (request.page_number - 1) * request.page_size
        page = matching[start : start + request.page_size]
        return RecordPage(records=[dict(record) for record in page], total_records=len(matching))

    async def delete_record(self, record_id: str, object_api_name: str) -> None:
        if record_id in self.delete_errors:
            raise self.delete_errors[record_id]
        self.deleted.append(record_id)
        self.records = [record for record in self.records if record["Id"] != record_id]


class _GatedRecordService(_StubRecordService):
    """Each fetch waits until the test opens its gate."""

    def __init__(self, records: list[dict]) -> None:
        super().__init__(records)
        self.gates: list[asyncio.Event] = []

    async def fetch_records(self, request: FetchRecordsRequest) -> RecordPage:
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        return await super().fetch_records(request)


class _StubSchemaService:
    def __init__(self, schema: ObjectSchema | None = None, error: Exception | None = None) -> None:
        self.schema = schema or _contact_schema()
        self.error = error

    async def fetch_schema(self, object_api_name: str) -> ObjectSchema:
        if self.error is not None:
            raise self.error
        return self.schema


class _StubPermissionService:
    def __init__(self, permissions: ObjectPermissions) -> None:
        self.permissions = permissions

    async def fetch_permissions(self, object_api_name: str) -> ObjectPermissions:
        return self.permissions


class _StubFlowSession:
    def __init__(self, events: list[FlowStatusEvent]) -> None:
        self._events = events
        self.paused = False
        self.stopped = False

    async def events(self):
        for event in self._events:
            yield event

    async def pause(self) -> None:
        self.paused = True

    async def stop(self) -> None:
        self.stopped = True


class _StubFlowLauncher:
    def __init__(self, session: _StubFlowSession) -> None:
        self.session = session
        self.launched: list[tuple[str, list[FlowInputVariable]]] = []

    async def launch(self, flow_name: str, input_variables: list[FlowInputVariable]) -> _StubFlowSession:
        self.launched.append((flow_name, input_variables))
        return self.session


class _QueuedFlowLauncher(_StubFlowLauncher):
    """Hands out a different session on each launch."""

    def __init__(self, sessions: list[_StubFlowSession]) -> None:
        super().__init__(sessions[0])
        self.sessions = list(sessions)

    async def launch(self, flow_name: str, input_variables: list[FlowInputVariable]) -> _StubFlowSession:
        self.launched.append((flow_name, input_variables))
        return self.sessions.pop(0)


class _RecordingHostLauncher(HostFlowLauncher):
    async def launch(self, flow_name, input_variables):
        self.session = await super().launch(flow_name, input_variables)
        return self.session


ALL_ACCESS = ObjectPermissions(is_createable=True, is_updateable=True, is_deletable=True)


class InteractionControllerTests(unittest.IsolatedAsyncioTestCase):
    def _settings(self, **overrides) -> Settings:
        values = {
            "search_debounce_ms": 10,
            "resize_debounce_ms": 10,
            "flow_close_grace_ms": 10,
        }
        values.update(overrides)
        return Settings(**values)

    def _build(
        self,
        *,
        records: _StubRecordService | None = None,
        schema_service: _StubSchemaService | None = None,
        permissions: ObjectPermissions = ALL_ACCESS,
        flows: _StubFlowLauncher | None = None,
        viewport: StaticViewport | None = None,
        settings: Settings | None = None,
        **config_overrides,
    ) -> InteractionController:
        config_values = {
            "child_object_api_name": "Contact",
            "parent_lookup_field": "AccountId",
            "record_id": "001A",
            "display_fields": ["Name", "Email", "Phone"],
            "sortable_fields": ["Name"],
            "searchable_fields": ["Name"],
            "page_size": 5,
        }
        config_values.update(config_overrides)
        self.records = records or _StubRecordService(_contacts())
        return InteractionController(
            WidgetConfig(**config_values),
            records=self.records,
            schema_service=schema_service or _StubSchemaService(),
            permission_service=_StubPermissionService(permissions),
            flows=flows,
            viewport=viewport,
            settings=settings or self._settings(),
            widget_id="w-1",
        )

    async def test_start_loads_schema_permissions_and_first_page(self) -> None:
        controller = self._build(permissions=ObjectPermissions(is_updateable=True, is_deletable=False))
        await controller.start()
        snapshot = controller.snapshot()

        self.assertEqual(snapshot.title, "Related Contact (12)")
        self.assertEqual(snapshot.icon_name, "standard:contact")
        self.assertEqual(snapshot.icon_style, "background-color: #f4b400;")
        self.assertEqual([row["rowNumber"] for row in snapshot.rows], [1, 2, 3, 4, 5])
        self.assertEqual(snapshot.total_pages, 3)
        self.assertTrue(snapshot.is_first_page)
        self.assertFalse(snapshot.is_last_page)
        self.assertFalse(snapshot.is_loading)
        self.assertEqual(snapshot.columns[1].label, "Full Name")
        self.assertEqual(
            [action["name"] for action in snapshot.columns[-1].type_attributes["rowActions"]],
            ["view", "edit"],
        )
        self.assertEqual([field.api_name for field in snapshot.editable_fields], ["Email", "Phone"])

        request = self.records.requests[0]
        self.assertEqual(request.parent_lookup_field, "AccountId")
        self.assertEqual(request.parent_id, "001A")
        self.assertEqual(request.fields, ["Name", "Email", "Phone"])

        self.assertIsNone(controller.on_row_action("delete", snapshot.rows[0]))
        self.assertEqual(controller.delete_modal.phase, "closed")

    async def test_paging_is_bounded(self) -> None:
        controller = self._build()
        await controller.start()

        self.assertFalse(await controller.page_previous())
        self.assertEqual(len(self.records.requests), 1)

        self.assertTrue(await controller.page_next())
        self.assertTrue(await controller.page_next())
        self.assertEqual([row["rowNumber"] for row in controller.rows], [11, 12])
        self.assertTrue(controller.pagination.is_last_page)
        self.assertFalse(await controller.page_next())
        self.assertEqual(len(self.records.requests), 3)

    async def test_search_commits_after_debounce_and_resets_page(self) -> None:
        controller = self._build()
        await controller.start()
        await controller.page_next()

        controller.on_search_input("ad")
        controller.on_search_input("ada")
        self.assertEqual(controller.pagination.page_number, 2)
        self.assertEqual(controller.snapshot().search_term, "ada")
        self.assertEqual(controller.snapshot().committed_search_term, "")

        await asyncio.sleep(0.05)
        await controller.wait_idle()

        self.assertEqual(controller.pagination.page_number, 1)
        self.assertEqual(len(self.records.requests), 3)
        last = self.records.requests[-1]
        self.assertEqual(last.search_term, "ada")
        self.assertEqual(last.searchable_fields, ["Name"])
        self.assertEqual([row["Name"] for row in controller.rows], ["Ada"])

    async def test_sort_is_reapplied_after_refresh(self) -> None:
        controller = self._build()
        await controller.start()

        controller.on_sort_change("nameUrl", "desc")
        expected = ["Katherine", "Grace", "Edsger", "Alan", "Ada"]
        self.assertEqual([row["Name"] for row in controller.rows], expected)
        self.assertEqual([row["rowNumber"] for row in controller.rows], [1, 2, 3, 4, 5])

        await controller.refresh()
        self.assertEqual([row["Name"] for row in controller.rows], expected)

    async def test_fetch_failure_clears_rows_and_selection(self) -> None:
        controller = self._build()
        await controller.start()
        controller.on_selection_changed(controller.rows[:2])

        self.records.fetch_error = RecordServiceError("Query timed out")
        with self.assertLogs("related_list.services.controller", level="ERROR"):
            await controller.refresh()
        snapshot = controller.snapshot(drain_notifications=True)

        self.assertEqual(snapshot.rows, [])
        self.assertEqual(snapshot.selection.ids, [])
        self.assertEqual(snapshot.error, "Query timed out")
        self.assertIsNone(snapshot.permission_error)
        self.assertFalse(snapshot.is_loading)
        self.assertEqual([note.variant for note in snapshot.notifications], ["error"])
        self.assertEqual(controller.notifications, [])

    async def test_permission_failure_sets_persistent_banner(self) -> None:
        controller = self._build()
        self.records.fetch_error = RecordServiceError("INSUFFICIENT_ACCESS: insufficient access rights")
        with self.assertLogs("related_list.services.controller", level="ERROR"):
            await controller.start()

        self.assertEqual(controller.permission_error, "INSUFFICIENT_ACCESS: insufficient access rights")
        self.assertEqual(controller.notifications, [])
        controller.dismiss_permission_error()
        self.assertIsNone(controller.permission_error)

    async def test_schema_failure_is_logged_without_notification(self) -> None:
        controller = self._build(schema_service=_StubSchemaService(error=RuntimeError("describe failed")))
        with self.assertLogs("related_list.services.controller", level="ERROR") as captured:
            await controller.start()

        self.assertTrue(any("schema_fetch_failed" in line for line in captured.output))
        self.assertEqual(controller.notifications, [])
        self.assertEqual(len(controller.rows), 5)
        self.assertEqual(controller.layout.columns[1].label, "Name")
        self.assertEqual(controller.title, "Related Contact (12)")

    async def test_delete_success_refreshes_and_discards_selection(self) -> None:
        controller = self._build()
        await controller.start()
        target = controller.rows[0]
        controller.on_selection_changed(controller.rows[:2])

        self.assertIsNone(controller.on_row_action("delete", target))
        self.assertEqual(controller.delete_modal.phase, "open")
        self.assertTrue(await controller.confirm_delete())

        self.assertEqual(self.records.deleted, [target["Id"]])
        self.assertEqual(controller.delete_modal.phase, "closed")
        self.assertIsNone(controller.selected_record_id)
        self.assertNotIn(target["Id"], controller.selection.selected_ids)
        self.assertEqual(controller.selection.count, 1)
        self.assertEqual(controller.pagination.total_records, 11)
        self.assertEqual(controller.notifications[-1].message, "Record deleted successfully")

    async def test_delete_failure_closes_modal(self) -> None:
        controller = self._build()
        await controller.start()
        locked, denied = controller.rows[0], controller.rows[1]
        self.records.delete_errors = {
            locked["Id"]: RecordServiceError("Record is locked"),
            denied["Id"]: RecordServiceError("INSUFFICIENT_ACCESS: cannot delete"),
        }

        controller.on_row_action("delete", locked)
        with self.assertLogs("related_list.services.controller", level="ERROR"):
            self.assertFalse(await controller.confirm_delete())
        self.assertEqual(controller.delete_modal.phase, "closed")
        self.assertEqual(controller.notifications[-1].message, "Record is locked")
        self.assertFalse(controller.is_loading)

        controller.on_row_action("delete", denied)
        with self.assertLogs("related_list.services.controller", level="ERROR"):
            await controller.confirm_delete()
        self.assertEqual(controller.permission_error, "INSUFFICIENT_ACCESS: cannot delete")

    async def test_confirm_delete_requires_open_modal(self) -> None:
        controller = self._build()
        await controller.start()
        with self.assertRaises(InvalidModalTransition):
            await controller.confirm_delete()

    async def test_bulk_delete_partial_failure_keeps_selection(self) -> None:
        controller = self._build()
        await controller.start()
        chosen = controller.rows[:3]
        controller.on_selection_changed(chosen)
        self.records.delete_errors = {chosen[1]["Id"]: RecordServiceError("Record is locked")}
        requests_before = len(self.records.requests)

        self.assertTrue(controller.open_bulk_delete())
        with self.assertLogs("related_list.services.controller", level="ERROR"):
            self.assertFalse(await controller.confirm_bulk_delete())

        self.assertEqual(controller.bulk_delete_modal.phase, "open")
        self.assertEqual(controller.selection.selected_ids, [row["Id"] for row in chosen])
        self.assertEqual(controller.notifications[-1].variant, "error")
        self.assertEqual(controller.notifications[-1].message, "Record is locked")
        self.assertEqual(len(self.records.requests), requests_before)

    async def test_bulk_delete_success(self) -> None:
        controller = self._build()
        await controller.start()
        self.assertFalse(controller.open_bulk_delete())

        controller.on_selection_changed(controller.rows[:3])
        self.assertTrue(controller.snapshot().selection.show_bulk_delete)
        controller.open_bulk_delete()
        self.assertTrue(await controller.confirm_bulk_delete())

        self.assertEqual(len(self.records.deleted), 3)
        self.assertEqual(controller.selection.count, 0)
        self.assertEqual(controller.bulk_delete_modal.phase, "closed")
        self.assertEqual(controller.notifications[-1].message, "3 records deleted successfully")
        self.assertEqual(controller.pagination.total_records, 9)

    async def test_edit_failure_returns_to_open_then_success_closes(self) -> None:
        controller = self._build()
        await controller.start()
        controller.on_row_action("edit", controller.rows[0])
        self.assertEqual(controller.edit_modal.phase, "open")

        controller.submit_edit()
        self.assertTrue(controller.is_loading)
        message = controller.edit_failed({"output": {"fieldErrors": {"Email": [{"message": "Invalid email"}]}}})
        self.assertEqual(message, "Invalid email")
        self.assertEqual(controller.edit_modal.phase, "open")
        self.assertFalse(controller.is_loading)

        controller.submit_edit()
        requests_before = len(self.records.requests)
        await controller.edit_succeeded()
        self.assertEqual(controller.edit_modal.phase, "closed")
        self.assertEqual(controller.notifications[-1].message, "Record updated successfully")
        self.assertEqual(len(self.records.requests), requests_before + 1)

    async def test_row_action_navigation(self) -> None:
        controller = self._build()
        await controller.start()
        row = dict(controller.rows[0], Phone="(555) 123-4567")

        view = controller.on_row_action("view", row)
        self.assertEqual(view.kind, "record_page")
        self.assertEqual(view.record_id, row["Id"])
        self.assertEqual(controller.on_row_action("Email", row).url, "mailto:ada@example.com")
        self.assertEqual(controller.on_row_action("Phone", row).url, "tel:5551234567")
        self.assertIsNone(controller.on_row_action("Phone", dict(row, Phone=None)))

        new_record = controller.new_record()
        self.assertEqual(new_record.kind, "object_page")
        self.assertEqual(new_record.action, "new")
        self.assertEqual(new_record.default_field_values, "AccountId=001A")
        self.assertEqual(encode_default_field_values({"AccountId": "a b/c"}), "AccountId=a%20b%2Fc")

    async def test_stale_results_win_unless_discarded(self) -> None:
        for discard, expected_first_row in ((False, 1), (True, 6)):
            records = _GatedRecordService(_contacts())
            controller = self._build(records=records, settings=self._settings(discard_stale_fetches=discard))

            first = asyncio.create_task(controller.refresh())
            await asyncio.sleep(0.01)
            controller.pagination.page_number = 2
            second = asyncio.create_task(controller.refresh())
            await asyncio.sleep(0.01)

            records.gates[1].set()
            await second
            records.gates[0].set()
            await first

            self.assertEqual(controller.rows[0]["rowNumber"], expected_first_row)
            self.assertFalse(controller.is_loading)

    async def test_view_is_granted_even_when_not_configured(self) -> None:
        controller = self._build(row_actions=["edit", "delete"])
        await controller.start()

        self.assertEqual(controller.granted_actions, ["view", "edit", "delete"])
        self.assertEqual(
            [action["name"] for action in controller.layout.columns[-1].type_attributes["rowActions"]],
            ["view", "edit", "delete"],
        )
        navigation = controller.on_row_action("view", controller.rows[0])
        self.assertEqual(navigation.kind, "record_page")
        self.assertEqual(navigation.record_id, controller.rows[0]["Id"])

    async def test_superseded_fetch_leaves_loading_flag_to_newest(self) -> None:
        for discard in (False, True):
            records = _GatedRecordService(_contacts())
            controller = self._build(records=records, settings=self._settings(discard_stale_fetches=discard))

            first = asyncio.create_task(controller.refresh())
            await asyncio.sleep(0.01)
            second = asyncio.create_task(controller.refresh())
            await asyncio.sleep(0.01)

            records.gates[0].set()
            await first
            self.assertTrue(controller.is_loading)

            records.gates[1].set()
            await second
            self.assertFalse(controller.is_loading)

    async def test_filter_rows_drive_the_fetch(self) -> None:
        controller = self._build()
        await controller.start()
        await controller.page_next()
        blank = controller.filters[0]
        self.assertEqual(self.records.requests[-1].filters, [])

        self.assertTrue(await controller.update_filter(blank.id, field="Name", operator="LIKE", value="a"))
        self.assertEqual(controller.pagination.page_number, 1)
        request = self.records.requests[-1]
        self.assertEqual(
            [(condition.field, condition.operator, condition.value) for condition in request.filters],
            [("Name", "LIKE", "a")],
        )

        requests_before = len(self.records.requests)
        controller.add_filter()
        self.assertEqual(len(self.records.requests), requests_before)
        self.assertEqual(len(controller.snapshot().filters), 2)

        self.assertTrue(await controller.remove_filter(blank.id))
        self.assertEqual(self.records.requests[-1].filters, [])
        with self.assertLogs("related_list.services.controller", level="WARNING"):
            self.assertFalse(await controller.remove_filter("filter-missing"))

        snapshot = controller.snapshot()
        self.assertEqual([option.value for option in snapshot.filter_logic_options], ["AND", "OR"])
        self.assertEqual(len(snapshot.filter_operator_options), 8)

    async def test_relaunch_stops_the_previous_flow(self) -> None:
        first, second = _StubFlowSession([]), _StubFlowSession([])
        controller = self._build(flows=_QueuedFlowLauncher([first, second]), flow_name="Onboard_Contact")
        await controller.start()

        self.assertTrue(await controller.launch_process())
        self.assertTrue(await controller.launch_process())
        self.assertTrue(first.paused)
        self.assertTrue(first.stopped)
        self.assertFalse(second.stopped)
        self.assertEqual(controller.flow_modal.phase, "open")

        await controller.close_process()
        self.assertTrue(second.paused)
        self.assertTrue(second.stopped)

    async def test_teardown_stops_open_flow(self) -> None:
        session = _StubFlowSession([])
        controller = self._build(flows=_StubFlowLauncher(session), flow_name="Onboard_Contact")
        await controller.start()
        await controller.launch_process()

        await controller.teardown()

        self.assertTrue(session.paused)
        self.assertTrue(session.stopped)

    async def test_flow_status_without_open_flow_is_ignored(self) -> None:
        controller = self._build()
        await controller.start()
        requests_before = len(self.records.requests)

        await controller.on_flow_status(FlowStatusEvent(status="FINISHED"))
        await asyncio.sleep(0.03)
        await controller.wait_idle()

        self.assertEqual(controller.notifications, [])
        self.assertEqual(len(self.records.requests), requests_before)

    async def test_host_rendered_flow_finishes_from_status_event(self) -> None:
        launcher = _RecordingHostLauncher()
        controller = self._build(flows=launcher, flow_name="Onboard_Contact")
        await controller.start()
        self.assertTrue(await controller.launch_process())
        self.assertFalse(launcher.session.stopped)

        await controller.on_flow_status(FlowStatusEvent(status="FINISHED"))
        await asyncio.sleep(0.05)
        await controller.wait_idle()

        self.assertTrue(launcher.session.paused)
        self.assertTrue(launcher.session.stopped)
        self.assertEqual(controller.flow_modal.phase, "closed")
        self.assertEqual(controller.notifications[-1].message, "Flow completed successfully")

    async def test_host_session_stream_ends_when_stopped(self) -> None:
        session = await HostFlowLauncher().launch("Onboard_Contact", [])

        async def collect() -> list[FlowStatusEvent]:
            return [event async for event in session.events()]

        collecting = asyncio.create_task(collect())
        await asyncio.sleep(0.01)
        self.assertFalse(collecting.done())

        await session.stop()
        self.assertEqual(await collecting, [])

    async def test_flow_finished_closes_after_grace_and_refreshes(self) -> None:
        session = _StubFlowSession([FlowStatusEvent(status="FINISHED")])
        launcher = _StubFlowLauncher(session)
        controller = self._build(flows=launcher, flow_name="Onboard_Contact")
        await controller.start()
        requests_before = len(self.records.requests)

        self.assertTrue(await controller.launch_process())
        name, inputs = launcher.launched[0]
        self.assertEqual(name, "Onboard_Contact")
        self.assertEqual([(variable.name, variable.value) for variable in inputs], [("recordId", "001A")])

        await asyncio.sleep(0.05)
        await controller.wait_idle()

        self.assertTrue(session.paused)
        self.assertTrue(session.stopped)
        self.assertEqual(controller.flow_modal.phase, "closed")
        self.assertEqual(controller.flow_input_variables, [])
        self.assertEqual(controller.notifications[-1].message, "Flow completed successfully")
        self.assertEqual(len(self.records.requests), requests_before + 1)

    async def test_flow_error_closes_immediately(self) -> None:
        session = _StubFlowSession([FlowStatusEvent(status="ERROR", message="Bad input")])
        controller = self._build(flows=_StubFlowLauncher(session), flow_name="Onboard_Contact")
        await controller.start()
        requests_before = len(self.records.requests)

        with self.assertLogs("related_list.services.controller", level="ERROR"):
            await controller.launch_process()
            await asyncio.sleep(0.02)

        self.assertTrue(session.stopped)
        self.assertEqual(controller.flow_modal.phase, "closed")
        self.assertEqual(controller.notifications[-1].message, "Bad input")
        self.assertEqual(len(self.records.requests), requests_before)

    async def test_launch_without_flow_name_notifies(self) -> None:
        controller = self._build()
        self.assertFalse(await controller.launch_process())
        self.assertEqual(controller.notifications[-1].message, "No flow specified")
        self.assertEqual(controller.flow_modal.phase, "closed")

    async def test_column_resize_reset_and_debounced_container_resize(self) -> None:
        viewport = StaticViewport(1000)
        controller = self._build(viewport=viewport, display_fields=["Name", "Email"], sortable_fields=[])
        await controller.start()
        self.assertEqual(controller.layout.columns[1].initial_width, 430)

        controller.on_column_resize("nameUrl", 333)
        self.assertEqual(controller.layout.columns[1].initial_width, 333)

        controller.toggle_settings_menu()
        self.assertTrue(controller.settings_menu_open)
        controller.reset_column_widths()
        self.assertFalse(controller.settings_menu_open)
        self.assertEqual(controller.layout.columns[1].initial_width, 430)
        self.assertEqual(controller.notifications[-1].message, "Column widths have been reset")

        controller.on_container_resize(2000)
        controller.on_container_resize(2000)
        self.assertEqual(controller.layout.columns[1].initial_width, 430)
        await asyncio.sleep(0.05)
        self.assertEqual(controller.layout.columns[1].initial_width, 930)

    async def test_selection_is_capped_and_reconciled(self) -> None:
        controller = self._build(settings=self._settings(max_row_selection=2))
        await controller.start()

        controller.on_selection_changed(controller.rows[:3])
        self.assertEqual(controller.selection.count, 2)

        controller.select_ids([controller.rows[4]["Id"]])
        await controller.page_next()
        self.assertEqual(controller.selection.selected_ids, [])

    async def test_teardown_stops_applying_results(self) -> None:
        controller = self._build()
        await controller.start()
        requests_before = len(self.records.requests)

        controller.on_search_input("ada")
        await controller.teardown()
        await asyncio.sleep(0.03)
        await controller.refresh()

        self.assertTrue(controller.is_closed)
        self.assertEqual(len(self.records.requests), requests_before)


if __name__ == "__main__":
    unittest.main()
