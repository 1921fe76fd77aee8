"""In-process registry of live widget controllers."""

from __future__ import annotations

import logging
from collections.abc import Callable
from uuid import uuid4

from related_list.schemas.widget import WidgetConfig
from related_list.services.controller import InteractionController

logger = logging.getLogger(__name__)

ControllerFactory = Callable[[WidgetConfig, str], InteractionController]


class WidgetRegistry:
    """Creates, looks up and tears down widget controllers by id."""

    def __init__(self, factory: ControllerFactory) -> None:
        self._factory = factory
        self._widgets: dict[str, InteractionController] = {}

    def __len__(self) -> int:
        return len(self._widgets)

    async def create(self, config: WidgetConfig) -> InteractionController:
        widget_id = uuid4().hex
        controller = self._factory(config, widget_id)
        self._widgets[widget_id] = controller
        await controller.start()
        logger.info(
            "related_list.widget_created widget_id=%s child_object=%s record_id=%s",
            widget_id,
            config.child_object_api_name,
            config.record_id,
        )
        return controller

    def get(self, widget_id: str) -> InteractionController | None:
        return self._widgets.get(widget_id)

    async def remove(self, widget_id: str) -> bool:
        controller = self._widgets.pop(widget_id, None)
        if controller is None:
            return False
        await controller.teardown()
        return True

    async def close_all(self) -> None:
        for widget_id in list(self._widgets):
            await self.remove(widget_id)
