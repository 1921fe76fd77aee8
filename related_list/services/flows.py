"""Guided process sessions rendered by the host."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator

from related_list.schemas.widget import FlowInputVariable, FlowStatusEvent

logger = logging.getLogger(__name__)


class HostFlowSession:
    """A process the host renders itself.

    Status comes back through the widget's ``flow-status`` event, so the event
    stream carries nothing and simply ends once the session is stopped.
    """

    def __init__(self, flow_name: str, input_variables: list[FlowInputVariable]) -> None:
        self.flow_name = flow_name
        self.input_variables = list(input_variables)
        self.paused = False
        self._stopped = asyncio.Event()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    def events(self) -> AsyncIterator[FlowStatusEvent]:
        return self

    def __aiter__(self) -> AsyncIterator[FlowStatusEvent]:
        return self

    async def __anext__(self) -> FlowStatusEvent:
        await self._stopped.wait()
        raise StopAsyncIteration

    async def pause(self) -> None:
        self.paused = True

    async def stop(self) -> None:
        if self.stopped:
            return
        self._stopped.set()
        logger.info("related_list.flow_session_stopped flow=%s", self.flow_name)


class HostFlowLauncher:
    """Hands out host-rendered sessions."""

    async def launch(self, flow_name: str, input_variables: list[FlowInputVariable]) -> HostFlowSession:
        return HostFlowSession(flow_name, input_variables)
