"""Related-list widget routes."""

from fastapi import APIRouter, Depends, HTTPException, Path, Request

from related_list.schemas.common import ApiResponse, DeleteResult
from related_list.schemas.events import WidgetEventRequest, WidgetEventResult
from related_list.schemas.widget import WidgetConfig, WidgetSnapshot
from related_list.services.controller import InteractionController
from related_list.services.errors import InvalidModalTransition
from related_list.services.events import apply_event
from related_list.services.registry import WidgetRegistry

router = APIRouter(prefix="/widgets")


def get_registry(request: Request) -> WidgetRegistry:
    return request.app.state.widget_registry


def _require_widget(registry: WidgetRegistry, widget_id: str) -> InteractionController:
    controller = registry.get(widget_id)
    if controller is None:
        raise HTTPException(status_code=404, detail="Widget not found")
    return controller


@router.post("", response_model=ApiResponse[WidgetSnapshot], status_code=201)
async def create_widget(
    payload: WidgetConfig,
    registry: WidgetRegistry = Depends(get_registry),
) -> ApiResponse[WidgetSnapshot]:
    """Create a widget and load its schema, permissions and first page."""

    controller = await registry.create(payload)
    return ApiResponse(data=controller.snapshot(drain_notifications=True))


@router.get("/{widget_id}", response_model=ApiResponse[WidgetSnapshot])
async def get_widget(
    widget_id: str = Path(..., min_length=1),
    registry: WidgetRegistry = Depends(get_registry),
) -> ApiResponse[WidgetSnapshot]:
    """Current widget state; pending notifications are handed out once."""

    controller = _require_widget(registry, widget_id)
    return ApiResponse(data=controller.snapshot(drain_notifications=True))


@router.delete("/{widget_id}", response_model=ApiResponse[DeleteResult])
async def remove_widget(
    widget_id: str = Path(..., min_length=1),
    registry: WidgetRegistry = Depends(get_registry),
) -> ApiResponse[DeleteResult]:
    """Tear down one widget."""

    removed = await registry.remove(widget_id)
    if not removed:
        raise HTTPException(status_code=404, detail="Widget not found")
    return ApiResponse(data=DeleteResult(id=widget_id, deleted=True))


@router.post("/{widget_id}/events", response_model=ApiResponse[WidgetEventResult])
async def post_widget_event(
    payload: WidgetEventRequest,
    widget_id: str = Path(..., min_length=1),
    registry: WidgetRegistry = Depends(get_registry),
) -> ApiResponse[WidgetEventResult]:
    """Apply one user or host event and return the resulting state."""

    controller = _require_widget(registry, widget_id)
    try:
        navigation = await apply_event(controller, payload.root)
    except InvalidModalTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return ApiResponse(
        data=WidgetEventResult(snapshot=controller.snapshot(drain_notifications=True), navigation=navigation)
    )
