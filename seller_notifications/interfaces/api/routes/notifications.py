"""Endpoints and websocket handler for seller notifications."""

from __future__ import annotations

import logging

import anyio
from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    Response,
    WebSocket,
    WebSocketDisconnect,
    status,
)

from seller_notifications.application.use_cases.notifications import (
    ListOptions,
    NotificationAccessLayer,
    NotificationFields,
)
from seller_notifications.domain.entities import AccountContext, Notification
from seller_notifications.infrastructure.notifications import (
    Subscription,
    serialize_change,
)
from seller_notifications.interfaces.api.dependencies import (
    get_access_layer,
    get_account_context,
    resolve_account,
)
from seller_notifications.interfaces.api.routes_helpers import unwrap_result
from seller_notifications.interfaces.api.schemas import (
    NotificationCount,
    NotificationCreate,
    NotificationIdsRequest,
    NotificationRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


@router.get("/", response_model=list[NotificationRead])
async def list_notifications(
    limit: int | None = Query(default=None, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    type: str | None = Query(default=None),
    unread_only: bool = Query(default=False),
    account: AccountContext | None = Depends(get_account_context),
    access: NotificationAccessLayer = Depends(get_access_layer),
) -> list[NotificationRead]:
    """Return the notifications of the authenticated account, newest first."""

    options = ListOptions(limit=limit, offset=offset, type=type, unread_only=unread_only)
    notifications = unwrap_result(await access.list(account, options))
    return [_to_schema(notification) for notification in notifications]


@router.get("/count", response_model=NotificationCount)
async def count_notifications(
    unread_only: bool = Query(default=False),
    account: AccountContext | None = Depends(get_account_context),
    access: NotificationAccessLayer = Depends(get_access_layer),
) -> NotificationCount:
    count = unwrap_result(await access.count(account, unread_only=unread_only))
    return NotificationCount(count=count)


@router.post("/", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
async def create_notification(
    payload: NotificationCreate,
    account: AccountContext | None = Depends(get_account_context),
    access: NotificationAccessLayer = Depends(get_access_layer),
) -> NotificationRead:
    fields = NotificationFields(
        title=payload.title,
        type=payload.type,
        message=payload.message,
        link=payload.link,
    )
    return _to_schema(unwrap_result(await access.create(account, fields)))


@router.post("/read-all", response_model=list[NotificationRead])
async def mark_all_notifications_read(
    account: AccountContext | None = Depends(get_account_context),
    access: NotificationAccessLayer = Depends(get_access_layer),
) -> list[NotificationRead]:
    updated = unwrap_result(await access.mark_all_read(account))
    return [_to_schema(notification) for notification in updated]


@router.post("/read", response_model=list[NotificationRead])
async def mark_notifications_read(
    payload: NotificationIdsRequest,
    account: AccountContext | None = Depends(get_account_context),
    access: NotificationAccessLayer = Depends(get_access_layer),
) -> list[NotificationRead]:
    updated = unwrap_result(await access.mark_many_read(account, payload.unique_ids()))
    return [_to_schema(notification) for notification in updated]


@router.post("/delete", response_model=list[NotificationRead])
async def delete_notifications(
    payload: NotificationIdsRequest,
    account: AccountContext | None = Depends(get_account_context),
    access: NotificationAccessLayer = Depends(get_access_layer),
) -> list[NotificationRead]:
    deleted = unwrap_result(await access.delete_many(account, payload.unique_ids()))
    return [_to_schema(notification) for notification in deleted]


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
async def delete_all_notifications(
    account: AccountContext | None = Depends(get_account_context),
    access: NotificationAccessLayer = Depends(get_access_layer),
) -> Response:
    unwrap_result(await access.delete_all(account))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{notification_id}", response_model=NotificationRead)
async def get_notification(
    notification_id: str,
    account: AccountContext | None = Depends(get_account_context),
    access: NotificationAccessLayer = Depends(get_access_layer),
) -> NotificationRead:
    return _to_schema(unwrap_result(await access.get_by_id(account, notification_id)))


@router.post("/{notification_id}/read", response_model=NotificationRead)
async def mark_notification_read(
    notification_id: str,
    account: AccountContext | None = Depends(get_account_context),
    access: NotificationAccessLayer = Depends(get_access_layer),
) -> NotificationRead:
    return _to_schema(unwrap_result(await access.mark_read(account, notification_id)))


@router.delete("/{notification_id}", response_model=NotificationRead)
async def delete_notification(
    notification_id: str,
    account: AccountContext | None = Depends(get_account_context),
    access: NotificationAccessLayer = Depends(get_access_layer),
) -> NotificationRead:
    return _to_schema(unwrap_result(await access.delete(account, notification_id)))


@router.websocket("/ws")
async def notifications_websocket(
    websocket: WebSocket,
    access: NotificationAccessLayer = Depends(get_access_layer),
) -> None:
    """Websocket endpoint that streams change events to the authenticated account."""

    try:
        account = resolve_account(websocket.query_params.get("token"))
    except HTTPException:
        account = None
    if account is None:
        await websocket.close(code=1008)
        return

    subscribed = access.subscribe(account)
    if not subscribed.ok:
        await websocket.close(code=1008)
        return
    subscription = subscribed.data

    await websocket.accept()
    send_lock = anyio.Lock()
    try:
        async with anyio.create_task_group() as task_group:
            task_group.start_soon(_forward_changes, websocket, subscription, send_lock)
            await _handle_client_messages(websocket, account, access, send_lock)
            task_group.cancel_scope.cancel()
    finally:
        access.unsubscribe(subscription)
    logger.info("Notification websocket closed for user %s", account.user_id)


async def _send(websocket: WebSocket, send_lock: anyio.Lock, payload: dict) -> None:
    async with send_lock:
        await websocket.send_json(payload)


async def _forward_changes(
    websocket: WebSocket, subscription: Subscription, send_lock: anyio.Lock
) -> None:
    try:
        async for change in subscription:
            await _send(websocket, send_lock, serialize_change(change))
    except WebSocketDisconnect:
        logger.info("Notification websocket disconnected while forwarding changes")


async def _handle_client_messages(
    websocket: WebSocket,
    account: AccountContext,
    access: NotificationAccessLayer,
    send_lock: anyio.Lock,
) -> None:
    try:
        await _receive_client_messages(websocket, account, access, send_lock)
    except WebSocketDisconnect:
        return


async def _receive_client_messages(
    websocket: WebSocket,
    account: AccountContext,
    access: NotificationAccessLayer,
    send_lock: anyio.Lock,
) -> None:
    while True:
        try:
            message = await websocket.receive_json()
        except ValueError:
            continue

        if not isinstance(message, dict):
            continue

        message_type = message.get("type")
        if message_type == "ping":
            await _send(websocket, send_lock, {"type": "pong"})
            continue

        if message_type == "ack":
            ids = message.get("ids", [])
            if isinstance(ids, list) and ids:
                result = await access.mark_many_read(account, [str(i) for i in ids])
                if not result.ok:
                    await _send(
                        websocket,
                        send_lock,
                        {"type": "error", "data": {"message": result.error.message}},
                    )
            continue
