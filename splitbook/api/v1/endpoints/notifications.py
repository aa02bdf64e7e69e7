from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from splitbook.api.deps import get_notification_service
from splitbook.models.chat import Notification
from splitbook.services.notification_service import NotificationService

router = APIRouter()


@router.get("", response_model=List[Notification])
async def list_notifications(
    user_id: str = Query(...),
    service: NotificationService = Depends(get_notification_service)
):
    """Latest notifications for a user"""
    return await service.list_for_user(user_id)


@router.post("/{notification_id}/read", response_model=Notification)
async def mark_notification_read(
    notification_id: str,
    service: NotificationService = Depends(get_notification_service)
):
    notification = await service.mark_read(notification_id)
    if not notification:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    return notification


@router.delete("/{notification_id}")
async def dismiss_notification(
    notification_id: str,
    service: NotificationService = Depends(get_notification_service)
):
    dismissed = await service.dismiss(notification_id)
    if not dismissed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")

    return {"success": True}
