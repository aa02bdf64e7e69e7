from typing import List

from fastapi import APIRouter, Depends, status

from splitbook.api.deps import get_group_or_404, get_message_repo
from splitbook.models.chat import Message
from splitbook.models.group import Group
from splitbook.repositories.message_repo import MessageRepository
from splitbook.schemas.chat import MessageCreate

router = APIRouter()


@router.post("/{group_id}/messages", response_model=Message, status_code=status.HTTP_201_CREATED)
async def send_message(
    message_in: MessageCreate,
    group: Group = Depends(get_group_or_404),
    repo: MessageRepository = Depends(get_message_repo)
):
    return await repo.create_message(group.id, message_in)


@router.get("/{group_id}/messages", response_model=List[Message])
async def list_messages(
    group: Group = Depends(get_group_or_404),
    repo: MessageRepository = Depends(get_message_repo)
):
    """Group chat transcript"""
    return await repo.list_messages(group.id)
