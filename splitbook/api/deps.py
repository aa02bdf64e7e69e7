from fastapi import Depends, HTTPException, status

from splitbook.db.mongo import get_db
from splitbook.models.group import Group
from splitbook.repositories.group_repo import GroupRepository
from splitbook.repositories.message_repo import MessageRepository
from splitbook.repositories.participant_repo import ParticipantRepository
from splitbook.services.ledger_service import LedgerService
from splitbook.services.notification_service import NotificationService


def get_group_repo(db = Depends(get_db)) -> GroupRepository:
    return GroupRepository(db)


def get_participant_repo(db = Depends(get_db)) -> ParticipantRepository:
    return ParticipantRepository(db)


def get_message_repo(db = Depends(get_db)) -> MessageRepository:
    return MessageRepository(db)


def get_ledger_service(db = Depends(get_db)) -> LedgerService:
    return LedgerService(db)


def get_notification_service(db = Depends(get_db)) -> NotificationService:
    return NotificationService(db)


async def get_group_or_404(
    group_id: str,
    repo: GroupRepository = Depends(get_group_repo)
) -> Group:
    """Resolve the group in the path or fail with 404."""
    group = await repo.get_group(group_id)
    if not group:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found"
        )
    return group
