from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from splitbook.api.deps import get_group_or_404, get_ledger_service, get_participant_repo
from splitbook.models.group import Group
from splitbook.models.ledger import Participant
from splitbook.repositories.participant_repo import ParticipantRepository
from splitbook.schemas.group import ParticipantCreate, ParticipantUpdate
from splitbook.services.ledger_service import LedgerService
from splitbook.utils.ledger_validation import ParticipantInUseError

router = APIRouter()


@router.post("/{group_id}/participants", response_model=Participant, status_code=status.HTTP_201_CREATED)
async def add_participant(
    participant_in: ParticipantCreate,
    group: Group = Depends(get_group_or_404),
    repo: ParticipantRepository = Depends(get_participant_repo)
):
    """Add a participant to the group's ledger"""
    return await repo.create_participant(group.id, participant_in)


@router.get("/{group_id}/participants", response_model=List[Participant])
async def list_participants(
    group: Group = Depends(get_group_or_404),
    repo: ParticipantRepository = Depends(get_participant_repo)
):
    return await repo.list_participants(group.id)


@router.patch("/{group_id}/participants/{participant_id}", response_model=Participant)
async def update_participant(
    participant_id: str,
    participant_in: ParticipantUpdate,
    group: Group = Depends(get_group_or_404),
    repo: ParticipantRepository = Depends(get_participant_repo)
):
    """Edit a participant's name or email"""
    participant = await repo.update_participant(group.id, participant_id, participant_in)
    if not participant:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Participant not found")
    return participant


@router.delete("/{group_id}/participants/{participant_id}")
async def delete_participant(
    participant_id: str,
    group: Group = Depends(get_group_or_404),
    service: LedgerService = Depends(get_ledger_service)
):
    """Delete a participant that no expense or settlement references"""
    try:
        deleted = await service.delete_participant(group.id, participant_id)
    except ParticipantInUseError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc)
        )
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Participant not found")

    return {"success": True}
