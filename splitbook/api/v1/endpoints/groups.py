from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from splitbook.api.deps import get_group_or_404, get_group_repo
from splitbook.models.group import Group
from splitbook.repositories.group_repo import GroupRepository
from splitbook.schemas.group import GroupAddMember, GroupCreate, GroupUpdate

router = APIRouter()


@router.post("", response_model=Group, status_code=status.HTTP_201_CREATED)
async def create_group(
    group_in: GroupCreate,
    repo: GroupRepository = Depends(get_group_repo)
):
    """Create a new group"""
    return await repo.create_group(group_in)


@router.get("", response_model=List[Group])
async def list_groups(
    user_id: str = Query(..., description="Member whose groups to list"),
    repo: GroupRepository = Depends(get_group_repo)
):
    """List groups a user is a member of"""
    return await repo.list_groups(user_id)


@router.get("/{group_id}", response_model=Group)
async def get_group(group: Group = Depends(get_group_or_404)):
    return group


@router.patch("/{group_id}", response_model=Group)
async def update_group(
    group_in: GroupUpdate,
    group: Group = Depends(get_group_or_404),
    repo: GroupRepository = Depends(get_group_repo)
):
    """Rename or re-describe a group"""
    updated = await repo.update_group(group.id, group_in)
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")
    return updated


@router.post("/{group_id}/members", response_model=Group)
async def add_member(
    member_in: GroupAddMember,
    group: Group = Depends(get_group_or_404),
    repo: GroupRepository = Depends(get_group_repo)
):
    """Give a user access to the group"""
    updated = await repo.add_member(group.id, member_in.user_id)
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")
    return updated
