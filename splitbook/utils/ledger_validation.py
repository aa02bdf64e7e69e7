"""Ledger validation utilities."""
from decimal import Decimal
from typing import Iterable, List, Sequence

from splitbook.core.config import settings
from splitbook.models.base import CENT
from splitbook.models.ledger import Participant, Split


class LedgerValidationError(Exception):
    """Custom exception for ledger validation errors."""
    pass


class SplitMismatchError(LedgerValidationError):
    """Split amounts do not add up to the expense amount."""

    def __init__(self, amount: Decimal, split_total: Decimal):
        self.amount = amount
        self.split_total = split_total
        super().__init__(
            f"Split sum ({split_total}) does not equal expense amount ({amount})"
        )


class ParticipantInUseError(LedgerValidationError):
    """Participant is still referenced by an expense or settlement."""
    pass


def validate_splits(
    amount: Decimal,
    splits: Sequence[Split],
    tolerance: Decimal | None = None,
) -> None:
    """
    Validate the splits of an expense.

    Rules:
    - at least one split
    - a participant appears at most once
    - sum of split amounts equals the expense amount within tolerance
    """
    if tolerance is None:
        tolerance = settings.SPLIT_TOLERANCE

    if not splits:
        raise LedgerValidationError("Expense must be split among at least one participant")

    seen = set()
    for split in splits:
        if split.participant_id in seen:
            raise LedgerValidationError(
                f"Participant '{split.participant_id}' appears in more than one split"
            )
        seen.add(split.participant_id)

    split_total = sum((split.amount for split in splits), Decimal("0"))
    if abs(split_total - amount) > tolerance:
        raise SplitMismatchError(amount, split_total)


def split_equally(amount: Decimal, participant_ids: Sequence[str]) -> List[Split]:
    """
    Divide amount equally in whole cents.

    Leftover cents go to the first participants in the given order,
    so the splits always add up to the amount exactly.
    """
    if not participant_ids:
        raise LedgerValidationError("Expense must be split among at least one participant")
    if len(set(participant_ids)) != len(participant_ids):
        raise LedgerValidationError("Participants to split among must be unique")

    amount_cents = int((amount / CENT).to_integral_value())
    count = len(participant_ids)
    per_participant = amount_cents // count
    remainder = amount_cents % count

    splits = []
    for i, participant_id in enumerate(participant_ids):
        extra = 1 if i < remainder else 0
        splits.append(
            Split(participant_id=participant_id, amount=(per_participant + extra) * CENT)
        )
    return splits


def validate_settlement(from_participant: str, to_participant: str) -> None:
    if from_participant == to_participant:
        raise LedgerValidationError("A participant cannot settle with themselves")


def ensure_group_members(participant_ids: Iterable[str], participants: Sequence[Participant]) -> None:
    """Reject ids that do not belong to the group's participants."""
    known = {p.id for p in participants}
    unknown = sorted({pid for pid in participant_ids if pid not in known})
    if unknown:
        raise LedgerValidationError(
            f"Unknown participant(s) for this group: {', '.join(unknown)}"
        )
