from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from fastapi import status

from splitbook.api.deps import (
    get_group_repo,
    get_ledger_service,
    get_message_repo,
    get_notification_service,
    get_participant_repo,
)
from splitbook.models.chat import Message, Notification
from splitbook.models.group import Group
from splitbook.models.ledger import Expense, Split
from splitbook.schemas.balance import BalanceResponse, SuggestedPaymentResponse, SuggestionStrategy
from splitbook.services.export_service import ExportDataType
from splitbook.utils.ledger_validation import ParticipantInUseError, SplitMismatchError

API = "/api/v1"


@pytest.fixture
def group(group_id):
    return Group(id=group_id, name="Weekend Trip", created_by="user-1", member_ids=["user-1"])


@pytest.fixture
def group_repo(test_client, group):
    repo = MagicMock()
    repo.get_group = AsyncMock(return_value=group)
    test_client.app.dependency_overrides[get_group_repo] = lambda: repo
    return repo


@pytest.fixture
def ledger_service(test_client):
    service = MagicMock()
    test_client.app.dependency_overrides[get_ledger_service] = lambda: service
    return service


def test_root(test_client):
    response = test_client.get("/")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"message": "Welcome to Splitbook API"}


def test_create_group(test_client, group_repo, group):
    group_repo.create_group = AsyncMock(return_value=group)

    response = test_client.post(
        f"{API}/groups",
        json={"name": "Weekend Trip", "created_by": "user-1"}
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["id"] == group.id
    assert data["member_ids"] == ["user-1"]


def test_create_group_validates_name(test_client, group_repo):
    group_repo.create_group = AsyncMock()

    response = test_client.post(f"{API}/groups", json={"name": "x", "created_by": "user-1"})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    group_repo.create_group.assert_not_awaited()


def test_unknown_group_returns_404(test_client, group_repo, ledger_service):
    group_repo.get_group.return_value = None

    response = test_client.get(f"{API}/groups/{ObjectId()}/balances")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Group not found"


def test_create_expense(test_client, group_repo, ledger_service, group, bob_id):
    ledger_service.add_expense = AsyncMock(return_value=Expense(
        id=str(ObjectId()),
        group_id=group.id,
        title="Dinner",
        amount=Decimal("300"),
        paid_by=bob_id,
        date=date(2024, 5, 1),
        splits=[Split(participant_id=bob_id, amount=Decimal("300"))],
    ))

    response = test_client.post(
        f"{API}/groups/{group.id}/expenses",
        json={"title": "Dinner", "amount": "300", "paid_by": bob_id, "split_among": [bob_id]}
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["amount"] == "300.00"
    assert data["date"] == "2024-05-01"
    assert data["splits"] == [{"participant_id": bob_id, "amount": "300.00"}]
    called_group, expense_in = ledger_service.add_expense.call_args[0]
    assert called_group.id == group.id
    assert expense_in.amount == Decimal("300.00")


def test_create_expense_split_mismatch_returns_400(test_client, group_repo, ledger_service, group, bob_id):
    ledger_service.add_expense = AsyncMock(
        side_effect=SplitMismatchError(Decimal("300.00"), Decimal("200.00"))
    )

    response = test_client.post(
        f"{API}/groups/{group.id}/expenses",
        json={
            "title": "Dinner",
            "amount": "300",
            "paid_by": bob_id,
            "splits": [{"participant_id": bob_id, "amount": "200"}]
        }
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "does not equal" in response.json()["detail"]


def test_create_expense_negative_amount_returns_422(test_client, group_repo, ledger_service, group, bob_id):
    ledger_service.add_expense = AsyncMock()

    response = test_client.post(
        f"{API}/groups/{group.id}/expenses",
        json={"title": "Refund", "amount": "-10", "paid_by": bob_id, "split_among": [bob_id]}
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    ledger_service.add_expense.assert_not_awaited()


def test_get_missing_expense_returns_404(test_client, group_repo, ledger_service, group):
    ledger_service.expenses.get_expense = AsyncMock(return_value=None)

    response = test_client.get(f"{API}/groups/{group.id}/expenses/{ObjectId()}")

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_get_balances(test_client, group_repo, ledger_service, group, alice_id):
    ledger_service.get_balances = AsyncMock(return_value=[
        BalanceResponse(
            participant_id=alice_id,
            participant_name="Alice",
            total_paid=Decimal("300.00"),
            total_owed=Decimal("100.00"),
            net_balance=Decimal("200.00"),
            status="Gets back",
        )
    ])

    response = test_client.get(f"{API}/groups/{group.id}/balances")

    assert response.status_code == status.HTTP_200_OK
    [balance] = response.json()
    assert balance["participant_name"] == "Alice"
    assert balance["net_balance"] == "200.00"
    assert balance["status"] == "Gets back"


def test_suggestions_strategy_parameter(test_client, group_repo, ledger_service, group, alice_id, bob_id):
    ledger_service.suggest_settlements = AsyncMock(return_value=[
        SuggestedPaymentResponse(
            from_participant=bob_id,
            from_name="Bob",
            to_participant=alice_id,
            to_name="Alice",
            amount=Decimal("100.00"),
        )
    ])

    response = test_client.get(
        f"{API}/groups/{group.id}/balances/suggestions",
        params={"strategy": "first_creditor"}
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()[0]["to_name"] == "Alice"
    assert ledger_service.suggest_settlements.call_args[0] == (group.id, SuggestionStrategy.FIRST_CREDITOR)


def test_export_csv(test_client, group_repo, ledger_service, group):
    ledger_service.export_report = AsyncMock(return_value="BALANCES\nName,Total Paid,Total Owed,Net Balance,Status\n")

    response = test_client.get(
        f"{API}/groups/{group.id}/export.csv",
        params={"data_type": "balances"}
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="Weekend_Trip_report.csv"' in response.headers["content-disposition"]
    assert response.text.startswith("BALANCES")
    assert ledger_service.export_report.call_args[0][1] == ExportDataType.BALANCES


def test_delete_referenced_participant_returns_409(test_client, group_repo, ledger_service, group, alice_id):
    ledger_service.delete_participant = AsyncMock(side_effect=ParticipantInUseError("in use"))

    response = test_client.delete(f"{API}/groups/{group.id}/participants/{alice_id}")

    assert response.status_code == status.HTTP_409_CONFLICT


def test_update_missing_participant_returns_404(test_client, group_repo, group):
    repo = MagicMock()
    repo.update_participant = AsyncMock(return_value=None)
    test_client.app.dependency_overrides[get_participant_repo] = lambda: repo

    response = test_client.patch(
        f"{API}/groups/{group.id}/participants/{ObjectId()}",
        json={"name": "Robert"}
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_mark_missing_notification_returns_404(test_client):
    service = MagicMock()
    service.mark_read = AsyncMock(return_value=None)
    test_client.app.dependency_overrides[get_notification_service] = lambda: service

    response = test_client.post(f"{API}/notifications/{ObjectId()}/read")

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_list_groups_for_user(test_client, group_repo, group):
    group_repo.list_groups = AsyncMock(return_value=[group])

    response = test_client.get(f"{API}/groups", params={"user_id": "user-1"})

    assert response.status_code == status.HTTP_200_OK
    assert [g["id"] for g in response.json()] == [group.id]
    group_repo.list_groups.assert_awaited_once_with("user-1")


def test_update_group(test_client, group_repo, group):
    group_repo.update_group = AsyncMock(return_value=group.model_copy(update={"name": "Ski Trip"}))

    response = test_client.patch(f"{API}/groups/{group.id}", json={"name": "Ski Trip"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "Ski Trip"
    called_id, group_in = group_repo.update_group.call_args[0]
    assert called_id == group.id
    assert group_in.model_dump(exclude_unset=True) == {"name": "Ski Trip"}


def test_add_member(test_client, group_repo, group):
    group_repo.add_member = AsyncMock(
        return_value=group.model_copy(update={"member_ids": ["user-1", "user-2"]})
    )

    response = test_client.post(f"{API}/groups/{group.id}/members", json={"user_id": "user-2"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["member_ids"] == ["user-1", "user-2"]
    group_repo.add_member.assert_awaited_once_with(group.id, "user-2")


def test_add_member_to_unknown_group_returns_404(test_client, group_repo):
    group_repo.get_group.return_value = None
    group_repo.add_member = AsyncMock()

    response = test_client.post(f"{API}/groups/{ObjectId()}/members", json={"user_id": "user-2"})

    assert response.status_code == status.HTTP_404_NOT_FOUND
    group_repo.add_member.assert_not_awaited()


@pytest.mark.parametrize("amount", ["1e27", "123456789012345678901234567890"])
def test_create_settlement_with_oversized_amount_returns_422(
    test_client, group_repo, ledger_service, group, alice_id, bob_id, amount
):
    ledger_service.record_settlement = AsyncMock()

    response = test_client.post(
        f"{API}/groups/{group.id}/settlements",
        json={"from_participant": bob_id, "to_participant": alice_id, "amount": amount}
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    ledger_service.record_settlement.assert_not_awaited()


def test_create_expense_with_oversized_amount_returns_422(test_client, group_repo, ledger_service, group, bob_id):
    ledger_service.add_expense = AsyncMock()

    response = test_client.post(
        f"{API}/groups/{group.id}/expenses",
        json={"title": "Yacht", "amount": "1e27", "paid_by": bob_id, "split_among": [bob_id]}
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    ledger_service.add_expense.assert_not_awaited()


def test_send_message(test_client, group_repo, group):
    repo = MagicMock()
    repo.create_message = AsyncMock(return_value=Message(
        id=str(ObjectId()),
        group_id=group.id,
        user_id="user-1",
        user_name="Alice",
        content="Paid for the taxi",
    ))
    test_client.app.dependency_overrides[get_message_repo] = lambda: repo

    response = test_client.post(
        f"{API}/groups/{group.id}/messages",
        json={"user_id": "user-1", "user_name": "Alice", "content": "Paid for the taxi"}
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["content"] == "Paid for the taxi"
    called_id, message_in = repo.create_message.call_args[0]
    assert called_id == group.id
    assert message_in.user_name == "Alice"


def test_send_empty_message_returns_422(test_client, group_repo, group):
    repo = MagicMock()
    repo.create_message = AsyncMock()
    test_client.app.dependency_overrides[get_message_repo] = lambda: repo

    response = test_client.post(
        f"{API}/groups/{group.id}/messages",
        json={"user_id": "user-1", "content": ""}
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    repo.create_message.assert_not_awaited()


def test_list_messages(test_client, group_repo, group):
    repo = MagicMock()
    repo.list_messages = AsyncMock(return_value=[
        Message(id=str(ObjectId()), group_id=group.id, user_id="user-1", content="first"),
        Message(id=str(ObjectId()), group_id=group.id, user_id="user-2", content="second"),
    ])
    test_client.app.dependency_overrides[get_message_repo] = lambda: repo

    response = test_client.get(f"{API}/groups/{group.id}/messages")

    assert response.status_code == status.HTTP_200_OK
    assert [m["content"] for m in response.json()] == ["first", "second"]
    repo.list_messages.assert_awaited_once_with(group.id)


def test_list_notifications(test_client, group_id):
    service = MagicMock()
    service.list_for_user = AsyncMock(return_value=[
        Notification(
            id=str(ObjectId()),
            user_id="user-1",
            group_id=group_id,
            type="expense_added",
            title="New Expense Added",
            message="Dinner - ৳300.00 added to Weekend Trip",
        )
    ])
    test_client.app.dependency_overrides[get_notification_service] = lambda: service

    response = test_client.get(f"{API}/notifications", params={"user_id": "user-1"})

    assert response.status_code == status.HTTP_200_OK
    [notification] = response.json()
    assert notification["read"] is False
    assert notification["message"] == "Dinner - ৳300.00 added to Weekend Trip"
    service.list_for_user.assert_awaited_once_with("user-1")


def test_dismiss_notification(test_client):
    service = MagicMock()
    service.dismiss = AsyncMock(return_value=True)
    test_client.app.dependency_overrides[get_notification_service] = lambda: service
    notification_id = str(ObjectId())

    response = test_client.delete(f"{API}/notifications/{notification_id}")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": True}
    service.dismiss.assert_awaited_once_with(notification_id)


def test_dismiss_missing_notification_returns_404(test_client):
    service = MagicMock()
    service.dismiss = AsyncMock(return_value=False)
    test_client.app.dependency_overrides[get_notification_service] = lambda: service

    response = test_client.delete(f"{API}/notifications/{ObjectId()}")

    assert response.status_code == status.HTTP_404_NOT_FOUND
