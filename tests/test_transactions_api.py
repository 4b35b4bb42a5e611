from datetime import datetime
from decimal import Decimal

import pytest

from app.shared.database.models import TransactionHistory
from tests.conftest import DRIVER_A, DRIVER_B, auth_headers


@pytest.fixture
def ledger(seed):
    seed.add_all([
        TransactionHistory(id=1, user_id=DRIVER_A, jenis_transaksi="topup", nominal=Decimal("500000"),
                           saldo_awal=Decimal("0"), saldo_akhir=Decimal("500000"),
                           trans_date=datetime(2026, 10, 1, 9, 0), status="completed",
                           payment_method="bank_transfer"),
        TransactionHistory(id=2, user_id=DRIVER_A, code_booking="BK-10", jenis_transaksi="payment",
                           nominal=Decimal("-150000"), trans_date=datetime(2026, 10, 5, 9, 0),
                           status="completed", payment_method="saldo"),
        TransactionHistory(id=3, user_id=DRIVER_A, jenis_transaksi="topup", nominal=Decimal("200000"),
                           trans_date=datetime(2026, 10, 7, 9, 0), status="pending", payment_method="QRIS"),
        TransactionHistory(id=4, user_id=DRIVER_A, code_booking="BK-11", jenis_transaksi="payment",
                           nominal=Decimal("-50000"), trans_date=datetime(2026, 10, 9, 9, 0), status="failed"),
    ])
    seed.commit()
    return seed


def get_history(client, **params):
    response = client.get("/api/v1/transactions", params=params, headers=auth_headers())
    assert response.status_code == 200
    return response.json()


def ids(body):
    return [t["id"] for t in body["transactions"]["items"]]


def test_newest_first_with_summary(client, ledger):
    body = get_history(client)

    assert ids(body) == [4, 3, 2, 1]
    summary = body["summary"]
    assert Decimal(summary["total_income"]) == Decimal("500000")
    assert Decimal(summary["total_expense"]) == Decimal("150000")
    assert Decimal(summary["current_balance"]) == Decimal("750000")
    assert summary["total_transactions"] == 4
    assert body["message"] == "Showing 4 of 4 transactions"


def test_display_fields_and_defaults(client, ledger):
    items = {t["id"]: t for t in get_history(client)["transactions"]["items"]}

    assert items[1]["category"] == "Top-up"
    assert items[1]["display_amount"] == "+ Rp 500,000"
    assert items[1]["code_booking"] == "-"
    assert items[2]["category"] == "Payment"
    assert items[2]["display_amount"] == "- Rp 150,000"
    assert items[4]["payment_method"] == "-"
    assert items[4]["keterangan"] == "Unknown"


@pytest.mark.parametrize("active_filter, expected", [
    ("income", [3, 1]),
    ("expense", [4, 2]),
    ("topup", [3, 1]),
    ("payment", [4, 2]),
])
def test_filters(client, ledger, active_filter, expected):
    body = get_history(client, filter=active_filter)
    assert ids(body) == expected
    assert body["summary"]["filtered_transactions"] == len(expected)


def test_search_is_case_insensitive(client, ledger):
    assert ids(get_history(client, search="bk-1")) == [4, 2]

    body = get_history(client, search="qris")
    assert ids(body) == [3]
    assert body["message"] == 'Showing 1 of 4 transactions for "qris"'


def test_pagination(client, ledger):
    body = get_history(client, page=2, rows_per_page=3)

    page = body["transactions"]
    assert page["total"] == 4
    assert page["pages"] == 2
    assert page["page"] == 2
    assert ids(body) == [1]


def test_invalid_filter_is_rejected(client, ledger):
    response = client.get("/api/v1/transactions?filter=refund", headers=auth_headers())
    assert response.status_code == 422


def test_empty_history(client, seed):
    response = client.get(f"/api/v1/transactions?user_id={DRIVER_B}")

    body = response.json()
    assert body["message"] == "No transactions found"
    assert body["transactions"]["items"] == []
    assert body["transactions"]["pages"] == 0


def test_requires_identity(client, seed):
    response = client.get("/api/v1/transactions")
    assert response.status_code == 401


def test_amounts_are_json_numbers(client, ledger):
    body = get_history(client)

    assert body["summary"]["total_income"] == 500000
    assert isinstance(body["summary"]["current_balance"], float)
    item = next(t for t in body["transactions"]["items"] if t["id"] == 2)
    assert item["nominal"] == -150000
    assert isinstance(item["nominal"], float)
