import datetime as dt

import pytest

from dashboard import actions, data
from dashboard.database import DatabaseError
from dashboard.schemas import State
from conftest import (
    DELBA_ID,
    DELBA_PENDING_INVOICE_ID,
    STEVEN_ID,
    STEVEN_PAID_INVOICE_ID,
    UNKNOWN_ID,
)


def _form(**overrides):
    form = {"customerId": DELBA_ID, "amount": "12.34", "status": "pending"}
    form.update(overrides)
    return form


async def test_create_invoice_inserts_and_redirects(db):
    response = await actions.create_invoice(_form())

    assert response.status_code == 303
    assert response.headers["location"] == "/dashboard/invoices"
    assert response.headers["cache-control"] == "no-store"

    rows = await data.fetch_filtered_invoices("1234", 1)
    assert len(rows) == 1
    assert rows[0].amount == 1234
    assert rows[0].status == "pending"
    assert rows[0].name == "Delba de Oliveira"
    assert rows[0].date == dt.datetime.now(dt.timezone.utc).date()

    cards = await data.fetch_card_data()
    assert cards.number_of_invoices == 16


async def test_create_invoice_rounds_to_cents(db):
    await actions.create_invoice(_form(amount="19.99"))
    rows = await data.fetch_filtered_invoices("1999", 1)
    assert [r.amount for r in rows] == [1999]


async def test_create_invoice_missing_fields(db):
    state = await actions.create_invoice({})

    assert isinstance(state, State)
    assert state.message == "Missing Fields. Failed to Create Invoice."
    assert state.errors == {
        "customerId": ["Please select a customer."],
        "amount": ["Please enter an amount greater than $0."],
        "status": ["Please select an invoice status."],
    }
    assert (await data.fetch_card_data()).number_of_invoices == 15


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"amount": "0"}, "amount"),
        ({"amount": "-5"}, "amount"),
        ({"amount": "abc"}, "amount"),
        ({"amount": "inf"}, "amount"),
        ({"status": "overdue"}, "status"),
        ({"customerId": ""}, "customerId"),
    ],
)
async def test_create_invoice_single_field_error(db, overrides, field):
    state = await actions.create_invoice(_form(**overrides))
    assert list(state.errors) == [field]


async def test_create_invoice_bad_customer_id_is_database_error(db):
    with pytest.raises(DatabaseError, match="Failed to create invoice."):
        await actions.create_invoice(_form(customerId="not-a-uuid"))


async def test_update_invoice(db):
    response = await actions.update_invoice(
        DELBA_PENDING_INVOICE_ID,
        _form(customerId=STEVEN_ID, amount="10.5", status="paid"),
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/dashboard/invoices"

    invoice = await data.fetch_invoice_by_id(DELBA_PENDING_INVOICE_ID)
    assert str(invoice.customer_id) == STEVEN_ID
    assert invoice.amount == 10.5
    assert invoice.status == "paid"


async def test_update_invoice_validation_error(db):
    state = await actions.update_invoice(DELBA_PENDING_INVOICE_ID, _form(status=None))
    assert state.message == "Missing Fields. Failed to Update Invoice."
    assert state.errors == {"status": ["Please select an invoice status."]}

    invoice = await data.fetch_invoice_by_id(DELBA_PENDING_INVOICE_ID)
    assert invoice.status == "pending"


async def test_update_invoice_bad_id(db):
    with pytest.raises(DatabaseError, match="Failed to update invoice."):
        await actions.update_invoice("'; DROP TABLE invoices; --", _form())
    assert (await data.fetch_card_data()).number_of_invoices == 15


async def test_update_invoice_values_are_bound_not_interpolated(db):
    sneaky = _form(customerId=f"{DELBA_ID}', status = 'paid")
    with pytest.raises(DatabaseError):
        await actions.update_invoice(DELBA_PENDING_INVOICE_ID, sneaky)

    invoice = await data.fetch_invoice_by_id(DELBA_PENDING_INVOICE_ID)
    assert invoice.status == "pending"


async def test_delete_invoice(db):
    response = await actions.delete_invoice(STEVEN_PAID_INVOICE_ID)
    assert response.headers["location"] == "/dashboard/invoices"
    assert await data.fetch_invoice_by_id(STEVEN_PAID_INVOICE_ID) is None
    assert (await data.fetch_card_data()).number_of_invoices == 14


async def test_delete_unknown_invoice_is_noop(db):
    await actions.delete_invoice(UNKNOWN_ID)
    assert (await data.fetch_card_data()).number_of_invoices == 15


async def test_delete_invoice_bad_id(db):
    with pytest.raises(DatabaseError, match="Failed to delete invoice."):
        await actions.delete_invoice("nope")
