import logging
import shutil
import sys

import bcrypt
import pytest

from dashboard import data
from dashboard.database import query_database
from dashboard.seed import FIXTURES_DIR, hash_password, load_fixture, main, seed


async def _count(table: str) -> int:
    rows = await query_database(f"SELECT COUNT(*) AS n FROM {table}")
    return rows[0]["n"]


def test_load_fixture_reads_every_row():
    invoices = load_fixture(FIXTURES_DIR, "invoices")
    assert len(invoices) == 15
    assert set(invoices[0]) == {"id", "customer_id", "amount", "status", "date"}
    assert all(isinstance(v, str) for v in invoices[0].values())


def test_hash_password():
    hashed = hash_password("123456")
    assert hashed != "123456"
    assert bcrypt.checkpw(b"123456", hashed.encode())


async def test_seed_is_idempotent(db):
    counts = {t: await _count(t) for t in ("users", "customers", "invoices", "revenue")}
    assert counts == {"users": 1, "customers": 10, "invoices": 15, "revenue": 12}

    await seed()

    assert {t: await _count(t) for t in counts} == counts


async def test_seed_keeps_existing_rows(db):
    await query_database("UPDATE revenue SET revenue = 1 WHERE month = 'Jan'")
    await seed()
    revenue = {r.month: r.revenue for r in await data.fetch_revenue()}
    assert revenue["Jan"] == 1


async def test_seed_failure_is_logged_and_raised(db, tmp_path, caplog):
    for name in ("users", "customers", "invoices", "revenue"):
        shutil.copy(FIXTURES_DIR / f"{name}.csv", tmp_path / f"{name}.csv")
    (tmp_path / "customers.csv").write_text(
        "id,name,email,image_url\nnot-a-uuid,Broken,broken@example.com,/x.png\n"
    )

    with caplog.at_level(logging.ERROR, logger="dashboard.seed"):
        with pytest.raises(ValueError):
            await seed(tmp_path)

    assert "Error seeding customers" in caplog.text


def test_main_exits_non_zero_when_seeding_fails(tmp_path, monkeypatch, caplog):
    monkeypatch.setattr(sys, "argv", ["dashboard-seed", "--fixtures", str(tmp_path / "missing")])

    with caplog.at_level(logging.ERROR, logger="dashboard.seed"):
        with pytest.raises(SystemExit) as exc_info:
            main()

    assert exc_info.value.code == 1
    assert "An error occurred while attempting to seed the database:" in caplog.text
