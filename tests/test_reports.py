from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.anyio

BASE = datetime(2024, 5, 1, tzinfo=timezone.utc)


async def _seed(repo, amounts_and_causes):
    ids = []
    for i, (amount, cause) in enumerate(amounts_and_causes):
        saved = await repo.insert_donation({
            "name": f"Donor {i}",
            "email": f"donor{i}@example.org",
            "amount": amount,
            "cause": cause,
            "date": BASE + timedelta(minutes=i),
        })
        ids.append(saved["id"])
    return ids


async def test_total_is_zero_without_donations(test_client: AsyncClient):
    r = await test_client.get("/api/donations/total")
    assert r.status_code == 200
    assert r.json() == {"totalDonated": 0}


async def test_total_sums_amounts(test_client: AsyncClient):
    for amount in (10, 15):
        await test_client.post("/api/donate", json={
            "name": "A", "email": "a@b.co", "amount": amount, "cause": "Orphanage",
        })
    r = await test_client.get("/api/donations/total")
    assert r.json()["totalDonated"] == 25


@pytest.mark.parametrize("population", [0, 3, 5, 8])
async def test_last_five_is_capped_and_newest_first(test_client: AsyncClient, repo, population):
    ids = await _seed(repo, [(1, "Education")] * population)
    r = await test_client.get("/api/donations/last-5")
    assert r.status_code == 200
    rows = r.json()["lastDonations"]
    assert len(rows) == min(population, 5)
    assert [row["id"] for row in rows] == list(reversed(ids))[:5]


async def test_by_cause_groups_and_sorts(test_client: AsyncClient, repo):
    await _seed(repo, [(10, "Education"), (7, "Orphanage"), (5, "Education")])
    r = await test_client.get("/api/donations/by-cause")
    assert r.status_code == 200
    assert r.json()["donationsByCause"] == [
        {"cause": "Education", "totalAmount": 15, "count": 2},
        {"cause": "Orphanage", "totalAmount": 7, "count": 1},
    ]


async def test_by_cause_is_empty_without_donations(test_client: AsyncClient):
    r = await test_client.get("/api/donations/by-cause")
    assert r.json() == {"donationsByCause": []}


async def test_list_all_is_unbounded_and_newest_first(test_client: AsyncClient, repo):
    ids = await _seed(repo, [(i, "Environmental") for i in range(12)])
    r = await test_client.get("/api/donations")
    assert r.status_code == 200
    rows = r.json()["donations"]
    assert len(rows) == 12
    assert [row["id"] for row in rows] == list(reversed(ids))


async def test_root_is_alive(test_client: AsyncClient):
    r = await test_client.get("/")
    assert r.status_code == 200
    assert r.text == "Donation API is running."


async def test_responses_carry_request_id_and_cors(test_client: AsyncClient):
    r = await test_client.get("/health", headers={"Origin": "http://frontend.test"})
    assert r.json() == {"ok": True}
    assert r.headers["x-request-id"]
    assert r.headers["access-control-allow-origin"] == "*"
