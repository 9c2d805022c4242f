"""Mini README: Tests for the FastAPI sales desk.

Drive the HTTP surface end to end over an in-memory ledger: entry flow,
two-step deletion, exports, settings and the analysis refusal path.
"""

from __future__ import annotations

from urllib.parse import quote

import pytest
from fastapi.testclient import TestClient

from daigou.analysis import SalesAnalyst
from daigou.configuration import DaigouSettings
from daigou.interface import create_application
from daigou.storage import LedgerStore, MemoryKeyValueStore


@pytest.fixture()
def client(tmp_path) -> TestClient:
    settings = DaigouSettings(data_directory=tmp_path)
    store = LedgerStore(MemoryKeyValueStore())
    app = create_application(settings=settings, store=store, analyst=SalesAnalyst(api_key=None))
    return TestClient(app)


def _record_korean_sale(client: TestClient, customer: str = "Amy") -> dict:
    client.post("/entry/country", data={"country": "KR"})
    for name, value in (
        ("customer_name", customer),
        ("item_name", "面膜"),
        ("quantity", "2"),
        ("cost_foreign", "1000"),
    ):
        client.post("/entry/field", data={"name": name, "value": value})
    state = client.post("/entry/field", data={"name": "price_sold", "value": "30"}).json()
    assert state["preview"]["unit_local_cost"] == 20
    response = client.post("/entry/submit")
    assert response.status_code == 200
    return response.json()["transaction"]


def test_dashboard_renders(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert "代購銷售帳本" in response.text


def test_country_selection_prefills_and_suggests_price(client: TestClient) -> None:
    state = client.post("/entry/country", data={"country": "KR"}).json()
    assert state["fields"]["exchange_rate"] == "0.02"
    assert state["fields"]["selling_exchange_rate"] == "0.035"

    state = client.post("/entry/field", data={"name": "cost_foreign", "value": "1000"}).json()
    assert state["fields"]["price_sold"] == "35"


def test_entry_flow_updates_summary(client: TestClient) -> None:
    transaction = _record_korean_sale(client)

    assert transaction["unitLocalCost"] == 20
    assert transaction["totalProfit"] == 20
    assert transaction["countryLabel"] == "韓國"
    assert client.get("/summary").json() == {
        "totalSales": 60,
        "totalCost": 40,
        "totalProfit": 20,
        "itemCount": 2,
    }
    listed = client.get("/transactions").json()["transactions"]
    assert [row["id"] for row in listed] == [transaction["id"]]
    assert "Amy" in client.get("/").text


def test_submit_without_names_is_rejected(client: TestClient) -> None:
    response = client.post("/entry/submit")

    assert response.status_code == 400
    assert client.get("/transactions").json()["transactions"] == []


def test_unknown_entry_field_is_rejected(client: TestClient) -> None:
    response = client.post("/entry/field", data={"name": "profit", "value": "1"})

    assert response.status_code == 400


def test_delete_requires_confirmation(client: TestClient) -> None:
    first = _record_korean_sale(client, "Amy")
    _record_korean_sale(client, "Ben")

    pending = client.post(f"/transactions/{first['id']}/delete-request").json()
    assert pending["kind"] == "delete"
    assert len(client.get("/transactions").json()["transactions"]) == 2

    client.post("/confirmation/cancel")
    assert client.post("/confirmation/confirm").json()["applied"] is False
    assert len(client.get("/transactions").json()["transactions"]) == 2

    client.post(f"/transactions/{first['id']}/delete-request")
    assert client.post("/confirmation/confirm").json()["applied"] is True
    remaining = client.get("/transactions").json()["transactions"]
    assert [row["customerName"] for row in remaining] == ["Ben"]


def test_clear_all_requires_confirmation(client: TestClient) -> None:
    _record_korean_sale(client)
    client.post("/transactions/clear-request")

    assert "清空所有資料" in client.get("/").text
    result = client.post("/confirmation/confirm").json()

    assert result["summary"] == {"totalSales": 0, "totalCost": 0, "totalProfit": 0, "itemCount": 0}


def test_exports(client: TestClient) -> None:
    _record_korean_sale(client)

    clipboard = client.get("/export/clipboard")
    assert clipboard.headers["content-type"].startswith("text/plain")
    assert clipboard.text.split("\n")[1].split("\t")[-1] == "$20"

    download = client.get("/export/csv")
    assert download.headers["content-type"].startswith("text/csv")
    assert quote("代購銷售紀錄_") in download.headers["content-disposition"]
    assert download.content.startswith(b"\xef\xbb\xbf")
    assert '"$20"' in download.content.decode("utf-8")


def test_default_rate_settings(client: TestClient) -> None:
    assert client.get("/settings/default-rate").json() == {"defaultRate": 0.28}

    updated = client.post("/settings/default-rate", data={"rate": "0.3"}).json()

    assert updated == {"defaultRate": 0.3}


def test_analysis_without_key_is_refused(client: TestClient) -> None:
    _record_korean_sale(client)

    response = client.post("/analysis")

    assert response.status_code == 400
    assert "API Key" in response.json()["detail"]


def test_browser_form_records_sale_and_returns_to_dashboard(client: TestClient) -> None:
    """A dashboard form post records the sale and redirects back to the page."""

    page = client.get("/").text
    assert 'name="customer_name"' in page
    assert 'action="/entry/form"' in page

    response = client.post(
        "/entry/form",
        data={
            "country": "KR",
            "date": "2024-05-01",
            "customer_name": "Amy",
            "item_name": "面膜",
            "quantity": "2",
            "cost_foreign": "1000",
            "exchange_rate": "0.02",
            "selling_exchange_rate": "0.035",
            "price_sold": "30",
        },
        headers={"Accept": "text/html"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/"
    assert client.get("/summary").json()["totalProfit"] == 20
    listed = client.get("/transactions").json()["transactions"]
    assert [row["country"] for row in listed] == ["KR"]


def test_browser_confirmation_redirects_to_dashboard(client: TestClient) -> None:
    _record_korean_sale(client)
    html = {"Accept": "text/html"}

    requested = client.post("/transactions/clear-request", headers=html, follow_redirects=False)
    confirmed = client.post("/confirmation/confirm", headers=html, follow_redirects=False)

    assert requested.status_code == 303
    assert confirmed.status_code == 303
    assert client.get("/transactions").json()["transactions"] == []


def test_dashboard_formats_numbers_like_exports(client: TestClient) -> None:
    _record_korean_sale(client)

    page = client.get("/").text

    assert "總銷售額 $60<" in page
    assert "₩1000<" in page
    assert "+20<" in page
    assert "1000.0" not in page
    assert "20.0<" not in page
