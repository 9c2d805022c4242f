"""Mini README: FastAPI-powered sales desk for the daigou ledger.

Structure:
    * create_application - application factory wiring routes and templates.
    * transaction_view - ledger row enriched with derived figures.

The interface serves a single local user. The ledger store, the entry
draft, the confirmation gate and the analyst are created once per
application and handed to the route handlers through this factory's
closure rather than held as module globals. Form posts from the dashboard
(an ``Accept: text/html`` request) are redirected back to it; other
callers receive JSON.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import quote

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from ..analysis import AnalysisInProgressError, AnalysisUnavailableError, SalesAnalyst
from ..configuration import DaigouSettings, get_settings
from ..entry import EDITABLE_FIELDS, ConfirmationGate, EntryDraft
from ..export import export_filename, render_clipboard, render_csv
from ..finance import COUNTRY_CONFIG, Transaction, country_config, derive
from ..logging_utils import get_logger
from ..storage import LedgerStore, open_ledger_store
from ..utils.numbers import format_number

LOGGER = get_logger(__name__)


def transaction_view(transaction: Transaction) -> Dict[str, object]:
    """Serialise a transaction together with its derived figures."""

    figures = derive(transaction)
    config = country_config(transaction.country)
    payload = transaction.as_dict()
    payload.update(
        {
            "countryLabel": config.label,
            "currencySymbol": config.currency_symbol,
            "unitLocalCost": figures.unit_local_cost,
            "unitProfit": figures.unit_profit,
            "totalSales": figures.total_sales,
            "totalProfit": figures.total_profit,
        }
    )
    return payload


def create_application(
    settings: Optional[DaigouSettings] = None,
    store: Optional[LedgerStore] = None,
    analyst: Optional[SalesAnalyst] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    store = store if store is not None else open_ledger_store(settings)
    analyst = analyst or SalesAnalyst(settings.gemini_api_key, settings.gemini_model)
    draft = EntryDraft()
    gate = ConfirmationGate()

    app = FastAPI(title="Daigou Sales Desk", version="0.1.0")
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
    templates.env.filters["number"] = format_number
    latest_report: Dict[str, Optional[str]] = {"text": None}

    def entry_state() -> Dict[str, object]:
        return draft.as_dict()

    def respond(request: Request, payload: Dict[str, object]) -> Response:
        """Send browser form posts back to the dashboard; API callers get JSON."""

        if "text/html" in request.headers.get("accept", ""):
            return RedirectResponse("/", status_code=303)
        return JSONResponse(payload)

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(request: Request) -> HTMLResponse:
        """Render the ledger with summary cards and the entry form."""

        summary = store.summary()
        LOGGER.debug(
            "Dashboard summary -> sales: %s cost: %s profit: %s items: %s",
            summary.total_sales,
            summary.total_cost,
            summary.total_profit,
            summary.item_count,
        )
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "summary": summary,
                "transactions": [transaction_view(t) for t in store.newest_first()],
                "entry": entry_state(),
                "countries": [(country.value, config.label) for country, config in COUNTRY_CONFIG.items()],
                "confirmation": gate.as_dict(),
                "analysis_enabled": analyst.configured and len(store) > 0 and not analyst.busy,
                "report": latest_report["text"],
            },
        )

    @app.get("/transactions")
    async def list_transactions() -> JSONResponse:
        """Return the ledger newest first with derived figures."""

        return JSONResponse({"transactions": [transaction_view(t) for t in store.newest_first()]})

    @app.get("/summary")
    async def summary() -> JSONResponse:
        return JSONResponse(store.summary().as_dict())

    @app.get("/entry")
    async def get_entry() -> JSONResponse:
        return JSONResponse(entry_state())

    @app.post("/entry/country")
    async def select_country(country: str = Form(...)) -> JSONResponse:
        """Switch the draft's country and pre-fill its default rates."""

        draft.select_country(country)
        return JSONResponse(entry_state())

    @app.post("/entry/field")
    async def update_field(name: str = Form(...), value: str = Form("")) -> JSONResponse:
        try:
            draft.update_field(name, value)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(entry_state())

    @app.post("/entry/submit")
    async def submit_entry() -> JSONResponse:
        """Record the drafted transaction when required fields are present."""

        transaction = draft.submit()
        if transaction is None:
            raise HTTPException(status_code=400, detail="請填寫客人名字與商品名稱")
        recorded = store.add(transaction)
        return JSONResponse({"transaction": transaction_view(recorded), "entry": entry_state()})

    @app.post("/entry/form")
    async def submit_entry_form(request: Request) -> Response:
        """Apply a whole HTML form to the draft and record it in one step."""

        form = await request.form()
        country = form.get("country")
        if country and country != draft.country.value:
            draft.select_country(country)
        for name in EDITABLE_FIELDS:
            if name in form:
                draft.update_field(name, str(form[name]))
        transaction = draft.submit()
        if transaction is None:
            raise HTTPException(status_code=400, detail="請填寫客人名字與商品名稱")
        recorded = store.add(transaction)
        return respond(request, {"transaction": transaction_view(recorded), "entry": entry_state()})

    @app.post("/transactions/{transaction_id}/delete-request")
    async def request_delete(request: Request, transaction_id: str) -> Response:
        gate.request_delete(transaction_id)
        return respond(request, gate.as_dict())

    @app.post("/transactions/clear-request")
    async def request_clear(request: Request) -> Response:
        gate.request_clear_all()
        return respond(request, gate.as_dict())

    @app.post("/confirmation/confirm")
    async def confirm(request: Request) -> Response:
        """Apply the pending delete or clear."""

        applied = gate.confirm(store)
        return respond(request, {"applied": applied, "summary": store.summary().as_dict()})

    @app.post("/confirmation/cancel")
    async def cancel(request: Request) -> Response:
        gate.cancel()
        return respond(request, gate.as_dict())

    @app.get("/export/clipboard", response_class=PlainTextResponse)
    async def export_clipboard() -> PlainTextResponse:
        """Tab-separated ledger text for pasting into a spreadsheet."""

        return PlainTextResponse(render_clipboard(store.transactions))

    @app.get("/export/csv")
    async def export_csv() -> Response:
        """CSV download of the ledger in entry order."""

        filename = export_filename(date.today(), settings.export_prefix)
        LOGGER.info("Serving CSV export %s with %s rows", filename, len(store))
        return Response(
            content=render_csv(store.transactions).encode("utf-8"),
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
        )

    @app.get("/settings/default-rate")
    async def get_default_rate() -> JSONResponse:
        return JSONResponse({"defaultRate": store.default_rate})

    @app.post("/settings/default-rate")
    async def set_default_rate(rate: float = Form(..., ge=0)) -> JSONResponse:
        store.set_default_rate(rate)
        return JSONResponse({"defaultRate": store.default_rate})

    @app.post("/analysis")
    async def analyse(request: Request) -> Response:
        """Run the AI sales analysis on the current ledger."""

        try:
            report = await analyst.analyse(store.transactions)
        except AnalysisUnavailableError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        except AnalysisInProgressError as error:
            raise HTTPException(status_code=409, detail=str(error)) from error
        latest_report["text"] = report
        return respond(request, {"report": report})

    return app
