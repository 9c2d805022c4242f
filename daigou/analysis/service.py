"""Mini README: Gemini-backed sales analysis of the ledger.

Structure:
    * build_analysis_rows - compact per-transaction summary sent as context.
    * build_prompt - Traditional-Chinese analyst prompt around those rows.
    * SalesAnalyst - single-flight client that never raises call failures.

The analyst reads a snapshot of the ledger and never mutates it. A missing
API key is refused up front with ``AnalysisUnavailableError`` so the caller
can show a message. A second request while one is running raises
``AnalysisInProgressError``. Failures of the remote call are logged and
turned into a fixed message.
"""

from __future__ import annotations

import json
from typing import Dict, Iterable, List, Optional

import google.generativeai as genai

from ..finance.countries import resolve_country
from ..finance.derivation import derive
from ..finance.ledger import Transaction
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

NO_DATA_MESSAGE = "尚無銷售數據可供分析。請先新增一些交易紀錄。"
MISSING_KEY_MESSAGE = "請先設定 API Key 才能使用 AI 分析功能。"
FAILURE_MESSAGE = "分析過程中發生錯誤，請檢查您的 API Key 或稍後再試。"
EMPTY_REPLY_MESSAGE = "無法產生分析報告。"
BUSY_MESSAGE = "分析進行中，請稍候。"

_PROMPT_TEMPLATE = """\
你是一位專業的代購銷售分析師。以下是目前的銷售數據 (JSON 格式)，包含不同國家 (JP=日本, KR=韓國, OTHER=其他) 的代購紀錄：
{data}

請用繁體中文 (Traditional Chinese) 為我提供一份簡短的分析報告 (約 150-200 字)。
重點包含：
1. 最賺錢的商品是什麼？(請考慮國家來源)
2. 不同國家的代購效益分析（例如日本 vs 韓國哪個利潤較好）。
3. 給予賣家的經營建議 (例如匯率波動應對或選品建議)。

請使用條列式呈現，語氣專業且正面。
"""


class AnalysisUnavailableError(RuntimeError):
    """Raised when no API key is configured."""

    def __init__(self, message: str = MISSING_KEY_MESSAGE) -> None:
        super().__init__(message)


class AnalysisInProgressError(RuntimeError):
    """Raised when an analysis is requested while another is running."""

    def __init__(self, message: str = BUSY_MESSAGE) -> None:
        super().__init__(message)


def build_analysis_rows(transactions: Iterable[Transaction]) -> List[Dict[str, object]]:
    """Summarise each transaction with the figures the analyst needs."""

    rows: List[Dict[str, object]] = []
    for transaction in transactions:
        rows.append(
            {
                "country": resolve_country(transaction.country).value,
                "item": transaction.item_name,
                "qty": transaction.quantity,
                "cost": transaction.cost_foreign,
                "rate": transaction.exchange_rate,
                "sold": transaction.price_sold,
                "profit": derive(transaction).total_profit,
            }
        )
    return rows


def build_prompt(rows: List[Dict[str, object]]) -> str:
    return _PROMPT_TEMPLATE.format(data=json.dumps(rows, ensure_ascii=False))


class SalesAnalyst:
    """Ask Gemini for a short written analysis of the ledger."""

    def __init__(self, api_key: Optional[str] = None, model: str = "gemini-2.0-flash") -> None:
        self._api_key = api_key or ""
        self._model = model
        self._busy = False

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    @property
    def busy(self) -> bool:
        return self._busy

    def _generative_model(self) -> "genai.GenerativeModel":
        genai.configure(api_key=self._api_key)
        return genai.GenerativeModel(self._model)

    async def analyse(self, transactions: Iterable[Transaction]) -> str:
        """Return report text for a snapshot of ``transactions``."""

        if not self.configured:
            raise AnalysisUnavailableError()
        if self._busy:
            raise AnalysisInProgressError()

        snapshot = list(transactions)
        if not snapshot:
            return NO_DATA_MESSAGE

        self._busy = True
        try:
            prompt = build_prompt(build_analysis_rows(snapshot))
            LOGGER.info("Requesting sales analysis for %s transactions", len(snapshot))
            response = await self._generative_model().generate_content_async(prompt)
            text = getattr(response, "text", "") or ""
        except Exception:
            LOGGER.exception("Sales analysis request failed")
            return FAILURE_MESSAGE
        finally:
            self._busy = False
        return text or EMPTY_REPLY_MESSAGE
