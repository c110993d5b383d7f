"""External AI classification clients.

Two implementations share one interface: Gemini called directly through the
google-genai SDK, and a remote classification function reached over HTTP.
Both return an ``AIResponse``; a transport or parsing failure raises
``ClassificationServiceError`` and fails the whole batch.
"""

import json
import re
from abc import ABC, abstractmethod
from typing import Any

import httpx
import structlog

from taxsort.config import settings
from taxsort.core.exceptions import ClassificationServiceError
from taxsort.schemas.classification import AIRequest, AIRequestItem, AIResponse, AIResultItem
from taxsort.services.categories import AI_CATEGORY_KEYS

logger = structlog.get_logger()

DEFAULT_CONFIDENCE = 0.5


class ClassificationClient(ABC):
    """Abstract base for AI classification backends."""

    @abstractmethod
    async def classify(self, request: AIRequest) -> AIResponse:
        """Classify one batch of transactions.

        The response may hold fewer results than requested: transactions the
        service could not classify are simply absent.
        """


class GeminiClassificationClient(ClassificationClient):
    """Google Gemini via the google-genai SDK."""

    def __init__(self, api_key: str | None = None, model: str | None = None, client: Any = None):
        self.api_key = settings.gemini_api_key if api_key is None else api_key
        self.model = model or settings.gemini_model
        self._client = client

    @property
    def client(self):
        if self._client is None:
            if not self.api_key:
                raise ClassificationServiceError(
                    "GEMINI_API_KEY is not configured. "
                    "Set it in your .env file to enable AI classification."
                )
            from google import genai

            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def classify(self, request: AIRequest) -> AIResponse:
        from google.genai import types

        prompt = build_classification_prompt(request.transactions)
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=0.1,
                    max_output_tokens=4096,
                ),
            )
        except ClassificationServiceError:
            raise
        except Exception as e:
            logger.error("gemini_classification_error", error=str(e), batch_size=len(request.transactions))
            raise ClassificationServiceError(f"Gemini API error: {e}") from e

        text = response.text or ""
        if not text:
            raise ClassificationServiceError("No content in Gemini response")
        return AIResponse(success=True, results=parse_classification_response(text))


class RemoteClassificationClient(ClassificationClient):
    """Classification function exposed over HTTP (e.g. an edge function)."""

    def __init__(
        self,
        url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url or settings.classify_function_url
        self.token = settings.classify_function_token if token is None else token
        self.timeout = timeout or settings.classify_timeout
        self._transport = transport

    async def classify(self, request: AIRequest) -> AIResponse:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        payload = {
            "transactions": [t.model_dump() for t in request.transactions],
            "userId": request.user_id,
        }

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(connect=5.0, read=self.timeout, write=10.0, pool=5.0),
                transport=self._transport,
            ) as client:
                resp = await client.post(self.url, json=payload, headers=headers)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as e:
            logger.warning("remote_classification_error", url=self.url, error=str(e))
            raise ClassificationServiceError(f"Classification service error: {e}") from e
        except ValueError as e:
            raise ClassificationServiceError("Classification service returned invalid JSON") from e

        if not isinstance(data, dict):
            raise ClassificationServiceError("Unexpected classification service response")
        if not data.get("success", True):
            return AIResponse(success=False, error=data.get("error") or "classification failed")
        return AIResponse(
            success=True,
            results=[r for r in (_coerce_result(item) for item in data.get("results") or []) if r],
        )


def get_classification_client() -> ClassificationClient:
    """Factory: return the configured classification client."""
    if settings.ai_classifier_provider == "remote":
        return RemoteClassificationClient()
    return GeminiClassificationClient()


# ── Prompt and response handling ───────────────────


def build_classification_prompt(transactions: list[AIRequestItem]) -> str:
    category_list = ", ".join(AI_CATEGORY_KEYS)
    lines = "\n".join(
        f'{i}. ID: {t.id} | Description: "{t.description}" | '
        f"Amount: ${abs(t.amount):.2f} ({t.type})"
        for i, t in enumerate(transactions, start=1)
    )

    return f"""You are a bookkeeping assistant that classifies bank transactions into IRS Schedule C categories for small business tax purposes.

IMPORTANT RULES:
1. Only use categories from this exact list: {category_list}
2. Be conservative - if unsure, use "OTHER_EXPENSES" for business expenses or "PERSONAL_EXPENSE" if likely personal
3. Extract the vendor/merchant name from the description
4. Consider the amount and direction (CREDIT = money in, DEBIT = money out)
5. Common patterns:
   - Gas stations -> CAR_TRUCK_EXPENSES
   - Software (Adobe, Microsoft, etc.) -> SOFTWARE_SUBSCRIPTIONS
   - Office supply stores -> OFFICE_EXPENSES
   - Hardware stores -> MATERIALS_SUPPLIES
   - ATM/Cash withdrawals -> OWNER_DRAWS
   - Transfers between accounts -> TRANSFER_BETWEEN_ACCOUNTS

For each transaction provide: category, subcategory (or null), vendor, confidence (0.0 to 1.0) and a one-sentence reasoning.

TRANSACTIONS:
{lines}

Respond ONLY with a valid JSON array, no markdown:
[{{"id": "transaction_id", "category": "CATEGORY_NAME", "subcategory": null, "vendor": "Vendor Name", "confidence": 0.85, "reasoning": "Brief explanation"}}]"""


_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")


def parse_classification_response(text: str) -> list[AIResultItem]:
    """Parse the model's JSON answer, tolerating fences and surrounding prose."""
    cleaned = _FENCE.sub("", text.strip()).strip()
    parsed = _try_parse_json(cleaned)
    if parsed is None:
        # The model sometimes adds text around the array
        match = re.search(r"\[.*\]", cleaned, re.DOTALL)
        if match:
            parsed = _try_parse_json(match.group())

    if isinstance(parsed, dict):
        parsed = parsed.get("results")
    if not isinstance(parsed, list):
        logger.warning("ai_parse_failed", response=text[:200])
        raise ClassificationServiceError("Failed to parse classification response")

    return [r for r in (_coerce_result(item) for item in parsed) if r]


def _try_parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, ValueError):
        return None


def _clamp_confidence(value: Any) -> float:
    try:
        confidence = float(value) if value else DEFAULT_CONFIDENCE
    except (TypeError, ValueError):
        confidence = DEFAULT_CONFIDENCE
    return min(max(confidence, 0.0), 1.0)


def _coerce_result(item: Any) -> AIResultItem | None:
    if not isinstance(item, dict) or item.get("id") in (None, ""):
        return None
    return AIResultItem(
        id=str(item["id"]),
        category=_text_or_none(item.get("category")),
        subcategory=_text_or_none(item.get("subcategory")),
        vendor=_text_or_none(item.get("vendor")),
        confidence=_clamp_confidence(item.get("confidence")),
        reasoning=_text_or_none(item.get("reasoning")),
    )


def _text_or_none(value: Any) -> str | None:
    if value is None:
        return None
    return str(value).strip() or None
