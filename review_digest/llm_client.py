import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union
import httpx
from .config import CFG, Settings
from .errors import BadGateway, ConfigMissing, FailureKind, LLMClientError, MalformedResponse, ProviderError
from .preprocess import clean_list
from .prompts import SYSTEM_PROMPT

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class LLMSuccess:
    pros: List[str] = field(default_factory=list)
    cons: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class LLMFailure:
    kind: FailureKind
    status_code: Optional[int] = None
    detail: str = ""


LLMResult = Union[LLMSuccess, LLMFailure]


class LLMClient:
    """
    Chat-completion client for the pros/cons digest:
      - summarize(prompt) -> LLMSuccess | LLMFailure   (never raises)
      - complete(prompt)  -> LLMSuccess                (raises classified LLMClientError)
    One attempt per call: connect/read phases use httpx timeouts and the whole
    call is capped at request_timeout seconds of wall-clock time.
    """

    def __init__(self, settings: Settings = CFG, transport: Optional[httpx.BaseTransport] = None):
        self.settings = settings
        timeout = httpx.Timeout(settings.request_timeout, connect=settings.connect_timeout)
        self.session = httpx.Client(timeout=timeout, transport=transport)

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    # ---------------- public API ----------------
    def summarize(self, prompt: str) -> LLMResult:
        try:
            return self.complete(prompt)
        except LLMClientError as e:
            return LLMFailure(kind=e.kind, status_code=e.status_code, detail=str(e))

    def complete(self, prompt: str) -> LLMSuccess:
        api_key = self.settings.llm_api_key
        if not api_key:
            raise ConfigMissing("DEEPSEEK_API_KEY is not configured")

        try:
            payload = {
                "model": self.settings.llm_model,
                "temperature": self.settings.temperature,
                "messages": [
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            }
            headers = {
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            }
            LOGGER.debug("Calling %s model=%s", self.settings.llm_api_url, self.settings.llm_model)
            deadline = time.monotonic() + self.settings.request_timeout
            with self.session.stream("POST", self.settings.llm_api_url, json=payload, headers=headers) as r:
                if not 200 <= r.status_code < 300:
                    raise ProviderError(r.status_code)
                body = _read_body(r, deadline)

            content = _message_content(json.loads(body))
            if content is None or not content.strip():
                raise BadGateway("provider returned empty response")

            parsed = parse_summary_content(content)
            return LLMSuccess(pros=parsed["pros"], cons=parsed["cons"])
        except LLMClientError:
            raise
        except Exception as e:
            # timeouts, transport errors, invalid JSON: all reported as one class
            raise MalformedResponse(f"{type(e).__name__}: {e}") from e


# ---------------- parsing helpers ----------------
def _read_body(response: httpx.Response, deadline: float) -> bytes:
    """Collect the response body, giving up once the wall-clock deadline has passed."""
    chunks = []
    for chunk in response.iter_bytes():
        if time.monotonic() > deadline:
            raise MalformedResponse("request deadline exceeded while reading provider response")
        chunks.append(chunk)
    return b"".join(chunks)


def _message_content(body: Any) -> Optional[str]:
    """
    choices[0].message.content as text, or None when any step of the path is missing.
    Scalars read as their JSON text (null -> "null", 5 -> "5"); objects and arrays read as "".
    """
    try:
        content = body["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    if isinstance(content, str):
        return content
    if content is None or isinstance(content, (bool, int, float)):
        return json.dumps(content)
    return ""


def extract_json_object(raw: Optional[str]) -> str:
    s = (raw or "").strip()
    start = s.find("{")
    end = s.rfind("}")
    if start < 0 or end <= start:
        raise MalformedResponse("no JSON object in provider content")
    return s[start:end + 1]


def _as_text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return json.dumps(value)
    return None  # null, objects and arrays carry no bullet text


def as_string_list(node: Any) -> List[str]:
    if not isinstance(node, list):
        return []
    return clean_list(_as_text(v) for v in node)


def parse_summary_content(content: str) -> Dict[str, List[str]]:
    """Parse free-form assistant text into {"pros": [...], "cons": [...]}."""
    data = json.loads(extract_json_object(content))
    if not isinstance(data, dict):
        raise MalformedResponse("provider content is not a JSON object")
    return {"pros": as_string_list(data.get("pros")), "cons": as_string_list(data.get("cons"))}
