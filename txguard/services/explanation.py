"""
Explanation generators.

Two independent strategies over the same analysis:
- ModelExplanationGenerator: chat-completion call, strict (every failure raises).
- RuleBasedExplanationGenerator: deterministic composer that never fails.

The model path never falls back to the rule-based one on its own; callers
that want resilience choose the rule-based generator explicitly.
"""
import json
import logging
import re
from typing import Any, Dict, Optional
import httpx
from txguard.core.config import Settings
from txguard.core.enums import ErrorCode, ExplanationSource
from txguard.core.models import Explanation, TransactionAnalysis

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("userHeadline", "userBody", "userPrivacyNote", "devNotes")

SYSTEM_PROMPT = (
    "You are an assistant that explains Web3 transactions for end users and developers. "
    "Respond ONLY with minified JSON, no markdown, following this shape strictly: "
    "{ userHeadline: string; userBody: string; userPrivacyNote: string; devNotes: string }. "
    "userHeadline: one short sentence summary for beginners. userBody: 2-4 short sentences "
    "explaining what will happen and key risks. userPrivacyNote: 1 short sentence about "
    "privacy implications. devNotes: a longer paragraph for developers and advanced users."
)

USER_INSTRUCTION = (
    "Explain the following transaction analysis to an end user. "
    "Input is a JSON object with raw calldata and a decoded analysis. "
    "Focus on what will happen, the main risks and privacy implications.\n\n"
)

NO_INPUT_SUMMARY = (
    "No input was provided. To analyze a transaction, please paste calldata or a "
    "JSON object containing a `data` field."
)

NOTHING_DECODED_SUMMARY = (
    "No specific ERC-20 function (transfer, approve, transferFrom) could be decoded "
    "from this input. It may be a different contract interface or malformed calldata."
)

DEFAULT_PRIVACY_NOTE = (
    "This transaction will be recorded on-chain. Anyone can see the addresses involved, "
    "amounts, and function called."
)

SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")


# ===== Errors =====

class ExplanationError(Exception):
    """Base class for failures of the model-backed explanation path."""
    code = ErrorCode.INTERNAL_ERROR
    
    def __init__(self, message: str, code: Optional[ErrorCode] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ExplanationConfigError(ExplanationError):
    code = ErrorCode.MISSING_API_KEY


class ExplanationUpstreamError(ExplanationError):
    code = ErrorCode.UPSTREAM_ERROR
    
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[ErrorCode] = None
    ):
        super().__init__(message, code)
        self.status_code = status_code


class ExplanationContentError(ExplanationError):
    code = ErrorCode.INVALID_RESPONSE


class ExplanationParseError(ExplanationError):
    code = ErrorCode.PARSE_ERROR


class ExplanationSchemaError(ExplanationError):
    code = ErrorCode.SCHEMA_ERROR


def _fail(error: ExplanationError, *details: Any) -> ExplanationError:
    logger.error("%s %s", error.message, " ".join(str(d) for d in details))
    return error


# ===== Shared payload =====

def describe_for_model(raw: str, analysis: TransactionAnalysis) -> Dict[str, Any]:
    """JSON-ready view of the analysis sent to the model."""
    return {
        "rawInput": raw,
        "actions": [a.model_dump(mode="json", by_alias=True) for a in analysis.actions],
        "risks": [r.model_dump(mode="json", by_alias=True) for r in analysis.risks],
        "privacy": [p.model_dump(mode="json", by_alias=True) for p in analysis.privacy],
    }


def _privacy_summary(analysis: TransactionAnalysis) -> str:
    return " ".join(f"{item.kind}: {item.description}" for item in analysis.privacy).strip()


# ===== Rule-based strategy =====

class RuleBasedExplanationGenerator:
    """Deterministic explanation composed from the analysis. Never fails."""
    
    def build_summary(self, raw: str, analysis: TransactionAnalysis) -> str:
        if not (raw or "").strip():
            return NO_INPUT_SUMMARY
        
        parts = []
        
        if not analysis.actions:
            parts.append(NOTHING_DECODED_SUMMARY)
        else:
            action_summaries = " ".join(action.description for action in analysis.actions)
            parts.append(f"Detected ERC-20-related activity: {action_summaries}")
        
        if analysis.risks:
            risk_summaries = " ".join(
                f"{risk.kind} (level: {risk.level.value}) - {risk.description}"
                for risk in analysis.risks
            )
            parts.append(f"Risk assessment: {risk_summaries}")
        
        parts.append(f"Privacy note: {_privacy_summary(analysis)}")
        return " ".join(parts)
    
    def generate(self, raw: str, analysis: TransactionAnalysis) -> Explanation:
        summary = self.build_summary(raw, analysis)
        
        # Headline is the first sentence, body the rest.
        first_sentence, *rest = SENTENCE_BOUNDARY.split(summary)
        headline = first_sentence.strip() or "Transaction summary"
        body = " ".join(rest).strip() or summary
        
        return Explanation(
            user_headline=headline,
            user_body=body,
            user_privacy_note=_privacy_summary(analysis) or DEFAULT_PRIVACY_NOTE,
            dev_notes=summary,
            source=ExplanationSource.RULE_BASED
        )


# ===== Model-backed strategy =====

class ModelExplanationGenerator:
    """
    Chat-completion backed explanation.
    
    Strict mode: a missing credential, a non-2xx response, missing content,
    invalid JSON or missing fields all raise an ExplanationError subclass.
    """
    
    def __init__(
        self,
        api_key: str = "",
        api_url: str = "https://api.openai.com/v1/chat/completions",
        model: str = "gpt-4o-mini",
        temperature: float = 0.2,
        max_tokens: int = 500,
        timeout: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.transport = transport
    
    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "ModelExplanationGenerator":
        return cls(
            api_key=settings.openai_api_key,
            api_url=settings.openai_api_url,
            model=settings.openai_model,
            temperature=settings.openai_temperature,
            max_tokens=settings.openai_max_tokens,
            timeout=settings.explanation_timeout_seconds,
            transport=transport
        )
    
    def build_request(self, raw: str, analysis: TransactionAnalysis) -> Dict[str, Any]:
        return {
            "model": self.model,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "response_format": {"type": "json_object"},
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": USER_INSTRUCTION + json.dumps(describe_for_model(raw, analysis), indent=2),
                },
            ],
        }
    
    async def generate(self, raw: str, analysis: TransactionAnalysis) -> Explanation:
        if not self.api_key:
            raise _fail(ExplanationConfigError(
                "Missing OPENAI_API_KEY for AI explanation."
            ), "strict mode, refusing to fall back")
        
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.api_url,
                    json=self.build_request(raw, analysis),
                    headers=headers
                )
        except httpx.TimeoutException as e:
            raise _fail(ExplanationUpstreamError(
                "Model API timed out.", code=ErrorCode.UPSTREAM_TIMEOUT
            ), e) from e
        except httpx.HTTPError as e:
            raise _fail(ExplanationUpstreamError(f"Model API request failed: {e}"), e) from e
        
        if not response.is_success:
            raise _fail(ExplanationUpstreamError(
                f"Model API error: {response.status_code}",
                status_code=response.status_code
            ), response.text)
        
        content = self._extract_content(response)
        
        try:
            parsed = json.loads(content)
        except ValueError as e:
            raise _fail(ExplanationParseError(
                "Failed to parse model explanation JSON."
            ), e, content) from e
        
        if not isinstance(parsed, dict) or not all(
            isinstance(parsed.get(name), str) for name in REQUIRED_FIELDS
        ):
            raise _fail(ExplanationSchemaError(
                "Model explanation JSON missing required fields."
            ), parsed)
        
        explanation = Explanation(
            user_headline=parsed["userHeadline"].strip(),
            user_body=parsed["userBody"].strip(),
            user_privacy_note=parsed["userPrivacyNote"].strip(),
            dev_notes=parsed["devNotes"].strip(),
            source=ExplanationSource.MODEL
        )
        logger.info("Generated explanation via model: %s", explanation.user_headline)
        return explanation
    
    def _extract_content(self, response: httpx.Response) -> str:
        """First choice's message content, or ExplanationContentError."""
        try:
            data = response.json()
        except ValueError:
            data = None
        
        content = None
        if isinstance(data, dict):
            choices = data.get("choices")
            if isinstance(choices, list) and choices and isinstance(choices[0], dict):
                message = choices[0].get("message") or {}
                if isinstance(message, dict):
                    content = message.get("content")
        
        if not isinstance(content, str) or not content.strip():
            raise _fail(ExplanationContentError(
                "Invalid model response content."
            ), response.text)
        return content
