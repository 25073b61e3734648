"""
Analyze endpoint - /v1/analyze-tx
Decodes a transaction payload and explains it before signing.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException

from txguard.api.v1.schemas.requests import AnalyzeTxRequest
from txguard.api.v1.schemas.responses import StructuredError
from txguard.core.config import settings
from txguard.core.enums import ErrorCode
from txguard.core.models import AnalysisReport
from txguard.services.analyzer import TransactionAnalyzer
from txguard.services.explanation import ExplanationError

logger = logging.getLogger(__name__)

router = APIRouter()

RETRYABLE_CODES = {ErrorCode.UPSTREAM_ERROR, ErrorCode.UPSTREAM_TIMEOUT}


def get_analyzer() -> TransactionAnalyzer:
    """Analyzer wired from process settings."""
    return TransactionAnalyzer.from_settings(settings)


@router.post("/analyze-tx", response_model=AnalysisReport, response_model_by_alias=True)
async def analyze_tx(
    request: AnalyzeTxRequest,
    analyzer: TransactionAnalyzer = Depends(get_analyzer)
):
    """
    **Transaction Intent Analysis**
    
    Returns decoded actions, risk findings, privacy notes, developer hints,
    the onchain registry signal (if any) and a four-field explanation.
    
    With `explanation="model"` a failed explanation yields HTTP 500 with a
    structured error; no degraded report is returned.
    """
    if request.explanation == "rule-based":
        return await analyzer.analyze_offline(request.raw)
    
    try:
        return await analyzer.analyze(request.raw)
    except ExplanationError as e:
        logger.error("Failed to generate AI explanation: %s", e.message)
        error = StructuredError(
            code=e.code,
            message="Failed to generate AI explanation. Check server logs.",
            source="explanation",
            retryable=e.code in RETRYABLE_CODES
        )
        raise HTTPException(status_code=500, detail=error.model_dump(mode="json"))
