"""
Synchronous transaction analysis pipeline.
Normalizer -> decoder -> risk classifier -> privacy notes and hints.
"""
from typing import Optional
from txguard.core.models import TransactionAnalysis
from txguard.services.calldata_decoder import CalldataDecoder
from txguard.services.payload_normalizer import normalize_payload
from txguard.services.privacy_hints import developer_hints, privacy_notes
from txguard.services.risk_classifier import RiskClassifier


def analyze_raw_input(
    raw: str,
    decoder: Optional[CalldataDecoder] = None,
    classifier: Optional[RiskClassifier] = None
) -> TransactionAnalysis:
    """Pure, CPU-only analysis. Never raises on bad input."""
    decoder = decoder or CalldataDecoder()
    classifier = classifier or RiskClassifier()
    
    payload = normalize_payload(raw)
    actions = decoder.decode(payload.call_data)
    risks = classifier.classify(actions)
    
    return TransactionAnalysis(
        actions=actions,
        risks=risks,
        privacy=privacy_notes(actions),
        developer_hints=developer_hints(actions, risks, payload.call_data),
        call_data=payload.call_data,
        target_contract=payload.target_hint
    )
