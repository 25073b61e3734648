"""
Payload normalizer.
Extracts call data and a target-address hint from raw user input.
"""
import json
from txguard.core.models import NormalizedPayload


def normalize_payload(raw: str) -> NormalizedPayload:
    """
    Accepts either a JSON transaction object or bare hex call data.
    
    Never raises: empty or unrecognized input yields an empty payload.
    """
    trimmed = (raw or "").strip()
    call_data = None
    target_hint = None
    
    # Option 1: JSON object with `data` (and optionally `to`)
    if trimmed.startswith("{"):
        try:
            parsed = json.loads(trimmed)
        except ValueError:
            parsed = None
        
        if isinstance(parsed, dict):
            if isinstance(parsed.get("data"), str):
                call_data = parsed["data"]
            if isinstance(parsed.get("to"), str):
                target_hint = parsed["to"]
    
    # Option 2: direct hex call data
    if not call_data and trimmed.startswith("0x"):
        call_data = trimmed
    
    return NormalizedPayload(call_data=call_data, target_hint=target_hint)
