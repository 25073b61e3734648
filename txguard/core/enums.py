"""
Core enums for transaction analysis.
Defines action kinds, risk grades and error codes.
"""
from enum import Enum


class ActionKind(str, Enum):
    """Recognized token-interface calls."""
    TRANSFER = "transfer"
    APPROVE = "approve"
    TRANSFER_FROM = "transferFrom"


class RiskLevel(str, Enum):
    """Grade of a deterministic risk finding."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class OnchainRiskLevel(str, Enum):
    """Grade reported by the onchain reputation registry."""
    UNKNOWN = "unknown"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ExplanationSource(str, Enum):
    """Which strategy produced an explanation."""
    MODEL = "model"
    RULE_BASED = "rule-based"


class ErrorCode(str, Enum):
    """Standardized error codes."""
    MISSING_API_KEY = "MISSING_API_KEY"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    UPSTREAM_TIMEOUT = "UPSTREAM_TIMEOUT"
    INVALID_RESPONSE = "INVALID_RESPONSE"   # No usable message content
    PARSE_ERROR = "PARSE_ERROR"             # Content is not JSON
    SCHEMA_ERROR = "SCHEMA_ERROR"           # JSON lacks required fields
    INTERNAL_ERROR = "INTERNAL_ERROR"
