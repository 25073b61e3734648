"""
Pydantic models for transaction analysis results.
Python attributes are snake_case; JSON is camelCase for UI consumers.
"""
from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from .enums import ActionKind, ExplanationSource, OnchainRiskLevel, RiskLevel

MAX_UINT256 = (1 << 256) - 1


class CamelModel(BaseModel):
    """Base model serialising with camelCase aliases."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ===== Decoded calls (closed variant, one case per known signature) =====

class TransferCall(CamelModel):
    """transfer(address,uint256)"""
    function: Literal["transfer"] = "transfer"
    to: str
    value: int


class ApproveCall(CamelModel):
    """approve(address,uint256)"""
    function: Literal["approve"] = "approve"
    spender: str
    value: int

    @property
    def unlimited(self) -> bool:
        return self.value == MAX_UINT256


class TransferFromCall(CamelModel):
    """transferFrom(address,address,uint256)"""
    function: Literal["transferFrom"] = "transferFrom"
    sender: str
    to: str
    value: int


DecodedCall = Annotated[
    Union[TransferCall, ApproveCall, TransferFromCall],
    Field(discriminator="function"),
]


# ===== Analysis facets =====

class DecodedAction(CamelModel):
    """One recognized function call, described for humans."""
    kind: ActionKind
    description: str
    severity: Optional[str] = None
    call: Optional[DecodedCall] = Field(None, exclude=True)


class RiskFinding(CamelModel):
    """A graded risk derived from decoded actions."""
    kind: str
    level: RiskLevel
    description: str


class PrivacyNote(CamelModel):
    kind: str
    description: str


class DeveloperHint(CamelModel):
    kind: str
    description: str


class OnchainRiskSignal(CamelModel):
    """Reputation entry read from the onchain registry."""
    source: Literal["onchainRegistry"] = "onchainRegistry"
    contract: str
    level: OnchainRiskLevel
    label: str = ""
    uri: Optional[str] = None


class Explanation(CamelModel):
    """Four-field natural-language explanation."""
    user_headline: str
    user_body: str
    user_privacy_note: str
    dev_notes: str
    source: ExplanationSource


class NormalizedPayload(CamelModel):
    call_data: Optional[str] = None
    target_hint: Optional[str] = None


class TransactionAnalysis(CamelModel):
    """Deterministic part of a report (no remote lookups)."""
    actions: List[DecodedAction] = Field(default_factory=list)
    risks: List[RiskFinding] = Field(default_factory=list)
    privacy: List[PrivacyNote] = Field(default_factory=list)
    developer_hints: List[DeveloperHint] = Field(default_factory=list)
    call_data: Optional[str] = None
    target_contract: Optional[str] = None


class AnalysisReport(CamelModel):
    """Aggregated result returned to the presentation layer."""
    input: str
    actions: List[DecodedAction]
    risks: List[RiskFinding]
    privacy: List[PrivacyNote]
    developer_hints: List[DeveloperHint]
    onchain_risk: Optional[OnchainRiskSignal] = None
    explanation: Explanation
    ai_summary: str = Field(..., description="Same as explanation.userBody")
