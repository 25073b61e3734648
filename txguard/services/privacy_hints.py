"""
Privacy notes and developer hints.
Independent of risk severity; baseline entries are always present.
"""
from typing import List, Optional
from txguard.core.enums import ActionKind
from txguard.core.models import DecodedAction, DeveloperHint, PrivacyNote, RiskFinding

ONCHAIN_VISIBILITY = PrivacyNote(
    kind="onchainVisibility",
    description=(
        "Transaction details such as addresses, token amounts, and called "
        "functions are publicly visible on-chain."
    )
)

UNLIMITED_APPROVAL_HINT = DeveloperHint(
    kind="unlimitedApprovalPattern",
    description=(
        "Avoid relying on unlimited ERC-20 approvals. Prefer allowances scoped to "
        "realistic amounts and reset approvals to 0 before changing spenders."
    )
)

APPROVAL_UX_HINT = DeveloperHint(
    kind="approvalUX",
    description=(
        "In your dApp and wallet UI, clearly explain to users what an approval does, "
        "highlight who the spender is, and surface the potential impact of granting it."
    )
)

ABI_COVERAGE_HINT = DeveloperHint(
    kind="abiCoverage",
    description=(
        "This calldata could not be decoded with the standard ERC-20 ABI. Provide the "
        "contract ABI or implement custom decoding so users see a clear description."
    )
)

PRIVACY_DISCLOSURE_HINT = DeveloperHint(
    kind="privacyDisclosure",
    description=(
        "Consider showing users which parts of this transaction will be publicly visible "
        "on-chain (addresses, token amounts, called functions) and link to an explorer "
        "for transparency."
    )
)


def has_payload(call_data: Optional[str]) -> bool:
    """True when call data carries at least one byte after the 0x prefix."""
    if not call_data:
        return False
    body = call_data[2:] if call_data[:2].lower() == "0x" else call_data
    return bool(body.strip())


def privacy_notes(actions: List[DecodedAction]) -> List[PrivacyNote]:
    # Even undecoded call data is public once broadcast.
    return [ONCHAIN_VISIBILITY.model_copy()]


def developer_hints(
    actions: List[DecodedAction],
    risks: List[RiskFinding],
    call_data: Optional[str]
) -> List[DeveloperHint]:
    """Rules fire independently; order is fixed."""
    hints = []
    
    if any(risk.kind == "unlimitedApproval" for risk in risks):
        hints.append(UNLIMITED_APPROVAL_HINT.model_copy())
    
    if any(action.kind == ActionKind.APPROVE for action in actions):
        hints.append(APPROVAL_UX_HINT.model_copy())
    
    if not actions and has_payload(call_data):
        hints.append(ABI_COVERAGE_HINT.model_copy())
    
    hints.append(PRIVACY_DISCLOSURE_HINT.model_copy())
    return hints
