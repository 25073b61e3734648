"""
Risk classifier.
Deterministic (action pattern -> finding) rules over decoded actions.
"""
from typing import Callable, List, Optional, Sequence
from txguard.core.enums import RiskLevel
from txguard.core.models import ApproveCall, DecodedAction, RiskFinding

RiskRule = Callable[[DecodedAction], Optional[RiskFinding]]

UNLIMITED_APPROVAL_WARNING = (
    "This approval appears to be unlimited (MaxUint256). This is often risky "
    "and should only be granted to highly trusted contracts."
)


def unlimited_approval_rule(action: DecodedAction) -> Optional[RiskFinding]:
    """Flag approvals granting the maximum uint256 allowance."""
    if isinstance(action.call, ApproveCall) and action.call.unlimited:
        return RiskFinding(
            kind="unlimitedApproval",
            level=RiskLevel.HIGH,
            description=UNLIMITED_APPROVAL_WARNING
        )
    return None


class RiskClassifier:
    """Applies every rule to every action, in action order."""
    
    DEFAULT_RULES: Sequence[RiskRule] = (unlimited_approval_rule,)
    
    def __init__(self, rules: Optional[Sequence[RiskRule]] = None):
        self.rules = list(rules) if rules is not None else list(self.DEFAULT_RULES)
    
    def classify(self, actions: List[DecodedAction]) -> List[RiskFinding]:
        findings = []
        for action in actions:
            for rule in self.rules:
                finding = rule(action)
                if finding is not None:
                    findings.append(finding)
        return findings
