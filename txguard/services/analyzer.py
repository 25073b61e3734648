"""
Transaction Analyzer - Main orchestrator.
Combines the deterministic analysis with the onchain reputation lookup
and the natural-language explanation.
"""
import asyncio
import contextlib
import logging
from typing import Optional
from txguard.core.config import Settings
from txguard.core.models import AnalysisReport, Explanation, OnchainRiskSignal, TransactionAnalysis
from txguard.services.explanation import ModelExplanationGenerator, RuleBasedExplanationGenerator
from txguard.services.onchain_risk_client import OnchainRiskClient
from txguard.services.transaction_analysis import analyze_raw_input

logger = logging.getLogger(__name__)


class TransactionAnalyzer:
    """
    Builds an AnalysisReport for one raw input.
    No state is shared between requests; each call starts from scratch.
    """
    
    def __init__(
        self,
        risk_client: OnchainRiskClient,
        explainer: ModelExplanationGenerator,
        rule_based: Optional[RuleBasedExplanationGenerator] = None
    ):
        self.risk_client = risk_client
        self.explainer = explainer
        self.rule_based = rule_based or RuleBasedExplanationGenerator()
    
    @classmethod
    def from_settings(cls, settings: Settings) -> "TransactionAnalyzer":
        return cls(
            risk_client=OnchainRiskClient.from_settings(settings),
            explainer=ModelExplanationGenerator.from_settings(settings)
        )
    
    async def analyze(self, raw: str) -> AnalysisReport:
        """
        Full pipeline with the model-backed explanation.
        
        The registry lookup runs concurrently with the model call. Explanation
        errors propagate and no partial report is returned.
        """
        analysis = analyze_raw_input(raw)
        risk_task = asyncio.create_task(self.risk_client.fetch_risk(analysis.target_contract))
        
        try:
            explanation = await self.explainer.generate(raw, analysis)
        except Exception:
            await self._discard(risk_task)
            logger.error("Failed to generate explanation for input of %d chars", len(raw or ""))
            raise
        except asyncio.CancelledError:
            await self._discard(risk_task)
            raise
        
        onchain_risk = await risk_task
        logger.info("Explanation source: %s", explanation.source.value)
        return self._build_report(raw, analysis, onchain_risk, explanation)
    
    @staticmethod
    async def _discard(task: asyncio.Task) -> None:
        """Cancel a lookup nobody will read and wait for it to stop."""
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
    
    async def analyze_offline(self, raw: str) -> AnalysisReport:
        """Same report, explained by the deterministic generator."""
        analysis = analyze_raw_input(raw)
        onchain_risk = await self.risk_client.fetch_risk(analysis.target_contract)
        explanation = self.rule_based.generate(raw, analysis)
        return self._build_report(raw, analysis, onchain_risk, explanation)
    
    async def generate_ai_summary(self, raw: str, analysis: TransactionAnalysis) -> str:
        """Single-string summary: the body of the model explanation."""
        explanation = await self.explainer.generate(raw, analysis)
        return explanation.user_body
    
    def _build_report(
        self,
        raw: str,
        analysis: TransactionAnalysis,
        onchain_risk: Optional[OnchainRiskSignal],
        explanation: Explanation
    ) -> AnalysisReport:
        return AnalysisReport(
            input=raw,
            actions=analysis.actions,
            risks=analysis.risks,
            privacy=analysis.privacy,
            developer_hints=analysis.developer_hints,
            onchain_risk=onchain_risk,
            explanation=explanation,
            ai_summary=explanation.user_body
        )
