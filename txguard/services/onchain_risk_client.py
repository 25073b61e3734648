"""
Onchain risk registry client.
Best-effort reputation lookup; every failure resolves to "no signal" (None).
"""
import asyncio
import logging
from typing import Any, Optional, Tuple
from eth_utils import to_checksum_address
from web3 import AsyncWeb3
from txguard.core.config import Settings
from txguard.core.enums import OnchainRiskLevel
from txguard.core.models import OnchainRiskSignal

logger = logging.getLogger(__name__)

RISK_REGISTRY_ABI = [
    {
        "name": "getRisk",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "target", "type": "address"}],
        "outputs": [
            {
                "name": "",
                "type": "tuple",
                "components": [
                    {"name": "level", "type": "uint8"},
                    {"name": "label", "type": "string"},
                    {"name": "uri", "type": "string"},
                ],
            }
        ],
    }
]

LEVEL_CODES = {
    1: OnchainRiskLevel.LOW,
    2: OnchainRiskLevel.MEDIUM,
    3: OnchainRiskLevel.HIGH,
}


def map_level(raw_level: Any) -> OnchainRiskLevel:
    try:
        return LEVEL_CODES.get(int(raw_level), OnchainRiskLevel.UNKNOWN)
    except (TypeError, ValueError):
        return OnchainRiskLevel.UNKNOWN


def is_address_like(value: Optional[str]) -> bool:
    """Basic syntactic check: 0x prefix and 42 characters."""
    return bool(value) and value.startswith("0x") and len(value) == 42


class OnchainRiskClient:
    """Client for the RiskTagRegistry `getRisk(address)` view."""
    
    def __init__(
        self,
        rpc_url: str = "",
        registry_address: str = "",
        timeout: float = 10.0,
        provider: Optional[Any] = None
    ):
        self.rpc_url = rpc_url
        self.registry_address = registry_address
        self.timeout = timeout
        # Defaults to an HTTP provider for rpc_url.
        self.provider = provider
    
    @classmethod
    def from_settings(cls, settings: Settings) -> "OnchainRiskClient":
        return cls(
            rpc_url=settings.sepolia_rpc_url,
            registry_address=settings.risk_registry_address,
            timeout=settings.onchain_timeout_seconds
        )
    
    @property
    def configured(self) -> bool:
        return bool(self.rpc_url and self.registry_address)
    
    async def fetch_risk(self, target: Optional[str]) -> Optional[OnchainRiskSignal]:
        """
        Look up the registry entry for `target`.
        
        Returns None when unconfigured, when the address is malformed,
        when the call fails, or when the entry carries no information.
        """
        if not target or not self.configured:
            return None
        
        if not is_address_like(target):
            return None
        
        try:
            raw_level, label, uri = await asyncio.wait_for(
                self._read_registry(target),
                timeout=self.timeout
            )
        except Exception as e:
            logger.warning("Onchain risk lookup failed for %s: %s", target, e)
            return None
        
        level = map_level(raw_level)
        if level == OnchainRiskLevel.UNKNOWN and not label and not uri:
            return None
        
        return OnchainRiskSignal(
            contract=target,
            level=level,
            label=str(label or ""),
            uri=str(uri) if uri else None
        )
    
    async def _read_registry(self, target: str) -> Tuple[Any, Any, Any]:
        """Single read-only eth_call against the registry."""
        provider = self.provider if self.provider is not None else AsyncWeb3.AsyncHTTPProvider(self.rpc_url)
        w3 = AsyncWeb3(provider)
        registry = w3.eth.contract(
            address=to_checksum_address(self.registry_address),
            abi=RISK_REGISTRY_ABI
        )
        result = await registry.functions.getRisk(to_checksum_address(target)).call()
        level, label, uri = result
        return level, label, uri
