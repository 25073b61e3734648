"""
Call data decoder for the fixed ERC-20 interface set.
Matches the 4-byte selector and decodes arguments with eth_abi.
"""
from typing import Dict, List, Optional, Tuple
from eth_abi import decode as abi_decode
from eth_utils import keccak, to_checksum_address
from txguard.core.enums import ActionKind
from txguard.core.models import (
    ApproveCall,
    DecodedAction,
    DecodedCall,
    TransferCall,
    TransferFromCall,
)

TOKEN_DECIMALS = 18

KNOWN_SIGNATURES: Dict[str, List[str]] = {
    "transfer(address,uint256)": ["address", "uint256"],
    "approve(address,uint256)": ["address", "uint256"],
    "transferFrom(address,address,uint256)": ["address", "address", "uint256"],
}


def selector_for(signature: str) -> str:
    return "0x" + keccak(text=signature)[:4].hex()


SELECTORS: Dict[str, Tuple[str, List[str]]] = {
    selector_for(sig): (sig, types) for sig, types in KNOWN_SIGNATURES.items()
}


def format_token_amount(value: int, decimals: int = TOKEN_DECIMALS) -> str:
    """
    Exact decimal rendering of a base-unit amount.
    Trailing fractional zeros are stripped; no floating point involved.
    """
    try:
        whole, fraction = divmod(int(value), 10 ** decimals)
        if not fraction:
            return str(whole)
        digits = str(fraction).rjust(decimals, "0").rstrip("0")
        return f"{whole}.{digits}"
    except (TypeError, ValueError):
        return str(value)


class CalldataDecoder:
    """Decodes transfer / approve / transferFrom call data into actions."""
    
    def decode_call(self, call_data: Optional[str]) -> Optional[DecodedCall]:
        """
        Returns the typed call, or None on selector mismatch or malformed bytes.
        """
        if not call_data:
            return None
        
        try:
            data = bytes.fromhex(call_data[2:] if call_data[:2].lower() == "0x" else call_data)
        except ValueError:
            return None
        
        if len(data) < 4:
            return None
        
        match = SELECTORS.get("0x" + data[:4].hex())
        if not match:
            return None
        
        signature, types = match
        try:
            args = abi_decode(types, data[4:])
        except Exception:
            return None
        
        if signature.startswith("transferFrom("):
            sender, to, value = args
            return TransferFromCall(
                sender=to_checksum_address(sender),
                to=to_checksum_address(to),
                value=value
            )
        if signature.startswith("transfer("):
            to, value = args
            return TransferCall(to=to_checksum_address(to), value=value)
        
        spender, value = args
        return ApproveCall(spender=to_checksum_address(spender), value=value)
    
    def decode(self, call_data: Optional[str]) -> List[DecodedAction]:
        """Decode call data into at most one action. Never raises."""
        call = self.decode_call(call_data)
        if call is None:
            return []
        return [self.describe(call)]
    
    def describe(self, call: DecodedCall) -> DecodedAction:
        """Human-readable action for a decoded call."""
        if isinstance(call, TransferCall):
            amount = format_token_amount(call.value)
            return DecodedAction(
                kind=ActionKind.TRANSFER,
                description=f"Transfer of {amount} tokens to {call.to}.",
                severity="info",
                call=call
            )
        
        if isinstance(call, ApproveCall):
            if call.unlimited:
                description = f"Approve {call.spender} to spend an unlimited amount of tokens."
            else:
                amount = format_token_amount(call.value)
                description = f"Approve {call.spender} to spend up to {amount} tokens."
            return DecodedAction(
                kind=ActionKind.APPROVE,
                description=description,
                severity="info",
                call=call
            )
        
        amount = format_token_amount(call.value)
        return DecodedAction(
            kind=ActionKind.TRANSFER_FROM,
            description=f"Transfer of {amount} tokens from {call.sender} to {call.to}.",
            severity="info",
            call=call
        )
