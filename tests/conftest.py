"""
Shared fixtures: calldata builders and settings without .env leakage.
"""
import pytest
from eth_abi import encode as abi_encode
from txguard.core.config import Settings
from txguard.services.calldata_decoder import selector_for

SPENDER = "0x1111111111111111111111111111111111111111"
RECIPIENT = "0x2222222222222222222222222222222222222222"
OWNER = "0x3333333333333333333333333333333333333333"
REGISTRY = "0x4444444444444444444444444444444444444444"
MAX_UINT256 = (1 << 256) - 1


def encode_call(signature: str, types, args) -> str:
    return selector_for(signature) + abi_encode(types, args).hex()


def transfer_calldata(to: str, value: int) -> str:
    return encode_call("transfer(address,uint256)", ["address", "uint256"], [to, value])


def approve_calldata(spender: str, value: int) -> str:
    return encode_call("approve(address,uint256)", ["address", "uint256"], [spender, value])


def transfer_from_calldata(sender: str, to: str, value: int) -> str:
    return encode_call(
        "transferFrom(address,address,uint256)",
        ["address", "address", "uint256"],
        [sender, to, value],
    )


@pytest.fixture
def make_settings():
    """Settings built only from explicit values (no env file)."""
    def _make(**overrides):
        values = {
            "openai_api_key": "",
            "sepolia_rpc_url": "",
            "risk_registry_address": "",
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make
