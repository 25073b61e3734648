import json
import httpx
import pytest
from fastapi.testclient import TestClient
from conftest import MAX_UINT256, REGISTRY, SPENDER, approve_calldata
from txguard.api.v1.endpoints.analyze_tx import get_analyzer
from txguard.main import app
from txguard.services.analyzer import TransactionAnalyzer
from txguard.services.explanation import ModelExplanationGenerator
from txguard.services.onchain_risk_client import OnchainRiskClient

MODEL_FIELDS = {
    "userHeadline": "Unlimited approval.",
    "userBody": "The spender can take every token you hold.",
    "userPrivacyNote": "Public on-chain.",
    "devNotes": "MaxUint256 allowance.",
}


def ok_handler(request):
    return httpx.Response(200, json={"choices": [{"message": {"content": json.dumps(MODEL_FIELDS)}}]})


def use_analyzer(handler=ok_handler, api_key="sk-test", registry_result=None):
    risk_client = OnchainRiskClient(rpc_url="http://localhost:8545", registry_address=REGISTRY)

    async def fake_read(target):
        return registry_result

    risk_client._read_registry = fake_read
    analyzer = TransactionAnalyzer(
        risk_client=risk_client,
        explainer=ModelExplanationGenerator(api_key=api_key, transport=httpx.MockTransport(handler))
    )
    app.dependency_overrides[get_analyzer] = lambda: analyzer


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root_and_health(client):
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/").json()["endpoints"]["analyze_tx"] == "POST /v1/analyze-tx"


def test_analyze_returns_camel_case_report(client):
    use_analyzer(registry_result=(3, "Drainer", ""))
    raw = json.dumps({"to": SPENDER, "data": approve_calldata(SPENDER, MAX_UINT256)})

    response = client.post("/v1/analyze-tx", json={"raw": raw})

    assert response.status_code == 200
    body = response.json()
    assert body["input"] == raw
    assert body["actions"][0]["kind"] == "approve"
    assert "call" not in body["actions"][0]
    assert body["risks"] == [{
        "kind": "unlimitedApproval",
        "level": "high",
        "description": body["risks"][0]["description"],
    }]
    assert [h["kind"] for h in body["developerHints"]] == [
        "unlimitedApprovalPattern", "approvalUX", "privacyDisclosure"
    ]
    assert body["onchainRisk"]["level"] == "high"
    assert body["onchainRisk"]["source"] == "onchainRegistry"
    assert body["explanation"]["userHeadline"] == "Unlimited approval."
    assert body["explanation"]["source"] == "model"
    assert body["aiSummary"] == MODEL_FIELDS["userBody"]


def test_missing_body_field_defaults_to_empty_input(client):
    use_analyzer()
    response = client.post("/v1/analyze-tx", json={})
    assert response.status_code == 200
    body = response.json()
    assert body["input"] == ""
    assert body["actions"] == []
    assert body["onchainRisk"] is None


def test_explanation_failure_is_structured_500(client):
    use_analyzer(handler=lambda request: httpx.Response(500, text="down"))
    response = client.post("/v1/analyze-tx", json={"raw": "0x"})

    assert response.status_code == 500
    detail = response.json()["detail"]
    assert detail["code"] == "UPSTREAM_ERROR"
    assert detail["source"] == "explanation"
    assert detail["retryable"] is True


def test_missing_credential_is_not_degraded(client):
    use_analyzer(api_key="")
    response = client.post("/v1/analyze-tx", json={"raw": "0x"})

    assert response.status_code == 500
    assert response.json()["detail"]["code"] == "MISSING_API_KEY"
    assert response.json()["detail"]["retryable"] is False


def test_rule_based_explanation_on_request(client):
    use_analyzer(api_key="")
    response = client.post("/v1/analyze-tx", json={"raw": "0x", "explanation": "rule-based"})

    assert response.status_code == 200
    explanation = response.json()["explanation"]
    assert explanation["source"] == "rule-based"
    assert explanation["userHeadline"].startswith("No specific ERC-20 function")
