"""
Configuration management using Pydantic settings.
Loads from environment variables with validation.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""
    
    # Generative model (explanations)
    openai_api_key: str = ""
    openai_api_url: str = "https://api.openai.com/v1/chat/completions"
    openai_model: str = "gpt-4o-mini"
    openai_temperature: float = 0.2
    openai_max_tokens: int = 500
    explanation_timeout_seconds: float = 20.0
    
    # Onchain risk registry
    sepolia_rpc_url: str = ""
    risk_registry_address: str = ""
    onchain_timeout_seconds: float = 10.0
    
    # App settings
    app_name: str = "Transaction Intent Guard"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )
    
    @property
    def onchain_registry_configured(self) -> bool:
        """Both the RPC endpoint and the registry address are set."""
        return bool(self.sepolia_rpc_url and self.risk_registry_address)


settings = Settings()
