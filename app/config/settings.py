from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

AccessLevelName = Literal["high", "medium"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Server
    port: int = 3001
    debug: bool = False
    cors_origins: list[str] = ["*"]

    # GitHub - token used for every docs/product repo operation
    github_token: str = ""

    # Documentation repository (PRs and auto-commits land here)
    docs_repo_owner: str = "haritha1313"
    docs_repo: str = "oqoqo-demo-docs"

    # Product repository (the demo pushes its code change here)
    product_repo_owner: str = "haritha1313"
    product_repo: str = "oqoqo-demo-product"

    # Shared secret expected in the X-Webhook-Secret header
    webhook_secret: str = "demo-secret"

    # Bearer token for admin endpoints
    # Empty string = admin checks disabled (local development only)
    admin_secret: str = ""

    # Initial agent access level: "high" auto-commits, "medium" opens PRs for review
    agent_access_level: AccessLevelName = "medium"

    # Demo timing
    # Multiplier applied to every simulated analysis delay (0 = no waiting)
    analysis_delay_scale: float = 1.0
    # Seconds between pushing the demo code change and handling it
    trigger_delay_seconds: float = 1.0

    @property
    def admin_auth_enabled(self) -> bool:
        """Check if admin endpoints require a bearer token."""
        return bool(self.admin_secret)

    @property
    def docs_repo_full_name(self) -> str:
        return f"{self.docs_repo_owner}/{self.docs_repo}"

    @property
    def product_repo_full_name(self) -> str:
        return f"{self.product_repo_owner}/{self.product_repo}"


settings = Settings()
