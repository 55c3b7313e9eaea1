import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
DOTENV_PATH = (Path(__file__).resolve().parent.parent.parent / ".env")
load_dotenv(dotenv_path=DOTENV_PATH, override=False)


def _flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip() in {"1", "true", "True", "YES", "yes"}


class Settings:
    # Azure OpenAI Configuration (completion service)
    AZURE_OPENAI_ENDPOINT: str = os.getenv("AZURE_OPENAI_ENDPOINT", "").strip().rstrip("/")
    AZURE_OPENAI_API_KEY: str = os.getenv("AZURE_OPENAI_API_KEY", "").strip()
    AZURE_OPENAI_DEPLOYMENT: str = os.getenv("AZURE_OPENAI_DEPLOYMENT", "").strip()
    AZURE_OPENAI_API_VERSION: str = os.getenv("AZURE_OPENAI_API_VERSION", "2025-01-01-preview").strip()
    DISABLE_AZURE_LLM: bool = _flag("DISABLE_AZURE_LLM")
    LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "30"))
    LLM_MAX_RETRIES: int = int(os.getenv("LLM_MAX_RETRIES", "3"))

    # Mailgun Configuration (environment fallback for the email provider)
    MAILGUN_API_KEY: str = os.getenv("MAILGUN_API_KEY", "").strip()
    MAILGUN_DOMAIN: str = os.getenv("MAILGUN_DOMAIN", "").strip()
    MAILGUN_FROM: str = os.getenv("MAILGUN_FROM", "noreply@example.com").strip()
    MAILGUN_BASE_URL: str = os.getenv("MAILGUN_BASE_URL", "https://api.mailgun.net").strip().rstrip("/")
    EMAIL_BULK_CONCURRENCY: int = int(os.getenv("EMAIL_BULK_CONCURRENCY", "5"))

    # Conversation / generation behaviour
    CONTEXT_MAX_TURNS: int = int(os.getenv("CONTEXT_MAX_TURNS", "10"))
    QUERY_PATTERN_FALLBACK: bool = _flag("QUERY_PATTERN_FALLBACK", "1")

    # App Configuration
    APP_TITLE: str = os.getenv("APP_TITLE", "Dataset Chat Orchestrator").strip()
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").strip().upper()

    @property
    def llm_configured(self) -> bool:
        return bool(
            not self.DISABLE_AZURE_LLM
            and self.AZURE_OPENAI_API_KEY
            and self.AZURE_OPENAI_ENDPOINT
            and self.AZURE_OPENAI_DEPLOYMENT
        )

    @property
    def mailgun_configured(self) -> bool:
        return bool(self.MAILGUN_API_KEY and self.MAILGUN_DOMAIN)

    def validate(self):
        if self.CONTEXT_MAX_TURNS < 1:
            raise RuntimeError("CONTEXT_MAX_TURNS must be at least 1")
        if self.EMAIL_BULK_CONCURRENCY < 1:
            raise RuntimeError("EMAIL_BULK_CONCURRENCY must be at least 1")


settings = Settings()
settings.validate()
