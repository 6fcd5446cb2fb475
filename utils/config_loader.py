"""Configuration loader that reads from .env and validates with Pydantic."""

import os
import sys
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from pydantic import ValidationError

from models.config_models import (
    DEFAULT_EXCLUDED_AUTHORS,
    Config,
    CredentialsConfig,
    FetchConfig,
    RepositoryConfig,
)


def parse_csv_list(raw: Optional[str]) -> list[str]:
    """Split a comma-separated list (logins, origins), dropping blanks and duplicates."""
    if not raw:
        return []
    items = []
    for part in raw.split(","):
        item = part.strip()
        if item and item not in items:
            items.append(item)
    return items


def load_config() -> Config:
    """
    Load and validate configuration from environment variables.

    Reads from .env file in the project root and validates all settings
    using Pydantic models. Every setting has a default, so an empty
    environment yields the expo/expo configuration.

    Returns:
        Config: Validated configuration object

    Raises:
        SystemExit: If configuration is invalid
    """
    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    excluded = parse_csv_list(os.getenv("EXCLUDED_AUTHORS"))

    try:
        repository = RepositoryConfig.parse(os.getenv("GITHUB_REPO", "expo/expo"))

        config = Config(
            repository=repository,
            excluded_authors=excluded or list(DEFAULT_EXCLUDED_AUTHORS),
            fetch=FetchConfig(
                per_page=os.getenv("PER_PAGE", "100"),
                max_pages=os.getenv("MAX_PAGES", "5"),
                request_timeout=os.getenv("REQUEST_TIMEOUT", "30"),
                api_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
            ),
            credentials=CredentialsConfig(
                github_token=os.getenv("GITHUB_TOKEN"),
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            cors_origins=parse_csv_list(os.getenv("CORS_ORIGINS")),
        )

        return config

    except ValidationError as e:
        print("❌ Configuration validation failed:", file=sys.stderr)
        print("\nPlease check your .env file. Invalid fields:", file=sys.stderr)

        for error in e.errors():
            field_path = " → ".join(str(x) for x in error["loc"])
            message = error["msg"]
            print(f"  • {field_path}: {message}", file=sys.stderr)

        print("\nHint: Copy .env.example to .env and adjust the settings.", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"❌ Configuration validation failed: GITHUB_REPO: {e}", file=sys.stderr)
        sys.exit(1)
