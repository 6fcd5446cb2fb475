"""Configuration models for validation using Pydantic."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator


# Internal expo team members; their PRs are hidden by default
DEFAULT_EXCLUDED_AUTHORS = [
    "jonsamp",
    "HubertBer",
    "douglowder",
    "vonovak",
    "Kudo",
    "tsapeta",
    "kitten",
    "intergalacticspacehighway",
    "Wenszel",
    "hassankhan",
    "jakex7",
    "behenate",
    "aleqsio",
    "alanjhughes",
    "Ubax",
    "gabrieldonadel",
    "amandeepmittal",
    "lukmccall",
    "chrfalch",
    "kadikraman",
    "sjchmiela",
    "byCedric",
    "EvanBacon",
    "dependabot[bot]",
    "krystofwoldrich",
    "hirbod",
    "brentvatne",
    "quinlanj",
    "kosmydel",
    "barthap",
]


class RepositoryConfig(BaseModel):
    """The single GitHub repository whose open PRs are listed."""

    owner: str = Field(default="expo", min_length=1, description="Repository owner (e.g., 'expo')")
    name: str = Field(default="expo", min_length=1, description="Repository name (e.g., 'expo')")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def parse(cls, value: str) -> "RepositoryConfig":
        """Build from 'owner/name' or a https://github.com/owner/name URL.

        Extra URL path segments (/pulls, /tree/main) and a trailing .git are ignored.
        """
        value = value.strip().rstrip("/")
        if value.startswith("http"):
            parts = value.split("/")
            if len(parts) < 5:
                raise ValueError(f"Invalid repository URL: {value}")
            owner, name = parts[3], parts[4]
        elif value.count("/") == 1:
            owner, name = value.split("/")
        else:
            raise ValueError("Invalid repository format. Use 'owner/name' or full URL")
        if name.endswith(".git"):
            name = name[:-len(".git")]
        return cls(owner=owner, name=name)


class FetchConfig(BaseModel):
    """Pagination and transport settings for the GitHub fetcher."""

    per_page: int = Field(default=100, ge=1, le=100, description="PRs per page (GitHub max is 100)")
    max_pages: int = Field(default=5, ge=1, description="Page cap (5 pages ~ 500 PRs)")
    request_timeout: float = Field(default=30.0, gt=0, description="Per-request timeout in seconds")
    api_url: str = Field(default="https://api.github.com", description="GitHub REST API base URL")

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        if not v.startswith(("https://", "http://")):
            raise ValueError("GitHub API URL must start with https:// or http://")
        return v.rstrip("/")


class CredentialsConfig(BaseModel):
    """API credentials loaded from environment variables."""

    # Optional: only raises the rate limit, anonymous access works
    github_token: Optional[str] = Field(None, description="GitHub personal access token")

    @field_validator("github_token")
    @classmethod
    def blank_token_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()


class Config(BaseModel):
    """Application configuration."""

    repository: RepositoryConfig = Field(default_factory=RepositoryConfig)
    excluded_authors: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDED_AUTHORS))
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig)
    log_level: str = Field(default="INFO", description="Logging level")
    cors_origins: list[str] = Field(default_factory=list, description="Browser origins allowed to call the API")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v_upper
