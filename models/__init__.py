"""Data models for the external PR viewer."""

from models.config_models import (
    Config,
    CredentialsConfig,
    FetchConfig,
    RepositoryConfig,
)
from models.data_models import FetchState, Label, PullRequestRecord, UserRef

__all__ = [
    "Config",
    "CredentialsConfig",
    "FetchConfig",
    "RepositoryConfig",
    "FetchState",
    "Label",
    "PullRequestRecord",
    "UserRef",
]
