"""
API routes for the External PR Viewer.

Provides endpoints for reading the filtered PR list, editing the
excluded-author set and triggering a refetch.
"""

from datetime import datetime
from typing import Literal, Optional
from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response, status
from pydantic import BaseModel

from models.data_models import FetchState, PullRequestRecord
from utils.logger import setup_logger
from viewer.state import PullRequestStore

logger = setup_logger(name=__name__)

router = APIRouter(prefix="/api", tags=["prs"])


def get_store(request: Request) -> PullRequestStore:
    """Dependency returning the store attached to the running app."""
    return request.app.state.store


class StatusResponse(BaseModel):
    """Fetch progress without the PR records."""
    repository: str
    status: Literal["idle", "loading", "error"]
    error: Optional[str] = None
    pages_fetched: int
    generation: int
    shown: int
    total: int
    last_updated: Optional[datetime] = None


class PRListResponse(StatusResponse):
    """Response model for PR list endpoint."""
    prs: list[PullRequestRecord]


class RefreshResponse(BaseModel):
    generation: int
    status: Literal["idle", "loading", "error"]


class ExcludedAuthorsResponse(BaseModel):
    excluded_authors: list[str]


class AddExcludedAuthorRequest(BaseModel):
    """Request body for adding an excluded author."""
    login: str


class AddExcludedAuthorResponse(ExcludedAuthorsResponse):
    added: bool


class RemoveExcludedAuthorResponse(ExcludedAuthorsResponse):
    removed: bool


def _status_fields(store: PullRequestStore, state: FetchState) -> dict:
    return {
        "repository": store.repository.full_name,
        "status": state.status,
        "error": state.error,
        "pages_fetched": state.pages_fetched,
        "generation": state.generation,
        "shown": len(state.filtered),
        "total": len(state.accumulated),
        "last_updated": state.last_updated,
    }


@router.get("/prs", response_model=PRListResponse)
def list_prs(store: PullRequestStore = Depends(get_store)):
    """
    List open PRs with excluded authors filtered out.

    Pages already fetched are returned while a fetch is still running
    (status "loading"). After a failed fetch the status is "error" and
    `error` carries the message.
    """
    state = store.snapshot()
    return PRListResponse(prs=state.filtered, **_status_fields(store, state))


@router.get("/status", response_model=StatusResponse)
def get_status(store: PullRequestStore = Depends(get_store)):
    """Fetch progress and counts, without records."""
    state = store.snapshot()
    return StatusResponse(**_status_fields(store, state))


@router.post("/refresh", response_model=RefreshResponse, status_code=status.HTTP_202_ACCEPTED)
def refresh(background_tasks: BackgroundTasks, store: PullRequestStore = Depends(get_store)):
    """
    Refetch all open PRs from page 1.

    Supersedes any fetch already in flight: its remaining pages are not
    requested and its results are discarded.
    """
    generation = store.begin_load()
    background_tasks.add_task(store.load, generation)
    logger.info(f"Refresh requested (generation {generation})")
    return RefreshResponse(generation=generation, status="loading")


@router.get("/excluded-authors", response_model=ExcludedAuthorsResponse)
def list_excluded_authors(store: PullRequestStore = Depends(get_store)):
    return ExcludedAuthorsResponse(excluded_authors=store.excluded_authors)


@router.post("/excluded-authors", response_model=AddExcludedAuthorResponse)
def add_excluded_author(
    body: AddExcludedAuthorRequest,
    response: Response,
    store: PullRequestStore = Depends(get_store)
):
    """
    Add a login to the excluded set.

    Surrounding whitespace is trimmed. Blank or already-present logins are
    accepted as a no-op (200 with added=false); a real addition returns 201.
    """
    added = store.add_excluded_author(body.login)
    response.status_code = status.HTTP_201_CREATED if added else status.HTTP_200_OK
    return AddExcludedAuthorResponse(added=added, excluded_authors=store.excluded_authors)


@router.delete("/excluded-authors/{login}", response_model=RemoveExcludedAuthorResponse)
def remove_excluded_author(login: str, store: PullRequestStore = Depends(get_store)):
    """Remove a login from the excluded set (no-op if absent)."""
    removed = store.remove_excluded_author(login)
    return RemoveExcludedAuthorResponse(removed=removed, excluded_authors=store.excluded_authors)
