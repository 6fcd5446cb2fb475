"""
External PR Viewer - HTTP API over the in-memory PR store.

Provides a FastAPI backend that serves the filtered list of open PRs and
lets clients edit the excluded-author set and trigger a refetch.
"""
