"""
Fetch-and-filter core of the external PR viewer.

Holds the excluded-author set, the author filter and the in-memory store
that recomputes the displayed PR list whenever either input changes.
"""
