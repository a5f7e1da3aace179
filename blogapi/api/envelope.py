"""
Response envelope assembly.

Every successful response body has a ``data`` key. List responses may
also carry ``metadata`` and ``pagination``; each is included only when
its flag is on and is left out entirely otherwise.
"""

from typing import Any, Dict, Optional

from fastapi import Request

from blogapi.api.pagination import Page
from blogapi.api.query import ListParams, ResourceQuery


def build_envelope(
    data: Any,
    metadata: Optional[Dict[str, Any]] = None,
    pagination: Optional[Dict[str, Any]] = None,
    *,
    show_metadata: bool = False,
    show_pagination: bool = False,
) -> Dict[str, Any]:
    """
    Assemble a response body.

    Args:
        data: Response payload
        metadata: Search/sort metadata block
        pagination: Pagination block
        show_metadata: Include ``metadata``
        show_pagination: Include ``pagination``

    Returns:
        ``{"data": ...}`` plus the enabled optional blocks
    """
    envelope: Dict[str, Any] = {"data": data}
    if show_metadata:
        envelope["metadata"] = metadata if metadata is not None else {}
    if show_pagination:
        envelope["pagination"] = pagination if pagination is not None else {}
    return envelope


def list_envelope(
    request: Request,
    page: Page,
    query: ResourceQuery,
    params: ListParams,
) -> Dict[str, Any]:
    """
    Envelope for a list endpoint.

    The flags are read from ``app.state.settings`` on every call.
    """
    settings = request.app.state.settings
    show_metadata = bool(settings.SHOW_METADATA)
    show_pagination = bool(settings.SHOW_PAGINATION)

    return build_envelope(
        page.items,
        metadata=query.describe(params.searches, params.sorts) if show_metadata else None,
        pagination=page.pagination_info(request.url.path) if show_pagination else None,
        show_metadata=show_metadata,
        show_pagination=show_pagination,
    )
