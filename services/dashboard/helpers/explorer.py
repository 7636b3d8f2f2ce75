"""
Request cycle
-------------
validate -> build URL -> fetch -> normalize, folded into one `ResultState`.

Outcomes
- Validation failure: nothing is fetched; previous tables and status stay,
  only `validation` is set.
- Transport failure: tables cleared, status cleared, `error` holds the message.
- Non-200 status: tables cleared, `error` is the fixed "Server Error" (the
  response body is not read on this path).
- Success: tables replaced with the normalized result.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Mapping, Optional

from helpers.api_client import FetchResult, fetch_json
from helpers.errors import DashboardError, ServerError, ValidationError
from helpers.normalizer import Table, normalize
from helpers.request_builder import build_url
from helpers.validation import ensure_valid
from helpers.views import ViewDescriptor

logger = logging.getLogger(__name__)

Fetch = Callable[[str], FetchResult]


@dataclass(frozen=True)
class ResultState:
    tables: List[Table] = field(default_factory=list)
    status_code: Optional[int] = None
    error: str = ""
    error_kind: str = ""
    validation: str = ""
    missing: List[str] = field(default_factory=list)
    url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tables": [table.to_dict() for table in self.tables],
            "status_code": self.status_code,
            "error": self.error,
            "error_kind": self.error_kind,
            "validation": self.validation,
            "missing": list(self.missing),
            "url": self.url,
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ResultState":
        if not data:
            return cls()
        return cls(
            tables=[Table.from_dict(t) for t in data.get("tables") or []],
            status_code=data.get("status_code"),
            error=data.get("error") or "",
            error_kind=data.get("error_kind") or "",
            validation=data.get("validation") or "",
            missing=list(data.get("missing") or []),
            url=data.get("url") or "",
        )


def run_request(
    base_url: str,
    view: ViewDescriptor,
    values: Mapping[str, Any],
    previous: Optional[ResultState] = None,
    fetch: Fetch = fetch_json,
) -> ResultState:
    """Run one request cycle for `view` and return the next result state."""
    previous = previous or ResultState()
    try:
        ensure_valid(view, values)
    except ValidationError as e:
        return replace(previous, validation=e.message, missing=e.missing)

    url = build_url(base_url, view, values)
    try:
        result = fetch(url)
        if not result.ok:
            raise ServerError(result.status_code)
    except ServerError as e:
        logger.warning("%s answered %s", url, e.status_code)
        return ResultState(status_code=e.status_code, error=e.message, error_kind=e.kind, url=url)
    except DashboardError as e:
        logger.warning("Request to %s failed: %s", url, e.message)
        return ResultState(error=e.message, error_kind=e.kind, url=url)

    return ResultState(
        tables=normalize(view.id, result.payload, values),
        status_code=result.status_code,
        url=url,
    )


def clear_result() -> ResultState:
    return ResultState()
