"""
Dashboard error taxonomy
------------------------
Raised by the validation gate and the transport, caught once by the request
cycle (`helpers.explorer.run_request`) and turned into a displayable result.

- ValidationError: required fields blank; no request is issued.
- TransportError:  the GET itself failed (connection, timeout, bad JSON).
- ServerError:     the API answered with a status other than 200.
"""

from typing import List, Optional, Sequence


class DashboardError(Exception):
    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DashboardError):
    kind = "validation"

    def __init__(self, missing: Sequence[str], message: str):
        super().__init__(message)
        self.missing: List[str] = list(missing)


class TransportError(DashboardError):
    kind = "network"


class ServerError(DashboardError):
    kind = "server"

    def __init__(self, status_code: Optional[int], message: str = "Server Error"):
        super().__init__(message)
        self.status_code = status_code
