from dataclasses import dataclass
from fastapi import Request

@dataclass(frozen=True)
class RequestContext:
    """Provenance of an inbound request, captured once per request"""
    page_url: str = ""
    user_ip: str = ""
    user_agent: str = ""
    session_id: str = ""

    @classmethod
    def from_request(cls, request: Request) -> "RequestContext":
        headers = request.headers
        client_host = request.client.host if request.client else ""
        return cls(
            page_url=headers.get("referer", "") or "",
            user_ip=client_host or "",
            user_agent=headers.get("user-agent", "") or "",
            session_id=headers.get("x-session-id", "") or ""
        )

def get_request_context(request: Request) -> RequestContext:
    """FastAPI dependency returning the provenance of the current request"""
    return RequestContext.from_request(request)
