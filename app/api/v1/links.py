"""Advisory link checks for client-side forms."""

from fastapi import APIRouter

from app.schemas.link import LinkCheckRequest, LinkCheckResponse
from app.services.exceptions import LinkValidationError
from app.services.link_validator import validate_link

router = APIRouter()


@router.post(
    "/validate",
    response_model=LinkCheckResponse,
    summary="Check a link",
    description="""
    Run the server's link rules without saving anything.

    Intended for form feedback; the add endpoint re-validates regardless.
    """,
)
def check_link(data: LinkCheckRequest) -> LinkCheckResponse:
    """Validate a link."""
    try:
        return LinkCheckResponse(valid=True, link=validate_link(data.link))
    except LinkValidationError as e:
        return LinkCheckResponse(valid=False, code=e.code, error=e.message)
