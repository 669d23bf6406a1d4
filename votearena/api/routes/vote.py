"""
Vote endpoint.

Records one head-to-head vote. The request body is::

    {companyA, companyB, result: "a"|"b"|"draw",
     submittedBy?, hcaptchaToken?, sessionToken?}

Clients keep the returned sessionToken and send it with their next vote to
skip the CAPTCHA while it is valid.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from votearena.api.dependencies import get_vote_coordinator
from votearena.api.middleware.auth import get_caller
from votearena.api.responses import error_response
from votearena.api.schemas import VoteErrorResponse, VoteResponse
from votearena.core.network import request_context_from
from votearena.core.vote import VoteStatus
from votearena.voting import VoteCoordinator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["vote"])

VOTE_PATH = "/vote-startup"

HTTP_STATUS = {
    VoteStatus.RECORDED: status.HTTP_200_OK,
    VoteStatus.INVALID: status.HTTP_400_BAD_REQUEST,
    VoteStatus.CAPTCHA_REQUIRED: status.HTTP_403_FORBIDDEN,
    VoteStatus.CAPTCHA_FAILED: status.HTTP_403_FORBIDDEN,
    VoteStatus.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    VoteStatus.VOTE_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    VoteStatus.MISCONFIGURED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@router.post(
    VOTE_PATH,
    response_model=VoteResponse,
    responses={
        400: {"model": VoteErrorResponse},
        403: {"model": VoteErrorResponse},
        429: {"model": VoteErrorResponse},
        500: {"model": VoteErrorResponse},
    },
    summary="Record a vote",
    description="Record the outcome of a matchup and return updated ratings.",
)
async def record_vote(
    request: Request,
    coordinator: VoteCoordinator = Depends(get_vote_coordinator),
):
    """
    Record a vote.

    A valid sessionToken skips the CAPTCHA; otherwise hcaptchaToken is
    required (403 captcha_required without it).
    """
    if not coordinator.configured:
        result = coordinator.misconfiguration()
        return JSONResponse(status_code=HTTP_STATUS[result.status], content=result.to_dict())

    try:
        payload = await request.json()
    except ValueError:
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid JSON body.")

    context = request_context_from(
        request.headers,
        request.client.host if request.client else None,
    )

    caller = get_caller(request)
    if caller is not None:
        logger.debug(f"Vote from gateway role={caller.role}")

    result = await coordinator.record_vote(payload, context)
    return JSONResponse(status_code=HTTP_STATUS[result.status], content=result.to_dict())


@router.api_route(
    VOTE_PATH,
    methods=["GET", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def vote_method_not_allowed():
    return error_response(status.HTTP_405_METHOD_NOT_ALLOWED, "Method not allowed.")
