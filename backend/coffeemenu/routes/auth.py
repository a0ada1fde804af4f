"""
Coffee Menu Backend — Auth Route Handlers
===========================================

What:  POST /api/login and GET /api/verify.
Who:   Called by the menu editor UI when the admin signs in, and on reload
       to check that a stored token is still accepted.

Both failures answer 401 with the body shape the UI already reads:
    login  → {"success": false, "error": "Invalid credentials"}
    verify → {"valid": false}
"""

from typing import Optional

from fastapi import APIRouter, Header
from fastapi.responses import JSONResponse

from coffeemenu.exceptions import UnauthorizedError
from coffeemenu.schemas.catalog import LoginRequest, LoginResponse, VerifyResponse
from coffeemenu.services.auth_service import auth_service, extract_token

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    response_model_exclude_none=True,
    responses={401: {"description": "Invalid credentials", "model": LoginResponse}},
    summary="Exchange admin credentials for the admin token",
)
async def login(body: Optional[LoginRequest] = None):
    body = body or LoginRequest()
    try:
        token = auth_service.login(body.username, body.password)
    except UnauthorizedError as e:
        return JSONResponse(
            status_code=401,
            content={"success": False, "error": e.message},
        )
    return LoginResponse(success=True, token=token)


@router.get(
    "/verify",
    response_model=VerifyResponse,
    responses={401: {"description": "Token not accepted", "model": VerifyResponse}},
    summary="Check whether a bearer token is the admin token",
)
async def verify(authorization: Optional[str] = Header(default=None)):
    if auth_service.verify(extract_token(authorization)):
        return VerifyResponse(valid=True)
    return JSONResponse(status_code=401, content={"valid": False})
