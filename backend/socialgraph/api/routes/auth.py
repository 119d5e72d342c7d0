"""Auth Routes — credential exchange for a bearer token.

Invariants:
    - POST /api/v1/login is the only route that accepts a password for authentication
    - Unknown email and wrong password produce the same 401 body
"""

from fastapi import APIRouter, Depends

from socialgraph.api.dependencies import get_account_service
from socialgraph.schemas.auth import LoginRequest, LoginResponse
from socialgraph.services.accounts import AccountService

router = APIRouter(prefix="/api/v1", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
):
    """Exchange email + password for a signed token."""
    token, user_id = await accounts.login(body.email, body.password)
    return LoginResponse(token=token, user_id=user_id)
