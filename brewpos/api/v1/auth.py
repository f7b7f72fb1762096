"""
Authentication routes
Sign up, sign in and sign out. Each sign-in opens a server-side Session.
"""

from fastapi import APIRouter, Depends

from ...core.security import get_current_session
from ...core.session import Session
from ...schemas.auth import AuthResponse, IdentityResponse, SignInRequest, SignUpRequest
from ...schemas.common import MessageResponse
from ...services.auth_service import AuthService
from ..deps import get_auth_service

router = APIRouter()


def _identity(session: Session) -> IdentityResponse:
    return IdentityResponse(
        user_id=session.user_id,
        email=session.email,
        full_name=session.full_name,
        role=session.role,
        session_id=session.session_id,
    )


def _auth_response(result: dict) -> AuthResponse:
    return AuthResponse(
        token=result["token"],
        token_type=result["token_type"],
        expires_in=result["expires_in"],
        identity=_identity(result["session"]),
    )


@router.post("/signup", response_model=AuthResponse, status_code=201)
def sign_up(req: SignUpRequest, auth: AuthService = Depends(get_auth_service)):
    """Create an account and sign it in"""
    return _auth_response(auth.sign_up(req.email, req.password, req.full_name, req.role))


@router.post("/signin", response_model=AuthResponse)
def sign_in(req: SignInRequest, auth: AuthService = Depends(get_auth_service)):
    return _auth_response(auth.sign_in(req.email, req.password))


@router.post("/signout", response_model=MessageResponse)
def sign_out(session: Session = Depends(get_current_session),
             auth: AuthService = Depends(get_auth_service)):
    """End the session; the cart is discarded with it"""
    auth.sign_out(session)
    return MessageResponse(message="Signed out")


@router.get("/me", response_model=IdentityResponse)
def whoami(session: Session = Depends(get_current_session)):
    return _identity(session)
