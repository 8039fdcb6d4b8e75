"""Account registration, verification and login resources."""

import falcon
import falcon.asgi

from docshare.application.dto.user_dto import RegisterInput, UserOutput
from docshare.application.use_cases.auth.login import LoginUseCase
from docshare.application.use_cases.auth.register_user import RegisterUserUseCase
from docshare.application.use_cases.auth.resend_otp import ResendOtpUseCase
from docshare.application.use_cases.auth.verify_otp import VerifyOtpUseCase
from docshare.interfaces.api.errors import respond
from docshare.interfaces.api.schemas import (
    LoginRequest,
    RegisterRequest,
    ResendOtpRequest,
    VerifyOtpRequest,
    parse_body,
)
from docshare.interfaces.api.serializers import auth_to_dict, user_to_dict


class RegisterResource:
    """POST /auth/register"""

    auth_exempt = True

    def __init__(self, register_user: RegisterUserUseCase) -> None:
        self._register = register_user

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = parse_body(RegisterRequest, await req.get_media())
        user = await self._register.execute(
            RegisterInput(name=body.name, email=body.email, password=body.password)
        )
        respond(
            resp,
            user_to_dict(user),
            status=falcon.HTTP_201,
            message="User registered successfully. Please check your email for OTP verification.",
        )


class VerifyOtpResource:
    """POST /auth/verify-otp"""

    auth_exempt = True

    def __init__(self, verify_otp: VerifyOtpUseCase) -> None:
        self._verify = verify_otp

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = parse_body(VerifyOtpRequest, await req.get_media())
        result = await self._verify.execute(body.email, body.otp)
        respond(resp, auth_to_dict(result), message="Email verified successfully")


class ResendOtpResource:
    """POST /auth/resend-otp"""

    auth_exempt = True

    def __init__(self, resend_otp: ResendOtpUseCase) -> None:
        self._resend = resend_otp

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = parse_body(ResendOtpRequest, await req.get_media())
        await self._resend.execute(body.email)
        respond(resp, message="OTP sent successfully")


class LoginResource:
    """POST /auth/login"""

    auth_exempt = True

    def __init__(self, login: LoginUseCase) -> None:
        self._login = login

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = parse_body(LoginRequest, await req.get_media())
        result = await self._login.execute(body.email, body.password)
        respond(resp, auth_to_dict(result), message="Login successful")


class MeResource:
    """GET /auth/me - the authenticated account."""

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        respond(resp, user_to_dict(UserOutput.from_user(req.context.user)))
