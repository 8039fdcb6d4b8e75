"""Profile resources for the authenticated user."""

import falcon.asgi

from docshare.application.dto.user_dto import UserOutput
from docshare.application.use_cases.user.change_password import ChangePasswordUseCase
from docshare.application.use_cases.user.update_profile import UpdateProfileUseCase
from docshare.interfaces.api.errors import respond
from docshare.interfaces.api.schemas import (
    PasswordChangeRequest,
    ProfileUpdateRequest,
    parse_body,
)
from docshare.interfaces.api.serializers import user_to_dict


class ProfileResource:
    """GET/PUT /users/profile"""

    def __init__(self, update_profile: UpdateProfileUseCase) -> None:
        self._update = update_profile

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        respond(resp, user_to_dict(UserOutput.from_user(req.context.user)))

    async def on_put(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = parse_body(ProfileUpdateRequest, await req.get_media())
        user = await self._update.execute(req.context.user, body.name)
        respond(resp, user_to_dict(user), message="Profile updated successfully")


class PasswordResource:
    """PUT /users/password"""

    def __init__(self, change_password: ChangePasswordUseCase) -> None:
        self._change = change_password

    async def on_put(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = parse_body(PasswordChangeRequest, await req.get_media())
        await self._change.execute(req.context.user, body.current_password, body.new_password)
        respond(resp, message="Password updated successfully")
