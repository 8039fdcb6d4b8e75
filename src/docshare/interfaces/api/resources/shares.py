"""Sharing API resources. Only the owner may change who has access."""

import falcon.asgi

from docshare.application.use_cases.sharing.grant_access import GrantAccessUseCase
from docshare.application.use_cases.sharing.list_shares import ListSharesUseCase
from docshare.application.use_cases.sharing.modify_access import ModifyAccessUseCase
from docshare.application.use_cases.sharing.revoke_access import RevokeAccessUseCase
from docshare.interfaces.api.errors import respond
from docshare.interfaces.api.resources._params import parse_uuid
from docshare.interfaces.api.schemas import AccessLevelRequest, ShareRequest, parse_body
from docshare.interfaces.api.serializers import document_to_dict, share_to_dict


class ShareResource:
    """POST /documents/{document_id}/share"""

    def __init__(self, grant_access: GrantAccessUseCase) -> None:
        self._grant = grant_access

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        doc_id = parse_uuid(document_id, "document id")
        body = parse_body(ShareRequest, await req.get_media())
        doc = await self._grant.execute(doc_id, req.context.user.id, body.email, body.access_level)
        respond(resp, document_to_dict(doc), message=f"Document shared with {body.email}")


class SharedWithResource:
    """GET /documents/{document_id}/shared - who has access."""

    def __init__(self, list_shares: ListSharesUseCase) -> None:
        self._list = list_shares

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        shares = await self._list.execute(
            parse_uuid(document_id, "document id"), req.context.user.id
        )
        respond(resp, [share_to_dict(s) for s in shares], count=len(shares))


class ShareEntryResource:
    """PUT/DELETE /documents/{document_id}/share/{user_id}"""

    def __init__(
        self, modify_access: ModifyAccessUseCase, revoke_access: RevokeAccessUseCase
    ) -> None:
        self._modify = modify_access
        self._revoke = revoke_access

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: str,
        user_id: str,
    ) -> None:
        doc_id = parse_uuid(document_id, "document id")
        target_id = parse_uuid(user_id, "user id")
        body = parse_body(AccessLevelRequest, await req.get_media())
        doc = await self._modify.execute(doc_id, req.context.user.id, target_id, body.access_level)
        respond(resp, document_to_dict(doc), message="Access level updated successfully")

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: str,
        user_id: str,
    ) -> None:
        doc = await self._revoke.execute(
            parse_uuid(document_id, "document id"),
            req.context.user.id,
            parse_uuid(user_id, "user id"),
        )
        respond(resp, document_to_dict(doc), message="Access revoked successfully")
