"""Falcon ASGI application."""

from dataclasses import dataclass

import falcon
import falcon.asgi
import falcon.media

from docshare.application.services.access_guard import AccessGuard
from docshare.application.use_cases.auth.login import LoginUseCase
from docshare.application.use_cases.auth.register_user import RegisterUserUseCase
from docshare.application.use_cases.auth.resend_otp import ResendOtpUseCase
from docshare.application.use_cases.auth.verify_otp import VerifyOtpUseCase
from docshare.application.use_cases.document.delete_document import DeleteDocumentUseCase
from docshare.application.use_cases.document.get_document import GetDocumentUseCase
from docshare.application.use_cases.document.list_documents import ListDocumentsUseCase
from docshare.application.use_cases.document.update_document import UpdateDocumentUseCase
from docshare.application.use_cases.document.upload_document import (
    MAX_UPLOAD_BYTES,
    UploadDocumentUseCase,
)
from docshare.application.use_cases.sharing.grant_access import GrantAccessUseCase
from docshare.application.use_cases.sharing.list_shares import ListSharesUseCase
from docshare.application.use_cases.sharing.modify_access import ModifyAccessUseCase
from docshare.application.use_cases.sharing.revoke_access import RevokeAccessUseCase
from docshare.application.use_cases.user.change_password import ChangePasswordUseCase
from docshare.application.use_cases.user.update_profile import UpdateProfileUseCase
from docshare.interfaces.api.errors import register_error_handlers
from docshare.interfaces.api.middleware.auth import AuthMiddleware
from docshare.interfaces.api.resources.auth import (
    LoginResource,
    MeResource,
    RegisterResource,
    ResendOtpResource,
    VerifyOtpResource,
)
from docshare.interfaces.api.resources.documents import (
    DocumentResource,
    DocumentsResource,
    SharedDocumentsResource,
)
from docshare.interfaces.api.resources.health import HealthResource
from docshare.interfaces.api.resources.shares import (
    ShareEntryResource,
    ShareResource,
    SharedWithResource,
)
from docshare.interfaces.api.resources.users import PasswordResource, ProfileResource


@dataclass
class UseCases:
    """Everything the HTTP layer calls into."""

    register_user: RegisterUserUseCase
    verify_otp: VerifyOtpUseCase
    resend_otp: ResendOtpUseCase
    login: LoginUseCase
    update_profile: UpdateProfileUseCase
    change_password: ChangePasswordUseCase
    upload_document: UploadDocumentUseCase
    list_documents: ListDocumentsUseCase
    get_document: GetDocumentUseCase
    update_document: UpdateDocumentUseCase
    delete_document: DeleteDocumentUseCase
    grant_access: GrantAccessUseCase
    modify_access: ModifyAccessUseCase
    revoke_access: RevokeAccessUseCase
    list_shares: ListSharesUseCase


def create_app(
    use_cases: UseCases,
    access_guard: AccessGuard,
    *,
    middleware: list | None = None,
    health_resource: HealthResource | None = None,
) -> falcon.asgi.App:
    """Create Falcon ASGI app with routes.

    ``middleware`` runs before authentication (CORS, pool lifespan).
    """
    app = falcon.asgi.App(middleware=[*(middleware or []), AuthMiddleware(access_guard)])

    multipart = falcon.media.MultipartFormHandler()
    # Leave headroom so oversize files reach the size check with a clear message.
    multipart.parse_options.max_body_part_buffer_size = MAX_UPLOAD_BYTES + 1024 * 1024
    app.req_options.media_handlers[falcon.MEDIA_MULTIPART] = multipart

    register_error_handlers(app)

    uc = use_cases
    health = health_resource or HealthResource()
    app.add_route("/health", health)
    app.add_route("/health/ready", health, suffix="ready")

    app.add_route("/auth/register", RegisterResource(uc.register_user))
    app.add_route("/auth/verify-otp", VerifyOtpResource(uc.verify_otp))
    app.add_route("/auth/resend-otp", ResendOtpResource(uc.resend_otp))
    app.add_route("/auth/login", LoginResource(uc.login))
    app.add_route("/auth/me", MeResource())

    app.add_route("/users/profile", ProfileResource(uc.update_profile))
    app.add_route("/users/password", PasswordResource(uc.change_password))

    app.add_route("/documents", DocumentsResource(uc.upload_document, uc.list_documents))
    app.add_route("/documents/shared", SharedDocumentsResource(uc.list_documents))
    app.add_route(
        "/documents/{document_id}",
        DocumentResource(uc.get_document, uc.update_document, uc.delete_document),
    )
    app.add_route("/documents/{document_id}/share", ShareResource(uc.grant_access))
    app.add_route("/documents/{document_id}/shared", SharedWithResource(uc.list_shares))
    app.add_route(
        "/documents/{document_id}/share/{user_id}",
        ShareEntryResource(uc.modify_access, uc.revoke_access),
    )
    return app
