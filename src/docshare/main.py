"""Application entry point and composition root."""

import logging

import falcon.asgi

from docshare import __version__
from docshare.application.services.access_guard import AccessGuard
from docshare.application.services.otp_manager import OtpManager
from docshare.application.use_cases.auth.login import LoginUseCase
from docshare.application.use_cases.auth.register_user import RegisterUserUseCase
from docshare.application.use_cases.auth.resend_otp import ResendOtpUseCase
from docshare.application.use_cases.auth.verify_otp import VerifyOtpUseCase
from docshare.application.use_cases.document.delete_document import DeleteDocumentUseCase
from docshare.application.use_cases.document.get_document import GetDocumentUseCase
from docshare.application.use_cases.document.list_documents import ListDocumentsUseCase
from docshare.application.use_cases.document.update_document import UpdateDocumentUseCase
from docshare.application.use_cases.document.upload_document import UploadDocumentUseCase
from docshare.application.use_cases.sharing.grant_access import GrantAccessUseCase
from docshare.application.use_cases.sharing.list_shares import ListSharesUseCase
from docshare.application.use_cases.sharing.modify_access import ModifyAccessUseCase
from docshare.application.use_cases.sharing.revoke_access import RevokeAccessUseCase
from docshare.application.use_cases.user.change_password import ChangePasswordUseCase
from docshare.application.use_cases.user.update_profile import UpdateProfileUseCase
from docshare.config import Settings, get_settings
from docshare.infrastructure.notifications.smtp_notifier import ConsoleNotifier, SmtpNotifier
from docshare.infrastructure.persistence.postgres.connection import create_pool
from docshare.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from docshare.infrastructure.security.bcrypt_hasher import BcryptPasswordHasher
from docshare.infrastructure.security.jwt_token_service import JwtTokenService
from docshare.infrastructure.storage.s3_content_store import S3ContentStore
from docshare.interfaces.api.app import UseCases, create_app
from docshare.interfaces.api.middleware.cors import CORSMiddleware
from docshare.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from docshare.interfaces.api.resources.health import HealthResource
from docshare.logging_config import configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """CLI entry point."""
    run_server()


def _build_notifier(settings: Settings):
    if not settings.smtp_host:
        logger.warning("SMTP_HOST not set; OTP codes will be written to the log")
        return ConsoleNotifier()
    return SmtpNotifier(
        settings.smtp_host,
        settings.smtp_port,
        username=settings.smtp_username,
        password=settings.smtp_password,
        sender=settings.smtp_sender,
        use_tls=settings.smtp_use_tls,
    )


def create_docshare_app() -> falcon.asgi.App:
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings.log_level, json_format=settings.is_production)

    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    hasher = BcryptPasswordHasher(rounds=settings.bcrypt_rounds)
    tokens = JwtTokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.access_token_expire_minutes,
    )
    content_store = S3ContentStore(
        settings.s3_bucket,
        region=settings.s3_region,
        endpoint_url=settings.s3_endpoint_url,
        access_key=settings.s3_access_key,
        secret_key=settings.s3_secret_key,
        prefix=settings.s3_prefix,
        public_base_url=settings.s3_public_base_url,
    )
    notifier = _build_notifier(settings)
    otp_manager = OtpManager(
        unit_of_work_factory=uow_factory,
        code_length=settings.otp_length,
        ttl_minutes=settings.otp_ttl_minutes,
    )

    use_cases = UseCases(
        register_user=RegisterUserUseCase(uow_factory, hasher, otp_manager, notifier),
        verify_otp=VerifyOtpUseCase(otp_manager, tokens),
        resend_otp=ResendOtpUseCase(otp_manager, notifier),
        login=LoginUseCase(uow_factory, hasher, tokens),
        update_profile=UpdateProfileUseCase(uow_factory),
        change_password=ChangePasswordUseCase(uow_factory, hasher),
        upload_document=UploadDocumentUseCase(uow_factory, content_store),
        list_documents=ListDocumentsUseCase(uow_factory),
        get_document=GetDocumentUseCase(uow_factory),
        update_document=UpdateDocumentUseCase(uow_factory),
        delete_document=DeleteDocumentUseCase(uow_factory, content_store),
        grant_access=GrantAccessUseCase(uow_factory),
        modify_access=ModifyAccessUseCase(uow_factory),
        revoke_access=RevokeAccessUseCase(uow_factory),
        list_shares=ListSharesUseCase(uow_factory),
    )

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app = create_app(
        use_cases,
        AccessGuard(uow_factory, tokens),
        middleware=[CORSMiddleware(cors_origins), PoolLifespanMiddleware(pool)],
        health_resource=HealthResource(pool),
    )
    logger.info("DocShare v%s configured (%s)", __version__, settings.environment)
    return app


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "docshare.main:create_docshare_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
