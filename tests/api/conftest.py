"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from docshare.application.services.access_guard import AccessGuard
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
from docshare.interfaces.api.app import UseCases, create_app
from docshare.interfaces.api.middleware.cors import CORSMiddleware

BOUNDARY = "docshare-test-boundary"


def multipart_body(
    fields: dict[str, str], file: tuple[str, bytes, str] | None = None
) -> tuple[bytes, str]:
    """Encode a multipart/form-data upload; ``file`` goes in the ``document`` field."""
    chunks: list[bytes] = []
    for name, value in fields.items():
        chunks.append(
            f'--{BOUNDARY}\r\nContent-Disposition: form-data; name="{name}"\r\n\r\n'
            f"{value}\r\n".encode()
        )
    if file:
        filename, data, content_type = file
        chunks.append(
            f'--{BOUNDARY}\r\nContent-Disposition: form-data; name="document"; '
            f'filename="{filename}"\r\nContent-Type: {content_type}\r\n\r\n'.encode()
            + data
            + b"\r\n"
        )
    chunks.append(f"--{BOUNDARY}--\r\n".encode())
    return b"".join(chunks), f"multipart/form-data; boundary={BOUNDARY}"


def auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def app(uow_factory, hasher, otp_manager, notifier, content_store, token_service):
    """Falcon ASGI app wired to in-memory fakes."""
    use_cases = UseCases(
        register_user=RegisterUserUseCase(uow_factory, hasher, otp_manager, notifier),
        verify_otp=VerifyOtpUseCase(otp_manager, token_service),
        resend_otp=ResendOtpUseCase(otp_manager, notifier),
        login=LoginUseCase(uow_factory, hasher, token_service),
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
    return create_app(
        use_cases,
        AccessGuard(uow_factory, token_service),
        middleware=[CORSMiddleware(["http://localhost:3000"])],
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)


@pytest.fixture
def login_token(client):
    """Log in a verified account and return its token."""

    def _login(email: str, password: str = "secret123") -> str:
        r = client.simulate_post("/auth/login", json={"email": email, "password": password})
        assert r.status_code == 200, r.json
        return r.json["data"]["token"]

    return _login


@pytest.fixture
def upload(client):
    """Upload a PDF as the token's owner and return the created document JSON."""

    def _upload(token: str, title: str = "Passport", document_type: str = "Passport") -> dict:
        body, content_type = multipart_body(
            {"title": title, "description": "Scanned copy", "documentType": document_type},
            ("passport.pdf", b"%PDF-1.4 test", "application/pdf"),
        )
        r = client.simulate_post(
            "/documents",
            body=body,
            headers={**auth(token), "Content-Type": content_type},
        )
        assert r.status_code == 201, r.json
        return r.json["data"]

    return _upload
