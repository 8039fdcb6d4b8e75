"""Document API resources."""

import falcon
import falcon.asgi

from docshare.application.dto.document_dto import DocumentCreateInput, DocumentUpdateInput
from docshare.application.use_cases.document.delete_document import DeleteDocumentUseCase
from docshare.application.use_cases.document.get_document import GetDocumentUseCase
from docshare.application.use_cases.document.list_documents import ListDocumentsUseCase
from docshare.application.use_cases.document.update_document import UpdateDocumentUseCase
from docshare.application.use_cases.document.upload_document import (
    MAX_UPLOAD_BYTES,
    UploadDocumentUseCase,
)
from docshare.domain.exceptions import ValidationError
from docshare.domain.value_objects import DocumentType
from docshare.interfaces.api.errors import respond
from docshare.interfaces.api.resources._params import parse_uuid
from docshare.interfaces.api.schemas import DocumentUpdateRequest, parse_body
from docshare.interfaces.api.serializers import document_to_dict

FILE_FIELD = "document"
_TEXT_FIELDS = ("title", "description", "documentType")


def parse_document_type(raw: str | None) -> DocumentType:
    if not raw:
        raise ValidationError("Please provide title, description and document type")
    try:
        return DocumentType(raw)
    except ValueError as e:
        allowed = ", ".join(t.value for t in DocumentType)
        raise ValidationError(f"Invalid document type. Allowed: {allowed}") from e


async def read_upload_form(req: falcon.asgi.Request) -> DocumentCreateInput:
    """Collect the file part and metadata fields of a multipart upload."""
    if not (req.content_type or "").startswith("multipart/form-data"):
        raise ValidationError("multipart/form-data required")

    form = await req.get_media()
    fields: dict[str, str] = {}
    filename: str | None = None
    content_type: str | None = None
    content = b""
    async for part in form:
        name = (part.name or "").strip()
        if name == FILE_FIELD:
            try:
                content = bytes(await part.get_data())
            except falcon.MediaMalformedError as e:
                raise ValidationError(
                    f"File too large. Maximum size is {MAX_UPLOAD_BYTES // (1024 * 1024)}MB"
                ) from e
            filename = part.filename or ""
            content_type = part.content_type
        elif name in _TEXT_FIELDS:
            fields[name] = (await part.get_text() or "").strip()

    if not filename:
        raise ValidationError("Please upload a file")
    title = fields.get("title")
    description = fields.get("description")
    if not title or not description:
        raise ValidationError("Please provide title, description and document type")
    return DocumentCreateInput(
        title=title,
        description=description,
        document_type=parse_document_type(fields.get("documentType")),
        filename=filename,
        content=content,
        content_type=content_type,
    )


class DocumentsResource:
    """GET/POST /documents - list own documents, upload a new one."""

    def __init__(
        self, upload_document: UploadDocumentUseCase, list_documents: ListDocumentsUseCase
    ) -> None:
        self._upload = upload_document
        self._list = list_documents

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        docs = await self._list.owned(req.context.user.id)
        respond(resp, [document_to_dict(d) for d in docs], count=len(docs))

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        input_data = await read_upload_form(req)
        doc = await self._upload.execute(req.context.user, input_data)
        respond(
            resp,
            document_to_dict(doc),
            status=falcon.HTTP_201,
            message="Document uploaded successfully",
        )


class SharedDocumentsResource:
    """GET /documents/shared - documents other users shared with me."""

    def __init__(self, list_documents: ListDocumentsUseCase) -> None:
        self._list = list_documents

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        docs = await self._list.shared_with_me(req.context.user.id)
        respond(resp, [document_to_dict(d) for d in docs], count=len(docs))


class DocumentResource:
    """GET/PUT/DELETE /documents/{document_id}"""

    def __init__(
        self,
        get_document: GetDocumentUseCase,
        update_document: UpdateDocumentUseCase,
        delete_document: DeleteDocumentUseCase,
    ) -> None:
        self._get = get_document
        self._update = update_document
        self._delete = delete_document

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        doc = await self._get.execute(parse_uuid(document_id, "document id"), req.context.user.id)
        respond(resp, document_to_dict(doc))

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        doc_id = parse_uuid(document_id, "document id")
        body = parse_body(DocumentUpdateRequest, await req.get_media())
        doc = await self._update.execute(
            doc_id,
            req.context.user.id,
            DocumentUpdateInput(
                title=body.title,
                description=body.description,
                document_type=body.document_type,
            ),
        )
        respond(resp, document_to_dict(doc), message="Document updated successfully")

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        await self._delete.execute(parse_uuid(document_id, "document id"), req.context.user.id)
        respond(resp, {}, message="Document deleted successfully")
