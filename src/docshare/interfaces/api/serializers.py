"""DTO -> JSON (camelCase)."""

from docshare.application.dto.document_dto import DocumentOutput, ShareOutput
from docshare.application.dto.user_dto import AuthOutput, UserOutput, UserSummary


def user_summary_to_dict(u: UserSummary) -> dict:
    return {"id": str(u.id), "name": u.name, "email": u.email}


def user_to_dict(u: UserOutput) -> dict:
    return {
        "id": str(u.id),
        "name": u.name,
        "email": u.email,
        "isVerified": u.is_verified,
        "createdAt": u.created_at.isoformat(),
    }


def auth_to_dict(a: AuthOutput) -> dict:
    return {"token": a.token, "user": user_to_dict(a.user)}


def share_to_dict(s: ShareOutput) -> dict:
    return {
        "user": user_summary_to_dict(s.user),
        "accessLevel": s.access_level.value,
        "sharedAt": s.shared_at.isoformat(),
    }


def document_to_dict(d: DocumentOutput) -> dict:
    return {
        "id": str(d.id),
        "title": d.title,
        "description": d.description,
        "documentType": d.document_type.value,
        "fileUrl": d.file_url,
        "owner": user_summary_to_dict(d.owner) if d.owner else {"id": str(d.owner_id)},
        "sharedWith": [share_to_dict(s) for s in d.shared_with],
        "isOwner": d.is_owner,
        "createdAt": d.created_at.isoformat(),
        "updatedAt": d.updated_at.isoformat(),
    }
