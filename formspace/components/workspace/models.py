"""Workspace data models.

Defines the API-facing entities for workspace organization:
- WorkspaceAccess: resolved role and access level of a caller
- Workspace / Folder / Form / Element views
- Request payloads for folder, form, element and sharing operations
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, EmailStr, Field

from formspace.db import models as db_models


class WorkspaceRole(str, Enum):
    """How a caller relates to a workspace."""

    owner = "owner"
    collaborator = "collaborator"
    none = "none"


class AccessLevel(str, Enum):
    """Effective access of a caller to a workspace."""

    edit = "edit"
    view = "view"
    none = "none"


GrantLevel = Literal["view", "edit"]


class Theme(str, Enum):
    """User display preference."""

    dark = "dark"
    light = "light"


class ElementType(str, Enum):
    """Supported form element types."""

    Text = "Text"
    Email = "Email"
    Number = "Number"
    Date = "Date"
    Phone = "Phone"
    Rating = "Rating"
    Image = "Image"
    Button = "Button"
    Text_Bubble = "Text_Bubble"


# Element types that never collect a respondent answer
NON_INPUT_ELEMENT_TYPES = frozenset({ElementType.Image, ElementType.Button, ElementType.Text_Bubble})


def collects_input(element_type: str | ElementType) -> bool:
    """Whether elements of this type take a respondent answer."""
    return ElementType(element_type) not in NON_INPUT_ELEMENT_TYPES


class WorkspaceAccess(BaseModel):
    """Resolved relationship between one user and one workspace."""

    workspaceId: str
    role: WorkspaceRole
    accessLevel: AccessLevel

    @property
    def can_view(self) -> bool:
        return self.accessLevel in (AccessLevel.view, AccessLevel.edit)

    @property
    def can_edit(self) -> bool:
        return self.accessLevel == AccessLevel.edit

    @property
    def is_shared(self) -> bool:
        return self.role == WorkspaceRole.collaborator


class ItemRef(BaseModel):
    """Id and display name of a folder or form."""

    id: str
    name: str


class WorkspaceSummary(BaseModel):
    """A workspace as listed for a user (owned or shared)."""

    id: str
    name: str
    role: WorkspaceRole
    accessLevel: AccessLevel


class WorkspaceDetail(BaseModel):
    """A workspace with its folders and top-level forms."""

    id: str
    name: str
    createdBy: str
    folders: list[ItemRef] = Field(default_factory=list)
    forms: list[ItemRef] = Field(default_factory=list)
    accessLevel: AccessLevel
    isSharedWorkspace: bool
    createdAt: int
    updatedAt: int


class Element(BaseModel):
    """Form element as stored."""

    id: str
    clientId: str
    formId: str
    type: ElementType
    label: str | None = None
    placeholder: str | None = None
    options: list[str] = Field(default_factory=list)
    value: str | None = None
    required: bool = False
    link: str | None = None

    @classmethod
    def from_row(cls, row: db_models.Element) -> "Element":
        return cls(
            id=row.id,
            clientId=row.client_id,
            formId=row.form_id,
            type=row.type,
            label=row.label,
            placeholder=row.placeholder,
            options=list(row.options or []),
            value=row.value,
            required=bool(row.required),
            link=row.link,
        )


class Form(BaseModel):
    """Form with its ordered element ids and counters."""

    id: str
    workspaceId: str
    folderId: str | None = None
    createdBy: str
    name: str
    elementIds: list[str] = Field(default_factory=list)
    viewCount: int = 0
    startCount: int = 0
    completedCount: int = 0
    createdAt: int
    updatedAt: int

    @classmethod
    def from_row(cls, row: db_models.Form) -> "Form":
        return cls(
            id=row.id,
            workspaceId=row.workspace_id,
            folderId=row.folder_id,
            createdBy=row.created_by,
            name=row.name,
            elementIds=list(row.element_ids or []),
            viewCount=row.view_count,
            startCount=row.start_count,
            completedCount=row.completed_count,
            createdAt=row.created_at,
            updatedAt=row.updated_at,
        )


class FormWithElements(Form):
    """Form with its elements resolved in display order."""

    elements: list[Element] = Field(default_factory=list)


class Folder(BaseModel):
    """Folder of forms inside a workspace."""

    id: str
    workspaceId: str
    createdBy: str
    name: str
    formIds: list[str] = Field(default_factory=list)
    createdAt: int
    updatedAt: int

    @classmethod
    def from_row(cls, row: db_models.Folder) -> "Folder":
        return cls(
            id=row.id,
            workspaceId=row.workspace_id,
            createdBy=row.created_by,
            name=row.name,
            formIds=list(row.form_ids or []),
            createdAt=row.created_at,
            updatedAt=row.updated_at,
        )


class FolderDetail(Folder):
    """Folder with its forms resolved."""

    forms: list[Form] = Field(default_factory=list)
    accessLevel: AccessLevel


class FolderListing(BaseModel):
    """Folders of a workspace plus the caller's access level."""

    folders: list[Folder]
    accessLevel: AccessLevel
    isSharedWorkspace: bool


class FormListing(BaseModel):
    """Forms of one container plus the caller's access level."""

    forms: list[FormWithElements]
    accessLevel: AccessLevel
    isSharedWorkspace: bool
    folderId: str | None = None


class Collaborator(BaseModel):
    """A user holding a grant on a workspace."""

    userId: str
    username: str
    email: str
    accessLevel: GrantLevel
    grantedAt: int


# Request models


class CreateFolderRequest(BaseModel):
    """Request to create a new folder."""

    name: str = Field(..., min_length=1, max_length=255)


class CreateFormRequest(BaseModel):
    """Request to create a new form, optionally inside a folder."""

    name: str = Field(..., min_length=1, max_length=255)
    folderId: str | None = None


class ElementInput(BaseModel):
    """One element as sent by the form builder.

    ``id`` is the client's stable element id, not the store id.
    """

    id: str = Field(..., min_length=1, max_length=128)
    type: ElementType
    label: str | None = None
    placeholder: str | None = None
    options: list[str] = Field(default_factory=list)
    value: str | None = None
    required: bool = False
    link: str | None = None


class SaveElementsRequest(BaseModel):
    """Full, ordered element list of a form."""

    elements: list[ElementInput]


class ShareWorkspaceRequest(BaseModel):
    """Owner-issued share of the caller's workspace."""

    email: EmailStr
    accessLevel: GrantLevel


class ShareViaLinkRequest(BaseModel):
    """Link-based self-grant to someone else's workspace."""

    workspaceId: str
    accessLevel: GrantLevel
