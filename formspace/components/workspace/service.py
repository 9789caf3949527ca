"""Workspace hierarchy business logic.

Provides service functions for:
- Workspace bootstrap and reads
- Folder management (create, delete, list, get)
- Form management (create, delete, list)
- Form element saves and public element reads

Every mutating function runs in one ``unit_of_work`` and loads the container
rows it rewrites with ``FOR UPDATE``, so the child row and the parent's id
list change together or not at all.
"""

from sqlalchemy.orm import Session

from formspace.components.workspace.access import require_edit, require_form_access, require_view
from formspace.components.workspace.models import (
    Element,
    ElementInput,
    ElementType,
    Folder,
    FolderDetail,
    FolderListing,
    Form,
    FormListing,
    FormWithElements,
    ItemRef,
    WorkspaceDetail,
    WorkspaceRole,
    WorkspaceSummary,
)
from formspace.db.database import unit_of_work
from formspace.db.models import Form as FormModel
from formspace.db.models import User as UserModel
from formspace.db.models import Workspace as WorkspaceModel
from formspace.errors import InvalidInputError, NotFoundError, UnauthorizedError
from formspace.repositories import (
    element_repository,
    folder_repository,
    form_repository,
    grant_repository,
    workspace_repository,
)
from formspace.utils import get_logger, get_timestamp_ms

logger = get_logger(__name__)

DEFAULT_WORKSPACE_NAME = "My Workspace"

def _without(ids: list[str], item_id: str) -> list[str]:
    return [existing for existing in ids if existing != item_id]


# Workspace service functions


def bootstrap_workspace(db: Session, user: UserModel, name: str = DEFAULT_WORKSPACE_NAME) -> WorkspaceModel:
    """Create the user's owned, empty workspace and link it to the user.

    Does not commit: signup calls this inside the transaction that creates
    the user.
    """
    workspace = workspace_repository.create_workspace(db, created_by=user.id, name=name)
    user.workspace_id = workspace.id
    user.updated_at = get_timestamp_ms()
    db.flush()
    logger.info(f"Bootstrapped workspace {workspace.id} for user {user.id}")
    return workspace


def get_workspace(db: Session, user_id: str, workspace_id: str) -> WorkspaceDetail:
    """Get a workspace with its folders and top-level forms.

    Raises:
        NotFoundError: Workspace missing or not visible to the caller
    """
    workspace, access = require_view(db, user_id, workspace_id)
    folders = folder_repository.get_many(db, list(workspace.folder_ids or []))
    forms = form_repository.get_many(db, list(workspace.form_ids or []))
    return WorkspaceDetail(
        id=workspace.id,
        name=workspace.name,
        createdBy=workspace.created_by,
        folders=[ItemRef(id=folder.id, name=folder.name) for folder in folders],
        forms=[ItemRef(id=form.id, name=form.name) for form in forms],
        accessLevel=access.accessLevel,
        isSharedWorkspace=access.is_shared,
        createdAt=workspace.created_at,
        updatedAt=workspace.updated_at,
    )


def list_workspaces(db: Session, user_id: str) -> list[WorkspaceSummary]:
    """List the user's own workspace followed by every workspace shared with them."""
    summaries: list[WorkspaceSummary] = []

    owned = db.get(UserModel, user_id)
    if owned is not None and owned.workspace_id:
        workspace = workspace_repository.get_by_id(db, owned.workspace_id)
        if workspace is not None:
            summaries.append(
                WorkspaceSummary(
                    id=workspace.id,
                    name=workspace.name,
                    role=WorkspaceRole.owner,
                    accessLevel="edit",
                )
            )

    grants = grant_repository.get_by_user(db, user_id)
    shared = workspace_repository.get_many(db, [grant.workspace_id for grant in grants])
    level_by_workspace = {grant.workspace_id: grant.access_level for grant in grants}
    for workspace in shared:
        summaries.append(
            WorkspaceSummary(
                id=workspace.id,
                name=workspace.name,
                role=WorkspaceRole.collaborator,
                accessLevel=level_by_workspace[workspace.id],
            )
        )
    return summaries


# Folder service functions


def create_folder(db: Session, user_id: str, workspace_id: str, name: str) -> Folder:
    """Create a folder and append it to the workspace's folder list.

    Raises:
        NotFoundError: Workspace missing
        UnauthorizedError: Caller lacks edit access
    """
    with unit_of_work(db):
        workspace, _ = require_edit(db, user_id, workspace_id)
        folder = folder_repository.create_folder(db, workspace_id=workspace.id, created_by=user_id, name=name)
        workspace_repository.update(
            db,
            workspace,
            {
                "folder_ids": [*(workspace.folder_ids or []), folder.id],
                "updated_at": get_timestamp_ms(),
            },
        )

    logger.info(f"Created folder {folder.id} in workspace {workspace_id}")
    return Folder.from_row(folder)


def delete_folder(db: Session, user_id: str, workspace_id: str, folder_id: str) -> list[str]:
    """Delete a folder, moving its forms to the top level of the workspace.

    Returns:
        Ids of the forms that were moved

    Raises:
        NotFoundError: Workspace or folder missing, or folder not in this workspace
        UnauthorizedError: Caller lacks edit access
    """
    with unit_of_work(db):
        workspace, _ = require_edit(db, user_id, workspace_id)
        folder = folder_repository.get_for_update(db, folder_id)
        if folder is None or folder.workspace_id != workspace.id:
            raise NotFoundError("Folder not found")

        moved_ids = list(folder.form_ids or [])
        now = get_timestamp_ms()
        for form in form_repository.get_many(db, moved_ids):
            form.folder_id = None
            form.updated_at = now

        workspace_repository.update(
            db,
            workspace,
            {
                "folder_ids": _without(list(workspace.folder_ids or []), folder.id),
                "form_ids": [*(workspace.form_ids or []), *moved_ids],
                "updated_at": now,
            },
        )
        db.delete(folder)
        db.flush()

    logger.info(f"Deleted folder {folder_id} from workspace {workspace_id}, moved {len(moved_ids)} forms to top level")
    return moved_ids


def list_folders(db: Session, user_id: str, workspace_id: str) -> FolderListing:
    """List a workspace's folders in order, with the caller's access level."""
    workspace, access = require_view(db, user_id, workspace_id)
    folders = folder_repository.get_many(db, list(workspace.folder_ids or []))
    return FolderListing(
        folders=[Folder.from_row(folder) for folder in folders],
        accessLevel=access.accessLevel,
        isSharedWorkspace=access.is_shared,
    )


def get_folder(db: Session, user_id: str, workspace_id: str, folder_id: str) -> FolderDetail:
    """Get a folder with its forms.

    Raises:
        NotFoundError: Workspace or folder missing, or not visible to the caller
    """
    workspace, access = require_view(db, user_id, workspace_id)
    folder = folder_repository.get_by_id(db, folder_id)
    if folder is None or folder.workspace_id != workspace.id:
        raise NotFoundError("Folder not found")

    forms = form_repository.get_many(db, list(folder.form_ids or []))
    return FolderDetail(
        **Folder.from_row(folder).model_dump(),
        forms=[Form.from_row(form) for form in forms],
        accessLevel=access.accessLevel,
    )


# Form service functions


def create_form(
    db: Session,
    user_id: str,
    workspace_id: str,
    name: str,
    folder_id: str | None = None,
) -> Form:
    """Create a form at the top level of a workspace or inside one of its folders.

    Raises:
        NotFoundError: Workspace or folder missing
        UnauthorizedError: Caller lacks edit access, or the folder belongs to
            another workspace
    """
    with unit_of_work(db):
        workspace, _ = require_edit(db, user_id, workspace_id)

        folder = None
        if folder_id is not None:
            folder = folder_repository.get_for_update(db, folder_id)
            if folder is None:
                raise NotFoundError("Folder not found")
            if folder.workspace_id != workspace.id:
                logger.warning(f"Cross-workspace form create: folder={folder_id} workspace={workspace_id}")
                raise UnauthorizedError("Folder does not belong to this workspace")

        form = form_repository.create_form(
            db,
            workspace_id=workspace.id,
            created_by=user_id,
            name=name,
            folder_id=folder_id,
        )
        now = get_timestamp_ms()
        if folder is not None:
            folder_repository.update(db, folder, {"form_ids": [*(folder.form_ids or []), form.id], "updated_at": now})
        else:
            workspace_repository.update(
                db, workspace, {"form_ids": [*(workspace.form_ids or []), form.id], "updated_at": now}
            )

    logger.info(f"Created form {form.id} in workspace {workspace_id} folder={folder_id}")
    return Form.from_row(form)


def delete_form(
    db: Session,
    user_id: str,
    workspace_id: str,
    form_id: str,
    folder_id: str | None = None,
) -> None:
    """Delete a form and remove it from its container list.

    The container is the folder when ``folder_id`` is given, otherwise the
    workspace's top level. Elements, sessions and entries go with the form.

    Raises:
        NotFoundError: Workspace, folder or form missing, or the form is not
            listed in the expected container
        UnauthorizedError: Caller lacks edit access
    """
    with unit_of_work(db):
        workspace, _ = require_edit(db, user_id, workspace_id)

        if folder_id is not None:
            container = folder_repository.get_for_update(db, folder_id)
            if container is None or container.workspace_id != workspace.id:
                raise NotFoundError("Folder not found")
            repository = folder_repository
        else:
            container = workspace
            repository = workspace_repository

        form_ids = list(container.form_ids or [])
        if form_id not in form_ids:
            raise NotFoundError("Form not found")

        repository.update(db, container, {"form_ids": _without(form_ids, form_id), "updated_at": get_timestamp_ms()})
        form = form_repository.get_by_id(db, form_id)
        if form is not None:
            db.delete(form)
            db.flush()

    logger.info(f"Deleted form {form_id} from workspace {workspace_id} folder={folder_id}")


def _with_elements(db: Session, form: FormModel) -> FormWithElements:
    elements = element_repository.get_many(db, list(form.element_ids or []))
    return FormWithElements(
        **Form.from_row(form).model_dump(),
        elements=[Element.from_row(element) for element in elements],
    )


def list_forms(
    db: Session,
    user_id: str,
    workspace_id: str,
    folder_id: str | None = None,
) -> FormListing:
    """List the forms of a workspace that sit in ``folder_id`` (top level when None)."""
    workspace, access = require_view(db, user_id, workspace_id)
    forms = form_repository.get_by_container(db, workspace.id, folder_id)
    return FormListing(
        forms=[_with_elements(db, form) for form in forms],
        accessLevel=access.accessLevel,
        isSharedWorkspace=access.is_shared,
        folderId=folder_id,
    )


# Element service functions


def _element_fields(element: ElementInput) -> dict:
    """Storable fields of one input element."""
    return {
        "type": element.type.value,
        "label": element.label,
        "placeholder": element.placeholder,
        "options": list(element.options),
        "value": element.value,
        "required": element.required,
        "link": element.link if element.type == ElementType.Image else None,
    }


def save_form_elements(
    db: Session,
    form_id: str,
    elements: list[ElementInput],
    user_id: str | None = None,
) -> FormWithElements:
    """Replace a form's element list.

    Each element is matched on its client id: existing elements get only
    their changed fields written, unknown ones are created. The form's
    ``element_ids`` becomes exactly the resulting ids in input order.
    Elements left out of the list are kept for their past responses but are
    no longer listed. Saving the same list twice changes nothing.

    When ``user_id`` is given the caller must have edit access to the form's
    workspace.

    Raises:
        NotFoundError: Form missing
        UnauthorizedError: Caller lacks edit access
        InvalidInputError: The same client id appears twice
    """
    client_ids = [element.id for element in elements]
    duplicates = sorted({client_id for client_id in client_ids if client_ids.count(client_id) > 1})
    if duplicates:
        raise InvalidInputError(f"Duplicate element ids: {', '.join(duplicates)}")

    with unit_of_work(db):
        if user_id is not None:
            require_form_access(db, user_id, form_id, edit=True)
        form = form_repository.get_for_update(db, form_id)
        if form is None:
            raise NotFoundError("Form not found")

        now = get_timestamp_ms()
        element_ids: list[str] = []
        for element in elements:
            fields = _element_fields(element)
            existing = element_repository.get_by_client_id(db, form.id, element.id)
            if existing is None:
                created = element_repository.create_element(db, form.id, element.id, fields)
                element_ids.append(created.id)
                continue

            changed = {name: value for name, value in fields.items() if getattr(existing, name) != value}
            if changed:
                changed["updated_at"] = now
                element_repository.update(db, existing, changed)
            element_ids.append(existing.id)

        if element_ids != list(form.element_ids or []):
            form_repository.update(db, form, {"element_ids": element_ids, "updated_at": now})
        result = _with_elements(db, form)

    logger.info(f"Saved {len(element_ids)} elements on form {form_id}")
    return result


def get_form_elements(db: Session, form_id: str) -> FormWithElements:
    """Public read of a form and its listed elements, for respondents.

    Raises:
        NotFoundError: Form missing
    """
    form = form_repository.get_by_id(db, form_id)
    if form is None:
        raise NotFoundError("Form not found")
    return _with_elements(db, form)

