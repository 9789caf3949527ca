"""Workspace Management Module.

This module provides the data models, authorization and services for
organizing folders, forms and elements inside workspaces, and for sharing
workspaces with collaborators.

Components:
- models.py: Access, workspace, folder, form and element models
- access.py: Owner / collaborator resolution and access guards
- service.py: Workspace, folder, form and element operations
- sharing.py: Grants, share links and collaborator management

Usage:
    from formspace.components.workspace import (
        resolve_access,
        create_folder,
        create_form,
        save_form_elements,
        share_workspace,
    )
"""

from formspace.components.workspace.access import (
    access_for,
    require_edit,
    require_form_access,
    require_owner,
    require_view,
    resolve_access,
)
from formspace.components.workspace.models import (
    AccessLevel,
    Collaborator,
    CreateFolderRequest,
    CreateFormRequest,
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
    SaveElementsRequest,
    ShareViaLinkRequest,
    ShareWorkspaceRequest,
    Theme,
    WorkspaceAccess,
    WorkspaceDetail,
    WorkspaceRole,
    WorkspaceSummary,
    collects_input,
)
from formspace.components.workspace.service import (
    bootstrap_workspace,
    create_folder,
    create_form,
    delete_folder,
    delete_form,
    get_folder,
    get_form_elements,
    get_workspace,
    list_folders,
    list_forms,
    list_workspaces,
    save_form_elements,
)
from formspace.components.workspace.sharing import (
    list_collaborators,
    revoke_grant,
    share_workspace,
    share_workspace_via_link,
)

__all__ = [
    # Models
    "AccessLevel",
    "WorkspaceRole",
    "WorkspaceAccess",
    "Theme",
    "ElementType",
    "collects_input",
    "ItemRef",
    "WorkspaceSummary",
    "WorkspaceDetail",
    "Element",
    "Form",
    "FormWithElements",
    "Folder",
    "FolderDetail",
    "FolderListing",
    "FormListing",
    "Collaborator",
    "CreateFolderRequest",
    "CreateFormRequest",
    "ElementInput",
    "SaveElementsRequest",
    "ShareWorkspaceRequest",
    "ShareViaLinkRequest",
    # Access
    "access_for",
    "resolve_access",
    "require_view",
    "require_edit",
    "require_form_access",
    "require_owner",
    # Service functions
    "bootstrap_workspace",
    "get_workspace",
    "list_workspaces",
    "create_folder",
    "delete_folder",
    "list_folders",
    "get_folder",
    "create_form",
    "delete_form",
    "list_forms",
    "save_form_elements",
    "get_form_elements",
    # Sharing
    "share_workspace",
    "share_workspace_via_link",
    "revoke_grant",
    "list_collaborators",
]
