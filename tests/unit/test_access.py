"""Tests for workspace access resolution and guards."""

import pytest
from sqlalchemy.orm import Session

from formspace.components.workspace import (
    AccessLevel,
    WorkspaceRole,
    require_edit,
    require_form_access,
    require_owner,
    require_view,
    resolve_access,
)
from formspace.errors import NotFoundError, UnauthorizedError
from formspace.repositories import form_repository, grant_repository


@pytest.fixture
def people(db_session: Session, make_user):
    owner = make_user("owner")
    editor = make_user("editor")
    viewer = make_user("viewer")
    stranger = make_user("stranger")
    grant_repository.create_grant(db_session, editor.id, owner.workspace_id, "edit")
    grant_repository.create_grant(db_session, viewer.id, owner.workspace_id, "view")
    db_session.commit()
    return owner, editor, viewer, stranger


class TestResolveAccess:
    """Owner / collaborator / none classification."""

    def test_owner_always_edits(self, db_session: Session, people):
        owner, *_ = people
        access = resolve_access(db_session, owner.id, owner.workspace_id)
        assert access.role == WorkspaceRole.owner
        assert access.accessLevel == AccessLevel.edit

    def test_collaborator_level_taken_from_grant(self, db_session: Session, people):
        owner, editor, viewer, _ = people

        assert resolve_access(db_session, editor.id, owner.workspace_id).accessLevel == AccessLevel.edit
        viewer_access = resolve_access(db_session, viewer.id, owner.workspace_id)
        assert viewer_access.role == WorkspaceRole.collaborator
        assert viewer_access.accessLevel == AccessLevel.view
        assert viewer_access.is_shared

    def test_stranger_has_none(self, db_session: Session, people):
        owner, _, _, stranger = people
        access = resolve_access(db_session, stranger.id, owner.workspace_id)
        assert access.role == WorkspaceRole.none
        assert not access.can_view

    def test_missing_workspace_resolves_to_none(self, db_session: Session, people):
        owner, *_ = people
        access = resolve_access(db_session, owner.id, "ws_missing")
        assert access.role == WorkspaceRole.none
        assert access.accessLevel == AccessLevel.none

    def test_edit_iff_owner_or_edit_grant(self, db_session: Session, people):
        owner, editor, viewer, stranger = people
        can_edit = {
            user.username: resolve_access(db_session, user.id, owner.workspace_id).can_edit
            for user in (owner, editor, viewer, stranger)
        }
        assert can_edit == {"owner": True, "editor": True, "viewer": False, "stranger": False}


class TestGuards:
    """require_view / require_edit / require_owner failure policy."""

    def test_view_passes_for_viewer(self, db_session: Session, people):
        owner, _, viewer, _ = people
        workspace, access = require_view(db_session, viewer.id, owner.workspace_id)
        assert workspace.id == owner.workspace_id
        assert access.accessLevel == AccessLevel.view

    def test_view_hides_workspace_from_stranger(self, db_session: Session, people):
        owner, _, _, stranger = people
        with pytest.raises(NotFoundError):
            require_view(db_session, stranger.id, owner.workspace_id)

    def test_edit_rejects_viewer_and_stranger(self, db_session: Session, people):
        owner, _, viewer, stranger = people
        for user in (viewer, stranger):
            with pytest.raises(UnauthorizedError):
                require_edit(db_session, user.id, owner.workspace_id)

    def test_edit_on_missing_workspace_is_not_found(self, db_session: Session, people):
        owner, *_ = people
        with pytest.raises(NotFoundError):
            require_edit(db_session, owner.id, "ws_missing")

    def test_owner_guard(self, db_session: Session, people):
        owner, editor, _, _ = people
        assert require_owner(db_session, owner.id, owner.workspace_id).id == owner.workspace_id
        with pytest.raises(UnauthorizedError):
            require_owner(db_session, editor.id, owner.workspace_id)

    def test_form_access_follows_workspace(self, db_session: Session, people):
        owner, editor, viewer, _ = people
        form = form_repository.create_form(db_session, owner.workspace_id, owner.id, "F")
        db_session.commit()

        _, access = require_form_access(db_session, editor.id, form.id, edit=True)
        assert access.can_edit
        with pytest.raises(UnauthorizedError):
            require_form_access(db_session, viewer.id, form.id, edit=True)
        with pytest.raises(NotFoundError):
            require_form_access(db_session, viewer.id, "form_missing")
