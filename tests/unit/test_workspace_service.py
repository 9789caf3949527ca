"""Tests for the workspace hierarchy service.

Test cases for:
- Workspace bootstrap and reads
- Folder create / delete / list / get
- Form create / delete / list
- Element saves and public element reads
"""

import pytest
from sqlalchemy.orm import Session

from formspace.components.workspace import (
    AccessLevel,
    ElementInput,
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
from formspace.db.models import Element, Folder, Form, Workspace
from formspace.errors import InvalidInputError, NotFoundError, UnauthorizedError
from formspace.repositories import folder_repository, form_repository, grant_repository, workspace_repository


def _workspace(db: Session, workspace_id: str) -> Workspace:
    workspace = db.get(Workspace, workspace_id)
    db.refresh(workspace)
    return workspace


class TestWorkspaceReads:
    """Bootstrap, get and list."""

    def test_signup_workspace_is_owned_and_empty(self, db_session: Session, owner):
        workspace = _workspace(db_session, owner.workspace_id)
        assert workspace.created_by == owner.id
        assert workspace.folder_ids == []
        assert workspace.form_ids == []

    def test_get_workspace_lists_folders_and_top_level_forms(self, db_session: Session, owner):
        folder = create_folder(db_session, owner.id, owner.workspace_id, "Drafts")
        top = create_form(db_session, owner.id, owner.workspace_id, "Top")
        create_form(db_session, owner.id, owner.workspace_id, "Nested", folder_id=folder.id)

        detail = get_workspace(db_session, owner.id, owner.workspace_id)

        assert [f.id for f in detail.folders] == [folder.id]
        assert [f.id for f in detail.forms] == [top.id]
        assert detail.accessLevel == AccessLevel.edit
        assert detail.isSharedWorkspace is False

    def test_list_workspaces_owned_first_then_shared(self, db_session: Session, make_user):
        alice = make_user("alice")
        bob = make_user("bob")
        grant_repository.create_grant(db_session, alice.id, bob.workspace_id, "view")
        db_session.commit()

        summaries = list_workspaces(db_session, alice.id)

        assert [(s.id, s.role.value, s.accessLevel.value) for s in summaries] == [
            (alice.workspace_id, "owner", "edit"),
            (bob.workspace_id, "collaborator", "view"),
        ]


class TestFolders:
    """Folder lifecycle."""

    def test_create_folder_appends_to_workspace(self, db_session: Session, owner):
        first = create_folder(db_session, owner.id, owner.workspace_id, "One")
        second = create_folder(db_session, owner.id, owner.workspace_id, "Two")

        assert _workspace(db_session, owner.workspace_id).folder_ids == [first.id, second.id]
        assert first.workspaceId == owner.workspace_id

    def test_viewer_cannot_create_folder(self, db_session: Session, owner, make_user):
        viewer = make_user("viewer")
        grant_repository.create_grant(db_session, viewer.id, owner.workspace_id, "view")
        db_session.commit()

        with pytest.raises(UnauthorizedError):
            create_folder(db_session, viewer.id, owner.workspace_id, "Nope")
        assert _workspace(db_session, owner.workspace_id).folder_ids == []

    def test_editor_can_create_folder(self, db_session: Session, owner, make_user):
        editor = make_user("editor")
        grant_repository.create_grant(db_session, editor.id, owner.workspace_id, "edit")
        db_session.commit()

        folder = create_folder(db_session, editor.id, owner.workspace_id, "Shared")
        assert folder.createdBy == editor.id

    def test_list_folders_reports_access(self, db_session: Session, owner, make_user):
        viewer = make_user("viewer")
        grant_repository.create_grant(db_session, viewer.id, owner.workspace_id, "view")
        db_session.commit()
        create_folder(db_session, owner.id, owner.workspace_id, "One")

        listing = list_folders(db_session, viewer.id, owner.workspace_id)

        assert [f.name for f in listing.folders] == ["One"]
        assert listing.accessLevel == AccessLevel.view
        assert listing.isSharedWorkspace is True

    def test_stranger_cannot_see_folders(self, db_session: Session, owner, make_user):
        stranger = make_user("stranger")
        with pytest.raises(NotFoundError):
            list_folders(db_session, stranger.id, owner.workspace_id)

    def test_get_folder_with_forms(self, db_session: Session, owner):
        folder = create_folder(db_session, owner.id, owner.workspace_id, "Drafts")
        form = create_form(db_session, owner.id, owner.workspace_id, "Inside", folder_id=folder.id)

        detail = get_folder(db_session, owner.id, owner.workspace_id, folder.id)

        assert detail.formIds == [form.id]
        assert [f.name for f in detail.forms] == ["Inside"]

    def test_delete_folder_moves_forms_to_top_level(self, db_session: Session, owner):
        folder = create_folder(db_session, owner.id, owner.workspace_id, "Drafts")
        top = create_form(db_session, owner.id, owner.workspace_id, "Top")
        inside = create_form(db_session, owner.id, owner.workspace_id, "Inside", folder_id=folder.id)

        moved = delete_folder(db_session, owner.id, owner.workspace_id, folder.id)

        workspace = _workspace(db_session, owner.workspace_id)
        assert moved == [inside.id]
        assert workspace.folder_ids == []
        assert workspace.form_ids == [top.id, inside.id]
        assert db_session.get(Folder, folder.id) is None
        assert db_session.get(Form, inside.id).folder_id is None

    def test_delete_folder_from_other_workspace(self, db_session: Session, owner, make_user):
        other = make_user("other")
        folder = create_folder(db_session, other.id, other.workspace_id, "Theirs")

        with pytest.raises(NotFoundError):
            delete_folder(db_session, owner.id, owner.workspace_id, folder.id)
        assert db_session.get(Folder, folder.id) is not None


class TestForms:
    """Form lifecycle and container lists."""

    def test_create_top_level_form(self, db_session: Session, owner):
        form = create_form(db_session, owner.id, owner.workspace_id, "Top")

        assert form.folderId is None
        assert _workspace(db_session, owner.workspace_id).form_ids == [form.id]

    def test_create_form_in_folder_lists_it_only_on_folder(self, db_session: Session, owner):
        folder = create_folder(db_session, owner.id, owner.workspace_id, "Drafts")
        form = create_form(db_session, owner.id, owner.workspace_id, "Inside", folder_id=folder.id)

        db_session.expire_all()
        assert db_session.get(Folder, folder.id).form_ids == [form.id]
        assert db_session.get(Workspace, owner.workspace_id).form_ids == []

    def test_create_form_in_missing_folder(self, db_session: Session, owner):
        with pytest.raises(NotFoundError):
            create_form(db_session, owner.id, owner.workspace_id, "X", folder_id="folder_missing")
        assert _workspace(db_session, owner.workspace_id).form_ids == []

    def test_create_form_in_foreign_folder(self, db_session: Session, owner, make_user):
        other = make_user("other")
        foreign = create_folder(db_session, other.id, other.workspace_id, "Theirs")

        with pytest.raises(UnauthorizedError):
            create_form(db_session, owner.id, owner.workspace_id, "X", folder_id=foreign.id)

        db_session.expire_all()
        assert db_session.get(Folder, foreign.id).form_ids == []

    def test_delete_form_then_delete_again(self, db_session: Session, owner):
        form = create_form(db_session, owner.id, owner.workspace_id, "Doomed")

        delete_form(db_session, owner.id, owner.workspace_id, form.id)

        assert _workspace(db_session, owner.workspace_id).form_ids == []
        assert db_session.get(Form, form.id) is None
        with pytest.raises(NotFoundError):
            delete_form(db_session, owner.id, owner.workspace_id, form.id)

    def test_delete_form_from_folder(self, db_session: Session, owner):
        folder = create_folder(db_session, owner.id, owner.workspace_id, "Drafts")
        form = create_form(db_session, owner.id, owner.workspace_id, "Inside", folder_id=folder.id)

        with pytest.raises(NotFoundError):
            # Not a top-level form
            delete_form(db_session, owner.id, owner.workspace_id, form.id)

        delete_form(db_session, owner.id, owner.workspace_id, form.id, folder_id=folder.id)
        db_session.expire_all()
        assert db_session.get(Folder, folder.id).form_ids == []

    def test_delete_form_removes_elements(self, db_session: Session, survey_form, owner):
        form, element_ids = survey_form

        delete_form(db_session, owner.id, owner.workspace_id, form.id)

        for element_id in element_ids.values():
            assert db_session.get(Element, element_id) is None

    def test_list_forms_filters_by_container(self, db_session: Session, owner):
        folder = create_folder(db_session, owner.id, owner.workspace_id, "Drafts")
        top = create_form(db_session, owner.id, owner.workspace_id, "Top")
        inside = create_form(db_session, owner.id, owner.workspace_id, "Inside", folder_id=folder.id)

        top_listing = list_forms(db_session, owner.id, owner.workspace_id)
        folder_listing = list_forms(db_session, owner.id, owner.workspace_id, folder_id=folder.id)

        assert [f.id for f in top_listing.forms] == [top.id]
        assert top_listing.folderId is None
        assert [f.id for f in folder_listing.forms] == [inside.id]
        assert folder_listing.folderId == folder.id



def _fail(*args, **kwargs):
    raise RuntimeError("storage unavailable")


class TestAtomicMutations:
    """A failure partway through a mutation leaves rows and id lists as they were."""

    def test_create_folder_rolls_back_folder_row(self, db_session: Session, owner, monkeypatch):
        monkeypatch.setattr(workspace_repository, "update", _fail)

        with pytest.raises(RuntimeError):
            create_folder(db_session, owner.id, owner.workspace_id, "Half done")

        assert db_session.query(Folder).count() == 0
        assert _workspace(db_session, owner.workspace_id).folder_ids == []

    def test_create_top_level_form_rolls_back_form_row(self, db_session: Session, owner, monkeypatch):
        monkeypatch.setattr(workspace_repository, "update", _fail)

        with pytest.raises(RuntimeError):
            create_form(db_session, owner.id, owner.workspace_id, "Half done")

        assert db_session.query(Form).count() == 0
        assert _workspace(db_session, owner.workspace_id).form_ids == []

    def test_create_form_in_folder_rolls_back_form_row(self, db_session: Session, owner, monkeypatch):
        folder = create_folder(db_session, owner.id, owner.workspace_id, "Drafts")
        monkeypatch.setattr(folder_repository, "update", _fail)

        with pytest.raises(RuntimeError):
            create_form(db_session, owner.id, owner.workspace_id, "Half done", folder_id=folder.id)

        db_session.expire_all()
        assert db_session.query(Form).count() == 0
        assert db_session.get(Folder, folder.id).form_ids == []

    def test_delete_form_restores_container_list(self, db_session: Session, owner, monkeypatch):
        form = create_form(db_session, owner.id, owner.workspace_id, "Kept")
        # The id is already dropped from the list when the form lookup fails
        monkeypatch.setattr(form_repository, "get_by_id", _fail)

        with pytest.raises(RuntimeError):
            delete_form(db_session, owner.id, owner.workspace_id, form.id)

        monkeypatch.undo()
        assert _workspace(db_session, owner.workspace_id).form_ids == [form.id]
        assert db_session.get(Form, form.id) is not None


class TestElements:
    """Element saves."""

    def test_save_assigns_ids_in_input_order(self, db_session: Session, survey_form):
        form, element_ids = survey_form

        assert [e.clientId for e in form.elements] == ["name", "age", "logo"]
        assert form.elementIds == [element_ids["name"], element_ids["age"], element_ids["logo"]]

    def test_link_kept_only_for_images(self, db_session: Session, owner):
        form = create_form(db_session, owner.id, owner.workspace_id, "F")
        saved = save_form_elements(
            db_session,
            form.id,
            [
                ElementInput(id="t", type="Text", link="https://example.com/ignored"),
                ElementInput(id="i", type="Image", link="https://example.com/kept.png"),
            ],
        )
        assert [e.link for e in saved.elements] == [None, "https://example.com/kept.png"]

    def test_save_is_idempotent(self, db_session: Session, owner):
        form = create_form(db_session, owner.id, owner.workspace_id, "F")
        payload = [
            ElementInput(id="a", type="Text", label="A", required=True),
            ElementInput(id="b", type="Rating", options=["1", "2", "3"]),
        ]

        first = save_form_elements(db_session, form.id, payload)
        second = save_form_elements(db_session, form.id, payload)

        assert first.elementIds == second.elementIds
        assert [e.model_dump() for e in first.elements] == [e.model_dump() for e in second.elements]
        assert db_session.query(Element).filter(Element.form_id == form.id).count() == 2

    def test_resave_updates_reorders_and_drops(self, db_session: Session, survey_form):
        form, element_ids = survey_form

        saved = save_form_elements(
            db_session,
            form.id,
            [
                ElementInput(id="age", type="Number", label="Age in years", required=True),
                ElementInput(id="name", type="Text", label="Name", required=True),
            ],
        )

        assert saved.elementIds == [element_ids["age"], element_ids["name"]]
        assert saved.elements[0].label == "Age in years"
        assert saved.elements[0].required is True
        # Dropped elements stay stored but unlisted
        assert db_session.get(Element, element_ids["logo"]) is not None

    def test_duplicate_client_ids_rejected(self, db_session: Session, owner):
        form = create_form(db_session, owner.id, owner.workspace_id, "F")
        with pytest.raises(InvalidInputError):
            save_form_elements(
                db_session,
                form.id,
                [ElementInput(id="a", type="Text"), ElementInput(id="a", type="Email")],
            )

    def test_save_requires_edit_access_when_caller_given(self, db_session: Session, survey_form, make_user):
        form, _ = survey_form
        stranger = make_user("stranger")
        with pytest.raises(UnauthorizedError):
            save_form_elements(db_session, form.id, [], user_id=stranger.id)

    def test_save_unknown_form(self, db_session: Session):
        with pytest.raises(NotFoundError):
            save_form_elements(db_session, "form_missing", [])

    def test_public_element_read(self, db_session: Session, survey_form):
        form, _ = survey_form
        public = get_form_elements(db_session, form.id)
        assert [e.clientId for e in public.elements] == ["name", "age", "logo"]

        with pytest.raises(NotFoundError):
            get_form_elements(db_session, "form_missing")
