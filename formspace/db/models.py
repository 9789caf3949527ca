"""SQLAlchemy ORM models for Formspace.

Entity Hierarchy:
    User -> Workspace -> Folder -> Form -> Element
                      -> Form (top-level)
    User -> SharedWorkspaceGrant -> Workspace
    Form -> FormSession (issued respondent sessions)
    Form -> FormEntry -> FormResponse

Container rows keep ordered id lists (workspaces.folder_ids,
workspaces.form_ids, folders.form_ids, forms.element_ids) alongside the
child's own parent column. The services in formspace.components keep both
sides consistent; nothing else should write them.
"""

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class User(Base):
    """User account. Owns exactly one workspace."""

    __tablename__ = "users"

    id = Column(String(64), primary_key=True)
    username = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    hashed_password = Column(String(255), nullable=False)
    # No FK: users and workspaces reference each other
    workspace_id = Column(String(64), nullable=True)
    theme = Column(Enum("dark", "light", name="user_theme"), default="dark", nullable=False)
    created_at = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger, nullable=True)

    # Relationships
    grants = relationship("SharedWorkspaceGrant", back_populates="user", cascade="all, delete-orphan")

    __table_args__ = (Index("idx_users_email", "email"),)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"


class Workspace(Base):
    """Workspace - top-level container owned by one user."""

    __tablename__ = "workspaces"

    id = Column(String(64), primary_key=True)
    created_by = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    folder_ids = Column(JSON, nullable=False, default=list)
    # Top-level forms only; forms inside a folder are listed on the folder
    form_ids = Column(JSON, nullable=False, default=list)
    created_at = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger, nullable=False)

    __table_args__ = (Index("idx_workspaces_created_by", "created_by"),)

    def __repr__(self) -> str:
        return f"<Workspace(id={self.id}, name={self.name})>"


class SharedWorkspaceGrant(Base):
    """Collaborator access to someone else's workspace."""

    __tablename__ = "shared_workspace_grants"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    workspace_id = Column(String(64), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False)
    access_level = Column(Enum("view", "edit", name="grant_access_level"), nullable=False)
    created_at = Column(BigInteger, nullable=False)

    # Relationships
    user = relationship("User", back_populates="grants")

    __table_args__ = (
        UniqueConstraint("user_id", "workspace_id", name="uq_grants_user_workspace"),
        Index("idx_grants_workspace_id", "workspace_id"),
    )

    def __repr__(self) -> str:
        return f"<SharedWorkspaceGrant(user_id={self.user_id}, workspace_id={self.workspace_id}, level={self.access_level})>"


class Folder(Base):
    """Folder - groups forms inside a workspace."""

    __tablename__ = "folders"

    id = Column(String(64), primary_key=True)
    workspace_id = Column(String(64), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False)
    created_by = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    form_ids = Column(JSON, nullable=False, default=list)
    created_at = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger, nullable=False)

    __table_args__ = (Index("idx_folders_workspace_id", "workspace_id"),)

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name={self.name})>"


class Form(Base):
    """Form - ordered input elements plus view/start/completion counters."""

    __tablename__ = "forms"

    id = Column(String(64), primary_key=True)
    workspace_id = Column(String(64), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False)
    # NULL means a top-level form
    folder_id = Column(String(64), ForeignKey("folders.id", ondelete="SET NULL"), nullable=True)
    created_by = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    element_ids = Column(JSON, nullable=False, default=list)
    view_count = Column(Integer, nullable=False, default=0)
    start_count = Column(Integer, nullable=False, default=0)
    completed_count = Column(Integer, nullable=False, default=0)
    created_at = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger, nullable=False)

    # Relationships
    elements = relationship("Element", back_populates="form", cascade="all, delete-orphan")
    sessions = relationship("FormSession", back_populates="form", cascade="all, delete-orphan")
    entries = relationship("FormEntry", back_populates="form", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_forms_workspace_folder", "workspace_id", "folder_id"),
    )

    def __repr__(self) -> str:
        return f"<Form(id={self.id}, name={self.name})>"


class Element(Base):
    """Element - one input (or decorative) field of a form.

    ``client_id`` is the stable id assigned by the form builder client and is
    what element saves match on.
    """

    __tablename__ = "elements"

    id = Column(String(64), primary_key=True)
    client_id = Column(String(128), nullable=False)
    form_id = Column(String(64), ForeignKey("forms.id", ondelete="CASCADE"), nullable=False)
    type = Column(
        Enum(
            "Text",
            "Email",
            "Number",
            "Date",
            "Phone",
            "Rating",
            "Image",
            "Button",
            "Text_Bubble",
            name="element_type",
        ),
        nullable=False,
    )
    label = Column(String(512), nullable=True)
    placeholder = Column(String(512), nullable=True)
    options = Column(JSON, nullable=False, default=list)
    value = Column(Text, nullable=True)  # Default / pre-filled value
    required = Column(Boolean, nullable=False, default=False)
    link = Column(String(1024), nullable=True)  # Image elements only
    created_at = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger, nullable=False)

    # Relationships
    form = relationship("Form", back_populates="elements")

    __table_args__ = (
        UniqueConstraint("form_id", "client_id", name="uq_elements_form_client_id"),
    )

    def __repr__(self) -> str:
        return f"<Element(id={self.id}, type={self.type})>"


class FormSession(Base):
    """FormSession - an issued anonymous respondent session.

    The session id is a bearer capability: holding it is what allows a
    respondent to record and submit answers for ``form_id``.
    """

    __tablename__ = "form_sessions"

    session_id = Column(String(64), primary_key=True)
    form_id = Column(String(64), ForeignKey("forms.id", ondelete="CASCADE"), nullable=False)
    issued_at = Column(BigInteger, nullable=False)

    # Relationships
    form = relationship("Form", back_populates="sessions")

    __table_args__ = (Index("idx_form_sessions_form_id", "form_id"),)

    def __repr__(self) -> str:
        return f"<FormSession(session_id={self.session_id}, form_id={self.form_id})>"


class FormEntry(Base):
    """FormEntry - one respondent session's answers to one form."""

    __tablename__ = "form_entries"

    id = Column(String(64), primary_key=True)
    form_id = Column(String(64), ForeignKey("forms.id", ondelete="CASCADE"), nullable=False)
    session_id = Column(String(64), nullable=False)
    is_completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger, nullable=False)
    completed_at = Column(BigInteger, nullable=True)

    # Relationships
    form = relationship("Form", back_populates="entries")
    responses = relationship(
        "FormResponse",
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="FormResponse.position",
    )

    __table_args__ = (
        UniqueConstraint("form_id", "session_id", name="uq_form_entries_form_session"),
        Index("idx_form_entries_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<FormEntry(id={self.id}, session_id={self.session_id}, completed={self.is_completed})>"


class FormResponse(Base):
    """FormResponse - the live answer to one element within one entry."""

    __tablename__ = "form_responses"

    id = Column(String(64), primary_key=True)
    entry_id = Column(String(64), ForeignKey("form_entries.id", ondelete="CASCADE"), nullable=False)
    element_id = Column(String(64), ForeignKey("elements.id", ondelete="CASCADE"), nullable=False)
    value = Column(Text, nullable=True)
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger, nullable=False)

    # Relationships
    entry = relationship("FormEntry", back_populates="responses")
    element = relationship("Element")

    __table_args__ = (
        UniqueConstraint("entry_id", "element_id", name="uq_form_responses_entry_element"),
    )

    def __repr__(self) -> str:
        return f"<FormResponse(entry_id={self.entry_id}, element_id={self.element_id})>"
