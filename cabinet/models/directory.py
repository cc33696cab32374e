"""Directory model."""

from sqlalchemy import Column, ForeignKey, Index, Integer, String, UniqueConstraint, text
from ..database import Base


class Directory(Base):
    """Directory table: one row per directory, linked to its parent by id.

    The root is not stored; top-level directories have parent=NULL.
    """

    __tablename__ = "directory"
    __table_args__ = (
        UniqueConstraint("name", "parent", name="uq_directory_name_parent"),
        # NULLs are distinct in a UNIQUE constraint, so top-level names need
        # their own partial index.
        Index(
            "uq_directory_root_name",
            "name",
            unique=True,
            sqlite_where=text("parent IS NULL"),
            postgresql_where=text("parent IS NULL"),
        ),
        Index("ix_directory_parent", "parent"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    parent = Column(Integer, ForeignKey("directory.id"), nullable=True)
