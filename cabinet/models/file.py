"""File model."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, LargeBinary, String, UniqueConstraint, text
from ..database import Base


class File(Base):
    """File table. The full path is derived from the parent chain, never stored."""

    __tablename__ = "file"
    __table_args__ = (
        UniqueConstraint("name", "parent", name="uq_file_name_parent"),
        Index(
            "uq_file_root_name",
            "name",
            unique=True,
            sqlite_where=text("parent IS NULL"),
            postgresql_where=text("parent IS NULL"),
        ),
        Index("ix_file_parent", "parent"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    parent = Column(Integer, ForeignKey("directory.id"), nullable=True)

    # Content
    content = Column(LargeBinary, nullable=False, default=b"")
    mode = Column(Integer, nullable=False, default=0)

    # Whole-second UTC timestamp, served as Last-Modified
    modified = Column(DateTime(timezone=True), nullable=False)
