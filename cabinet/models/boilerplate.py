"""Boilerplate and boilerplate file mapping models."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text
from ..database import Base


class Boilerplate(Base):
    """Named set of client-path -> stored-file mappings."""

    __tablename__ = "boilerplate"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    modified = Column(DateTime(timezone=True), nullable=False)
    # Optional provisioning script run by clients after placing the files
    script = Column(Text, nullable=True)


class BoilerplateFileMapping(Base):
    """One client location of a boilerplate, pointing at a stored file.

    The file reference is non-owning: it only blocks deletion of the file.
    Existence of the file is checked by the repository at write time.
    """

    __tablename__ = "bp_file_map"
    __table_args__ = (
        Index("ix_bp_file_map_file", "file"),
    )

    boilerplate_id = Column(
        "boilerplate",
        Integer,
        ForeignKey("boilerplate.id", ondelete="CASCADE"),
        primary_key=True,
    )
    location = Column(String(1024), primary_key=True)
    file_id = Column("file", Integer, ForeignKey("file.id"), nullable=False)
