"""Project model."""

from sqlalchemy import Index, false, text
from sqlmodel import Field, SQLModel


class Project(SQLModel, table=True):
    """A named group of timers.

    At most one project is current; new timers default to it.
    """

    __tablename__ = "projects"
    __table_args__ = (
        Index(
            "uq_projects_single_current",
            "is_current",
            unique=True,
            sqlite_where=text("is_current = 1"),
            postgresql_where=text("is_current"),
        ),
    )

    id: int | None = Field(default=None, primary_key=True)
    unique_id: str = Field(max_length=64, unique=True, index=True)
    name: str = Field(max_length=200)
    is_current: bool = Field(default=False, sa_column_kwargs={"server_default": false()})
