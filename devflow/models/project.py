"""ORM model for projects, the resources owned by users."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, func

from devflow.models.base import Base


class Project(Base):
    """
    A user's project. owner_id is set at creation and never reassigned;
    there is no relationship() back to User, the owner is looked up by id.
    """

    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=False, default="")
    owner_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tags = Column(JSON, nullable=False, default=list)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(DateTime(timezone=True), nullable=True)
