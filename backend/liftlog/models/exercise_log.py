from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, String
from liftlog.db import Base

class ExerciseRecord(Base):
    __tablename__ = "exercise_logs"
    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    session_id: Mapped[str] = mapped_column(ForeignKey("sessions.id", ondelete="CASCADE"), index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)

    session = relationship("SessionRecord", back_populates="exercises")
    sets = relationship(
        "SetRecord",
        back_populates="exercise",
        cascade="all, delete-orphan",
        order_by="SetRecord.position",
    )
