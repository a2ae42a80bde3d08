from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, DateTime, String
from liftlog.db import Base

class RoutineRecord(Base):
    __tablename__ = "routines"
    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    # creation order
    position: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    last_performed: Mapped[DateTime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    exercises = relationship(
        "RoutineExerciseRecord",
        back_populates="routine",
        cascade="all, delete-orphan",
        order_by="RoutineExerciseRecord.position",
    )

class RoutineExerciseRecord(Base):
    __tablename__ = "routine_exercises"
    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    routine_id: Mapped[str] = mapped_column(ForeignKey("routines.id", ondelete="CASCADE"), index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    sets: Mapped[int] = mapped_column(Integer, nullable=False)
    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    measure: Mapped[str] = mapped_column(String(16), nullable=False, default="reps")

    routine = relationship("RoutineRecord", back_populates="exercises")
