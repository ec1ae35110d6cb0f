from typing import Optional

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class SpotModel(Base):
    __tablename__ = 'spots'

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    event_id: Mapped[str] = mapped_column(
        String(36), ForeignKey('events.id'), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(10), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='available', nullable=False)
    # Written by the reservation together with the ticket row
    ticket_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    __table_args__ = (UniqueConstraint('event_id', 'name', name='uq_spot_event_name'),)
