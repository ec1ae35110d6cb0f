from decimal import Decimal

from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class TicketModel(Base):
    __tablename__ = 'tickets'

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    event_id: Mapped[str] = mapped_column(
        String(36), ForeignKey('events.id'), nullable=False, index=True
    )
    # One ticket per spot
    spot_id: Mapped[str] = mapped_column(
        String(36), ForeignKey('spots.id'), nullable=False, unique=True
    )
    ticket_type: Mapped[str] = mapped_column(String(10), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
