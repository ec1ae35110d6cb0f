from decimal import Decimal
from typing import Optional

from sqlalchemy import Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class EventModel(Base):
    __tablename__ = 'events'

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    organization: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    rating: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    date: Mapped[Optional[str]] = mapped_column(String(19), nullable=True, index=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    capacity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    price: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    partner_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
