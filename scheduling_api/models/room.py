from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from scheduling_api.db.base import Base


class Room(Base):
    __tablename__ = "rooms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    code: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
