from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from scheduling_api.db.base import Base


class Language(Base):
    __tablename__ = "languages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
