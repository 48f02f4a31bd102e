from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from database.models.base import BaseModel

class User(BaseModel):
    """Model for user"""
    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String, unique=True, index=True, nullable=False)
    # Salted bcrypt hash, never the plaintext
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)

    def __repr__(self):
        return f"<User {self.email}>"
