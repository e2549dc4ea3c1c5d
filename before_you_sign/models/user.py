import enum

from sqlalchemy import Column, Integer, String, DateTime, Enum, func
from sqlalchemy.orm import relationship
from ..core.db import Base


class Role(str, enum.Enum):
    ADMIN = "admin"
    DEALERSHIP = "dealership"
    CUSTOMER = "customer"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash
    # stored as the plain value ("dealership"), checked on the way in and out
    role = Column(
        Enum(
            Role,
            name="user_role",
            native_enum=False,
            create_constraint=True,
            validate_strings=True,
            values_callable=lambda roles: [r.value for r in roles],
        ),
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    dealership = relationship("DealershipProfile", back_populates="user", uselist=False)
    customer = relationship("CustomerProfile", back_populates="user", uselist=False)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role.value}')>"
