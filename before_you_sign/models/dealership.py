from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from ..core.db import Base


class DealershipProfile(Base):
    __tablename__ = "dealerships"

    # --- Primary identifiers ---
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False, index=True)

    # --- Business details ---
    business_name = Column(String(150), nullable=False)
    registration_number = Column(String(50), nullable=True)
    license_number = Column(String(50), nullable=True)
    year_established = Column(Integer, nullable=True)

    # --- Contact ---
    email = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=True)
    address = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    postal_code = Column(String(20), nullable=True)
    website = Column(String(255), nullable=True)

    # --- Listing info ---
    operating_hours = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="dealership")

    def __repr__(self):
        return f"<DealershipProfile(id={self.id}, user_id={self.user_id}, business_name='{self.business_name}')>"
