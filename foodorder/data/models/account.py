# foodorder/data/models/account.py
import enum
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship

from foodorder.data.database import Base


class RoleType(str, enum.Enum):
    CUSTOMER = "customer"
    RESTAURANT = "restaurant"
    ADMIN = "admin"


class AccountModel(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    username = Column(String(255), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)
    password = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    roles = relationship(
        "AccountRoleModel",
        back_populates="account",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def role_types(self) -> set[RoleType]:
        return {r.role_type for r in self.roles if r.is_active}


class AccountRoleModel(Base):
    __tablename__ = "account_roles"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False)
    role_type = Column(SAEnum(RoleType, name="role_type"), nullable=False, default=RoleType.CUSTOMER)
    is_active = Column(Boolean, nullable=False, default=True)
    description = Column(String(255), nullable=True)

    account = relationship("AccountModel", back_populates="roles")
