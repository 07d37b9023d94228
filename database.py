"""Database setup and models for the trapline records.

This module provides the database connection, models, and utilities
for the trapper's records using SQLAlchemy. Every record except the
user account itself is scoped to one user.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import create_engine, Column, Integer, String, Text, DateTime, Float, ForeignKey
from sqlalchemy.orm import declarative_base, sessionmaker

from logic.config import DATABASE_URL
from logic.licenses import split_licenses

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value):
    return value.isoformat() if value else None


class User(Base):
    """Account used to sign in.

    Attributes:
        id: Primary key, also the id of the user's profile.
        email: Lower-cased login email.
        password_hash: Salted password hash.
        created_at: When the account was created.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def to_dict(self):
        return {"id": self.id, "email": self.email, "created_at": _iso(self.created_at)}


class OperatingArea(Base):
    """A trapping zone tracked by the user.

    Attributes:
        id: Primary key.
        user_id: Owning user.
        name: Display name of the area.
        district: Administrative district the area lies in.
        area_type: Registered Line or Private Land.
        license_number: License the area is trapped under.
    """

    __tablename__ = "operating_areas"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(120), nullable=False)
    district = Column(String(120), nullable=True)
    area_type = Column(String(50), nullable=False)
    license_number = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "district": self.district,
            "area_type": self.area_type,
            "license_number": self.license_number,
            "created_at": _iso(self.created_at),
        }


class HarvestLog(Base):
    """One animal taken in an operating area."""

    __tablename__ = "harvest_logs"

    id = Column(String(36), primary_key=True, default=new_id)
    operating_area_id = Column(
        String(36), ForeignKey("operating_areas.id"), nullable=False, index=True
    )
    species = Column(String(50), nullable=False)
    sex = Column(String(20), nullable=False)
    date_harvested = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    def to_dict(self):
        return {
            "id": self.id,
            "operating_area_id": self.operating_area_id,
            "species": self.species,
            "sex": self.sex,
            "date_harvested": _iso(self.date_harvested),
            "created_at": _iso(self.created_at),
        }


class TrapInventory(Base):
    """A line of gear in the trap shed."""

    __tablename__ = "trap_inventory"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    category = Column(String(100), nullable=False)
    model = Column(String(120), nullable=False)
    total_quantity = Column(Integer, nullable=False, default=0)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "category": self.category,
            "model": self.model,
            "total_quantity": self.total_quantity,
            "notes": self.notes,
            "created_at": _iso(self.created_at),
        }


class TrapDeployment(Base):
    """A physical trap's current placement on the map."""

    __tablename__ = "trap_deployments"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    operating_area_id = Column(
        String(36), ForeignKey("operating_areas.id"), nullable=False, index=True
    )
    trap_inventory_id = Column(
        String(36), ForeignKey("trap_inventory.id"), nullable=False, index=True
    )
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    status = Column(String(30), nullable=False, default="Active")
    deployed_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    def to_dict(self, trap_inventory=None):
        """Convert the deployment to a dictionary.

        Args:
            trap_inventory: Optional inventory item the deployment references,
                embedded the way the map popup reads it.

        Returns:
            Dictionary representation of the deployment.
        """
        return {
            "id": self.id,
            "user_id": self.user_id,
            "operating_area_id": self.operating_area_id,
            "trap_inventory_id": self.trap_inventory_id,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "status": self.status,
            "deployed_at": _iso(self.deployed_at),
            "trap_inventory": (
                {"id": trap_inventory.id, "model": trap_inventory.model, "category": trap_inventory.category}
                if trap_inventory is not None
                else None
            ),
        }


class LandPermission(Base):
    """A landowner's permission to trap private land."""

    __tablename__ = "land_permissions"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    landowner_name = Column(String(120), nullable=False)
    phone = Column(String(40), nullable=True)
    property_location = Column(String(255), nullable=False)
    status = Column(String(30), nullable=False, default="Active")
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "landowner_name": self.landowner_name,
            "phone": self.phone,
            "property_location": self.property_location,
            "status": self.status,
            "created_at": _iso(self.created_at),
        }


class Profile(Base):
    """Trapper identification. The id is the owning user's id.

    Attributes:
        trapping_license: License numbers joined into one delimited string.
    """

    __tablename__ = "profiles"

    id = Column(String(36), ForeignKey("users.id"), primary_key=True)
    full_name = Column(String(120), nullable=True)
    trapping_license = Column(Text, nullable=True)
    outdoors_card = Column(String(64), nullable=True)
    drivers_license = Column(String(64), nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "full_name": self.full_name,
            "trapping_license": self.trapping_license,
            "trapping_licenses": split_licenses(self.trapping_license),
            "outdoors_card": self.outdoors_card,
            "drivers_license": self.drivers_license,
            "updated_at": _iso(self.updated_at),
        }


def get_db():
    """Dependency for getting database session.

    Yields:
        Database session that will be closed after use.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize the database by creating all tables."""
    Base.metadata.create_all(bind=engine)
