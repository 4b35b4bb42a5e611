# app/shared/database/models.py
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Date, Text,
    Numeric, ForeignKey, CheckConstraint, func
)
from sqlalchemy.orm import relationship, declarative_base
import uuid

Base = declarative_base()


def _uuid() -> str:
    return str(uuid.uuid4())


# =====================================================
# TIMESTAMP MIXIN
# =====================================================
class TimestampMixin:
    """Adds created_at and updated_at columns"""
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    updated_at = Column(DateTime, nullable=False, server_default=func.current_timestamp(), onupdate=func.current_timestamp())


# =====================================================
# IDENTITY
# =====================================================

class User(Base):
    """Login account. Drivers share their id with their row in `drivers`."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_uuid)
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255))
    phone = Column(String(50))
    role = Column(String(50), default='driver', nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, server_default=func.current_timestamp())


class Driver(Base):
    """Driver directory entry"""
    __tablename__ = "drivers"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False)
    email = Column(String(255), index=True)
    phone_number = Column(String(50))
    license_number = Column(String(100))
    saldo = Column(Numeric(14, 2), default=0)
    description = Column(Text)
    selfie_url = Column(String(500))
    status = Column(String(20), default='active')
    created_at = Column(DateTime, server_default=func.current_timestamp())

    # Relationships
    transfers = relationship("AirportTransfer", back_populates="driver")
    payments = relationship("Payment", back_populates="driver")


# =====================================================
# TRANSFERS AND BOOKINGS
# =====================================================

class AirportTransfer(Base, TimestampMixin):
    """Airport pickup/dropoff assigned to a driver"""
    __tablename__ = "airport_transfer"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'confirmed', 'completed', 'canceled')",
            name="ck_airport_transfer_status"
        ),
        CheckConstraint(
            "status NOT IN ('confirmed', 'completed') OR driver_id IS NOT NULL",
            name="ck_airport_transfer_assigned_driver"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    booking_code = Column(String(100), nullable=False)
    customer_name = Column(String(255))
    pickup_location = Column(String(500), nullable=False)
    dropoff_location = Column(String(500), nullable=False)
    pickup_date = Column(Date)
    pickup_time = Column(String(20))
    status = Column(String(20), nullable=False, default='pending')
    driver_id = Column(String(36), ForeignKey("drivers.id"), index=True)
    price = Column(Numeric(14, 2))

    # Relationships
    driver = relationship("Driver", back_populates="transfers")


class Booking(Base):
    """Vehicle rental booking. Read-only for this service."""
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    code_booking = Column(String(100), nullable=False)
    user_id = Column(String(36), ForeignKey("drivers.id"), nullable=False, index=True)
    vehicle_name = Column(String(255))
    end_date = Column(DateTime)
    remaining_payments = Column(Numeric(14, 2), default=0)


# =====================================================
# PAYMENTS AND LEDGER
# =====================================================

class Payment(Base):
    """Balance movement shown on the driver profile"""
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    driver_id = Column(String(36), ForeignKey("drivers.id"), nullable=False, index=True)
    payment_type = Column(String(50))
    amount = Column(Numeric(14, 2), nullable=False)
    description = Column(Text)
    booking_id = Column(Integer, ForeignKey("bookings.id"))
    created_at = Column(DateTime, server_default=func.current_timestamp())

    # Relationships
    driver = relationship("Driver", back_populates="payments")


class TransactionHistory(Base):
    """Immutable balance ledger entry"""
    __tablename__ = "histori_transaksi"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), nullable=False, index=True)
    code_booking = Column(String(100))
    jenis_transaksi = Column(String(50))     # topup | payment | saldo_awal | saldo_akhir
    keterangan = Column(Text)                # free-text description
    nominal = Column(Numeric(14, 2))         # signed amount
    saldo_awal = Column(Numeric(14, 2))      # balance before
    saldo_akhir = Column(Numeric(14, 2))     # balance after
    trans_date = Column(DateTime, server_default=func.current_timestamp())
    status = Column(String(20))
    payment_method = Column(String(50))
    bank_name = Column(String(100))
    account_number = Column(String(100))
    account_holder_received = Column(String(255))
    reference_no = Column(String(100))
