from sqlalchemy import Column, Float, ForeignKey, Index, Integer, Text, UniqueConstraint, text

from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata


class Tenants(Base):
    __tablename__ = 'tenants'

    name = Column(Text, nullable=False)
    status = Column(Text, nullable=False, server_default=text("'active'"))
    id = Column(Integer, primary_key=True)
    opening_time = Column(Text)  # "HH:MM", NULL = configured default
    closing_time = Column(Text)
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))

    api_keys = relationship('TenantApiKeys', back_populates='tenant')
    closed_days = relationship('ClosedDays', back_populates='tenant')
    staff_members = relationship('StaffMembers', back_populates='tenant')
    products = relationship('Products', back_populates='tenant')
    reservations = relationship('Reservations', back_populates='tenant')
    notifications = relationship('Notifications', back_populates='tenant')


class TenantApiKeys(Base):
    __tablename__ = 'tenant_api_keys'

    tenant_id = Column(ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False)
    api_key = Column(Text, nullable=False, unique=True)
    id = Column(Integer, primary_key=True)
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))

    tenant = relationship('Tenants', back_populates='api_keys')


class ClosedDays(Base):
    __tablename__ = 'closed_days'
    __table_args__ = (
        UniqueConstraint('tenant_id', 'weekday'),
    )

    tenant_id = Column(ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False)
    weekday = Column(Integer, nullable=False)  # 0 = Sunday … 6 = Saturday
    id = Column(Integer, primary_key=True)

    tenant = relationship('Tenants', back_populates='closed_days')


class StaffMembers(Base):
    __tablename__ = 'staff_members'

    tenant_id = Column(ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False)
    name = Column(Text, nullable=False)
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    color = Column(Text, nullable=False, server_default=text("'#3b82f6'"))
    sort_order = Column(Integer, nullable=False, server_default=text('0'))
    id = Column(Integer, primary_key=True)
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))

    tenant = relationship('Tenants', back_populates='staff_members')
    shifts = relationship('StaffShifts', back_populates='staff_member')
    exceptions = relationship('ShiftExceptions', back_populates='staff_member')
    reservations = relationship('Reservations', back_populates='staff_member')


class StaffShifts(Base):
    __tablename__ = 'staff_shifts'
    __table_args__ = (
        UniqueConstraint('staff_member_id', 'day_of_week'),
    )

    tenant_id = Column(ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False)
    staff_member_id = Column(ForeignKey('staff_members.id', ondelete='CASCADE'), nullable=False)
    day_of_week = Column(Integer, nullable=False)  # 0 = Sunday … 6 = Saturday
    start_time = Column(Text, nullable=False)
    end_time = Column(Text, nullable=False)
    is_working = Column(Integer, nullable=False, server_default=text('1'))
    id = Column(Integer, primary_key=True)

    staff_member = relationship('StaffMembers', back_populates='shifts')


class ShiftExceptions(Base):
    __tablename__ = 'shift_exceptions'

    tenant_id = Column(ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False)
    staff_member_id = Column(ForeignKey('staff_members.id', ondelete='CASCADE'), nullable=False)
    exception_date = Column(Text, nullable=False)  # YYYY-MM-DD
    start_time = Column(Text, nullable=False)
    end_time = Column(Text, nullable=False)
    id = Column(Integer, primary_key=True)
    reason = Column(Text)

    staff_member = relationship('StaffMembers', back_populates='exceptions')


class Products(Base):
    __tablename__ = 'products'

    tenant_id = Column(ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False)
    name = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    duration_minutes = Column(Integer, nullable=False, server_default=text('60'))
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    id = Column(Integer, primary_key=True)
    category = Column(Text)

    tenant = relationship('Tenants', back_populates='products')
    reservations = relationship('Reservations', back_populates='product')


class Reservations(Base):
    __tablename__ = 'reservations'
    __table_args__ = (
        Index('ix_reservations_tenant_date', 'tenant_id', 'reservation_date'),
    )

    tenant_id = Column(ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False)
    customer_name = Column(Text, nullable=False)
    reservation_date = Column(Text, nullable=False)  # YYYY-MM-DD
    reservation_time = Column(Text, nullable=False)  # HH:MM
    party_size = Column(Integer, nullable=False, server_default=text('2'))
    status = Column(Text, nullable=False, server_default=text("'pending'"))
    source = Column(Text, nullable=False, server_default=text("'api'"))
    created_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))
    updated_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))
    id = Column(Integer, primary_key=True)
    end_time = Column(Text)  # NULL = DEFAULT_DURATION_MINUTES of occupancy
    customer_phone = Column(Text)
    customer_email = Column(Text)
    staff_member_id = Column(ForeignKey('staff_members.id', ondelete='SET NULL'))
    product_id = Column(ForeignKey('products.id', ondelete='SET NULL'))
    price_paid = Column(Float)
    notes = Column(Text)

    tenant = relationship('Tenants', back_populates='reservations')
    staff_member = relationship('StaffMembers', back_populates='reservations')
    product = relationship('Products', back_populates='reservations')


class Notifications(Base):
    __tablename__ = 'notifications'

    tenant_id = Column(ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False)
    title = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    type = Column(Text, nullable=False, server_default=text("'info'"))
    read = Column(Integer, nullable=False, server_default=text('0'))
    id = Column(Integer, primary_key=True)
    link = Column(Text)
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))

    tenant = relationship('Tenants', back_populates='notifications')
