"""
SQLAlchemy ORM models -- schema of the invoicing dashboard.

Tables
------
users      -- people who can sign in (bcrypt password hashes)
customers  -- billed parties shown in the dashboard
invoices   -- one row per invoice, amount stored in cents
revenue    -- monthly revenue figures for the chart
"""

from __future__ import annotations

import uuid

from sqlalchemy import Column, Date, Integer, String, Text, Uuid

from .database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    email = Column(Text, nullable=False, unique=True)
    password = Column(Text, nullable=False)


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    image_url = Column(String(255), nullable=False)


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    customer_id = Column(Uuid, nullable=False)
    amount = Column(Integer, nullable=False)  # cents
    status = Column(String(255), nullable=False)  # pending | paid
    date = Column(Date, nullable=False)


class Revenue(Base):
    __tablename__ = "revenue"

    month = Column(String(4), primary_key=True)
    revenue = Column(Integer, nullable=False)
