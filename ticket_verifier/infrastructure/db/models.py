# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ticket_verifier.infrastructure.db.session import Base


class User(Base):
    __tablename__ = "users"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))


class Ticket(Base):
    __tablename__ = "tickets"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(String(255))
    last_name: Mapped[str] = mapped_column(String(255))
    phone_number: Mapped[str] = mapped_column(String(64))
    email: Mapped[str] = mapped_column(String(255))
    card_type: Mapped[str] = mapped_column(String(64))
    code: Mapped[str] = mapped_column(String(255))
    image_path: Mapped[str] = mapped_column(String(512))
