from sqlalchemy import Column, Integer, String, TIMESTAMP
from sqlalchemy.sql import func
from app.db import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)

    email = Column(String(255), nullable=False, unique=True)
    username = Column(String(100), nullable=False, unique=True)
    password = Column(String(255), nullable=False)  # bcrypt hash
    full_name = Column(String(255))

    role = Column(String(20), nullable=False)  # partner / business

    created_at = Column(TIMESTAMP, server_default=func.now(), nullable=False)
