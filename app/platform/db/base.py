import sqlalchemy
from sqlalchemy import Column, String
from sqlalchemy.orm import declarative_base
from uuid_extension import uuid7

Base = declarative_base()


class BaseModel(Base):
    __abstract__ = True
    id = Column(String, primary_key=True, default=lambda: str(uuid7()), index=True)
    created_at = Column(
        sqlalchemy.DateTime(timezone=True), server_default=sqlalchemy.func.now(), nullable=False
    )
    # Only written by explicit updates; inserts leave it empty.
    updated_at = Column(sqlalchemy.DateTime(timezone=True), nullable=True)

# Note: Models will import this Base. Do not import models here to avoid circular imports.
# init_models() in session.py imports them before create_all.
