"""Database engine, session factory and declarative base"""

from dataclasses import dataclass, field
import asyncio

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base

from hotelbook.config import settings

engine = create_async_engine(
    settings.database_url,
    echo=settings.api_debug,
    pool_pre_ping=True,
)

SessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()


@dataclass
class SchemaState:
    """Tracks whether the reservations table has been provisioned in this process"""
    ready: bool = False
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


schema_state = SchemaState()


async def get_db():
    """FastAPI dependency: one session per request"""
    async with SessionLocal() as session:
        yield session
