from __future__ import annotations
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool


Base = declarative_base()

_IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def make_engine(database_url: str) -> Engine:
	connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
	kwargs = {}
	# Every new connection to an in-memory SQLite URL is a fresh empty database, so keep one
	if database_url in _IN_MEMORY_URLS:
		kwargs["poolclass"] = StaticPool
	return create_engine(database_url, connect_args=connect_args, future=True, **kwargs)


def make_sessionmaker(engine: Engine) -> sessionmaker:
	return sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
