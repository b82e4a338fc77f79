from __future__ import annotations
from sqlalchemy import Boolean, Column, Integer, JSON, String, Text
from .db import Base


class UserRow(Base):
	__tablename__ = "users"
	# sqlite_autoincrement keeps ids from being reused after the newest row is deleted
	__table_args__ = {"sqlite_autoincrement": True}
	id = Column(Integer, primary_key=True, autoincrement=True)
	username = Column(String(128), unique=True, nullable=False, index=True)
	password = Column(String(256), nullable=False)


class ContentRow(Base):
	__tablename__ = "content"
	__table_args__ = {"sqlite_autoincrement": True}
	id = Column(Integer, primary_key=True, autoincrement=True)
	title = Column(Text, nullable=False)
	type = Column(String(32), nullable=False)  # notes, quiz, assignment, paper
	subject = Column(String(128), nullable=False)
	grade = Column(String(64), nullable=False)
	difficulty = Column(String(16), nullable=False)  # easy, medium, hard
	html_content = Column(Text, nullable=False)
	tags = Column(JSON, nullable=True)
	is_public = Column(Boolean, default=False, nullable=False)
	created_by_id = Column(Integer, nullable=False, index=True)


class TopicSuggestionRow(Base):
	__tablename__ = "topic_suggestion"
	__table_args__ = {"sqlite_autoincrement": True}
	id = Column(Integer, primary_key=True, autoincrement=True)
	title = Column(Text, nullable=False)
	description = Column(Text, nullable=False)
	subject = Column(String(128), nullable=False, index=True)
	grade = Column(String(64), nullable=False, index=True)
	category = Column(String(128), nullable=True)
	difficulty_levels = Column(JSON, nullable=True)
