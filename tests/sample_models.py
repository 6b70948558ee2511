"""
Soft Enable Test Models

Users with groups, posts, comments and addresses, all soft-enableable,
plus a tag model without the mixin and a model with a renamed flag column.
"""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import declarative_base, relationship

from soft_enable import EnableableQuery, EnableMixin

Base = declarative_base()


class Group(Base, EnableMixin):
    __tablename__ = "groups"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    enabled = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    users = relationship("User", back_populates="group")


class User(Base, EnableMixin):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=True)
    enabled = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    group = relationship("Group", back_populates="users")
    posts = relationship("Post", back_populates="user", order_by="Post.id")
    addresses = relationship("Address", lazy="dynamic", query_class=EnableableQuery)

    def __repr__(self):
        return f"<User {self.email}>"


class Post(Base, EnableMixin):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    enabled = Column(Boolean, default=True)

    user = relationship("User", back_populates="posts")
    comments = relationship("Comment", back_populates="post")


class Comment(Base, EnableMixin):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(Integer, ForeignKey("posts.id"), nullable=False, index=True)
    body = Column(Text, nullable=False)
    enabled = Column(Boolean, default=True)

    post = relationship("Post", back_populates="comments")


class Address(Base, EnableMixin):
    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    address = Column(String(255), nullable=False)
    enabled = Column(Boolean, default=True)


class Tag(Base):
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False)


class Channel(Base, EnableMixin):
    """Uses is_active as its flag"""

    __tablename__ = "channels"
    __enabled_column__ = "is_active"

    id = Column(Integer, primary_key=True, autoincrement=True)
    channel_type = Column(String(50), nullable=False)
    is_active = Column(Boolean, default=True)


class Document(Base, EnableMixin):
    """Single-table inheritance root"""

    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    kind = Column(String(20), nullable=False)
    title = Column(String(255), nullable=False)
    enabled = Column(Boolean, default=True)

    __mapper_args__ = {"polymorphic_on": kind, "polymorphic_identity": "document"}


class Invoice(Document):
    __mapper_args__ = {"polymorphic_identity": "invoice"}
