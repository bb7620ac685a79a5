# label_hub/store/schema.py
"""标签记录表的 ORM 模型。"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    JSON,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    pass


class LhUiLabel(Base):
    """扁平的 UI 标签记录表，(scope_key, label_key, language_code) 唯一。"""

    __tablename__ = "lh_ui_labels"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    scope_key: Mapped[str] = mapped_column(String(255), nullable=False)
    label_key: Mapped[str] = mapped_column(String(255), nullable=False)
    language_code: Mapped[str] = mapped_column(String(16), nullable=False)
    translated_text: Mapped[str] = mapped_column(Text, nullable=False)
    # 入库时计算好的标签路径，保留含字面点号的标签键
    label_path_json: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    __table_args__ = (
        UniqueConstraint(
            "scope_key", "label_key", "language_code", name="uq_ui_label_identity"
        ),
        Index("ix_ui_labels_lang_scope", "language_code", "scope_key"),
    )
