from sqlalchemy import JSON, Column, Integer, Text
from sqlalchemy.orm import relationship
from designtaste.database import Base

ELEMENT_STATUSES = ("queued", "processing", "completed", "error")
TERMINAL_STATUSES = ("completed", "error")


class Element(Base):
    __tablename__ = "processing_queue"

    id = Column(Text, primary_key=True)
    source_url = Column(Text, nullable=False)
    element_data = Column(JSON, nullable=False)
    screenshot_url = Column(Text)
    status = Column(Text, nullable=False, default="queued")
    priority = Column(Integer, nullable=False, default=1)
    error_message = Column(Text)
    created_at = Column(Text, nullable=False)
    processed_at = Column(Text)

    analysis = relationship(
        "ElementAnalysis", back_populates="element", uselist=False, cascade="all, delete-orphan"
    )
    inspirations = relationship("Inspiration", back_populates="element", cascade="all, delete-orphan")
    generated_code = relationship("GeneratedCode", back_populates="element", cascade="all, delete-orphan")
