from sqlalchemy import JSON, Column, Float, ForeignKey, Text
from sqlalchemy.orm import relationship
from designtaste.database import Base


class Inspiration(Base):
    __tablename__ = "inspirations"

    id = Column(Text, primary_key=True)
    element_id = Column(Text, ForeignKey("processing_queue.id", ondelete="CASCADE"), nullable=False)
    title = Column(Text, nullable=False)
    image_url = Column(Text, nullable=False)
    source = Column(Text, nullable=False)
    category = Column(Text)
    tags = Column(JSON, nullable=False, default=list)
    similarity_score = Column(Float, nullable=False)
    description = Column(Text)
    source_url = Column(Text)
    created_at = Column(Text, nullable=False)

    element = relationship("Element", back_populates="inspirations")
