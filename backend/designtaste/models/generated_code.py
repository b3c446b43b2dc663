from sqlalchemy import JSON, Column, ForeignKey, Text
from sqlalchemy.orm import relationship
from designtaste.database import Base


class GeneratedCode(Base):
    __tablename__ = "generated_code"

    id = Column(Text, primary_key=True)
    element_id = Column(Text, ForeignKey("processing_queue.id", ondelete="CASCADE"), nullable=False)
    framework = Column(Text, nullable=False)
    code = Column(Text, nullable=False)
    description = Column(Text)
    improvements = Column(JSON, nullable=False, default=list)
    created_at = Column(Text, nullable=False)

    element = relationship("Element", back_populates="generated_code")
