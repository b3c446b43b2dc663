from sqlalchemy import JSON, Column, Float, ForeignKey, Text
from sqlalchemy.orm import relationship
from designtaste.database import Base


class ElementAnalysis(Base):
    __tablename__ = "element_analyses"

    id = Column(Text, primary_key=True)
    element_id = Column(Text, ForeignKey("processing_queue.id", ondelete="CASCADE"), nullable=False, unique=True)
    component_type = Column(Text, nullable=False)
    design_issues = Column(JSON, nullable=False, default=list)
    style_characteristics = Column(JSON, nullable=False, default=list)
    recommendations = Column(JSON, nullable=False, default=list)
    confidence_score = Column(Float, nullable=False)
    created_at = Column(Text, nullable=False)

    element = relationship("Element", back_populates="analysis")
