from designtaste.models.element import Element
from designtaste.models.analysis import ElementAnalysis
from designtaste.models.inspiration import Inspiration
from designtaste.models.generated_code import GeneratedCode

__all__ = ["Element", "ElementAnalysis", "Inspiration", "GeneratedCode"]
