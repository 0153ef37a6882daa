"""
Shadow detection in CIE L*a*b* by color binning and border analysis.
"""
from .models.color_bin import BinSteps, ColorBinKey
from .models.detection_result import DetectionResult
from .models.lab_image import LabPlanes
from .models.shadow_points import ShadowPointSet
from .pipeline.find_shadows import find_shadows

__version__ = "1.0.0"

__all__ = [
    "BinSteps",
    "ColorBinKey",
    "DetectionResult",
    "LabPlanes",
    "ShadowPointSet",
    "find_shadows",
]
