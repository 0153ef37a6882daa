# pipeline/detect_shadows.py
from pathlib import Path
import logging
import os
from typing import Tuple, Union

from dotenv import load_dotenv

from ..models.color_bin import BinSteps
from ..models.detection_result import DetectionResult
from ..repositories.image_repository import ImageRepository
from ..services.mask_service import MaskService
from ..services.preprocessing_service import PreprocessingService
from .find_shadows import coerce_steps, find_shadows

logger = logging.getLogger(__name__)

# env‑vars
load_dotenv()
OUTPUT_DIR = os.getenv("SHADOW_OUTPUT_DIR", "data/shadow_output")
OUTPUT_EXT = os.getenv("OUTPUT_IMG_EXT", ".png")
DEFAULT_STEPS = BinSteps(
    l_step=int(os.getenv("SHADOW_L_STEP", "10")),
    a_step=int(os.getenv("SHADOW_A_STEP", "10")),
    b_step=int(os.getenv("SHADOW_B_STEP", "10")),
)


def final_mask_name(steps: BinSteps, ext: str = OUTPUT_EXT) -> str:
    return f"mask_step_two_lStep{steps.l_step}_aStep{steps.a_step}_bStep{steps.b_step}{ext}"


def detect_shadows(
    image_path: Union[str, Path],
    steps: Union[BinSteps, Tuple[int, int, int]] = DEFAULT_STEPS,
    *,
    workers: int | None = None,
    scheduling: str | None = None,
    output_dir: Union[str, Path] = OUTPUT_DIR,
    ext: str = OUTPUT_EXT,
    save_intermediates: bool = False,
    image_repository: ImageRepository = ImageRepository(),
    preprocessing_service: PreprocessingService = PreprocessingService(),
    mask_service: MaskService = MaskService(),
) -> DetectionResult:
    """
    For one photo on disk:
        • convert to Lab and smooth each plane (bilateral filter)
        • keep pixels darker than the mean lightness as candidates
        • refine the candidates with find_shadows()
        • write the final mask (and optionally every intermediate plane)
    Returns the DetectionResult with output_path set to the final mask.
    """
    steps = coerce_steps(steps)
    output_dir = Path(output_dir)

    rgb = image_repository.load(image_path)
    raw = preprocessing_service.to_lab(rgb)
    planes = preprocessing_service.smooth(raw)
    planes.path = Path(image_path)
    candidates = preprocessing_service.background_light_mask(planes.l)
    logger.info(f"{mask_service.count_marked(candidates)} candidate pixels in {Path(image_path).name}")

    if save_intermediates:
        image_repository.save(raw.merged(), output_dir / f"LAB{ext}")
        for name, plane in (("L", raw.l), ("A", raw.a), ("B", raw.b),
                            ("L_BFiltered", planes.l), ("A_BFiltered", planes.a),
                            ("B_BFiltered", planes.b),
                            ("mask_step_one", mask_service.to_displayable(candidates))):
            image_repository.save(plane, output_dir / f"{name}{ext}")

    result = find_shadows(planes, candidates, steps,
                          workers=workers, scheduling=scheduling)

    final_mask = mask_service.render(result.points, planes.shape)
    result.output_path = image_repository.save(final_mask, output_dir / final_mask_name(steps, ext))
    logger.info(f"final mask written to {result.output_path}")
    return result
