"""
Coarse progress reporting for polling clients.

Progress is derived from which rows exist for an element, not measured.
Poll the element status to learn whether processing has finished.
"""

STEP_LABELS = ("Analyzing image", "Suggesting tips", "Finding inspiration", "Generating code")


def calculate_progress(status: str, has_analysis: bool, inspirations_count: int) -> int:
    if status == "error":
        return 0
    if status == "completed":
        return 100

    progress = 0
    if status == "processing":
        progress += 15
    if has_analysis:
        progress += 35
    if inspirations_count > 0:
        progress += 35
    return min(progress, 95)


def processing_steps(status: str, has_analysis: bool, inspirations_count: int) -> list[dict]:
    finished = status in ("completed", "error")
    analysed = finished or (status == "processing" and has_analysis)
    inspired = finished or inspirations_count > 0
    flags = (analysed, analysed, inspired, finished)
    return [{"label": label, "completed": done} for label, done in zip(STEP_LABELS, flags)]


def current_step(status: str, has_analysis: bool, inspirations_count: int) -> str:
    if status == "error":
        return "Error occurred during processing"
    if status == "completed":
        return "Processing completed successfully"
    if not has_analysis:
        return "Analyzing image..."
    if inspirations_count == 0:
        return "Finding inspiration..."
    return "Generating code..."


def provider_for_step(has_analysis: bool, inspirations_count: int) -> str:
    if not has_analysis:
        return "Heuristic analysis"
    if inspirations_count == 0:
        return "Design Sources"
    return "Processing"
