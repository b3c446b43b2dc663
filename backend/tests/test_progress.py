import pytest

from designtaste.services.progress import calculate_progress, current_step, processing_steps, provider_for_step


class TestCalculateProgress:
    @pytest.mark.parametrize(
        "status, has_analysis, count, expected",
        [
            ("error", True, 5, 0),
            ("completed", False, 0, 100),
            ("queued", False, 0, 0),
            ("processing", False, 0, 15),
            ("processing", True, 0, 50),
            ("processing", True, 3, 85),
            ("queued", True, 3, 70),
        ],
    )
    def test_values(self, status, has_analysis, count, expected):
        assert calculate_progress(status, has_analysis, count) == expected

    def test_never_exceeds_95_before_completion(self):
        for status in ("queued", "processing"):
            for has_analysis in (True, False):
                assert calculate_progress(status, has_analysis, 100) <= 95


def test_steps_while_processing():
    steps = processing_steps("processing", True, 0)
    assert [s["completed"] for s in steps] == [True, True, False, False]


def test_steps_terminal_all_complete():
    for status in ("completed", "error"):
        assert all(s["completed"] for s in processing_steps(status, False, 0))


def test_current_step_labels():
    assert current_step("processing", False, 0) == "Analyzing image..."
    assert current_step("processing", True, 0) == "Finding inspiration..."
    assert current_step("processing", True, 2) == "Generating code..."
    assert current_step("error", True, 2) == "Error occurred during processing"


def test_provider_for_step():
    assert provider_for_step(False, 0) == "Heuristic analysis"
    assert provider_for_step(True, 0) == "Design Sources"
    assert provider_for_step(True, 4) == "Processing"
