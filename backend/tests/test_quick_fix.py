import pytest

from designtaste.services.quick_fix_service import generate_quick_fix_suggestion


class TestQuickFixSuggestion:
    @pytest.mark.parametrize(
        "tag, prompt, heading",
        [
            ("DIV", "Fix the COLOR", "**Color & Contrast Improvements:**"),
            ("DIV", "more padding please", "**Spacing & Layout Improvements:**"),
            ("DIV", "better layout and contrast", "**Color & Contrast Improvements:**"),
            ("SECTION", "make it modern", "**Modern Styling for section:**"),
            ("BUTTON", "bigger", "**Button Improvements:**"),
            ("DIV", "the button is odd", "**Button Improvements:**"),
            ("INPUT", "wider", "**Form Input Improvements:**"),
            ("DIV", "form looks off", "**Form Input Improvements:**"),
            ("P", "larger font", "**Typography Improvements:**"),
            ("SPAN", "hmm", "**General Improvements for span:**"),
        ],
    )
    def test_first_matching_rule(self, tag, prompt, heading):
        assert generate_quick_fix_suggestion({"tagName": tag}, prompt).startswith(heading)

    def test_modern_wins_over_button(self):
        suggestion = generate_quick_fix_suggestion({"tagName": "BUTTON"}, "improve this")
        assert suggestion.startswith("**Modern Styling for button:**")

    def test_general_includes_tip(self):
        suggestion = generate_quick_fix_suggestion({}, "???")
        assert suggestion.startswith("**General Improvements for element:**")
        assert "💡 Tip" in suggestion


class TestQuickFixRoute:
    def test_suggestion(self, client):
        r = client.post("/api/quick-fix", json={"elementData": {"tagName": "BUTTON"}, "prompt": "bigger"})
        assert r.status_code == 200
        data = r.json()
        assert data["success"] is True
        assert data["type"] == "quick_fix"
        assert data["suggestion"].startswith("**Button Improvements:**")

    @pytest.mark.parametrize(
        "payload", [{"prompt": "x"}, {"elementData": {"tagName": "DIV"}}, {"elementData": {}, "prompt": "x"}]
    )
    def test_missing_fields(self, client, payload):
        r = client.post("/api/quick-fix", json=payload)
        assert r.status_code == 400
        assert r.json()["detail"] == "Missing element data or prompt"
