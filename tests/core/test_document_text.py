"""
Test suite for editor document text extraction.

System role: Verification of the document-to-plain-text adapter
"""

import json

from draftmind.core.document_text import extract_plain_text


class TestExtractPlainText:
    """Test suite for extract_plain_text."""

    def test_should_flatten_editor_tree(self, make_document) -> None:
        content = make_document("Paris is the capital of France.", "The Eiffel Tower is in Paris.")

        assert extract_plain_text(content) == (
            "Paris is the capital of France. The Eiffel Tower is in Paris."
        )

    def test_should_join_inline_text_nodes_with_spaces(self) -> None:
        content = json.dumps(
            {
                "type": "doc",
                "content": [
                    {
                        "type": "paragraph",
                        "content": [
                            {"type": "text", "text": "Hello"},
                            {"type": "text", "text": "world"},
                        ],
                    }
                ],
            }
        )

        assert extract_plain_text(content) == "Hello world"

    def test_nodes_without_text_should_contribute_empty_string(self) -> None:
        content = json.dumps({"type": "doc", "content": [{"type": "horizontalRule"}]})

        assert extract_plain_text(content) == ""

    def test_plain_text_should_pass_through(self) -> None:
        assert extract_plain_text("Just some notes.") == "Just some notes."

    def test_missing_content_should_be_empty(self) -> None:
        assert extract_plain_text(None) == ""
        assert extract_plain_text("") == ""
