"""
Tests for delimited block extraction.
"""

from oparser.document import Document
from oparser.extract.blocks import extract_block, extract_blocks
from oparser.models import ExtractionSettings, ObjectKind


class TestExtractBlock:
    """Tests for extract_block."""

    def test_policy_map_block(self, document):
        """Test a policy-map runs through its indented end-policy-map."""
        text = extract_block(document, "policy-map NGDCS-CUSTOMER-A-00-IN", ObjectKind.POLICY_MAP)

        assert text == (
            "policy-map NGDCS-CUSTOMER-A-00-IN\n"
            " class class-default\n"
            "  police rate 100 mbps\n"
            "  !\n"
            " !\n"
            " end-policy-map"
        )

    def test_route_policy_block(self, document):
        """Test a route-policy runs through end-policy."""
        text = extract_block(document, "route-policy CUSTOMER-B-IMPORT", ObjectKind.ROUTE_POLICY)

        assert text.startswith("route-policy CUSTOMER-B-IMPORT\n")
        assert text.endswith("\nend-policy")
        assert "endif" in text

    def test_missing_declaration(self, document):
        """Test None for a declaration that is not in the document."""
        assert extract_block(document, "route-policy NOPE", ObjectKind.ROUTE_POLICY) is None

    def test_unterminated_block(self):
        """Test None when the terminator never follows."""
        document = Document.from_text("route-policy RP\n  pass\n")

        assert extract_block(document, "route-policy RP", ObjectKind.ROUTE_POLICY) is None

    def test_anchor_is_exact(self):
        """Test a declaration does not anchor on a longer name."""
        document = Document.from_text(
            "route-policy RP-LONG\n  drop\nend-policy\nroute-policy RP\n  pass\nend-policy\n"
        )

        text = extract_block(document, "route-policy RP", ObjectKind.ROUTE_POLICY)

        assert text == "route-policy RP\n  pass\nend-policy"

    def test_idempotent(self, document):
        """Test repeated extraction yields identical text."""
        first = extract_block(document, "route-policy CUSTOMER-A-IMPORT", ObjectKind.ROUTE_POLICY)
        second = extract_block(document, "route-policy CUSTOMER-A-IMPORT", ObjectKind.ROUTE_POLICY)

        assert first == second


class TestExtractBlocks:
    """Tests for extract_blocks."""

    def test_route_policies_processed_first(self, document):
        """Test all route-policies are extracted before any policy-map."""
        extraction = extract_blocks(
            document,
            {
                ObjectKind.POLICY_MAP: ["policy-map NGDCS-CUSTOMER-A-00-IN"],
                ObjectKind.ROUTE_POLICY: [
                    "route-policy CUSTOMER-A-IMPORT",
                    "route-policy CUSTOMER-B-IMPORT",
                ],
            },
        )

        kinds = [block.kind for block in extraction.blocks]
        assert kinds == [ObjectKind.ROUTE_POLICY, ObjectKind.ROUTE_POLICY, ObjectKind.POLICY_MAP]

    def test_render_keeps_resolution_order_with_separators(self, document):
        """Test artifact text follows declaration order, one separator per block."""
        extraction = extract_blocks(
            document,
            {
                ObjectKind.ROUTE_POLICY: [
                    "route-policy CUSTOMER-B-IMPORT",
                    "route-policy CUSTOMER-A-IMPORT",
                ],
            },
        )

        text = extraction.render(ObjectKind.ROUTE_POLICY)
        assert text.index("CUSTOMER-B-IMPORT") < text.index("CUSTOMER-A-IMPORT")
        assert text.endswith("route-policy CUSTOMER-A-IMPORT\n  pass\nend-policy\n!\n")
        assert text.count("end-policy\n!\n") == 2

    def test_custom_separator(self, document):
        settings = ExtractionSettings(separator="#")

        extraction = extract_blocks(
            document, {ObjectKind.ROUTE_POLICY: ["route-policy CUSTOMER-A-IMPORT"]}, settings
        )

        assert extraction.render(ObjectKind.ROUTE_POLICY).endswith("end-policy\n#\n")

    def test_miss_is_recorded(self, document):
        """Test an undelimited declaration produces a diagnostic."""
        extraction = extract_blocks(document, {ObjectKind.POLICY_MAP: ["policy-map GONE"]})

        assert extraction.render(ObjectKind.POLICY_MAP) == ""
        assert [str(r) for r in extraction.diagnostics.for_kind(ObjectKind.POLICY_MAP)] == [
            "pm empty for policy-map GONE"
        ]

    def test_blank_declarations_skipped(self, document):
        extraction = extract_blocks(document, {ObjectKind.ROUTE_POLICY: ["", "   "]})

        assert extraction.blocks == []
        assert len(extraction.diagnostics) == 0
