"""Tests for template expansion."""

from __future__ import annotations

from luming.diagnostics import DiagnosticLevel
from luming.document import parse_document
from luming.dsl.ast import LayoutDirection
from luming.templates.expansion import (
    MAX_EXPANSION_DEPTH,
    TemplateExpander,
    infer_root_names,
)
from luming.templates.runtime import RuntimeEntity, RuntimeGroup, iter_layout_nodes


def _expand(source: str, root_names: list[str] | None = None):
    document = parse_document(source)
    expander = TemplateExpander(document.templates)
    return expander.expand_document(document, root_names)


def _chain(node):
    """Follow single-entity content down to the leaf."""
    chain = [node]
    while node.content is not None:
        assert isinstance(node.content, RuntimeEntity)
        node = node.content.node
        chain.append(node)
    return chain


class TestScenes:
    """Tests for documents with structural statements."""

    def test_one_scene_per_statement(self) -> None:
        """Each structural line yields one scene."""
        expansion = _expand("header / body\nfooter")
        assert len(expansion.scenes) == 2
        assert isinstance(expansion.scenes[0], RuntimeGroup)
        assert expansion.scenes[0].direction == LayoutDirection.COLUMN
        assert [root.id for root in expansion.roots] == [
            "header_1",
            "body_2",
            "footer_3",
        ]

    def test_repeated_entity_gets_distinct_nodes(self) -> None:
        """Every occurrence of a template is its own instantiation."""
        expansion = _expand("tab: bg blue; rd 8\ntab + tab")
        first, second = expansion.roots

        assert first.id == "tab_1"
        assert second.id == "tab_2"
        assert first is not second
        assert not first.terminated and not second.terminated
        assert first.styles == {"background-color": "blue", "border-radius": "8px"}

    def test_sequence_shared_across_scenes(self) -> None:
        """Sequence numbers keep counting from one scene to the next."""
        expansion = _expand("a + b\nb + a")
        assert [root.id for root in expansion.roots] == ["a_1", "b_2", "b_3", "a_4"]

    def test_nested_containers(self, sample_source: str) -> None:
        """Container content is expanded in place, depth first."""
        expansion = _expand(sample_source)
        (scene,) = expansion.scenes
        ids = [node.id for node in iter_layout_nodes(scene)]

        assert ids == ["main_1", "tabs_2", "tab_3", "tab_4", "content_5"]
        assert expansion.roots[0].styles == {
            "background-color": "#fda",
            "width": "70%",
        }

    def test_inline_content_overrides_template_content(self) -> None:
        """Each container occurrence uses its own content."""
        expansion = _expand("card[title]\ncard[body]")
        first, second = expansion.roots

        assert first.content.node.template_name == "title"
        assert second.content.node.template_name == "body"

    def test_styles_are_copied(self) -> None:
        """Nodes carry a copy of their template's styles."""
        document = parse_document("tab: bg blue\ntab")
        expansion = TemplateExpander(document.templates).expand_document(document)
        expansion.roots[0].styles["color"] = "red"

        assert document.templates["tab"].styles == {"background-color": "blue"}

    def test_root_names_ignored_with_scenes(self) -> None:
        """Explicit roots do not replace structural statements."""
        expansion = _expand("header + body", root_names=["footer"])
        assert [root.template_name for root in expansion.roots] == ["header", "body"]
        assert expansion.diagnostics == []


class TestCycles:
    """Tests for self-referencing templates."""

    def test_self_container_terminates(self) -> None:
        """``a[a]`` expands to a finite chain ending in a terminal node."""
        expansion = _expand("a[a]")
        chain = _chain(expansion.roots[0])

        assert [node.id for node in chain] == ["a_1", "a_2", "a_3"]
        assert [node.terminated for node in chain] == [False, False, True]
        assert chain[-1].content is None

    def test_terminal_node_keeps_styles(self) -> None:
        """A cut self-reference still carries the template's styles."""
        expansion = _expand("a: bg red\na[a]")
        leaf = _chain(expansion.roots[0])[-1]

        assert leaf.terminated
        assert leaf.styles == {"background-color": "red"}

    def test_mutual_recursion_terminates(self) -> None:
        """Templates that contain each other stop at the first repeat."""
        expansion = _expand("a[b]\nb[a]")
        for root in expansion.roots:
            chain = _chain(root)
            assert chain[-1].terminated
            assert not any(node.terminated for node in chain[:-1])
            names = [node.template_name for node in chain[1:-1]]
            assert len(names) == len(set(names))

    def test_direct_expansion_of_recursive_template(self) -> None:
        """Expanding a template by name checks its own reference too."""
        document = parse_document("a[a]")
        root = TemplateExpander(document.templates).expand_entity(
            "a", from_template=True
        )
        chain = _chain(root)

        assert [node.terminated for node in chain] == [False, True]

    def test_cycles_produce_no_diagnostics(self) -> None:
        """Cutting a cycle is not an error."""
        assert _expand("a[b]\nb[a]").diagnostics == []


class TestDepthLimit:
    """Tests for long chains of distinct templates."""

    def test_long_chain_is_cut(self) -> None:
        """Expansion stops with one error once the depth limit is reached."""
        lines = [f"t{i}[t{i + 1}]" for i in range(MAX_EXPANSION_DEPTH + 20)]
        source = "\n".join(lines)
        document = parse_document(source)
        expander = TemplateExpander(document.templates)
        chain = _chain(expander.expand_entity("t0", from_template=True))

        assert len(chain) == MAX_EXPANSION_DEPTH + 1
        assert chain[-1].terminated
        assert chain[-1].template_name == f"t{MAX_EXPANSION_DEPTH}"
        (diagnostic,) = expander.diagnostics
        assert diagnostic.level == DiagnosticLevel.ERROR
        assert "nesting exceeds" in diagnostic.message

    def test_short_chain_is_complete(self) -> None:
        """Chains within the limit expand fully."""
        source = "\n".join(f"t{i}[t{i + 1}]" for i in range(10))
        document = parse_document(source)
        expander = TemplateExpander(document.templates)
        chain = _chain(expander.expand_entity("t0", from_template=True))

        assert [node.template_name for node in chain][-1] == "t10"
        assert not any(node.terminated for node in chain)
        assert expander.diagnostics == []


class TestRoots:
    """Tests for documents without structural statements."""

    def test_styles_only_document(self) -> None:
        """Every template becomes a root and a scene."""
        expansion = _expand("header: bg red\nbody: 70")

        assert [root.id for root in expansion.roots] == ["header_1", "body_2"]
        assert all(isinstance(scene, RuntimeEntity) for scene in expansion.scenes)
        assert [scene.node for scene in expansion.scenes] == expansion.roots

    def test_explicit_roots(self) -> None:
        """Requested roots are expanded in the requested order."""
        expansion = _expand("header: bg red\nbody: 70", root_names=["body"])
        assert [root.id for root in expansion.roots] == ["body_1"]

    def test_unknown_root(self) -> None:
        """An unknown root yields a terminal node and one error."""
        expansion = _expand("", root_names=["nonexistent"])
        (root,) = expansion.roots

        assert root.terminated
        assert root.template_name == "nonexistent"
        (diagnostic,) = expansion.diagnostics
        assert diagnostic.level == DiagnosticLevel.ERROR
        assert "nonexistent" in diagnostic.message
        assert diagnostic.line is None

    def test_empty_document(self) -> None:
        """An empty document has no roots, scenes, or diagnostics."""
        expansion = _expand("")
        assert expansion.roots == []
        assert expansion.scenes == []
        assert expansion.diagnostics == []


class TestInferRootNames:
    """Tests for root inference."""

    def test_uncontained_templates(self) -> None:
        """Templates referenced from content are not roots."""
        document = parse_document("page[header / body]\nfooter")
        assert infer_root_names(document) == ["page", "footer"]

    def test_all_contained_falls_back_to_order(self) -> None:
        """When every template is contained, all are roots."""
        document = parse_document("a[b]\nb[a]")
        assert infer_root_names(document) == ["a", "b"]

    def test_requested_wins(self) -> None:
        """A non-empty request is returned verbatim."""
        document = parse_document("page[header / body]")
        assert infer_root_names(document, ["body", "missing"]) == ["body", "missing"]

    def test_empty_request_is_ignored(self) -> None:
        """An empty request falls back to inference."""
        document = parse_document("header: bg red")
        assert infer_root_names(document, []) == ["header"]
