"""
TypeScript Symbol Extractor

Extracts callable symbols from TypeScript/JavaScript source files using tree-sitter.
Handles .ts, .tsx, .js, .jsx files (JavaScript is parsed with the TypeScript grammar).
"""

import re
from typing import Optional

from tree_sitter import Node, Tree

from mcpgen.ast.extractors.base import LanguageExtractor, register_extractor
from mcpgen.ast.models import FunctionSymbol, ParameterInfo, SymbolKind

FUNCTION_DECLARATION_TYPES = ("function_declaration", "generator_function_declaration")
FUNCTION_VALUE_TYPES = ("arrow_function", "function_expression", "function", "generator_function")
VARIABLE_DECLARATION_TYPES = ("lexical_declaration", "variable_declaration")
CLASS_DECLARATION_TYPES = ("class_declaration", "abstract_class_declaration")
PARAMETER_TYPES = ("required_parameter", "optional_parameter")

_WHITESPACE_RE = re.compile(r"\s+")


class TypeScriptExtractor(LanguageExtractor):
    """Extracts callable symbols from TypeScript/JavaScript source files."""

    @property
    def languages(self) -> tuple[str, ...]:
        return ("typescript", "tsx")

    # -------------------------------------------------------------------------
    # Top-level statements
    # -------------------------------------------------------------------------

    def _top_level(self, tree: Tree) -> list[tuple[Node, Node, bool]]:
        """
        Unwrap top-level statements.

        Returns (declaration, statement, has_export_keyword) triples, where
        statement is the node documentation comments attach to.
        """
        items = []
        for node in tree.root_node.children:
            if node.type == "export_statement":
                declaration = node.child_by_field_name("declaration")
                if declaration is None:
                    # export default function name() {} may parse as an expression
                    value = node.child_by_field_name("value")
                    if value is not None and value.type in FUNCTION_VALUE_TYPES:
                        declaration = value
                if declaration is not None:
                    items.append((declaration, node, True))
            else:
                items.append((node, node, False))
        return items

    def extract_export_names(self, tree: Tree, source: bytes) -> set[str]:
        """
        Names exported through a local export clause or a default export.

        ``export { a, b as c }`` and ``export default a`` mark the local
        names a and b as exported. Re-exports from other modules are ignored.
        """
        names: set[str] = set()
        for node in tree.root_node.children:
            if node.type != "export_statement":
                continue
            if node.child_by_field_name("source") is not None:
                continue

            value = node.child_by_field_name("value")
            if value is not None and value.type == "identifier":
                names.add(self.get_node_text(value, source))

            clause = self.find_child(node, "export_clause")
            if clause is None:
                continue
            for spec in self.find_children(clause, "export_specifier"):
                name_node = spec.child_by_field_name("name")
                if name_node is not None:
                    names.add(self.get_node_text(name_node, source))
        return names

    # -------------------------------------------------------------------------
    # Declarations
    # -------------------------------------------------------------------------

    def extract_declarations(self, tree: Tree, source: bytes) -> list[FunctionSymbol]:
        """Extract top-level function declarations, exported or not."""
        exported_names = self.extract_export_names(tree, source)
        symbols = []

        for declaration, statement, has_export in self._top_level(tree):
            is_default_function = has_export and declaration.type in FUNCTION_VALUE_TYPES
            if declaration.type not in FUNCTION_DECLARATION_TYPES and not is_default_function:
                continue
            name_node = declaration.child_by_field_name("name")
            name = self.get_node_text(name_node, source) if name_node else None
            symbols.append(
                self._build_symbol(
                    SymbolKind.DECLARATION,
                    name,
                    declaration,
                    source,
                    is_exported=has_export or (name in exported_names),
                    doc_anchor=statement,
                )
            )

        return symbols

    # -------------------------------------------------------------------------
    # Bindings
    # -------------------------------------------------------------------------

    def extract_bindings(self, tree: Tree, source: bytes) -> list[FunctionSymbol]:
        """Extract top-level const/let/var bindings initialized with a function."""
        exported_names = self.extract_export_names(tree, source)
        symbols = []

        for declaration, statement, has_export in self._top_level(tree):
            if declaration.type not in VARIABLE_DECLARATION_TYPES:
                continue
            for declarator in self.find_children(declaration, "variable_declarator"):
                value = declarator.child_by_field_name("value")
                if value is None or value.type not in FUNCTION_VALUE_TYPES:
                    continue
                name_node = declarator.child_by_field_name("name")
                name = None
                if name_node is not None and name_node.type == "identifier":
                    name = self.get_node_text(name_node, source)
                symbols.append(
                    self._build_symbol(
                        SymbolKind.BINDING,
                        name,
                        value,
                        source,
                        is_exported=has_export or (name in exported_names),
                        doc_anchor=statement,
                    )
                )

        return symbols

    # -------------------------------------------------------------------------
    # Methods
    # -------------------------------------------------------------------------

    def extract_methods(self, tree: Tree, source: bytes) -> list[FunctionSymbol]:
        """
        Extract methods of top-level classes.

        Private methods and get/set accessors are excluded. A method counts
        as exported when its class is exported.
        """
        exported_names = self.extract_export_names(tree, source)
        symbols = []

        for declaration, _statement, has_export in self._top_level(tree):
            if declaration.type not in CLASS_DECLARATION_TYPES:
                continue
            class_name_node = declaration.child_by_field_name("name")
            class_name = self.get_node_text(class_name_node, source) if class_name_node else None
            class_exported = has_export or (class_name in exported_names)

            body = declaration.child_by_field_name("body")
            if body is None:
                continue
            for member in body.children:
                if member.type != "method_definition":
                    continue
                if self._is_private(member, source) or self._is_accessor(member):
                    continue
                symbols.append(
                    self._build_symbol(
                        SymbolKind.METHOD,
                        self._method_name(member, source),
                        member,
                        source,
                        is_exported=class_exported,
                        doc_anchor=member,
                        class_name=class_name,
                    )
                )

        return symbols

    def _is_private(self, node: Node, source: bytes) -> bool:
        modifier = self.find_child(node, "accessibility_modifier")
        return modifier is not None and self.get_node_text(modifier, source) == "private"

    def _is_accessor(self, node: Node) -> bool:
        return self.has_token(node, "get") or self.has_token(node, "set")

    def _method_name(self, node: Node, source: bytes) -> Optional[str]:
        name_node = node.child_by_field_name("name")
        if name_node is None or name_node.type == "computed_property_name":
            return None
        name = self.get_node_text(name_node, source)
        if name_node.type == "string":
            name = name.strip("'\"")
        return name or None

    # -------------------------------------------------------------------------
    # Shared symbol building
    # -------------------------------------------------------------------------

    def _build_symbol(
        self,
        kind: SymbolKind,
        name: Optional[str],
        node: Node,
        source: bytes,
        is_exported: bool,
        doc_anchor: Node,
        class_name: Optional[str] = None,
    ) -> FunctionSymbol:
        """Build a FunctionSymbol from a function-like node."""
        return FunctionSymbol(
            kind=kind,
            name=name,
            parameters=self._extract_function_parameters(node, source),
            return_type=self._extract_return_type(node, source),
            is_async=self.has_token(node, "async"),
            is_exported=is_exported,
            doc=self.leading_doc_comment(doc_anchor, source),
            class_name=class_name,
            line=node.start_point[0] + 1,
        )

    def _extract_function_parameters(self, node: Node, source: bytes) -> list[ParameterInfo]:
        params_node = node.child_by_field_name("parameters")
        if params_node is not None:
            return self._extract_parameters(params_node, source)
        # Arrow function with a single bare parameter: x => ...
        single = node.child_by_field_name("parameter")
        if single is not None:
            return [ParameterInfo(name=self.get_node_text(single, source))]
        return []

    def _extract_parameters(self, node: Node, source: bytes) -> list[ParameterInfo]:
        """Extract parameters from formal_parameters node."""
        params = []

        for child in node.named_children:
            if child.type in PARAMETER_TYPES:
                param = self._extract_typed_parameter(child, source)
            elif child.type in ("identifier", "rest_pattern", "assignment_pattern"):
                param = self._extract_plain_parameter(child, source)
            else:
                param = None
            if param is not None:
                params.append(param)

        return params

    def _extract_typed_parameter(self, node: Node, source: bytes) -> Optional[ParameterInfo]:
        pattern = node.child_by_field_name("pattern")
        if pattern is None or pattern.type == "this":
            return None

        name, is_rest = self._pattern_name(pattern, source)
        type_node = node.child_by_field_name("type")
        value = node.child_by_field_name("value")

        type_annotation = self._extract_type_annotation(type_node, source) if type_node else None
        if type_annotation is None and is_rest:
            type_annotation = "any[]"

        return ParameterInfo(
            name=name,
            type_annotation=type_annotation or self._infer_literal_type(value, source),
            default_value=self.get_node_text(value, source) if value else None,
            is_optional=node.type == "optional_parameter",
            is_rest=is_rest,
        )

    def _extract_plain_parameter(self, node: Node, source: bytes) -> Optional[ParameterInfo]:
        if node.type == "assignment_pattern":
            left = node.child_by_field_name("left")
            right = node.child_by_field_name("right")
            if left is None:
                return None
            name, _ = self._pattern_name(left, source)
            return ParameterInfo(
                name=name,
                type_annotation=self._infer_literal_type(right, source),
                default_value=self.get_node_text(right, source) if right else None,
            )
        name, is_rest = self._pattern_name(node, source)
        return ParameterInfo(
            name=name,
            type_annotation="any[]" if is_rest else None,
            is_rest=is_rest,
        )

    def _pattern_name(self, pattern: Node, source: bytes) -> tuple[str, bool]:
        """Return (name, is_rest) for a parameter binding pattern."""
        if pattern.type == "rest_pattern":
            inner = pattern.named_children[0] if pattern.named_children else pattern
            return self.get_node_text(inner, source), True
        # Destructured parameters keep their pattern text as the name
        return _WHITESPACE_RE.sub(" ", self.get_node_text(pattern, source)).strip(), False

    def _infer_literal_type(self, value: Optional[Node], source: bytes) -> Optional[str]:
        """Infer a type from a literal default value, the way tsc widens it."""
        if value is None:
            return None
        if value.type in ("string", "template_string"):
            return "string"
        if value.type == "number":
            return "number"
        if value.type in ("true", "false"):
            return "boolean"
        if value.type == "array":
            return "any[]"
        if value.type == "object":
            return "{}"
        if value.type == "new_expression":
            constructor = value.child_by_field_name("constructor")
            if constructor is not None and constructor.type == "identifier":
                return self.get_node_text(constructor, source)
        return None

    def _extract_return_type(self, node: Node, source: bytes) -> Optional[str]:
        return_node = node.child_by_field_name("return_type")
        if return_node is None:
            return None
        if return_node.type == "type_predicate_annotation":
            return "boolean"
        if return_node.type == "asserts_annotation":
            return "void"
        return self._extract_type_annotation(return_node, source)

    def _extract_type_annotation(self, node: Node, source: bytes) -> Optional[str]:
        """Extract type from type_annotation node."""
        # Skip the colon, get the actual type
        for child in node.children:
            if child.type != ":":
                return self.get_node_text(child, source).strip() or None
        return None


# Register the extractor
register_extractor(TypeScriptExtractor())
