"""
Tests for AST Module

Tests tree-sitter parsing, JSDoc reading and the TypeScript extractor.
"""

import pytest

from mcpgen.ast.extractors import TypeScriptExtractor, get_extractor
from mcpgen.ast.jsdoc import is_doc_comment, parse_jsdoc
from mcpgen.ast.models import SymbolKind
from mcpgen.ast.parser import ASTParser
from mcpgen.exceptions import SourceParseError


# =============================================================================
# Parser Tests
# =============================================================================


class TestLanguageDetection:
    """Test language detection from file extensions."""

    def test_typescript_extensions(self):
        parser = ASTParser()
        assert parser.detect_language("app.ts") == "typescript"
        assert parser.detect_language("component.tsx") == "tsx"
        assert parser.detect_language("index.js") == "typescript"  # JS uses TS parser
        assert parser.detect_language("App.jsx") == "tsx"
        assert parser.detect_language("/path/to/module.mjs") == "typescript"

    def test_unsupported_extensions(self):
        parser = ASTParser()
        assert parser.detect_language("main.py") is None
        assert parser.detect_language("schema.sql") is None
        assert not parser.is_supported("readme.md")

    def test_parse_file_unsupported(self, temp_dir):
        path = temp_dir / "notes.md"
        path.write_text("# notes")
        with pytest.raises(SourceParseError):
            ASTParser().parse_file(path)

    def test_parse_file_missing(self, temp_dir):
        with pytest.raises(SourceParseError):
            ASTParser().parse_file(temp_dir / "missing.ts")


class TestTypeScriptParsing:
    """Test tree-sitter TypeScript parsing."""

    def test_parse_function(self):
        tree = ASTParser().parse(b"export function add(a: number, b: number): number { return a + b; }", "typescript")
        assert tree.root_node.type == "program"
        assert tree.root_node.children[0].type == "export_statement"

    def test_parse_tsx(self):
        tree = ASTParser().parse(b"export const View = () => <div>hi</div>;", "tsx")
        assert not tree.root_node.has_error

    def test_parse_syntax_error_graceful(self):
        """Parser should handle syntax errors gracefully."""
        tree = ASTParser().parse(b"export function broken(a: string {", "typescript")
        # Tree-sitter still returns a tree, just with ERROR nodes
        assert tree is not None
        assert tree.root_node.has_error

    def test_unsupported_language(self):
        with pytest.raises(SourceParseError):
            ASTParser().parse(b"x = 1", "python")


# =============================================================================
# JSDoc Tests
# =============================================================================


class TestJSDoc:
    """Test documentation comment parsing."""

    def test_description_and_examples(self):
        doc = parse_jsdoc('''/**
 * Fetch a user.
 * Second line.
 *
 * @param id - user id
 * @example getUser("1")
 * @example
 *   getUser("2")
 */''')
        assert doc.description == "Fetch a user.\nSecond line."
        assert doc.examples == ['getUser("1")', 'getUser("2")']
        assert doc.tags["param"] == ["id - user id"]

    def test_single_line(self):
        doc = parse_jsdoc("/** Quick summary */")
        assert doc.description == "Quick summary"
        assert doc.examples == []

    def test_decorators_stay_in_example(self):
        doc = parse_jsdoc('''/**
 * Register a service.
 * @example
 * @Injectable()
 * class Users {}
 * @returns nothing
 */''')
        assert doc.examples == ["@Injectable()\nclass Users {}"]
        assert doc.tags["returns"] == ["nothing"]
        assert "Injectable()" not in doc.tags

    def test_empty_example_skipped(self):
        doc = parse_jsdoc("/**\n * Text\n * @example\n */")
        assert doc.examples == []

    def test_plain_comments_ignored(self):
        assert parse_jsdoc("// line comment") is None
        assert parse_jsdoc("/* block comment */") is None
        assert not is_doc_comment("/**/")


# =============================================================================
# Extractor Tests
# =============================================================================


class TestTypeScriptExtractor:
    """Test symbol extraction from TypeScript sources."""

    def setup_method(self):
        self.extractor = TypeScriptExtractor()
        self.parser = ASTParser()

    def _extract(self, source: str, language: str = "typescript"):
        data = source.encode("utf-8")
        tree = self.parser.parse(data, language)
        return self.extractor.extract_all(tree, data, "src/sample.ts")

    def test_registry(self):
        assert isinstance(get_extractor("typescript"), TypeScriptExtractor)
        assert isinstance(get_extractor("tsx"), TypeScriptExtractor)
        assert get_extractor("python") is None

    def test_declarations(self):
        symbols = self._extract('''
export function exported(a: string): number { return 1; }
function local() {}
export default function defaultExport() {}
''')
        names = {s.name: s for s in symbols.declarations}
        assert set(names) == {"exported", "local", "defaultExport"}
        assert names["exported"].is_exported
        assert not names["local"].is_exported
        assert names["defaultExport"].is_exported
        assert names["exported"].kind == SymbolKind.DECLARATION
        assert names["exported"].return_type == "number"

    def test_export_clause_marks_exported(self):
        symbols = self._extract('''
function shared() {}
const other = () => 1;
export { shared, other as renamed };
''')
        assert symbols.declarations[0].is_exported
        assert symbols.bindings[0].is_exported

    def test_bindings(self):
        symbols = self._extract('''
export const arrow = async (id: string) => id;
export const expr = function (x: number) { return x; };
export const notAFunction = 42;
let single = x => x;
''')
        names = [s.name for s in symbols.bindings]
        assert names == ["arrow", "expr", "single"]
        assert symbols.bindings[0].is_async
        assert symbols.bindings[0].kind == SymbolKind.BINDING
        assert symbols.bindings[2].parameters[0].name == "x"
        assert not symbols.bindings[2].is_exported

    def test_methods(self):
        symbols = self._extract('''
export class UserService {
    getUser(id: string): User { return null; }
    private secret() {}
    get name() { return ""; }
    static async create(data: UserInput) {}
}
class Hidden {
    visible() {}
}
''')
        methods = {s.name: s for s in symbols.methods}
        assert set(methods) == {"getUser", "create", "visible"}
        assert methods["getUser"].is_exported
        assert methods["getUser"].class_name == "UserService"
        assert methods["getUser"].qualified_name == "UserService.getUser"
        assert methods["create"].is_async
        assert not methods["visible"].is_exported

    def test_candidate_order(self):
        symbols = self._extract('''
export class A { m() {} }
export const b = () => 1;
export function c() {}
''')
        assert [s.name for s in symbols.candidates()] == ["c", "b", "m"]

    def test_parameters(self):
        symbols = self._extract('''
export function search(query: string, limit?: number, page = 1, ...tags: string[]) {}
export function untyped(a, { b, c }, ...rest) {}
''')
        params = symbols.declarations[0].parameters
        assert [p.name for p in params] == ["query", "limit", "page", "tags"]
        assert params[0].type_annotation == "string"
        assert params[1].is_optional
        assert params[2].type_annotation == "number"
        assert params[2].default_value == "1"
        assert params[3].is_rest
        assert params[3].type_annotation == "string[]"

        untyped = symbols.declarations[1].parameters
        assert untyped[0].type_annotation is None
        assert untyped[1].name == "{ b, c }"
        assert untyped[2].type_annotation == "any[]"

    def test_this_parameter_skipped(self):
        symbols = self._extract("export function bound(this: Window, x: number) {}")
        assert [p.name for p in symbols.declarations[0].parameters] == ["x"]

    def test_type_predicate_return(self):
        symbols = self._extract("export function isUser(x: unknown): x is User { return true; }")
        assert symbols.declarations[0].return_type == "boolean"

    def test_doc_comment_attached(self):
        symbols = self._extract('''
/** Exported with docs. */
export function documented() {}

/** Binding docs. */
export const bound = () => 1;

export class Service {
    /** Method docs. */
    run() {}
}
''')
        assert symbols.declarations[0].doc.description == "Exported with docs."
        assert symbols.bindings[0].doc.description == "Binding docs."
        assert symbols.methods[0].doc.description == "Method docs."

    def test_plain_comment_not_doc(self):
        symbols = self._extract('''
// not a doc comment
export function plain() {}
''')
        assert symbols.declarations[0].doc is None

    def test_recovers_from_syntax_errors(self):
        symbols = self._extract('''
export function good(a: string) {}
export function bad( {
''')
        assert symbols.has_errors
        assert "good" in [s.name for s in symbols.declarations]
