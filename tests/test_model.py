import os
import tempfile
import unittest

from vhdldoc.errors import DuplicateSymbolError, SourceReadError
from vhdldoc.model import (
    Constant,
    Entity,
    Function,
    Library,
    Package,
    Procedure,
    Subtype,
    SymbolID,
    SymbolKind,
    Type,
)


def make(cls, name, line, scope="work.p", signature="", **kwargs):
    return cls(
        filepath="p.vhd",
        name=name,
        line=line,
        scope=scope,
        doc_start=0,
        doc_end=0,
        code_start=0,
        code_end=0,
        signature=signature,
        **kwargs,
    )


class TestSymbol(unittest.TestCase):
    def test_identity_and_names(self):
        c = make(Constant, "width", 7)
        self.assertEqual(c.key, SymbolID("width", 7))
        self.assertEqual(c.qualified_name, "work.p.width")
        self.assertEqual(c.kind, SymbolKind.CONSTANT)
        self.assertEqual(str(c), "constant work.p.width")

    def test_summary_falls_back_to_kind_and_name(self):
        self.assertEqual(make(Subtype, "s", 1).one_line_summary(), "subtype s")
        self.assertEqual(make(Subtype, "s", 1, signature="subtype s is bit;").one_line_summary(),
                         "subtype s is bit;")
        f = make(Function, "f", 1, signature="function f(", summary="function f(x : bit) return bit;")
        self.assertEqual(f.one_line_summary(), "function f(x : bit) return bit;")

    def test_doc_and_code_read_from_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "e.vhd")
            data = b"-- doc\nentity e is\nend;\n"
            with open(path, "wb") as fh:
                fh.write(data)
            e = Entity(filepath=path, name="e", line=2, scope="work",
                       doc_start=0, doc_end=7, code_start=7, code_end=len(data))
            self.assertEqual(e.doc(), "-- doc\n")
            self.assertEqual(e.code(), "entity e is\nend;\n")
            self.assertEqual(e.doc_code(data), ("-- doc\n", "entity e is\nend;\n"))
            self.assertTrue(e.has_doc)

    def test_unreadable_file(self):
        e = make(Entity, "e", 1, scope="work")
        e.filepath = "/nonexistent/e.vhd"
        with self.assertRaises(SourceReadError):
            e.doc()


class TestPackageContainer(unittest.TestCase):
    def setUp(self):
        self.pkg = make(Package, "p", 1, scope="work")

    def test_routes_by_kind(self):
        self.pkg.add_symbol(make(Constant, "c", 2))
        self.pkg.add_symbol(make(Function, "f", 3))
        self.pkg.add_symbol(make(Procedure, "pr", 4))
        self.pkg.add_symbol(make(Type, "t", 5, form="enum"))
        self.pkg.add_symbol(make(Subtype, "s", 6))
        self.assertEqual(
            [len(m) for m in (self.pkg.constants, self.pkg.functions, self.pkg.procedures,
                              self.pkg.types, self.pkg.subtypes)],
            [1, 1, 1, 1, 1],
        )
        self.assertEqual(self.pkg.inner_names(), ["c", "f", "pr", "s", "t"])

    def test_same_key_is_rejected(self):
        self.pkg.add_symbol(make(Constant, "c", 2))
        with self.assertRaises(DuplicateSymbolError):
            self.pkg.add_symbol(make(Constant, "c", 2))
        self.assertEqual(len(self.pkg.constants), 1)

    def test_library_units_cannot_be_members(self):
        with self.assertRaises(TypeError):
            self.pkg.add_symbol(make(Entity, "e", 2))

    def test_overloads_listed_once(self):
        for line in (5, 2, 9):
            self.pkg.add_symbol(make(Function, "f", line))
        self.pkg.add_symbol(make(Function, "a", 11))
        self.assertEqual(self.pkg.function_names(), ["a", "f"])
        self.assertEqual([s.line for s in self.pkg.get_functions("f")], [2, 5, 9])
        self.assertEqual(self.pkg.get_procedures("f"), [])

    def test_constants_listed_per_declaration_site(self):
        self.pkg.add_symbol(make(Constant, "c", 2))
        self.pkg.add_symbol(make(Constant, "c", 3))
        self.pkg.add_symbol(make(Constant, "B", 4))
        self.assertEqual(self.pkg.constant_names(), ["B", "c", "c"])

    def test_get_symbol_across_kinds(self):
        self.pkg.add_symbol(make(Function, "word", 4))
        self.pkg.add_symbol(make(Type, "word", 2, form="array"))
        self.pkg.add_symbol(make(Constant, "other", 3))
        found = self.pkg.get_symbol("word")
        self.assertEqual([type(s) for s in found], [Type, Function])
        self.assertEqual(self.pkg.get_symbol("missing"), [])

    def test_code_summary_order_and_separators(self):
        self.pkg.add_symbol(make(Type, "t", 6, signature="type t is (a, b);", form="enum"))
        self.pkg.add_symbol(make(Function, "f", 5, signature="function f return integer;"))
        self.pkg.add_symbol(make(Function, "f", 3, signature="function f(x : integer) return integer;"))
        self.pkg.add_symbol(make(Constant, "a", 2, signature="constant A : integer := 1;"))
        self.assertEqual(
            self.pkg.code_summary(),
            "constant A : integer := 1;\n"
            "\n"
            "function f(x : integer) return integer;\n"
            "function f return integer;\n"
            "\n"
            "type t is (a, b);\n",
        )
        self.assertEqual(self.pkg.code(), self.pkg.code_summary())

    def test_code_summary_single_block_has_no_separator(self):
        self.pkg.add_symbol(make(Subtype, "s", 2, signature="subtype s is bit;"))
        self.assertEqual(self.pkg.code_summary(), "subtype s is bit;\n")

    def test_empty_package_summary(self):
        self.assertEqual(self.pkg.code_summary(), "")
        self.assertEqual(len(self.pkg), 0)


class TestLibrary(unittest.TestCase):
    def test_add_and_lookup(self):
        lib = Library("work")
        lib.add_symbol(make(Entity, "top", 3, scope="work"))
        lib.add_symbol(make(Package, "pkg", 1, scope="work"))
        self.assertEqual(lib.entity_names(), ["top"])
        self.assertEqual(lib.package_names(), ["pkg"])
        self.assertEqual([s.name for s in lib.symbols()], ["pkg", "top"])
        self.assertEqual(len(lib.get_symbol("top")), 1)

    def test_members_cannot_be_units(self):
        with self.assertRaises(TypeError):
            Library("work").add_symbol(make(Constant, "c", 1, scope="work"))

    def test_duplicate_unit(self):
        lib = Library("work")
        lib.add_symbol(make(Entity, "top", 3, scope="work"))
        with self.assertRaises(DuplicateSymbolError) as ctx:
            lib.add_symbol(make(Entity, "top", 3, scope="work"))
        self.assertEqual(ctx.exception.scope, "work")

    def test_add_symbols_is_all_or_nothing(self):
        lib = Library("work")
        lib.add_symbol(make(Entity, "top", 3, scope="work"))
        batch = [make(Package, "pkg", 1, scope="work"), make(Entity, "top", 3, scope="work")]
        with self.assertRaises(DuplicateSymbolError):
            lib.add_symbols(batch)
        self.assertEqual(lib.package_names(), [])
        self.assertEqual(lib.entity_names(), ["top"])


if __name__ == "__main__":
    unittest.main()
