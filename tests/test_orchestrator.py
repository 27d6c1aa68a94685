import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from vhdldoc import (
    DocConfig,
    ScanTaskError,
    SourceReadError,
    UnterminatedDeclarationError,
    scan_files,
    scan_files_sequential,
)
from vhdldoc import orchestrator

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")


class OrchestratorTestCase(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.tmp)

    def write(self, name, text):
        path = os.path.join(self.tmp, name)
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(text)
        return path


class TestScanFiles(OrchestratorTestCase):
    def test_default_library(self):
        path = self.write("p.vhd", "package p is\nconstant c : integer := 1;\nend package;\n")
        report = scan_files([path])
        self.assertTrue(report.ok)
        self.assertEqual(report.libraries.library_names(), ["work"])
        self.assertEqual(report.libraries.get("work").package_names(), ["p"])

    def test_library_assignment(self):
        uart = os.path.join(FIXTURES, "uart_pkg.vhd")
        fifo = os.path.join(FIXTURES, "fifo.vhd")
        config = DocConfig(libraries={uart: "uart"})
        report = scan_files([uart, fifo], config)
        self.assertTrue(report.ok)
        self.assertEqual(report.libraries.get("uart").package_names(), ["uart_pkg"])
        self.assertEqual(report.libraries.get("work").entity_names(), ["fifo"])

    def test_failures_do_not_stop_siblings(self):
        good = self.write("good.vhd", "entity good is\nend entity;\n")
        broken = self.write("broken.vhd", "package broken is\ntype r is record\n")
        missing = os.path.join(self.tmp, "missing.vhd")

        report = scan_files([broken, good, missing])

        self.assertFalse(report.ok)
        self.assertEqual(set(report.failures), {broken, missing})
        self.assertIsInstance(report.failures[broken], UnterminatedDeclarationError)
        self.assertIsInstance(report.failures[missing], SourceReadError)
        self.assertEqual(report.libraries.get("work").entity_names(), ["good"])
        self.assertEqual(report.libraries.get("work").package_names(), [])

    def test_unexpected_error_only_fails_its_file(self):
        good = self.write("good.vhd", "entity good is\nend entity;\n")
        odd = self.write("odd.vhd", "entity odd is\nend entity;\n")
        real_scan_file = orchestrator.scan_file

        def scan(path, library):
            if path == odd:
                raise RuntimeError("boom")
            return real_scan_file(path, library)

        for run in (scan_files, scan_files_sequential):
            with self.subTest(run=run.__name__), patch("vhdldoc.orchestrator.scan_file", side_effect=scan):
                report = run([odd, good])
                self.assertEqual(list(report.failures), [odd])
                self.assertIsInstance(report.failures[odd], ScanTaskError)
                self.assertIn("RuntimeError: boom", str(report.failures[odd]))
                self.assertEqual(report.libraries.get("work").entity_names(), ["good"])

    def test_failures_are_logged(self):
        broken = self.write("broken.vhd", "entity e is\n")
        with self.assertLogs("vhdldoc.orchestrator", level="ERROR") as logs:
            report = scan_files([broken])
        self.assertFalse(report.ok)
        self.assertIn("broken.vhd", logs.output[0])

    def test_empty_input(self):
        report = scan_files([])
        self.assertTrue(report.ok)
        self.assertEqual(len(report.libraries), 0)

    def test_concurrent_matches_sequential(self):
        paths = [os.path.join(FIXTURES, "uart_pkg.vhd"), os.path.join(FIXTURES, "fifo.vhd")]
        for i in range(12):
            paths.append(self.write(
                f"gen{i}.vhd",
                f"-- generated package {i}\n"
                f"package gen{i}_pkg is\n"
                f"  constant N{i}, M{i} : integer := {i};\n"
                f"  procedure run(x : integer);\n"
                f"  procedure run(x : integer; y : integer);\n"
                f"end package gen{i}_pkg;\n"
                f"entity gen{i} is\n"
                f"end entity;\n",
            ))
        config = DocConfig(libraries={p: f"lib{i % 3}" for i, p in enumerate(paths)})

        sequential = scan_files_sequential(paths, config).libraries.identities()
        for workers in (None, 1, 4):
            with self.subTest(workers=workers):
                config.workers = workers
                report = scan_files(paths, config)
                self.assertTrue(report.ok)
                self.assertEqual(report.libraries.identities(), sequential)

    def test_duplicate_unit_across_files(self):
        a = self.write("a.vhd", "entity top is\nend entity;\n")
        b = self.write("b.vhd", "entity top is\nend entity;\n")
        report = scan_files([a, b])
        self.assertFalse(report.ok)
        self.assertEqual(list(report.failures), [b])
        self.assertEqual(report.libraries.get("work").entity_names(), ["top"])


if __name__ == "__main__":
    unittest.main()
