from __future__ import annotations

import contextlib
import importlib.util
import io
import tempfile
import unittest
from pathlib import Path


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None
PROGRAMS = Path(__file__).resolve().parents[1] / "programs"


class CliUsageTests(unittest.TestCase):
    def _main(self, argv: list[str]) -> tuple[int, str, str]:
        from bs_jax.cli import main

        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_too_few_arguments_prints_usage_and_exits_zero(self) -> None:
        for argv in ([], ["3"], ["3", "4"]):
            with self.subTest(argv=argv):
                code, out, _ = self._main(argv)
                self.assertEqual(code, 0)
                self.assertIn("usage: bs", out)

    def test_help_flag_exits_zero(self) -> None:
        from bs_jax.cli import main

        out = io.StringIO()
        with contextlib.redirect_stdout(out), self.assertRaises(SystemExit) as ctx:
            main(["-h"])
        self.assertEqual(ctx.exception.code, 0)
        self.assertIn("height", out.getvalue())

    def test_bad_dimension_is_reported(self) -> None:
        for argv in (["x", "4", "prog.bs"], ["3", "0", "prog.bs"]):
            with self.subTest(argv=argv):
                code, _, err = self._main(argv)
                self.assertEqual(code, 1)
                self.assertIn("ERROR PARSE: couldn't read number from string", err)


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for CLI execution tests")
class CliExecutionTests(unittest.TestCase):
    def _main(self, argv: list[str]) -> tuple[int, str, str]:
        from bs_jax.cli import main

        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_runs_program_file(self) -> None:
        code, out, err = self._main(["1", "11", str(PROGRAMS / "hello.bs")])
        self.assertEqual(code, 0, err)
        self.assertEqual(out, "Hi bs\n")

    def test_missing_file_is_io_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = str(Path(tmp) / "missing.bs")
            code, out, err = self._main(["1", "1", path])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn(f'ERROR IO: Could not open file "{path}"', err)

    def test_malformed_record_is_parse_error_before_running(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bad.bs"
            path.write_text("0 0 right\n1 0 'H\n2 0 frobnicate\n", encoding="utf-8")
            code, out, err = self._main(["1", "3", str(path)])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn('ERROR PARSE: Couldn\'t parse operation "frobnicate"', err)

    def test_runtime_fault_exits_nonzero(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "fault.bs"
            path.write_text("0 0 print\n", encoding="utf-8")
            code, _, err = self._main(["1", "1", str(path)])
        self.assertEqual(code, 1)
        self.assertIn("ERROR RUNTIME: selection stack is empty", err)

    def test_max_steps_flag_bounds_execution(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "spin.bs"
            path.write_text("0 0 select\n", encoding="utf-8")
            code, _, err = self._main(["--max-steps", "20", "1", "1", str(path)])
        self.assertEqual(code, 1)
        self.assertIn("no halt after 20 step(s)", err)


if __name__ == "__main__":
    unittest.main()
