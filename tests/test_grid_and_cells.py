from __future__ import annotations

import importlib.util
import unittest

from bs_jax.cells import KEYWORDS, NIL, Char, Nil, Number, Op, Operation, render_cell


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


class CellModelTests(unittest.TestCase):
    def test_char_must_be_one_codepoint(self) -> None:
        with self.assertRaises(ValueError):
            Char("ab")
        with self.assertRaises(ValueError):
            Char("")
        self.assertEqual(Char("A").codepoint, 65)

    def test_keywords_map_directions_to_run_operations(self) -> None:
        self.assertIs(KEYWORDS["up"], Operation.RUN_UP)
        self.assertIs(KEYWORDS["left"], Operation.RUN_LEFT)
        self.assertIs(KEYWORDS["down"], Operation.RUN_DOWN)
        self.assertIs(KEYWORDS["right"], Operation.RUN_RIGHT)
        self.assertEqual(set(KEYWORDS.values()), set(Operation))

    def test_render_cell_per_variant(self) -> None:
        self.assertEqual(render_cell(Char("x")), "x")
        self.assertEqual(render_cell(Number(-42)), "-42")
        self.assertEqual(render_cell(NIL), "")
        self.assertEqual(render_cell(Op(Operation.RUN_LEFT)), "ERR PRINT: Operation <run_left> cannot be printed\n")


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for grid tests")
class GridStoreTests(unittest.TestCase):
    def test_new_grid_is_all_nil(self) -> None:
        from bs_jax.grid import Grid

        grid = Grid(2, 3)
        self.assertEqual(grid.shape, (2, 3))
        self.assertTrue(all(isinstance(grid.get(x, y), Nil) for x in range(3) for y in range(2)))

    def test_set_then_get_keeps_variant_and_payload(self) -> None:
        from bs_jax.grid import Grid

        grid = Grid(2, 2)
        cells = {(0, 0): Op(Operation.ADD), (1, 0): Number(-7), (0, 1): Char("\n"), (1, 1): Char("é")}
        for (x, y), cell in cells.items():
            grid.set(x, y, cell)
        for (x, y), cell in cells.items():
            self.assertEqual(grid.get(x, y), cell)

    def test_storage_is_row_major(self) -> None:
        from bs_jax.grid import TAG_NUMBER, Grid

        grid = Grid(2, 3)
        grid.set(2, 1, Number(9))
        self.assertEqual(int(grid.tags[1, 2]), TAG_NUMBER)
        self.assertEqual(int(grid.payload[1, 2]), 9)

    def test_out_of_bounds_access_is_rejected(self) -> None:
        from bs_jax.errors import BSOutOfBoundsError
        from bs_jax.grid import Grid

        grid = Grid(2, 3)
        for x, y in ((3, 0), (0, 2), (-1, 0), (0, -1)):
            with self.subTest(x=x, y=y):
                with self.assertRaises(BSOutOfBoundsError):
                    grid.get(x, y)
                with self.assertRaises(BSOutOfBoundsError):
                    grid.set(x, y, NIL)

    def test_number_at_requires_number_cell(self) -> None:
        from bs_jax.errors import BSTypeError
        from bs_jax.grid import Grid

        grid = Grid(1, 2)
        grid.set(0, 0, Number(5))
        self.assertEqual(int(grid.number_at(0, 0)), 5)
        with self.assertRaises(BSTypeError):
            grid.number_at(1, 0)

    def test_number_outside_int32_is_rejected(self) -> None:
        from bs_jax.grid import INT32_MAX, Grid

        with self.assertRaises(ValueError):
            Grid(1, 1).set(0, 0, Number(INT32_MAX + 1))

    def test_region_is_row_major(self) -> None:
        from bs_jax.grid import Grid
        from bs_jax.selection import Vec2

        grid = Grid(3, 3)
        grid.set(1, 1, Char("a"))
        grid.set(2, 1, Char("b"))
        grid.set(1, 2, Char("c"))
        grid.set(2, 2, Char("d"))
        rows = grid.region(Vec2(1, 1), Vec2(2, 2))
        self.assertEqual(rows, [[Char("a"), Char("b")], [Char("c"), Char("d")]])

    def test_dimensions_must_be_positive(self) -> None:
        from bs_jax.grid import Grid

        with self.assertRaises(ValueError):
            Grid(0, 4)


if __name__ == "__main__":
    unittest.main()
