import copy

from django.test import SimpleTestCase

from events.availability_matrix import empty_matrix
from events.sanitizers import ValidationError
from events.selection import SelectionEngine, paint


def changed_cells(before, after):
    return {
        (day, hour)
        for day in range(7)
        for hour in range(24)
        if before[day][hour] != after[day][hour]
    }


class SelectionEngineTests(SimpleTestCase):
    def setUp(self):
        self.matrix = empty_matrix()
        self.engine = SelectionEngine(self.matrix)

    def test_click_on_free_cell_marks_only_that_cell(self):
        before = copy.deepcopy(self.matrix)

        mode = self.engine.begin(0, 18)
        self.engine.end()

        self.assertEqual(mode, SelectionEngine.MODE_ADD)
        self.assertEqual(changed_cells(before, self.matrix), {(0, 18)})
        self.assertTrue(self.matrix[0][18])

    def test_click_on_marked_cell_clears_only_that_cell(self):
        self.matrix[3][9] = True
        self.matrix[3][10] = True
        before = copy.deepcopy(self.matrix)

        mode = self.engine.begin(3, 9)
        self.engine.end()

        self.assertEqual(mode, SelectionEngine.MODE_REMOVE)
        self.assertEqual(changed_cells(before, self.matrix), {(3, 9)})
        self.assertTrue(self.matrix[3][10])

    def test_drag_paints_every_touched_cell_with_the_initial_mode(self):
        # Mixed cells under the drag: the first one decides (free -> ADD)
        self.matrix[0][19] = True

        self.engine.begin(0, 18)
        for hour in (19, 20, 21):
            self.engine.continue_drag(0, hour)
        touched = self.engine.end()

        self.assertEqual(touched, {(0, 18), (0, 19), (0, 20), (0, 21)})
        for hour in (18, 19, 20, 21):
            self.assertTrue(self.matrix[0][hour])

    def test_remove_drag_never_flips_back_to_add(self):
        for hour in range(8, 12):
            self.matrix[2][hour] = True
        before = copy.deepcopy(self.matrix)

        self.engine.begin(2, 8)
        # 2/12 is free, but the drag is a REMOVE drag: it stays free
        for hour in (9, 10, 11, 12):
            self.engine.continue_drag(2, hour)
        self.engine.end()

        for hour in range(8, 13):
            self.assertFalse(self.matrix[2][hour])
        self.assertEqual(changed_cells(before, self.matrix), {(2, 8), (2, 9), (2, 10), (2, 11)})

    def test_only_touched_cells_change(self):
        self.matrix[6][0] = True
        before = copy.deepcopy(self.matrix)

        self.engine.begin(1, 1)
        self.engine.continue_drag(2, 2)
        self.engine.continue_drag(3, 3)
        touched = self.engine.end()

        changed = changed_cells(before, self.matrix)
        self.assertTrue(changed <= touched)
        self.assertTrue(all(self.matrix[d][h] for d, h in touched))
        self.assertTrue(self.matrix[6][0])

    def test_continue_without_begin_is_a_noop(self):
        self.assertFalse(self.engine.continue_drag(4, 4))
        self.assertFalse(self.matrix[4][4])

    def test_continue_after_end_is_a_noop(self):
        self.engine.begin(0, 0)
        self.engine.end()

        self.assertFalse(self.engine.continue_drag(0, 1))
        self.assertFalse(self.matrix[0][1])

    def test_end_is_idempotent(self):
        self.engine.begin(5, 5)
        first = self.engine.end()
        second = self.engine.end()

        self.assertFalse(self.engine.is_dragging)
        self.assertEqual(first, second)
        self.assertTrue(self.matrix[5][5])

    def test_begin_while_dragging_starts_a_new_drag(self):
        self.matrix[1][0] = True

        self.engine.begin(0, 0)          # ADD
        self.engine.begin(1, 0)          # REMOVE, previous drag closed
        self.engine.continue_drag(0, 0)  # painted with REMOVE now
        self.engine.end()

        self.assertFalse(self.matrix[0][0])
        self.assertFalse(self.matrix[1][0])

    def test_matrix_is_edited_in_place(self):
        self.engine.begin(0, 0)
        self.engine.end()

        self.assertIs(self.engine.matrix, self.matrix)
        self.assertTrue(self.matrix[0][0])

    def test_out_of_range_cells_are_rejected(self):
        with self.assertRaises(ValidationError):
            self.engine.begin(7, 0)

        self.engine.begin(0, 0)
        with self.assertRaises(ValidationError):
            self.engine.continue_drag(0, 24)

    def test_dispatch_maps_pointer_events(self):
        self.engine.dispatch(SelectionEngine.EVENT_DOWN, 0, 10)
        self.engine.dispatch(SelectionEngine.EVENT_ENTER, 0, 11)
        self.engine.dispatch(SelectionEngine.EVENT_LEAVE)
        # Pointer re-enters the grid without a new mousedown: nothing is painted
        self.engine.dispatch(SelectionEngine.EVENT_ENTER, 0, 12)
        self.engine.dispatch(SelectionEngine.EVENT_UP)

        self.assertTrue(self.matrix[0][10])
        self.assertTrue(self.matrix[0][11])
        self.assertFalse(self.matrix[0][12])

    def test_dispatch_rejects_unknown_event(self):
        with self.assertRaises(ValidationError):
            self.engine.dispatch("wheel", 0, 0)

    def test_rejects_malformed_matrix(self):
        with self.assertRaises(ValidationError):
            SelectionEngine([[False] * 24] * 6)


class PaintTests(SimpleTestCase):
    def test_paint_runs_one_stroke(self):
        matrix = empty_matrix()

        touched = paint(matrix, [(4, hour) for hour in range(19, 23)])

        self.assertEqual(touched, {(4, 19), (4, 20), (4, 21), (4, 22)})
        self.assertEqual(sum(sum(row) for row in matrix), 4)

    def test_paint_same_stroke_twice_clears_it(self):
        matrix = empty_matrix()
        stroke = [(0, 18), (0, 19)]

        paint(matrix, stroke)
        paint(matrix, stroke)

        self.assertEqual(matrix, empty_matrix())

    def test_empty_stroke_touches_nothing(self):
        matrix = empty_matrix()
        self.assertEqual(paint(matrix, []), frozenset())
        self.assertEqual(matrix, empty_matrix())
