import random
import unittest

from game import (
    Board,
    Cell,
    Player,
    GameState,
    GameStatus,
    Scores,
    InvariantViolation,
    BOARD_SIZE,
    choose_first_move,
    is_threatened,
    evaluate_move,
    choose_move,
    ai_pick_move,
    apply_move,
)

P1, P2 = Player.P1, Player.P2


def board_with(cells):
    board = Board.empty()
    for (r, c), tok in cells.items():
        owner = P1 if tok[0] == 'a' else P2
        board = board.with_cell(r, c, Cell(owner, int(tok[1:])))
    return board


def fill_except(free, token='b1'):
    return board_with({rc: token for rc in Board.empty().coords() if rc not in free})


class TestFirstMove(unittest.TestCase):
    def test_given_empty_board_when_choosing_first_move_then_always_interior(self):
        board = Board.empty()
        for seed in range(25):
            r, c = choose_first_move(board, random.Random(seed))
            self.assertFalse(board.is_edge(r, c), (r, c))

    def test_given_same_seed_when_choosing_first_move_then_reproducible(self):
        board = Board.empty()
        self.assertEqual(
            choose_first_move(board, random.Random(42)),
            choose_first_move(board, random.Random(42)),
        )

    def test_given_interior_full_when_choosing_first_move_then_falls_back_to_edge_empties(self):
        board = fill_except({(0, 0), (5, 3)})
        for seed in range(10):
            self.assertIn(choose_first_move(board, random.Random(seed)), {(0, 0), (5, 3)})

    def test_given_full_board_when_choosing_first_move_then_invariant_violation(self):
        with self.assertRaises(InvariantViolation):
            choose_first_move(fill_except(set()), random.Random(0))


class TestEvaluateMove(unittest.TestCase):
    def test_given_quiet_centre_move_when_evaluating_then_only_positional_bonus(self):
        score = evaluate_move(board_with({(2, 2): 'a1'}), 2, 2, P1)
        self.assertEqual(score.captures, 0)
        self.assertEqual(score.explosions, 0)
        self.assertFalse(score.threatened)
        self.assertEqual(score.position, 5.0)
        self.assertEqual(score.total, 5.0)

    def test_given_corner_move_when_evaluating_then_smallest_positional_bonus(self):
        score = evaluate_move(board_with({(0, 0): 'a1'}), 0, 0, P1)
        self.assertEqual(score.position, 1.0)

    def test_given_primed_opponent_neighbor_when_evaluating_then_penalised_once(self):
        board = board_with({(2, 2): 'a1', (2, 3): 'b3', (1, 2): 'b3'})
        self.assertTrue(is_threatened(board, 2, 2, P1))
        score = evaluate_move(board, 2, 2, P1)
        self.assertTrue(score.threatened)
        self.assertEqual(score.total, 5.0 - 15)

    def test_given_primed_own_cell_next_to_enemy_when_evaluating_then_captures_and_chain_scored(self):
        board = board_with({(3, 3): 'a3', (3, 4): 'b1', (5, 5): 'b1'})
        score = evaluate_move(board, 3, 3, P1)
        self.assertEqual(score.captures, 1)
        self.assertEqual(score.explosions, 1)
        self.assertFalse(score.threatened)
        self.assertEqual(score.total, 10 + 5 + 5.0)

    def test_given_primed_row_when_evaluating_then_every_cascade_explosion_counted(self):
        cells = {(2, c): 'a3' for c in range(BOARD_SIZE)}
        board = board_with(cells)
        score = evaluate_move(board, 2, 0, P1)
        self.assertEqual(score.explosions, 6)
        self.assertEqual(score.captures, 0)
        self.assertEqual(score.total, 30 + 3.0)
        # the simulation never touches the board it was given
        self.assertEqual(board, board_with(cells))

    def test_given_cascade_through_enemy_cells_when_evaluating_then_each_capture_counted(self):
        board = board_with({(2, 0): 'a3', (2, 1): 'b3', (1, 1): 'b1', (5, 5): 'b1'})
        score = evaluate_move(board, 2, 0, P1)
        # round 1 captures (2,1); round 2 it explodes and captures (1,1)
        self.assertEqual(score.captures, 2)
        self.assertEqual(score.explosions, 2)
        self.assertTrue(score.threatened)


class TestChooseMove(unittest.TestCase):
    def test_given_capture_available_when_choosing_then_capturing_cell_selected(self):
        board = board_with({(0, 0): 'a1', (3, 3): 'a3', (3, 4): 'b1', (5, 5): 'b1'})
        self.assertEqual(choose_move(board, P1, False), (3, 3))

    def test_given_equal_scores_when_choosing_then_first_in_row_major_order(self):
        board = board_with({(3, 2): 'a1', (2, 3): 'a1', (5, 5): 'b1'})
        self.assertEqual(choose_move(board, P1, False), (2, 3))

    def test_given_threatened_centre_when_choosing_then_safer_cell_preferred(self):
        board = board_with({(2, 2): 'a1', (2, 3): 'b3', (0, 5): 'a1'})
        # (2,2): 5 - 15 = -10 ; (0,5): 6 - 5 = 1
        self.assertEqual(choose_move(board, P1, False), (0, 5))

    def test_given_no_owned_cells_when_choosing_then_invariant_violation(self):
        with self.assertRaises(InvariantViolation):
            choose_move(board_with({(1, 1): 'b1'}), P1, False)

    def test_given_first_move_flag_when_choosing_then_empty_interior_cell(self):
        board = board_with({(2, 2): 'a3'})
        r, c = choose_move(board, P2, True, random.Random(3))
        self.assertTrue(board.cell_at(r, c).is_empty)
        self.assertFalse(board.is_edge(r, c))


class TestAiPickMove(unittest.TestCase):
    def test_given_p2_first_move_state_when_picking_then_legal_placement(self):
        s = apply_move(GameState.initial(), P1, 2, 2).state
        move = ai_pick_move(s, random.Random(5))
        self.assertIsNotNone(move)
        result = apply_move(s, P2, *move)
        self.assertEqual(result.state.board.cell_at(*move), Cell(P2, 3))

    def test_given_playing_state_when_picking_then_own_cell_of_current_player(self):
        board = board_with({(2, 2): 'a1', (4, 4): 'b2', (4, 1): 'b1'})
        s = GameState(board, P2, GameStatus.playing(), Scores.of(board), 3)
        self.assertIn(ai_pick_move(s), {(4, 4), (4, 1)})

    def test_given_game_over_when_picking_then_none(self):
        board = board_with({(2, 2): 'a1'})
        s = GameState(board, P1, GameStatus.game_over(P1), Scores.of(board), 4)
        self.assertIsNone(ai_pick_move(s))


if __name__ == '__main__':
    unittest.main(verbosity=2)
