from wiggle.drawing import append_point, clear_drawing, start_stroke
from wiggle.history import HistoryManager
from wiggle.types import Drawing, Point, SolidBrush, empty_drawing


def add_stroke(drawing, stroke_id):
    drawing = start_stroke(drawing, stroke_id, 'draw', SolidBrush(), Point(1, 1, 0))
    return append_point(drawing, stroke_id, Point(9, 9, 16))


def test_undo_walks_back_to_the_initial_drawing():
    initial = empty_drawing(32, 32)
    history = HistoryManager(initial)
    states = [initial]
    for i in range(4):
        states.append(add_stroke(states[-1], f"s{i}"))
        history.commit(states[-1])

    for expected in reversed(states[:-1]):
        assert history.undo()
        assert history.present == expected

    assert not history.can_undo()
    assert history.present is initial


def test_redo_restores_undone_states():
    history = HistoryManager(empty_drawing(32, 32))
    first = add_stroke(history.present, 'a')
    second = add_stroke(first, 'b')
    history.commit(first)
    history.commit(second)

    history.undo()
    history.undo()
    assert history.redo()
    assert history.present == first
    assert history.redo()
    assert history.present == second
    assert not history.can_redo()


def test_commit_after_undo_drops_redo_tail():
    history = HistoryManager(empty_drawing(32, 32))
    history.commit(add_stroke(history.present, 'a'))
    history.commit(add_stroke(history.present, 'b'))
    history.undo()
    assert history.can_redo()

    history.commit(add_stroke(history.present, 'c'))
    assert not history.can_redo()
    assert [s.id for s in history.present.strokes] == ['a', 'c']


def test_revision_and_listener_follow_successful_changes():
    calls = []
    history = HistoryManager(empty_drawing(32, 32), on_change=lambda: calls.append(history.revision))
    assert history.revision == 0

    assert not history.undo()
    assert not history.redo()
    assert history.revision == 0
    assert calls == []

    history.commit(add_stroke(history.present, 'a'))
    history.undo()
    history.redo()
    history.clear()
    assert history.revision == 4
    assert calls == [1, 2, 3, 4]


def test_clear_is_undoable():
    history = HistoryManager(empty_drawing(32, 32))
    drawn = add_stroke(history.present, 'a')
    history.commit(drawn)
    history.clear()
    assert history.present.strokes == ()
    assert (history.present.width, history.present.height) == (32, 32)
    history.undo()
    assert history.present == drawn
    assert history.undo_depth == 1 and history.redo_depth == 1


def test_committed_snapshots_are_not_mutated_by_later_edits():
    base = Drawing(20, 20)
    history = HistoryManager(base)
    drawn = add_stroke(base, 'a')
    history.commit(drawn)
    append_point(drawn, 'a', Point(15, 15, 30))
    clear_drawing(drawn)
    assert len(history.present.strokes[0].points) == 2
