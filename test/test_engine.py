from __future__ import annotations

import pytest

from storygraph import messages
from storygraph.engine.core import StoryEngine
from storygraph.engine.io import BufferSink, ScriptedSource
from storygraph.engine.state import EndReason, TraversalStatus
from storygraph.graph.tree import StoryTree


OPENING = [
    "===== Begin Adventure =====",
    "",
    "You wake in a dark forest.",
    "Choose your next action:",
    "1. Walk toward the light.",
    "2. Follow the river.",
]


def play(tree: StoryTree, *lines: str):
    sink = BufferSink()
    source = ScriptedSource(lines)
    state = tree.play_game(source, sink)
    return state, sink, source


# =============================================================================
# Start
# =============================================================================


class TestStart:

    def test_no_root(self) -> None:
        state, sink, source = play(StoryTree())
        assert sink.lines == ["No root node. Cannot play game."]
        assert state.status is TraversalStatus.TERMINATED
        assert state.end_reason is EndReason.NO_ROOT
        assert source.prompts == []

    def test_no_root_even_with_nodes(self) -> None:
        tree = StoryTree()
        tree.add_node("1", "2", "x")
        state, sink, _ = play(tree)
        assert state.end_reason is EndReason.NO_ROOT

    def test_opening_lines(self, story: StoryTree) -> None:
        engine = StoryEngine(story, BufferSink())
        state = engine.start()
        assert engine.sink.lines == OPENING
        assert state.status is TraversalStatus.AT_NODE
        assert state.current is story.root
        assert state.path == ["1"]

    def test_root_leaf_ends_immediately(self) -> None:
        tree = StoryTree()
        tree.create_root("only", "  The end.  ")
        state, sink, source = play(tree)
        assert sink.lines == [
            "===== Begin Adventure =====",
            "",
            "The end.",
            "There are no further paths.",
            "Your journey ends here.",
            "",
            "===== Adventure Complete =====",
        ]
        assert state.end_reason is EndReason.LEAF_REACHED
        assert source.prompts == []

    def test_cannot_start_twice(self, story: StoryTree) -> None:
        engine = StoryEngine(story, BufferSink())
        engine.start()
        with pytest.raises(RuntimeError):
            engine.start()


# =============================================================================
# Transitions
# =============================================================================


class TestPlay:

    def test_happy_path(self, story: StoryTree) -> None:
        state, sink, source = play(story, "1")
        assert sink.lines == OPENING + [
            "",
            "Walk toward the light.",
            "There are no further paths.",
            "Your journey ends here.",
            "",
            "===== Adventure Complete =====",
        ]
        assert state.current is story.find_node("2")
        assert state.end_reason is EndReason.LEAF_REACHED
        assert state.steps == 1
        assert source.prompts == ["Selection: "]

    def test_invalid_then_out_of_range_then_valid(self, story: StoryTree) -> None:
        state, sink, _ = play(story, "abc", "5", "1")
        after_opening = sink.lines[len(OPENING):]
        assert after_opening[:2] == [messages.INVALID_SELECTION, messages.OUT_OF_RANGE]
        assert after_opening[3] == "Walk toward the light."
        assert state.rejected_inputs == 2
        assert state.path == ["1", "2"]

    @pytest.mark.parametrize(
        "line,notice",
        [
            ("", messages.NEED_NUMBER),
            ("   ", messages.NEED_NUMBER),
            ("1.5", messages.INVALID_SELECTION),
            ("-1", messages.INVALID_SELECTION),
            ("two", messages.INVALID_SELECTION),
            ("0", messages.OUT_OF_RANGE),
            ("3", messages.OUT_OF_RANGE),
            ("99999999999", messages.INVALID_NUMBER),
            ("2147483647", messages.OUT_OF_RANGE),
            ("2147483648", messages.INVALID_NUMBER),
            ("1" * 5000, messages.INVALID_NUMBER),
        ],
    )
    def test_rejected_input_keeps_position(self, story: StoryTree, line: str, notice: str) -> None:
        engine = StoryEngine(story, BufferSink())
        engine.start()
        engine.sink.drain()

        state = engine.submit(line)

        assert engine.sink.lines == [notice]
        assert state.current is story.root
        assert state.status is TraversalStatus.AT_NODE

    def test_surrounding_whitespace_is_ignored(self, story: StoryTree) -> None:
        state, _, _ = play(story, "  2 \t", "1")
        assert state.path == ["1", "3", "4"]

    def test_leading_zeros_accepted(self, story: StoryTree) -> None:
        state, _, _ = play(story, "002", "01")
        assert state.path == ["1", "3", "4"]

    def test_shared_child_reachable_from_both_parents(self, story: StoryTree) -> None:
        state, _, _ = play(story, "2", "2")
        assert state.current is story.find_node("2")
        assert state.path == ["1", "3", "2"]

    def test_end_of_input(self, story: StoryTree) -> None:
        state, sink, _ = play(story, "oops")
        assert sink.lines[-3:] == [
            "",
            "Input error or EOF. Ending adventure.",
            "===== Adventure Complete =====",
        ]
        assert state.end_reason is EndReason.INPUT_EXHAUSTED
        assert state.current is story.root

    def test_cycles_are_followed(self) -> None:
        tree = StoryTree()
        tree.create_root("a", "Room A")
        tree.add_node("a", "b", "Room B")
        tree.add_node("b", "a", "unused")
        tree.add_node("b", "c", "Exit")
        state, _, _ = play(tree, "1", "1", "1", "2")
        assert state.path == ["a", "b", "a", "b", "c"]
        assert state.steps == 4
        assert state.end_reason is EndReason.LEAF_REACHED

    def test_non_string_payload(self) -> None:
        tree = StoryTree(value_factory=int)
        tree.create_root("1", 100)
        tree.add_node("1", "2", 200)
        state, sink, _ = play(tree, "1")
        assert "1. 200" in sink.lines
        assert "200" in sink.lines


class TestSubmit:

    def test_before_start(self, story: StoryTree) -> None:
        with pytest.raises(RuntimeError):
            StoryEngine(story, BufferSink()).submit("1")

    def test_after_termination(self, story: StoryTree) -> None:
        engine = StoryEngine(story, BufferSink())
        engine.start()
        engine.submit(None)
        with pytest.raises(RuntimeError):
            engine.submit("1")

    def test_choices(self, story: StoryTree) -> None:
        engine = StoryEngine(story, BufferSink())
        assert engine.choices() == []
        engine.start()
        assert engine.choices() == [(1, "Walk toward the light."), (2, "Follow the river.")]
        engine.submit("1")
        assert engine.choices() == []


def test_traversal_does_not_mutate_tree(story: StoryTree) -> None:
    before = story.render()
    play(story, "2", "2")
    assert story.render() == before


def test_long_zero_padded_selection(story: StoryTree) -> None:
    state, _, _ = play(story, "0" * 5000 + "2", "1")
    assert state.path == ["1", "3", "4"]


def test_five_thousand_digit_selection_then_valid(story: StoryTree) -> None:
    state, sink, _ = play(story, "9" * 5000, "1")
    assert messages.INVALID_NUMBER in sink.lines
    assert state.rejected_inputs == 1
    assert state.end_reason is EndReason.LEAF_REACHED


def test_echoed_prompts_match_console_transcript(story: StoryTree) -> None:
    sink = BufferSink()
    source = ScriptedSource(["x", "1"], echo=sink)

    StoryEngine(story, sink).run(source)

    assert sink.lines[len(OPENING):len(OPENING) + 4] == [
        "Selection: x",
        messages.INVALID_SELECTION,
        "Selection: 1",
        "",
    ]


def test_echo_at_end_of_input(story: StoryTree) -> None:
    sink = BufferSink()
    StoryEngine(story, sink).run(ScriptedSource([], echo=sink))
    assert sink.lines[len(OPENING):] == [
        "Selection: ",
        "",
        messages.INPUT_EXHAUSTED,
        messages.COMPLETE_BANNER,
    ]
