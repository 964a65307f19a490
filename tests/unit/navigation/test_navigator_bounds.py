from __future__ import annotations

import itertools
import random
from pathlib import Path

from yoku.document import parse_text
from yoku.navigation import FocusLevel, Navigator
from yoku.workspace import Workspace


def _workspace(tmp_path: Path, *texts: str) -> Workspace:
    workspace = Workspace(data_dir=tmp_path)
    for index, text in enumerate(texts):
        workspace.add_loaded(tmp_path / f"f{index}.md", f"f{index}", parse_text(text))
    return workspace


def _assert_in_bounds(nav: Navigator) -> None:
    workspace = nav.workspace
    if len(workspace) == 0:
        assert nav.focus is FocusLevel.FILE
        return
    assert 0 <= nav.file_index < len(workspace)
    sections = nav.current_file().document.sections
    if sections:
        assert 0 <= nav.section_index < len(sections)
        notes = sections[nav.section_index].notes
        if notes:
            assert 0 <= nav.note_index < len(notes)
        else:
            assert nav.focus is not FocusLevel.NOTE
    else:
        assert nav.focus is FocusLevel.FILE


def test_descend_walks_file_section_note_then_next_note(tmp_path: Path) -> None:
    nav = Navigator(_workspace(tmp_path, "# A\n- [ ] one\n- [ ] two\n"))

    nav.descend()
    assert nav.focus is FocusLevel.SECTION
    nav.descend()
    assert nav.focus is FocusLevel.NOTE
    assert nav.note_index == 0
    nav.descend()
    assert nav.focus is FocusLevel.NOTE
    assert nav.note_index == 1
    nav.descend()
    assert nav.note_index == 1


def test_descend_stops_at_section_without_notes(tmp_path: Path) -> None:
    nav = Navigator(_workspace(tmp_path, "# Empty\n"))

    nav.descend()
    nav.descend()

    assert nav.focus is FocusLevel.SECTION


def test_descend_from_file_without_sections_is_noop(tmp_path: Path) -> None:
    workspace = _workspace(tmp_path, "# A\n")
    workspace.files[0].document.remove_section(0)
    nav = Navigator(workspace)

    nav.descend()

    assert nav.focus is FocusLevel.FILE


def test_ascend_steps_back_through_notes_before_leaving(tmp_path: Path) -> None:
    nav = Navigator(_workspace(tmp_path, "# A\n- [ ] one\n- [ ] two\n- [ ] three\n"))
    nav.descend()
    nav.descend()
    nav.next_sibling()
    nav.next_sibling()
    assert nav.note_index == 2

    nav.ascend()
    assert (nav.focus, nav.note_index) == (FocusLevel.NOTE, 1)
    nav.ascend()
    assert (nav.focus, nav.note_index) == (FocusLevel.NOTE, 0)
    nav.ascend()
    assert (nav.focus, nav.note_index) == (FocusLevel.SECTION, 0)
    nav.ascend()
    assert nav.focus is FocusLevel.FILE
    nav.ascend()
    assert nav.focus is FocusLevel.FILE


def test_file_siblings_clamp_and_reset_children(tmp_path: Path) -> None:
    nav = Navigator(_workspace(tmp_path, "# A\n# B\n", "# C\n", "# D\n"))
    nav.descend()
    nav.next_sibling()
    assert nav.section_index == 1
    nav.ascend()

    nav.next_sibling()
    assert (nav.file_index, nav.section_index, nav.note_index) == (1, 0, 0)
    nav.next_sibling()
    nav.next_sibling()
    assert nav.file_index == 2
    nav.previous_sibling()
    nav.previous_sibling()
    nav.previous_sibling()
    assert nav.file_index == 0


def test_file_sibling_move_at_boundary_still_resets_children(tmp_path: Path) -> None:
    nav = Navigator(_workspace(tmp_path, "# A\n# B\n"))
    nav.descend()
    nav.next_sibling()
    nav.ascend()
    assert (nav.file_index, nav.section_index) == (0, 1)

    nav.next_sibling()

    assert (nav.file_index, nav.section_index, nav.note_index) == (0, 0, 0)


def test_section_siblings_clamp_and_reset_note(tmp_path: Path) -> None:
    nav = Navigator(_workspace(tmp_path, "# A\n- [ ] a1\n- [ ] a2\n\n# B\n- [ ] b1\n"))
    nav.descend()
    nav.descend()
    nav.next_sibling()
    assert nav.note_index == 1
    nav.ascend()
    nav.ascend()
    assert nav.focus is FocusLevel.SECTION

    nav.next_sibling()
    assert (nav.section_index, nav.note_index) == (1, 0)
    nav.next_sibling()
    assert nav.section_index == 1
    nav.previous_sibling()
    nav.previous_sibling()
    assert nav.section_index == 0


def test_section_sibling_move_at_boundary_still_resets_note(tmp_path: Path) -> None:
    nav = Navigator(_workspace(tmp_path, "# A\n- [ ] a1\n- [ ] a2\n"))
    nav.descend()
    nav.note_index = 1

    nav.previous_sibling()

    assert (nav.focus, nav.section_index, nav.note_index) == (FocusLevel.SECTION, 0, 0)


def test_leave_notes_returns_to_section_and_clears_selection(tmp_path: Path) -> None:
    nav = Navigator(_workspace(tmp_path, "# A\n- [ ] a1\n- [ ] a2\n"))
    nav.descend()
    nav.descend()
    nav.next_sibling()

    nav.leave_notes()

    assert (nav.focus, nav.note_index) == (FocusLevel.SECTION, 0)


def test_navigation_on_empty_workspace_is_noop(tmp_path: Path) -> None:
    nav = Navigator(Workspace(data_dir=tmp_path))

    for move in (nav.descend, nav.ascend, nav.next_sibling, nav.previous_sibling):
        move()
        assert (nav.focus, nav.file_index, nav.section_index, nav.note_index) == (
            FocusLevel.FILE,
            0,
            0,
            0,
        )
    assert nav.current_file() is None
    assert nav.current_section() is None
    assert nav.current_note() is None


def test_random_command_sequences_keep_indices_in_bounds(tmp_path: Path) -> None:
    nav = Navigator(
        _workspace(
            tmp_path,
            "# A\n- [ ] 1\n- [ ] 2\n- [ ] 3\n\n# B\n\n# C\n- [x] 4\n",
            "# D\n",
            "# E\n- [-] 5\n- [ ] 6\n",
        )
    )
    rng = random.Random(1234)
    moves = [nav.descend, nav.ascend, nav.next_sibling, nav.previous_sibling, nav.leave_notes]
    for _ in range(2000):
        rng.choice(moves)()
        _assert_in_bounds(nav)


def test_every_short_command_sequence_keeps_indices_in_bounds(tmp_path: Path) -> None:
    text = "# A\n- [ ] 1\n- [ ] 2\n\n# B\n"
    names = ("descend", "ascend", "next_sibling", "previous_sibling")
    for sequence in itertools.product(names, repeat=5):
        nav = Navigator(_workspace(tmp_path, text, "# C\n- [ ] 3\n"))
        for name in sequence:
            getattr(nav, name)()
            _assert_in_bounds(nav)
