import pytest

from filefuse.file_system_tree.tree_builder import TreeBuilder
from filefuse.file_system_tree.tree_renderer import AUTO_TOC_LINE_THRESHOLD, TreeRenderer
from filefuse.types import TocMode


def build(name, entries):
    builder = TreeBuilder(name)
    for path, is_file in entries:
        builder.insert(path, is_file=is_file)
    return builder.root


def flat_tree(file_count):
    """A root directory holding ``file_count`` files: file_count + 1 render lines."""
    return build("flat", [(f"file{index:03d}.txt", True) for index in range(file_count)])


@pytest.fixture
def project():
    return build(
        "project",
        [
            ("a.txt", True),
            ("sub/b.txt", True),
            ("sub/deeper/c.txt", True),
            ("z", False),
        ],
    )


def test_threshold_constant():
    assert AUTO_TOC_LINE_THRESHOLD == 100
    assert TreeRenderer().auto_threshold == 100


def test_render_files_and_dirs(project):
    expected = "\n".join(
        [
            "└── project/",
            "    ├── a.txt",
            "    ├── sub/",
            "    │   ├── b.txt",
            "    │   └── deeper/",
            "    │       └── c.txt",
            "    └── z/",
        ]
    )
    assert TreeRenderer().render([project], TocMode.FILES_AND_DIRS) == expected


def test_render_dirs_only(project):
    expected = "\n".join(
        [
            "└── project/",
            "    ├── sub/",
            "    │   └── deeper/",
            "    └── z/",
        ]
    )
    assert TreeRenderer().render([project], TocMode.DIRS_ONLY) == expected


def test_round_trip_indentation():
    tree = build("root", [("a.txt", True), ("sub/b.txt", True)])
    lines = TreeRenderer().render([tree], TocMode.FILES_AND_DIRS).splitlines()

    a_line = next(line for line in lines if line.endswith("a.txt"))
    sub_line = next(line for line in lines if line.endswith("sub/"))
    b_line = next(line for line in lines if line.endswith("b.txt"))

    def indent(line):
        return len(line) - len(line.lstrip(" │├└─"))

    assert a_line and sub_line
    assert indent(b_line) > indent(sub_line)


def test_last_sibling_computed_over_visible_children():
    tree = build("root", [("dir", False), ("z_file.txt", True)])
    assert TreeRenderer().render([tree], TocMode.DIRS_ONLY) == "└── root/\n    └── dir/"


def test_multiple_roots():
    first = build("first", [("one.txt", True)])
    second = build("second", [("two.txt", True)])
    expected = "\n".join(
        [
            "├── first/",
            "│   └── one.txt",
            "└── second/",
            "    └── two.txt",
        ]
    )
    assert TreeRenderer().render([first, second], TocMode.FILES_AND_DIRS) == expected


def test_file_root():
    root = TreeBuilder("notes.md", is_file=True).root
    assert TreeRenderer().render([root], TocMode.FILES_AND_DIRS) == "└── notes.md"
    assert TreeRenderer().render([root], TocMode.DIRS_ONLY) == ""


class TestAutoMode:
    def test_ninety_nine_lines_shows_files(self):
        tree = flat_tree(98)
        assert tree.estimate_render_lines(show_files=True) == 99
        rendered = TreeRenderer().render([tree], TocMode.AUTO)
        assert "file000.txt" in rendered
        assert len(rendered.splitlines()) == 99

    def test_one_hundred_lines_shows_dirs_only(self):
        tree = flat_tree(99)
        assert tree.estimate_render_lines(show_files=True) == 100
        assert TreeRenderer().render([tree], TocMode.AUTO) == "└── flat/"

    def test_estimate_is_summed_across_roots(self):
        trees = [flat_tree(49), flat_tree(49)]
        assert not TreeRenderer().show_files(trees, TocMode.AUTO)
        assert TreeRenderer().show_files(trees[:1], TocMode.AUTO)

    def test_custom_threshold(self):
        tree = flat_tree(3)
        assert not TreeRenderer(auto_threshold=4).show_files([tree], TocMode.AUTO)
        assert TreeRenderer(auto_threshold=5).show_files([tree], TocMode.AUTO)

    def test_explicit_modes_ignore_size(self):
        tree = flat_tree(150)
        assert TreeRenderer().show_files([tree], TocMode.FILES_AND_DIRS)
        assert not TreeRenderer().show_files([tree], TocMode.DIRS_ONLY)


def test_render_without_mode_or_trees(project):
    assert TreeRenderer().render([project], None) == ""
    assert TreeRenderer().render([], TocMode.AUTO) == ""


def test_stream_render_yields_lines(project):
    lines = list(TreeRenderer().stream_render([project], TocMode.DIRS_ONLY))
    assert lines[0] == "└── project/"
    assert all("\n" not in line for line in lines)
