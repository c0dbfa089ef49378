import pytest

from filefuse.exceptions import PatternError
from filefuse.file_system_tree.tree_renderer import TreeRenderer
from filefuse.fuse import FileFuser
from filefuse.selection_policy import SelectionConfig, SelectionPolicy
from filefuse.types import TocMode


def test_select_collects_files_and_trees(project):
    fuser = FileFuser([project], selection=SelectionConfig(extensions=("py",)))
    selection = fuser.select()

    assert [path.relative_to(project).as_posix() for path in selection.files] == [
        "build/out.py",
        "main.py",
        "src/app.py",
        "src/utils/helpers.py",
    ]
    assert selection.file_count == 4
    assert len(selection.trees) == 1
    assert selection.trees[0].name == "project"


def test_select_builds_tree_for_directory_root(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "sub" / "b.txt").write_text("b")

    tree = FileFuser([tmp_path]).select().trees[0]

    assert tree.fs_path == tmp_path
    assert [child.name for child in tree.sorted_children] == ["a.txt", "sub"]
    sub = tree.get_child("sub")
    assert sub.fs_path == tmp_path / "sub"
    assert sub.get_child("b.txt").fs_path == tmp_path / "sub" / "b.txt"
    assert tree.count_files() == 2


def test_select_is_cached(project):
    fuser = FileFuser([project])
    assert fuser.select() is fuser.select()


def test_multiple_roots_keep_input_order(project):
    fuser = FileFuser([project / "src", project / "main.py"])
    selection = fuser.select()

    assert [path.name for path in selection.files] == ["app.py", "data.json", "helpers.py", "main.py"]
    assert [tree.name for tree in selection.trees] == ["src", "main.py"]


def test_rejected_file_root_produces_no_tree(project):
    fuser = FileFuser([project / "main.py"], selection=SelectionConfig(extensions=("txt",)))
    selection = fuser.select()
    assert selection.files == []
    assert selection.trees == []
    assert fuser.render() == ""


def test_accepts_prebuilt_policy(project):
    policy = SelectionPolicy(SelectionConfig(ignore_patterns=("src",)))
    fuser = FileFuser([project], selection=policy)
    assert fuser.policy is policy
    assert all("src" not in path.parts for path in fuser.select().files)


def test_invalid_pattern_fails_before_walking(project):
    with pytest.raises(PatternError):
        FileFuser([project], selection=SelectionConfig(ignore_patterns=("***",)))


def test_table_of_contents(project):
    fuser = FileFuser([project / "src"], toc_mode="files-and-dirs")
    assert fuser.table_of_contents() == "\n".join(
        [
            "└── src/",
            "    ├── app.py",
            "    └── utils/",
            "        ├── data.json",
            "        └── helpers.py",
        ]
    )


def test_no_table_of_contents_without_mode(project):
    assert FileFuser([project]).table_of_contents() == ""


def test_custom_renderer_threshold(project):
    fuser = FileFuser([project / "src"], toc_mode=TocMode.AUTO, renderer=TreeRenderer(auto_threshold=3))
    assert fuser.table_of_contents() == "└── src/\n    └── utils/"


def test_render_default_format(tmp_path):
    (tmp_path / "a.txt").write_text("alpha")
    (tmp_path / "b.txt").write_text("beta")

    output = FileFuser([tmp_path]).render()
    assert output == f"{tmp_path / 'a.txt'}\n---\nalpha\n\n---\n{tmp_path / 'b.txt'}\n---\nbeta\n\n---"


def test_render_xml_with_table_of_contents(tmp_path):
    root = tmp_path / "docs"
    root.mkdir()
    (root / "guide.md").write_text("# Guide")

    output = FileFuser([root], toc_mode=TocMode.FILES_AND_DIRS, output_format="xml").render()
    assert output == "\n".join(
        [
            "<documents>",
            "<table_of_contents>",
            "└── docs/",
            "    └── guide.md",
            "</table_of_contents>",
            "",
            '<document index="1">',
            f"<source>{root / 'guide.md'}</source>",
            "<document_content>",
            "# Guide",
            "</document_content>",
            "</document>",
            "</documents>",
        ]
    )


def test_render_skips_binary_files(tmp_path):
    (tmp_path / "blob.bin").write_bytes(b"\x00\x01\x02")
    (tmp_path / "text.txt").write_text("text")

    output = FileFuser([tmp_path], output_format="markdown").render()
    assert "blob.bin" not in output
    assert output == f"{tmp_path / 'text.txt'}\n```\ntext\n```"


def test_stream_output_only_once(tmp_path):
    (tmp_path / "a.txt").write_text("a")
    fuser = FileFuser([tmp_path])
    list(fuser.stream_output())
    with pytest.raises(RuntimeError):
        list(fuser.stream_output())


def test_invalid_toc_mode(project):
    with pytest.raises(ValueError):
        FileFuser([project], toc_mode="sometimes")
