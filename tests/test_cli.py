#!/usr/bin/env python3
"""
Command-line tests
"""

import json
import os
import sys

from doc_test_utils import MockHighlighter, SourceTree, command_string, run_tests
from sectiondoc.cli import load_config, main, parse_arguments

FILES = {
    "app.js": "// Entry point.\nvar a = 1;\n",
    "lib/util.js": "// Helper.\nfunction util() {}\n",
}


def test_generates_docs():
    with SourceTree(FILES) as tree:
        command = MockHighlighter().to_executable(tree.path("mock_highlighter.py"))
        code = main([
            "-i", tree.in_dir,
            "-o", tree.out_dir,
            "--highlighter", command_string(command),
            "app.js", "lib",
        ])

        assert code == 0
        assert tree.output_files() == [
            "app.js.html",
            "doc-style.css",
            os.path.join("lib", "util.js.html"),
        ]


def test_missing_highlighter_exits_with_error():
    with SourceTree(FILES) as tree:
        code = main([
            "-i", tree.in_dir,
            "-o", tree.out_dir,
            "--highlighter", "/nonexistent/pygmentize",
            "app.js",
        ])

        assert code == 1


def test_missing_source_exits_with_error():
    with SourceTree(FILES) as tree:
        code = main(["-i", tree.in_dir, "-o", tree.out_dir, "missing.js"])

        assert code == 1


def test_latin1_source_is_documented():
    """Bytes that are not UTF-8 are replaced instead of aborting the run"""
    with SourceTree(FILES) as tree:
        with open(os.path.join(tree.in_dir, "latin.js"), "wb") as f:
            f.write(b"// caf\xe9\nvar a = 1;\n")
        command = MockHighlighter().to_executable(tree.path("mock_highlighter.py"))

        code = main([
            "-i", tree.in_dir,
            "-o", tree.out_dir,
            "--highlighter", command_string(command),
            "latin.js",
        ])

        assert code == 0
        assert "caf\ufffd" in tree.read_output("latin.js.html")


def test_invalid_config_value_exits_with_error():
    with SourceTree(FILES) as tree:
        config_path = tree.path("sectiondoc.json")
        with open(config_path, "w") as f:
            json.dump({"tab_size": "x"}, f)

        code = main(["--config", config_path, "-i", tree.in_dir, "-o", tree.out_dir, "app.js"])

        assert code == 1
        assert not os.path.exists(tree.out_dir)


def test_custom_stylesheet():
    with SourceTree(FILES) as tree:
        css_path = tree.path("custom.css")
        with open(css_path, "w") as f:
            f.write("body { color: red; }\n")
        command = MockHighlighter().to_executable(tree.path("mock_highlighter.py"))

        code = main([
            "-i", tree.in_dir,
            "-o", tree.out_dir,
            "--highlighter", command_string(command),
            "--stylesheet", css_path,
            "app.js",
        ])

        assert code == 0
        assert tree.read_output("doc-style.css") == "body { color: red; }\n"


def test_config_file_merged_with_flags():
    with SourceTree() as tree:
        config_path = tree.path("sectiondoc.json")
        with open(config_path, "w") as f:
            json.dump({"in_dir": "code", "out_dir": "site", "tab_size": 8}, f)

        args = parse_arguments(["--config", config_path, "-o", "public", "--timeout", "10"])
        config = load_config(args)

        assert config.in_dir == "code"
        assert config.out_dir == "public"
        assert config.tab_size == 8
        assert config.timeout == 10.0


def test_bad_config_file_warns():
    with SourceTree() as tree:
        args = parse_arguments(["--config", tree.path("missing.json")])
        config = load_config(args)

        assert config.out_dir == "docs"


def test_default_files():
    args = parse_arguments([])

    assert args.files == ["."]
    assert args.verbose is False


def main_runner():
    """Run all tests"""
    print("Running CLI tests...\n")
    return run_tests([
        test_generates_docs,
        test_missing_highlighter_exits_with_error,
        test_missing_source_exits_with_error,
        test_latin1_source_is_documented,
        test_invalid_config_value_exits_with_error,
        test_custom_stylesheet,
        test_config_file_merged_with_flags,
        test_bad_config_file_warns,
        test_default_files,
    ])


if __name__ == "__main__":
    sys.exit(main_runner())
