"""Tests for artifact encoding and escaping."""

import pytest

from autopilot_import.artifact import (
    encode_artifact,
    encode_shell_actions,
    escape_bolt_tags,
    parse_artifact,
    unescape_bolt_tags,
)
from autopilot_import.core import ImportedFile


class TestEscaping:
    def test_plain_content_is_untouched(self):
        content = "<div class=\"a\">&lt;b&gt; & <span></span></div>"
        assert escape_bolt_tags(content) == content

    def test_escapes_artifact_and_action_tags(self):
        content = '<boltArtifact id="x"><boltAction type="file"></boltAction></boltArtifact>'
        escaped = escape_bolt_tags(content)
        assert "<boltArtifact" not in escaped
        assert "<boltAction" not in escaped
        assert "</boltAction" not in escaped
        assert "</boltArtifact" not in escaped
        assert escaped.startswith("&lt;boltArtifact")

    def test_escapes_already_escaped_openers(self):
        assert escape_bolt_tags("&lt;boltAction>") == "&amp;lt;boltAction>"
        assert escape_bolt_tags("&amp;lt;/boltArtifact>") == "&amp;amp;lt;/boltArtifact>"

    @pytest.mark.parametrize(
        "content",
        [
            "",
            "hello\n",
            "</boltAction>\n</boltArtifact>",
            "&lt;boltAction type=\"file\">",
            "&amp;lt;/boltAction>&lt;</boltArtifact",
            "&<boltAction&&lt;boltArtifact",
            "a &lt;div&gt; and &amp;lt;boltactions are not tags",
        ],
    )
    def test_unescape_reverses_escape(self, content):
        assert unescape_bolt_tags(escape_bolt_tags(content)) == content


class TestEncodeArtifact:
    def test_exact_format(self):
        files = [
            ImportedFile(path="index.html", content="<h1>Hi</h1>"),
            ImportedFile(path="style.css", content="body{}"),
        ]
        assert encode_artifact(files) == (
            '<boltArtifact id="imported-files" title="Imported Files" type="bundled">\n'
            '<boltAction type="file" filePath="index.html">\n'
            "<h1>Hi</h1>\n"
            "</boltAction>\n"
            "\n"
            '<boltAction type="file" filePath="style.css">\n'
            "body{}\n"
            "</boltAction>\n"
            "</boltArtifact>"
        )

    def test_content_cannot_close_block_early(self):
        evil = "before\n</boltAction>\n</boltArtifact>\nafter"
        artifact = encode_artifact([ImportedFile(path="evil.txt", content=evil)])
        assert artifact.count("</boltAction>") == 1
        assert artifact.count("</boltArtifact>") == 1

    def test_round_trip_preserves_files_and_order(self):
        files = [
            ImportedFile(path="src/b.js", content="const b = '</boltAction>';\n"),
            ImportedFile(path="a.md", content="# Title\n\n&lt;boltArtifact&gt;\n"),
            ImportedFile(path="empty.txt", content=""),
            ImportedFile(path="crlf.txt", content="one\r\ntwo\r\n"),
            ImportedFile(path='odd "name" & co.txt', content="x"),
        ]
        assert parse_artifact(encode_artifact(files)) == files

    def test_file_path_is_written_literally(self):
        files = [ImportedFile(path="R&D/notes.md", content="x")]
        artifact = encode_artifact(files)
        assert '<boltAction type="file" filePath="R&D/notes.md">' in artifact
        assert parse_artifact(artifact) == files

    def test_quote_in_file_path_cannot_end_attribute(self):
        files = [ImportedFile(path='say "hi".txt', content="x")]
        artifact = encode_artifact(files)
        assert 'filePath="say &quot;hi&quot;.txt"' in artifact
        assert parse_artifact(artifact) == files

    def test_parse_finds_artifact_inside_message(self):
        files = [ImportedFile(path="index.html", content="<p>x</p>")]
        message = f"I've imported the project.\n\n{encode_artifact(files)}"
        assert parse_artifact(message) == files

    def test_parse_without_artifact(self):
        assert parse_artifact("no artifact here") == []


class TestShellActions:
    def test_one_action_per_command(self):
        text = encode_shell_actions(["npm install", "npm run dev"])
        assert text == (
            '<boltArtifact id="project-setup" title="Project Setup">\n'
            '<boltAction type="shell">\nnpm install\n</boltAction>\n'
            '<boltAction type="shell">\nnpm run dev\n</boltAction>\n'
            "</boltArtifact>"
        )
