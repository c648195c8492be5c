"""Tests for the vtt-karaoke command line.

WHY: The CLI is how the split / edit / merge loop is actually run. Its
file naming must never overwrite a hand-edited word file, and errors
must exit non-zero with a readable message.

HOW: main() is called with explicit argv; files live in tmp_path;
stdout and stderr are captured with capsys.

RULES:
- Commands are run through main(), never through a subprocess
"""

import pytest

from vtt_karaoke import config
from vtt_karaoke.cli import _resolve_output_path, build_parser, main

SONG = "WEBVTT\n\n00:00:00.000 --> 00:00:03.000\nhi there\n"


@pytest.fixture
def song(tmp_path):
    path = tmp_path / "song.vtt"
    path.write_text(SONG, encoding="utf-8")
    return path


class TestResolveOutputPath:
    def test_no_conflict(self, tmp_path):
        assert _resolve_output_path("song", "-words.vtt", tmp_path) == tmp_path / "song-words.vtt"

    def test_conflicts_counted(self, tmp_path):
        (tmp_path / "song-words.vtt").write_text("", encoding="utf-8")
        (tmp_path / "song-words-2.vtt").write_text("", encoding="utf-8")
        assert _resolve_output_path("song", "-words.vtt", tmp_path) == tmp_path / "song-words-3.vtt"


class TestSplitCommand:
    def test_writes_word_file(self, song, capsys):
        main(["split", str(song)])
        output = song.parent / "song-words.vtt"
        assert output.read_text(encoding="utf-8") == (
            "WEBVTT\n\n00:00:00.000 --> 00:00:00.857\nhi\n\n00:00:00.857 --> 00:00:03.000\nthere\n"
        )
        err = capsys.readouterr().err
        assert "Running Word split..." in err
        assert "song-words.vtt written" in err

    def test_second_run_does_not_overwrite(self, song):
        main(["split", str(song)])
        (song.parent / "song-words.vtt").write_text("edited", encoding="utf-8")
        main(["split", str(song)])
        assert (song.parent / "song-words.vtt").read_text(encoding="utf-8") == "edited"
        assert (song.parent / "song-words-2.vtt").exists()

    def test_output_override(self, song, tmp_path):
        target = tmp_path / "out" / "custom.vtt"
        target.parent.mkdir()
        main(["split", str(song), "-o", str(target)])
        assert target.read_text(encoding="utf-8").startswith("WEBVTT\n\n00:00:00.000")

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["split", str(tmp_path / "nope.vtt")])
        assert excinfo.value.code == 1
        assert "Error: File not found" in capsys.readouterr().err


class TestMergeCommand:
    def test_writes_karaoke_file(self, tmp_path, words_vtt):
        path = tmp_path / "words.vtt"
        path.write_text(words_vtt, encoding="utf-8")
        main(["merge", str(path)])
        merged = (tmp_path / "words-karaoke.vtt").read_text(encoding="utf-8")
        assert "a <00:00:00.500><00:00:02.000>b" in merged

    def test_gap_time_option(self, tmp_path, words_vtt):
        path = tmp_path / "words.vtt"
        path.write_text(words_vtt, encoding="utf-8")
        main(["merge", str(path), "--gap-time", "5"])
        merged = (tmp_path / "words-karaoke.vtt").read_text(encoding="utf-8")
        assert "a <00:00:00.500>b" in merged

    def test_negative_gap_time(self, tmp_path, words_vtt, capsys):
        path = tmp_path / "words.vtt"
        path.write_text(words_vtt, encoding="utf-8")
        with pytest.raises(SystemExit) as excinfo:
            main(["merge", str(path), "--gap-time=-1"])
        assert excinfo.value.code == 1
        assert "Error:" in capsys.readouterr().err
        assert not (tmp_path / "words-karaoke.vtt").exists()

    def test_unparseable_gap_time(self, tmp_path, words_vtt, capsys):
        path = tmp_path / "words.vtt"
        path.write_text(words_vtt, encoding="utf-8")
        with pytest.raises(SystemExit) as excinfo:
            main(["merge", str(path), "--gap-time", "abc"])
        assert excinfo.value.code == 2
        assert "usage: vtt-karaoke" in capsys.readouterr().err
        assert not (tmp_path / "words-karaoke.vtt").exists()


class TestPreviewCommand:
    def test_renders_positions(self, tmp_path, karaoke_vtt, capsys):
        path = tmp_path / "karaoke.vtt"
        path.write_text(karaoke_vtt, encoding="utf-8")
        main(["preview", str(path), "--at", "1.5", "--at", "00:00:05.500", "--at", "9"])
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "00:00:01.500\t<c.current>hello</c><c.future>world</c>",
            "00:00:05.500\t<c.past>one </c><c.future>two</c>",
            "00:00:09.000\t",
        ]

    def test_rewind(self, tmp_path, karaoke_vtt, capsys):
        path = tmp_path / "karaoke.vtt"
        path.write_text(karaoke_vtt, encoding="utf-8")
        main(["preview", str(path), "--at", "2.5", "--at", "1.5"])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "00:00:02.500\t<c.past>hello</c><c.current>world</c>"
        assert lines[1] == "00:00:01.500\t<c.current>hello</c><c.future>world</c>"

    def test_no_cues(self, tmp_path, capsys):
        path = tmp_path / "empty.vtt"
        path.write_text("WEBVTT\n", encoding="utf-8")
        main(["preview", str(path), "--at", "1"])
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "No cues found" in captured.err

    def test_bad_position(self, tmp_path, karaoke_vtt, capsys):
        """Unparseable positions are argparse usage errors (status 2)."""
        path = tmp_path / "karaoke.vtt"
        path.write_text(karaoke_vtt, encoding="utf-8")
        with pytest.raises(SystemExit) as excinfo:
            main(["preview", str(path), "--at", "soon"])
        assert excinfo.value.code == 2
        err = capsys.readouterr().err
        assert "usage: vtt-karaoke" in err
        assert "Not a time value" in err

    def test_invalid_class_name_environment(self, tmp_path, karaoke_vtt, capsys, monkeypatch):
        """A value that parses but fails validation exits with status 1."""
        monkeypatch.setattr(config, "DEFAULT_CURRENT_CLASS", "not valid")
        path = tmp_path / "karaoke.vtt"
        path.write_text(karaoke_vtt, encoding="utf-8")
        with pytest.raises(SystemExit) as excinfo:
            main(["preview", str(path), "--at", "1"])
        assert excinfo.value.code == 1
        assert "Error: Invalid class name configuration" in capsys.readouterr().err


class TestParser:
    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_defaults(self):
        args = build_parser().parse_args(["merge", "in.vtt"])
        assert args.gap_time is None
        assert args.output is None
        assert args.verbose is False

    def test_at_repeated(self):
        args = build_parser().parse_args(["preview", "in.vtt", "--at", "1", "--at", "00:01.5"])
        assert args.at == [1.0, 1.5]
